"""
projects/registry.py -- Project lifecycle and ownership rules.

Visibility:
  designer -- sees the projects they created.
  client   -- sees the projects whose client set contains their id.
A project outside the caller's scope is reported as ProjectNotFound, exactly
like a project that does not exist, so ids of other users' projects cannot
be discovered.

Mutation: only the creating designer may update or delete a project. The
same ProjectNotFound is returned for another designer's project.

Layer rule: no imports from api/ or fastapi.
"""

from __future__ import annotations

import logging

from auth.models import Role, User
from auth.store import UserStore
from core.errors import ClientNotFound, ProjectNotFound
from projects.models import Project, ProjectFields
from projects.store import ProjectStore

logger = logging.getLogger("designdesk.projects")


class ProjectRegistry:
    """Create, read, update and delete projects on behalf of a resolved user."""

    def __init__(self, projects: ProjectStore, users: UserStore) -> None:
        self._projects = projects
        self._users = users

    def create(self, designer: User, fields: ProjectFields) -> Project:
        """Create a project owned by designer and shared with fields.client_username.

        Raises ClientNotFound if no user has that username.
        """
        client = self._users.get_by_username(fields.client_username) if fields.client_username else None
        if client is None:
            raise ClientNotFound()

        project = Project(
            created_by=designer.id,
            name=fields.name,
            start_date=fields.start_date,
            end_date=fields.end_date,
            budget=fields.budget,
            client_username=fields.client_username,
            associated_clients=[client.id],
        )
        project_id = self._projects.create_project(project)
        logger.info("Designer %s created project %s for client %s", designer.id, project_id, client.id)
        return self._projects.get_for_designer(project_id, designer.id)

    def update(self, designer: User, project_id: int, fields: ProjectFields) -> Project:
        """Replace all mutable fields of one of designer's projects.

        The client set is left as it was at creation; client_username is
        stored as given.
        """
        if not self._projects.replace_fields(project_id, designer.id, fields):
            raise ProjectNotFound()
        logger.info("Designer %s updated project %s", designer.id, project_id)
        return self._projects.get_for_designer(project_id, designer.id)

    def delete(self, designer: User, project_id: int) -> None:
        if not self._projects.delete_project(project_id, designer.id):
            raise ProjectNotFound()
        logger.info("Designer %s deleted project %s", designer.id, project_id)

    def list_for(self, user: User) -> list[Project]:
        """Return every project visible to user. An empty list is a valid result."""
        if user.role == Role.designer.value:
            return self._projects.list_for_designer(user.id)
        if user.role == Role.client.value:
            return self._projects.list_for_client(user.id)
        raise ProjectNotFound("No projects found.")

    def get_one(self, user: User, project_id: int) -> Project:
        project = None
        if user.role == Role.designer.value:
            project = self._projects.get_for_designer(project_id, user.id)
        elif user.role == Role.client.value:
            project = self._projects.get_for_client(project_id, user.id)
        if project is None:
            raise ProjectNotFound()
        return project
