"""
api/routes/projects.py -- Project management endpoints.

Routes:
  POST   /api/projects        -- create a project for a client (designer)
  GET    /api/projects        -- list projects visible to the caller (authenticated)
  GET    /api/projects/{id}   -- one visible project (authenticated)
  PUT    /api/projects/{id}   -- replace all fields of an owned project (designer)
  DELETE /api/projects/{id}   -- delete an owned project (designer)

Ownership is enforced by ProjectRegistry; these handlers only translate
between the transport models and the registry.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.models import MessageResponse, ProjectEnvelope, ProjectRequest, ProjectResponse
from auth.dependencies import require_authenticated, require_designer
from auth.models import User
from projects.registry import ProjectRegistry

router = APIRouter()


def _registry(request: Request) -> ProjectRegistry:
    return request.app.state.projects


@router.post("/projects", response_model=ProjectEnvelope)
def create_project(
    request: Request,
    body: ProjectRequest,
    current_user: User = Depends(require_designer),
) -> ProjectEnvelope:
    project = _registry(request).create(current_user, body.to_fields())
    return ProjectEnvelope(project=ProjectResponse.from_project(project))


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(
    request: Request,
    current_user: User = Depends(require_authenticated),
) -> list[ProjectResponse]:
    """Designers get the projects they created; clients get the ones they are on."""
    projects = _registry(request).list_for(current_user)
    return [ProjectResponse.from_project(p) for p in projects]


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(
    request: Request,
    project_id: int,
    current_user: User = Depends(require_authenticated),
) -> ProjectResponse:
    return ProjectResponse.from_project(_registry(request).get_one(current_user, project_id))


@router.put("/projects/{project_id}", response_model=ProjectEnvelope)
def update_project(
    request: Request,
    project_id: int,
    body: ProjectRequest,
    current_user: User = Depends(require_designer),
) -> ProjectEnvelope:
    """Full replace: fields missing from the body are cleared."""
    project = _registry(request).update(current_user, project_id, body.to_fields())
    return ProjectEnvelope(project=ProjectResponse.from_project(project))


@router.delete("/projects/{project_id}", response_model=MessageResponse)
def delete_project(
    request: Request,
    project_id: int,
    current_user: User = Depends(require_designer),
) -> MessageResponse:
    _registry(request).delete(current_user, project_id)
    return MessageResponse(message="Project deleted successfully")
