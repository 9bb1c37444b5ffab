"""
projects/store.py -- SQLAlchemy-backed persistence layer for projects.

Uses SQLAlchemy Core (not ORM) so the dataclasses in projects/models.py
remain the authoritative domain representation.

The client set of a project is stored in the project_clients link table, one
row per (project, client). "Client X may see project P" is then a plain
membership query on that table.

Pattern: Repository + Data Mapper. ProjectStore is the repository,
_row_to_project is the mapper. Every read and write is scoped by the caller
(designer id or client id); the store has no unscoped single-project lookup
for route code to misuse.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = ProjectStore("sqlite:///designdesk.db")
    project_id = store.create_project(project)
    store.list_for_designer(designer_id)
    store.close()
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    select,
)
from sqlalchemy.engine import Connection, Engine

from core.db import make_engine
from projects.models import Project, ProjectFields

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_projects = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255)),
    Column("start_date", String(10)),  # YYYY-MM-DD
    Column("end_date", String(10)),
    Column("budget", Float),
    Column("client_username", String(255)),
    Column("created_by", Integer, nullable=False, index=True),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
)

_project_clients = Table(
    "project_clients",
    metadata,
    Column("project_id", Integer, nullable=False, index=True),
    Column("client_id", Integer, nullable=False, index=True),
    UniqueConstraint("project_id", "client_id", name="uq_project_client"),
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProjectStore:
    """Repository for Project entities and their client associations."""

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_project(self, project: Project) -> int:
        """Insert a project and its client links in one transaction. Returns the new id."""
        now = _now_iso()
        with self.engine.begin() as conn:
            result = conn.execute(
                _projects.insert().values(
                    name=project.name,
                    start_date=project.start_date,
                    end_date=project.end_date,
                    budget=project.budget,
                    client_username=project.client_username,
                    created_by=project.created_by,
                    created_at=now,
                    updated_at=now,
                )
            )
            project_id = result.inserted_primary_key[0]
            for client_id in dict.fromkeys(project.associated_clients):
                conn.execute(_project_clients.insert().values(project_id=project_id, client_id=client_id))
        return project_id

    def replace_fields(self, project_id: int, designer_id: int, fields: ProjectFields) -> bool:
        """Overwrite every mutable field of a project owned by designer_id.

        Returns True if a row was updated, False if the project does not exist
        or belongs to another designer.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                _projects.update()
                .where((_projects.c.id == project_id) & (_projects.c.created_by == designer_id))
                .values(
                    name=fields.name,
                    start_date=fields.start_date,
                    end_date=fields.end_date,
                    budget=fields.budget,
                    client_username=fields.client_username,
                    updated_at=_now_iso(),
                )
            )
        return result.rowcount > 0

    def delete_project(self, project_id: int, designer_id: int) -> bool:
        """Delete a project owned by designer_id together with its client links.

        Returns True if deleted, False if not found or owned by someone else.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                _projects.delete().where((_projects.c.id == project_id) & (_projects.c.created_by == designer_id))
            )
            if result.rowcount > 0:
                conn.execute(_project_clients.delete().where(_project_clients.c.project_id == project_id))
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_for_designer(self, project_id: int, designer_id: int) -> Optional[Project]:
        query = _projects.select().where((_projects.c.id == project_id) & (_projects.c.created_by == designer_id))
        with self.engine.connect() as conn:
            rows = self._load(conn, query)
        return rows[0] if rows else None

    def get_for_client(self, project_id: int, client_id: int) -> Optional[Project]:
        query = _projects.select().where(
            (_projects.c.id == project_id) & _projects.c.id.in_(self._client_project_ids(client_id))
        )
        with self.engine.connect() as conn:
            rows = self._load(conn, query)
        return rows[0] if rows else None

    def list_for_designer(self, designer_id: int) -> list[Project]:
        """Return every project created by designer_id, oldest first."""
        query = _projects.select().where(_projects.c.created_by == designer_id).order_by(_projects.c.id)
        with self.engine.connect() as conn:
            return self._load(conn, query)

    def list_for_client(self, client_id: int) -> list[Project]:
        """Return every project client_id is associated with, oldest first."""
        query = (
            _projects.select().where(_projects.c.id.in_(self._client_project_ids(client_id))).order_by(_projects.c.id)
        )
        with self.engine.connect() as conn:
            return self._load(conn, query)

    def close(self) -> None:
        self.engine.dispose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _client_project_ids(client_id: int):
        return select(_project_clients.c.project_id).where(_project_clients.c.client_id == client_id)

    @staticmethod
    def _load(conn: Connection, query) -> list[Project]:
        """Run a projects query and attach each row's client list."""
        rows = conn.execute(query).fetchall()
        if not rows:
            return []
        ids = [r.id for r in rows]
        links = conn.execute(
            select(_project_clients.c.project_id, _project_clients.c.client_id)
            .where(_project_clients.c.project_id.in_(ids))
            .order_by(_project_clients.c.project_id, _project_clients.c.client_id)
        ).fetchall()
        clients: dict[int, list[int]] = {pid: [] for pid in ids}
        for link in links:
            clients[link.project_id].append(link.client_id)
        return [_row_to_project(r, clients[r.id]) for r in rows]


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_project(row, associated_clients: list[int]) -> Project:
    return Project(
        id=row.id,
        name=row.name,
        start_date=row.start_date,
        end_date=row.end_date,
        budget=row.budget,
        client_username=row.client_username,
        created_by=row.created_by,
        associated_clients=associated_clients,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
