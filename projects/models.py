"""
projects/models.py -- Domain dataclasses for design projects.

Pure data containers with zero logic. Ownership and visibility rules live in
projects/registry.py; persistence lives in projects/store.py.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Project:
    """A scoped engagement between one designer and one or more clients.

    created_by is the designer's user id. associated_clients holds the user
    ids of every client who may view the project; it always contains the
    client resolved at creation.

    id is None before the record is written to the database.
    """

    created_by: int
    name: Optional[str] = None
    start_date: Optional[str] = None  # ISO 8601 date
    end_date: Optional[str] = None  # ISO 8601 date
    budget: Optional[float] = None
    client_username: Optional[str] = None
    associated_clients: list[int] = field(default_factory=list)
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""


@dataclass
class ProjectFields:
    """The mutable fields of a project, as submitted by a designer.

    Updates replace all of them at once: a field left as None here becomes
    None on the stored project.
    """

    name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    budget: Optional[float] = None
    client_username: Optional[str] = None
