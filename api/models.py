"""
API request and response models for DesignDesk REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py,
projects/models.py and catalogue/models.py, which own the internal domain
representation. Route handlers map between the two.

JSON keys are camelCase (startDate, clientUsername, associatedClients, ...)
because that is what the browser front end sends and reads. Python attribute
names stay snake_case; the alias generator does the translation, and
populate_by_name lets tests and internal callers use either form.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from auth.passwords import MAX_PASSWORD_BYTES
from catalogue.models import Option
from projects.models import Project, ProjectFields

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared envelopes
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/register.

    role is a plain string here so an unknown value reaches register_user()
    and comes back as the typed invalid_role error rather than a generic 422.

    Only the username is trimmed. The password is hashed exactly as sent so
    that logging in with the same string always matches.
    """

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    role: str = Field(max_length=30)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return v


class LoginRequest(BaseModel):
    username: str = Field(max_length=255)
    password: str = Field(max_length=1024)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        return v.strip()


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str = "Login successful"
    token: str
    role: str


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class ProjectRequest(BaseModel):
    """Request body for POST /api/projects and PUT /api/projects/{id}.

    Every field is optional: PUT replaces all fields, so anything omitted is
    cleared. POST additionally needs clientUsername to resolve the client;
    a missing one is reported as client_not_found.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = Field(default=None, ge=0)
    client_username: Optional[str] = Field(default=None, max_length=255)

    def to_fields(self) -> ProjectFields:
        return ProjectFields(
            name=self.name,
            start_date=self.start_date.isoformat() if self.start_date else None,
            end_date=self.end_date.isoformat() if self.end_date else None,
            budget=self.budget,
            client_username=self.client_username,
        )


class ProjectResponse(BaseModel):
    model_config = _CAMEL

    id: int
    name: Optional[str]
    start_date: Optional[str]
    end_date: Optional[str]
    budget: Optional[float]
    client_username: Optional[str]
    created_by: int
    associated_clients: list[int]
    created_at: str
    updated_at: str

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        """Build a ProjectResponse from a Project dataclass."""
        return cls(
            id=project.id,
            name=project.name,
            start_date=project.start_date,
            end_date=project.end_date,
            budget=project.budget,
            client_username=project.client_username,
            created_by=project.created_by,
            associated_clients=list(project.associated_clients),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectEnvelope(BaseModel):
    """Response for project create and update: {"project": {...}}."""

    project: ProjectResponse


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class OptionGroupRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    topic_name: str = Field(min_length=1, max_length=255)
    options: list[str] = Field(default_factory=list)


class OptionsSaveRequest(BaseModel):
    """Request body for POST /api/options."""

    model_config = _CAMEL

    design_preferences: list[OptionGroupRequest]


class OptionResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: str

    @classmethod
    def from_option(cls, option: Option) -> "OptionResponse":
        return cls(id=option.id, name=option.name, type=option.type)


class OptionsSaveResponse(BaseModel):
    model_config = _CAMEL

    message: str = "Options saved successfully"
    saved_options: list[OptionResponse]


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


class ImageUploadResponse(BaseModel):
    model_config = _CAMEL

    image_url: str
