"""Pydantic models for API request/response.

JSON payloads use camelCase keys (``isCompleted``, ``dueDate``); Python
code keeps snake_case field names.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.model.todo import Priority
from domain.model.user import Role


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ── Auth ─────────────────────────────────────────────────


class _Credentials(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator('email', mode='before')
    @classmethod
    def blank_email_is_missing(cls, v):
        """Treat an empty email as absent so the service reports it as missing."""
        return _blank_to_none(v)


class RegisterRequest(_Credentials):
    """Request model for user registration."""
    name: Optional[str] = None


class LoginRequest(_Credentials):
    """Request model for user login."""


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""
    id: str
    email: str
    name: str
    role: Role


class ProfileResponse(CamelModel):
    """Response model for the current user's profile."""
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime


class AuthResponse(BaseModel):
    """Response model for authentication."""
    message: str
    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


# ── Todos ────────────────────────────────────────────────


class TodoCreateRequest(CamelModel):
    """Request model for creating a todo."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None

    @field_validator('due_date', mode='before')
    @classmethod
    def blank_due_date_is_none(cls, v):
        return _blank_to_none(v)


class TodoUpdateRequest(CamelModel):
    """Partial update. Only keys present in the JSON body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None

    @field_validator('due_date', mode='before')
    @classmethod
    def blank_due_date_is_none(cls, v):
        return _blank_to_none(v)


class TodoResponse(CamelModel):
    """Response model for a todo."""
    id: str = Field(..., description="Todo ID")
    title: str
    description: str
    is_completed: bool
    priority: Priority
    due_date: Optional[datetime] = None
    owner_id: str = Field(..., description="ID of the owning user")
    is_deleted: bool
    deleted_at: Optional[datetime] = Field(None, description="Set while the todo is in the trash")
    created_at: datetime
    updated_at: datetime


class TodoEnvelope(BaseModel):
    message: str
    todo: TodoResponse


class TodoListResponse(BaseModel):
    message: str
    todos: list[TodoResponse]


# ── Admin ────────────────────────────────────────────────


class TodoCounts(BaseModel):
    total: int
    active: int
    trashed: int
    completed: int


class StatsResponse(CamelModel):
    """Instance-wide counters, admin only."""
    users: int
    todos: TodoCounts
    generated_at: datetime
