from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Account roles. Assigned at creation and never changed."""
    CUSTOMER = 'customer'
    ADMIN = 'admin'


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    role: Role = Role.CUSTOMER
    password_hash: str | None = None

    def public_view(self) -> dict:
        """User fields that are safe to hand back to clients."""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role.value,
        }


@dataclass(frozen=True)
class Principal:
    """Caller identity carried inside a session token."""
    id: str
    email: str
    role: Role
    name: str
