# domain/model/todo.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class Priority(str, Enum):
    """Todo priority levels."""
    LOW = 'Low'
    MEDIUM = 'Medium'
    HIGH = 'High'


# Fields a client may change through an update request.
EDITABLE_FIELDS = ('title', 'description', 'is_completed', 'priority', 'due_date')


# ── Todo Domain Model ────────────────────────────────────


@dataclass
class Todo:
    """A single task owned by one user.

    A todo is either active or trashed (``is_deleted``). ``deleted_at`` is
    set exactly while the todo sits in the trash.
    """
    id: str
    owner_id: str
    title: str
    created_at: datetime
    updated_at: datetime

    description: str = ''
    is_completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(
        owner_id: str,
        title: str,
        description: str | None = None,
        priority: Priority | None = None,
        due_date: datetime | None = None,
    ) -> 'Todo':
        """Create a new active Todo with a generated ID."""
        now = datetime.now(timezone.utc)
        return Todo(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            created_at=now,
            updated_at=now,
            description=description or '',
            priority=priority or Priority.MEDIUM,
            due_date=due_date,
        )

    # ── queries ───────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        return not self.is_deleted

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    # ── state transitions ─────────────────────────────────

    def apply_changes(self, changes: dict) -> None:
        """Overwrite the editable fields present in ``changes``."""
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise KeyError(f"Field is not editable: {name}")
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def trash(self) -> None:
        """Soft-delete: hide from the active list, keep for restore."""
        now = datetime.now(timezone.utc)
        self.is_deleted = True
        self.deleted_at = now
        self.updated_at = now

    def restore(self) -> None:
        """Bring a trashed todo back to the active list."""
        self.is_deleted = False
        self.deleted_at = None
        self.updated_at = datetime.now(timezone.utc)
