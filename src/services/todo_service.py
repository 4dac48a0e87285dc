"""The todo lifecycle, scoped to the calling user.

State machine::

    create ──> ACTIVE ──soft_delete──> TRASHED ──purge──> (gone)
                 ^                        │
                 └────────restore─────────┘

Update and soft_delete only see active todos, restore only sees trashed
ones, purge sees both. A todo that belongs to another user is reported as
NotFoundError so its existence is never revealed.

Write-backs only match the state that was read. A todo purged or moved
between the read and the write is reported as NotFoundError, never
recreated.
"""

import logging
from datetime import datetime

from domain.model.errors import NotFoundError, ValidationError
from domain.model.todo import Priority, Todo
from port.todo_repository import TodoRepository

logger = logging.getLogger(__name__)

# Fields that may be omitted from an update but never set to null.
_NON_NULLABLE = {
    'title': "Title is required",
    'is_completed': "Completion status cannot be null",
    'priority': "Priority cannot be null",
}


def _require_title(title: str | None) -> None:
    if title is None or not title.strip():
        raise ValidationError("Title is required")


def create(
    repo: TodoRepository,
    owner_id: str,
    title: str | None,
    description: str | None = None,
    priority: Priority | None = None,
    due_date: datetime | None = None,
) -> Todo:
    """Create an active todo for ``owner_id``.

    Raises:
        ValidationError: title missing or blank
    """
    _require_title(title)
    todo = Todo.create(
        owner_id=owner_id,
        title=title,
        description=description,
        priority=priority,
        due_date=due_date,
    )
    repo.add(todo)
    logger.info("Todo created", extra={"todoId": todo.id, "userId": owner_id})
    return todo


def list_active(repo: TodoRepository, owner_id: str) -> list[Todo]:
    """Active todos, newest first."""
    return repo.find_active(owner_id)


def list_trashed(repo: TodoRepository, owner_id: str) -> list[Todo]:
    """Trashed todos, most recently deleted first."""
    return repo.find_trashed(owner_id)


def update(repo: TodoRepository, owner_id: str, todo_id: str, changes: dict) -> Todo:
    """Apply a partial update to an active todo.

    ``changes`` must only contain the fields the client actually sent;
    anything absent keeps its stored value.

    Raises:
        NotFoundError: no active todo with this id owned by the caller
        ValidationError: blank title, or null for a non-nullable field
    """
    for name, message in _NON_NULLABLE.items():
        if name in changes and changes[name] is None:
            raise ValidationError(message)
    if 'title' in changes:
        _require_title(changes['title'])
    if 'description' in changes and changes['description'] is None:
        changes = {**changes, 'description': ''}

    todo = repo.get(todo_id, owner_id, deleted=False)
    if not todo:
        raise NotFoundError("Todo not found")

    todo.apply_changes(changes)
    if not repo.save(todo, expected_deleted=False):
        raise NotFoundError("Todo not found")
    logger.info("Todo updated", extra={"todoId": todo_id, "userId": owner_id, "fields": sorted(changes)})
    return todo


def soft_delete(repo: TodoRepository, owner_id: str, todo_id: str) -> Todo:
    """Move an active todo to the trash.

    Deleting a todo that is already trashed is a NotFoundError; its
    original deleted_at is kept.
    """
    todo = repo.get(todo_id, owner_id, deleted=False)
    if not todo:
        raise NotFoundError("Todo not found")

    todo.trash()
    if not repo.save(todo, expected_deleted=False):
        raise NotFoundError("Todo not found")
    logger.info("Todo moved to trash", extra={"todoId": todo_id, "userId": owner_id})
    return todo


def restore(repo: TodoRepository, owner_id: str, todo_id: str) -> Todo:
    todo = repo.get(todo_id, owner_id, deleted=True)
    if not todo:
        raise NotFoundError("Deleted todo not found")

    todo.restore()
    if not repo.save(todo, expected_deleted=True):
        raise NotFoundError("Deleted todo not found")
    logger.info("Todo restored", extra={"todoId": todo_id, "userId": owner_id})
    return todo


def purge(repo: TodoRepository, owner_id: str, todo_id: str) -> Todo:
    """Permanently remove a todo in either state and return its last known state."""
    todo = repo.get(todo_id, owner_id)
    if not todo:
        raise NotFoundError("Todo not found")

    # Lost a race with a concurrent purge
    if not repo.delete(todo_id, owner_id):
        raise NotFoundError("Todo not found")

    logger.info("Todo permanently deleted", extra={"todoId": todo_id, "userId": owner_id})
    return todo
