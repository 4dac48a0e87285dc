"""Instance-wide counters for administrators."""

from datetime import datetime, timezone

from port.todo_repository import TodoRepository
from port.user_repository import UserRepository


def get_overview(user_repo: UserRepository, todo_repo: TodoRepository) -> dict:
    """Counts of users and todos across all accounts."""
    todos = todo_repo.count_by_state()
    return {
        'users': user_repo.count(),
        'todos': todos,
        'generated_at': datetime.now(timezone.utc),
    }
