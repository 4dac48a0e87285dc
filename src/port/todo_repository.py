"""Port definition for TodoRepository."""

from typing import Protocol

from domain.model.todo import Todo


class TodoRepository(Protocol):
    """Todo persistence. Every lookup is scoped to the owning user."""

    def add(self, todo: Todo) -> None:
        """Insert a new todo."""
        ...

    def save(self, todo: Todo, expected_deleted: bool) -> bool:
        """Write back an existing todo.

        Only matches the stored document while its owner is unchanged and it
        is still in the ``expected_deleted`` state; never inserts. Returns
        False when nothing matched (purged or moved in the meantime).
        """
        ...

    def get(self, todo_id: str, owner_id: str, deleted: bool | None = None) -> Todo | None:
        """Find an owned todo by ID.

        ``deleted`` narrows the match to trashed (True) or active (False)
        todos; None matches either state.
        """
        ...

    def find_active(self, owner_id: str) -> list[Todo]:
        """Active todos, newest created first."""
        ...

    def find_trashed(self, owner_id: str) -> list[Todo]:
        """Trashed todos, most recently deleted first."""
        ...

    def delete(self, todo_id: str, owner_id: str) -> bool:
        """Remove the document. Returns True if deleted, False if not found."""
        ...

    def count_by_state(self) -> dict[str, int]:
        """Counts across all owners: total, active, trashed, completed."""
        ...
