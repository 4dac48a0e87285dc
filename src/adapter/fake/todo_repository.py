"""In-memory implementation of TodoRepository for testing."""

from dataclasses import replace

from domain.model.todo import Todo


class FakeTodoRepository:
    def __init__(self):
        self.store: dict[str, Todo] = {}

    # ── write operations ─────────────────────────────────────

    def add(self, todo: Todo) -> None:
        # Stored copies are detached from caller objects
        self.store[todo.id] = replace(todo)

    def save(self, todo: Todo, expected_deleted: bool) -> bool:
        stored = self.store.get(todo.id)
        if not stored or stored.owner_id != todo.owner_id or stored.is_deleted != expected_deleted:
            return False
        self.store[todo.id] = replace(todo)
        return True

    def delete(self, todo_id: str, owner_id: str) -> bool:
        todo = self.store.get(todo_id)
        if not todo or todo.owner_id != owner_id:
            return False
        del self.store[todo_id]
        return True

    # ── read operations ──────────────────────────────────────

    def get(self, todo_id: str, owner_id: str, deleted: bool | None = None) -> Todo | None:
        todo = self.store.get(todo_id)
        if not todo or todo.owner_id != owner_id:
            return None
        if deleted is not None and todo.is_deleted != deleted:
            return None
        return replace(todo)

    def find_active(self, owner_id: str) -> list[Todo]:
        results = [t for t in self.store.values() if t.owner_id == owner_id and not t.is_deleted]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return [replace(t) for t in results]

    def find_trashed(self, owner_id: str) -> list[Todo]:
        results = [t for t in self.store.values() if t.owner_id == owner_id and t.is_deleted]
        results.sort(key=lambda t: t.deleted_at, reverse=True)
        return [replace(t) for t in results]

    def count_by_state(self) -> dict[str, int]:
        todos = list(self.store.values())
        trashed = sum(1 for t in todos if t.is_deleted)
        return {
            'total': len(todos),
            'active': len(todos) - trashed,
            'trashed': trashed,
            'completed': sum(1 for t in todos if t.is_completed),
        }
