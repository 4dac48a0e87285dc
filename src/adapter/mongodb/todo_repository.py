"""MongoDB implementation of TodoRepository."""

from logging import getLogger

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import TODOS_COLLECTION_NAME
from domain.model.errors import RepositoryError
from domain.model.todo import Priority, Todo

logger = getLogger(__name__)


class MongoTodoRepository:
    def __init__(self, db: Database):
        self.collection = db[TODOS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for todos collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [
                ('user_id', 1),
                ('is_deleted', 1),
                ('created_at', -1),
            ], 'idx_todos_owner_active')
            create_index_safe(self.collection, [
                ('user_id', 1),
                ('is_deleted', 1),
                ('deleted_at', -1),
            ], 'idx_todos_owner_trash')
            return True
        except PyMongoError as e:
            logger.error("Failed to create todos indexes", extra={"error": str(e)})
            return False

    # ── mapping ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Todo:
        """Convert MongoDB document to Todo domain model."""
        return Todo(
            id=doc['_id'],
            owner_id=doc['user_id'],
            title=doc['title'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            description=doc.get('description', ''),
            is_completed=doc.get('is_completed', False),
            priority=Priority(doc.get('priority', Priority.MEDIUM.value)),
            due_date=doc.get('due_date'),
            is_deleted=doc.get('is_deleted', False),
            deleted_at=doc.get('deleted_at'),
        )

    def _find(self, query: dict, sort_field: str) -> list[Todo]:
        try:
            docs = self.collection.find(query).sort(sort_field, DESCENDING)
            return [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list todos", extra={"userId": query.get('user_id'), "error": str(e)})
            raise RepositoryError("Failed to fetch todos") from e

    # ── write operations ─────────────────────────────────────

    @staticmethod
    def _mutable_fields(todo: Todo) -> dict:
        return {
            'title': todo.title,
            'description': todo.description,
            'is_completed': todo.is_completed,
            'priority': todo.priority.value,
            'due_date': todo.due_date,
            'is_deleted': todo.is_deleted,
            'deleted_at': todo.deleted_at,
            'updated_at': todo.updated_at,
        }

    def add(self, todo: Todo) -> None:
        doc = {
            '_id': todo.id,
            'user_id': todo.owner_id,
            'created_at': todo.created_at,
            **self._mutable_fields(todo),
        }
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to insert todo", extra={"todoId": todo.id, "error": str(e)})
            raise RepositoryError("Failed to save todo") from e

        logger.debug("Todo inserted", extra={"todoId": todo.id, "userId": todo.owner_id})

    def save(self, todo: Todo, expected_deleted: bool) -> bool:
        """Conditional write-back. Never upserts, so a purged todo stays gone."""
        try:
            result = self.collection.update_one(
                {'_id': todo.id, 'user_id': todo.owner_id, 'is_deleted': expected_deleted},
                {'$set': self._mutable_fields(todo)},
            )
        except PyMongoError as e:
            logger.error("Failed to save todo", extra={"todoId": todo.id, "error": str(e)})
            raise RepositoryError("Failed to save todo") from e

        if result.matched_count == 0:
            logger.warning("Todo changed before save", extra={"todoId": todo.id, "userId": todo.owner_id})
            return False
        return True

    def delete(self, todo_id: str, owner_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': todo_id, 'user_id': owner_id})
        except PyMongoError as e:
            logger.error("Failed to delete todo", extra={"todoId": todo_id, "error": str(e)})
            raise RepositoryError("Failed to delete todo") from e

        if result.deleted_count == 0:
            logger.warning("Todo not found for deletion", extra={"todoId": todo_id, "userId": owner_id})
            return False
        return True

    # ── read operations ──────────────────────────────────────

    def get(self, todo_id: str, owner_id: str, deleted: bool | None = None) -> Todo | None:
        query: dict = {'_id': todo_id, 'user_id': owner_id}
        if deleted is not None:
            query['is_deleted'] = deleted
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("Failed to retrieve todo", extra={"todoId": todo_id, "error": str(e)})
            raise RepositoryError("Failed to fetch todo") from e
        return self._to_domain(doc) if doc else None

    def find_active(self, owner_id: str) -> list[Todo]:
        return self._find({'user_id': owner_id, 'is_deleted': False}, 'created_at')

    def find_trashed(self, owner_id: str) -> list[Todo]:
        return self._find({'user_id': owner_id, 'is_deleted': True}, 'deleted_at')

    def count_by_state(self) -> dict[str, int]:
        try:
            total = self.collection.count_documents({})
            trashed = self.collection.count_documents({'is_deleted': True})
            completed = self.collection.count_documents({'is_completed': True})
        except PyMongoError as e:
            logger.error("Failed to count todos", extra={"error": str(e)})
            raise RepositoryError("Failed to count todos") from e
        return {
            'total': total,
            'active': total - trashed,
            'trashed': trashed,
            'completed': completed,
        }
