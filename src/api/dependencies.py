from adapter.mongodb.connection import get_database
from adapter.mongodb.todo_repository import MongoTodoRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import RepositoryError
from port.todo_repository import TodoRepository
from port.user_repository import UserRepository


def _get_db():
    """Get MongoDB database, raising RepositoryError (500) if unavailable."""
    db = get_database()
    if db is None:
        raise RepositoryError("Database unavailable")
    return db


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_todo_repo() -> TodoRepository:
    return MongoTodoRepository(_get_db())
