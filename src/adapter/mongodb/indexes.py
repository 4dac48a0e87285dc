"""MongoDB index management.

Each MongoXxxRepository declares its indexes through create_index_safe.
An existing index that clashes with the declared one (same name with other
keys, or same keys under another name) is dropped and rebuilt.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Server error codes for IndexOptionsConflict / IndexKeySpecsConflict
_CONFLICT_CODES = {85, 86}


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a conflicting one if necessary."""
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in _CONFLICT_CODES and "already exists" not in str(e):
            raise

    clash = _find_clash(collection, dict(keys), name)
    if clash is None:
        logger.error("Unresolved index conflict", extra={"index": name, "collection": collection.name})
        return False

    logger.warning("Replacing conflicting index", extra={"dropped": clash, "index": name})
    collection.drop_index(clash)
    collection.create_index(keys, name=name, **kwargs)
    return True


def _find_clash(collection: Collection, wanted_keys: dict, name: str) -> str | None:
    for existing_name, info in collection.index_information().items():
        if existing_name == '_id_':
            continue
        same_keys = dict(info.get('key', [])) == wanted_keys
        if (existing_name == name) != same_keys:
            return existing_name
    return None


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for the users and todos collections. Called at app startup."""
    from adapter.mongodb.todo_repository import MongoTodoRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    # Run both even if the first fails
    users_ok = MongoUserRepository(db).ensure_indexes()
    todos_ok = MongoTodoRepository(db).ensure_indexes()
    return users_ok and todos_ok
