"""Todo routes. Every endpoint acts on the authenticated caller's todos only.

Endpoints:
- GET    /api/todos                    active todos
- GET    /api/todos/deleted/list       trashed todos
- POST   /api/todos                    create
- PUT    /api/todos/{id}               partial update
- DELETE /api/todos/{id}               move to trash
- PUT    /api/todos/{id}/restore       restore from trash
- DELETE /api/todos/{id}/permanent     delete forever
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_todo_repo
from api.models import (
    TodoCreateRequest,
    TodoEnvelope,
    TodoListResponse,
    TodoResponse,
    TodoUpdateRequest,
)
from api.security import get_current_user_required
from domain.model.todo import Todo
from domain.model.user import Principal
from port.todo_repository import TodoRepository
from services import todo_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/todos", tags=["todos"])


def _to_response(todo: Todo) -> TodoResponse:
    return TodoResponse(
        id=todo.id,
        title=todo.title,
        description=todo.description,
        is_completed=todo.is_completed,
        priority=todo.priority,
        due_date=todo.due_date,
        owner_id=todo.owner_id,
        is_deleted=todo.is_deleted,
        deleted_at=todo.deleted_at,
        created_at=todo.created_at,
        updated_at=todo.updated_at,
    )


@router.get("", response_model=TodoListResponse)
def get_todos(
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    todos = todo_service.list_active(repo, current_user.id)
    return TodoListResponse(
        message="Todos fetched successfully",
        todos=[_to_response(t) for t in todos],
    )


@router.get("/deleted/list", response_model=TodoListResponse)
def get_deleted_todos(
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    todos = todo_service.list_trashed(repo, current_user.id)
    return TodoListResponse(
        message="Deleted todos fetched successfully",
        todos=[_to_response(t) for t in todos],
    )


@router.post("", response_model=TodoEnvelope, status_code=status.HTTP_201_CREATED)
def create_todo(
    request: TodoCreateRequest,
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    todo = todo_service.create(
        repo,
        owner_id=current_user.id,
        title=request.title,
        description=request.description,
        priority=request.priority,
        due_date=request.due_date,
    )
    return TodoEnvelope(message="Todo created successfully", todo=_to_response(todo))


@router.put("/{todo_id}", response_model=TodoEnvelope)
def update_todo(
    todo_id: str,
    request: TodoUpdateRequest,
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    # exclude_unset keeps "sent as null" apart from "not sent"
    changes = request.model_dump(exclude_unset=True)
    todo = todo_service.update(repo, current_user.id, todo_id, changes)
    return TodoEnvelope(message="Todo updated successfully", todo=_to_response(todo))


@router.delete("/{todo_id}", response_model=TodoEnvelope)
def delete_todo(
    todo_id: str,
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    todo = todo_service.soft_delete(repo, current_user.id, todo_id)
    return TodoEnvelope(message="Todo deleted successfully", todo=_to_response(todo))


@router.put("/{todo_id}/restore", response_model=TodoEnvelope)
def restore_todo(
    todo_id: str,
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    todo = todo_service.restore(repo, current_user.id, todo_id)
    return TodoEnvelope(message="Todo restored successfully", todo=_to_response(todo))


@router.delete("/{todo_id}/permanent", response_model=TodoEnvelope)
def permanently_delete_todo(
    todo_id: str,
    current_user: Principal = Depends(get_current_user_required),
    repo: TodoRepository = Depends(get_todo_repo),
):
    todo = todo_service.purge(repo, current_user.id, todo_id)
    return TodoEnvelope(message="Todo permanently deleted successfully", todo=_to_response(todo))
