"""Administrator-only routes."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_todo_repo, get_user_repo
from api.models import StatsResponse, TodoCounts
from api.security import require_admin
from domain.model.user import Principal
from port.todo_repository import TodoRepository
from port.user_repository import UserRepository
from services import stats_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    admin: Principal = Depends(require_admin),
    user_repo: UserRepository = Depends(get_user_repo),
    todo_repo: TodoRepository = Depends(get_todo_repo),
):
    """User and todo counters across all accounts."""
    overview = stats_service.get_overview(user_repo, todo_repo)
    logger.info("Admin stats retrieved", extra={"userId": admin.id})
    return StatsResponse(
        users=overview['users'],
        todos=TodoCounts(**overview['todos']),
        generated_at=overview['generated_at'],
    )
