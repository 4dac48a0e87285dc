"""Authentication routes (register, login, logout, me)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_repo
from api.models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)
from api.security import get_current_user_required
from domain.model.user import Principal, User
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _to_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(**user.public_view())


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user.

    Returns:
        JWT token and public user info

    Raises:
        400 if a field is missing, 409 if the email is already registered
    """
    session = auth_service.register(repo, request.email, request.password, request.name)
    return AuthResponse(
        message="Registration successful",
        token=session.token,
        user=_to_response(session.user),
    )


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return JWT token.

    Raises:
        400 if a field is missing, 401 if credentials are invalid
    """
    session = auth_service.login(repo, request.email, request.password)
    return AuthResponse(
        message="Login successful",
        token=session.token,
        user=_to_response(session.user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Acknowledge logout. The client discards its token; nothing is revoked server-side."""
    return MessageResponse(message=auth_service.logout())


@router.get("/me")
def get_me(
    current_user: Principal = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get current authenticated user info."""
    user = auth_service.get_profile(repo, current_user)
    profile = ProfileResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=user.created_at,
    )
    return {"user": profile.model_dump(mode="json", by_alias=True)}
