"""Bearer-token authentication and role gates.

Usage in a route::

    current_user: Principal = Depends(get_current_user_required)
    admin: Principal = Depends(require_admin)

Role gates are built on top of get_current_user_required, so FastAPI
always authenticates before it checks the role.
"""

import logging
from typing import Callable, Optional
from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from domain.model.errors import AuthenticationError, PermissionDeniedError
from domain.model.user import Principal, Role
from services.token_service import decode_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# APIKeyHeader hands over the raw header so both "Bearer <token>" and a bare token work
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Session token, either 'Bearer <token>' or the bare token",
)


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an Authorization header value."""
    if not authorization or not authorization.strip():
        return None
    value = authorization.strip()
    if value.startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    return value or None


def get_current_user_required(
    authorization: Optional[str] = Security(authorization_header),
) -> Principal:
    """Authenticate the caller from the Authorization header.

    Raises:
        AuthenticationError: 401 if no token was sent
        PermissionDeniedError: 403 if the token is invalid or expired
    """
    token = extract_token(authorization)
    if not token:
        raise AuthenticationError("No token provided")
    return decode_token(token)


def require_role(role: Role) -> Callable[..., Principal]:
    """Build a dependency that admits only callers holding ``role``."""

    def check_role(current_user: Principal = Depends(get_current_user_required)) -> Principal:
        if current_user.role != role:
            logger.warning(
                "Role check failed",
                extra={"userId": current_user.id, "required": role.value, "actual": current_user.role.value},
            )
            raise PermissionDeniedError(f"{role.value.capitalize()} access required")
        return current_user

    return check_role


require_admin = require_role(Role.ADMIN)
require_customer = require_role(Role.CUSTOMER)
