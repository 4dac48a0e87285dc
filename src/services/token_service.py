"""Session token issuing and verification (JWT, HS256).

Tokens are self-contained: nothing is persisted server-side, so a token
stays valid until it expires.
"""

import os
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import PermissionDeniedError
from domain.model.user import Principal, Role, User

logger = logging.getLogger(__name__)

_DEV_SECRET = "dev-secret-change-me"

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", _DEV_SECRET)
if JWT_SECRET_KEY == _DEV_SECRET:
    logger.warning(
        "JWT_SECRET_KEY not set, using the development default. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7


def issue_token(user: User, now: datetime | None = None) -> str:
    """Create a signed session token carrying the user's identity."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": user.email,
        "role": user.role.value,
        "name": user.name,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=JWT_EXPIRATION_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Principal:
    """Verify a session token and return the identity it carries.

    Raises:
        PermissionDeniedError: bad signature, expired, malformed, or missing claims
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
        return Principal(
            id=payload["sub"],
            email=payload["email"],
            role=Role(payload["role"]),
            name=payload["name"],
        )
    except (JWTError, KeyError, ValueError) as e:
        logger.debug(f"JWT verification failed: {e}")
        raise PermissionDeniedError("Invalid token")
