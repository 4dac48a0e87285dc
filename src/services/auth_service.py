"""Registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP status codes.
"""

import logging
from dataclasses import dataclass

import bcrypt

from domain.model.errors import AuthenticationError, DuplicateError, NotFoundError, ValidationError
from domain.model.user import Principal, Role, User
from port.user_repository import UserRepository
from services.token_service import issue_token

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthSession:
    """A freshly issued token together with the user it was issued for."""
    token: str
    user: User


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _create_user(repo: UserRepository, email: str, password: str, name: str, role: Role) -> User:
    if _is_blank(email) or _is_blank(password) or _is_blank(name):
        raise ValidationError("Email, password, and name are required")

    email = normalize_email(email)
    if repo.get_by_email(email):
        raise DuplicateError("Email already exists")

    return repo.create(
        email=email,
        password_hash=_hash_password(password),
        name=name.strip(),
        role=role,
    )


def register(repo: UserRepository, email: str | None, password: str | None, name: str | None) -> AuthSession:
    """Register a new customer account and sign it in.

    Raises:
        ValidationError: a required field is missing
        DuplicateError: email already registered (case-insensitive)
    """
    user = _create_user(repo, email, password, name, Role.CUSTOMER)
    logger.info("User registered", extra={"userId": user.id})
    return AuthSession(token=issue_token(user), user=user)


def login(repo: UserRepository, email: str | None, password: str | None) -> AuthSession:
    """Authenticate a user by email and password.

    Unknown email and wrong password fail with the same message so the
    response does not reveal which accounts exist.

    Raises:
        ValidationError: email or password missing
        AuthenticationError: invalid credentials
    """
    if _is_blank(email) or not password:
        raise ValidationError("Email and password are required")

    user = repo.get_by_email(normalize_email(email))
    if not user or not user.password_hash or not _verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info("User logged in", extra={"userId": user.id})
    return AuthSession(token=issue_token(user), user=user)


def logout() -> str:
    """Acknowledge a logout. Issued tokens stay valid until they expire."""
    return "Logout successful"


def get_profile(repo: UserRepository, principal: Principal) -> User:
    """Load the stored account behind an authenticated caller."""
    user = repo.get_by_id(principal.id)
    if not user:
        raise NotFoundError("User not found")
    return user


def create_admin(repo: UserRepository, email: str, password: str, name: str) -> User:
    """Create an administrator account. Operator tooling only, not exposed over HTTP."""
    user = _create_user(repo, email, password, name, Role.ADMIN)
    logger.info("Admin created", extra={"userId": user.id})
    return user
