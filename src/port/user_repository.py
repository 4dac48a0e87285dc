from typing import Protocol

from domain.model.user import Role, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""

    def create(self, email: str, password_hash: str, name: str, role: Role = Role.CUSTOMER) -> User:
        """Create a new user.

        Raises DuplicateError if the email is already taken.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by (already normalised) email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def count(self) -> int:
        """Number of registered users."""
        ...
