from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""

    async def save(self, user: User) -> User:
        """Persist a new user. Return the stored User."""
        ...

    async def find_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    async def find_all(self) -> list[User]:
        """Return every stored user."""
        ...

    async def update(self, user: User) -> User:
        """Persist changes to an existing user, stamping updated_at. Return the stored User."""
        ...

    async def delete(self, user_id: str) -> bool:
        """Delete a user by ID. Return True if a record was removed."""
        ...
