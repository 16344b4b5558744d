"""User use-cases: registration and profile management.

Each use-case receives its repository through the constructor and exposes
a single ``execute`` coroutine. Repository and hashing failures are not
caught here; they propagate to the route handler.
"""

import asyncio
import logging

from domain.model.errors import DomainError, DuplicateError, NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository
from services.auth_service import hash_password

USER_NOT_FOUND_MESSAGE = "User not found"


class CreateUserUseCase:
    """Register a new user: duplicate check → hash → build entity → save."""

    def __init__(self, user_repo: UserRepository, logger: logging.Logger | None = None):
        self.user_repo = user_repo
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, first_name: str, last_name: str, email: str, password: str) -> User:
        """Return the persisted User.

        Raises:
            DuplicateError: email already registered
            ValidationError: entity field rules violated
        """
        if await self.user_repo.find_by_email(email):
            raise DuplicateError("User with this email already exists")

        password_hash = await asyncio.to_thread(hash_password, password)

        user = User.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password_hash,
        )
        saved = await self.user_repo.save(user)

        self.logger.info("User created", extra={"userId": saved.id})
        return saved


class GetUserByIdUseCase:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self, id: str) -> User:
        user = await self.user_repo.find_by_id(id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user


class GetAllUsersUseCase:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self) -> list[User]:
        return await self.user_repo.find_all()


class UpdateUserUseCase:
    """Apply first/last name changes. Empty strings leave a field unchanged."""

    def __init__(self, user_repo: UserRepository, logger: logging.Logger | None = None):
        self.user_repo = user_repo
        self.logger = logger or logging.getLogger(__name__)

    async def execute(
        self,
        id: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        user = await self.user_repo.find_by_id(id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        user.update_profile(first_name=first_name, last_name=last_name)
        updated = await self.user_repo.update(user)

        self.logger.info("User updated", extra={"userId": id})
        return updated


class DeleteUserUseCase:
    def __init__(self, user_repo: UserRepository, logger: logging.Logger | None = None):
        self.user_repo = user_repo
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, id: str) -> None:
        """Raises NotFoundError, or DomainError when the repository reports no deletion."""
        user = await self.user_repo.find_by_id(id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        if not await self.user_repo.delete(id):
            raise DomainError("Failed to delete user")

        self.logger.info("User deleted", extra={"userId": id})
