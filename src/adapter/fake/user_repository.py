"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace
from datetime import datetime, timezone

from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    async def save(self, user: User) -> User:
        self.store[user.id] = replace(user)
        return replace(user)

    async def update(self, user: User) -> User:
        stored = replace(user, updated_at=datetime.now(timezone.utc))
        self.store[user.id] = stored
        return replace(stored)

    async def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    async def find_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    async def find_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    async def find_all(self) -> list[User]:
        return [replace(user) for user in self.store.values()]
