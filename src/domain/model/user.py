# domain/model/user.py

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


@dataclass
class User:
    """Domain model representing a registered user.

    ``password`` holds whatever the caller supplied: plaintext when the
    entity is validated, the bcrypt hash once the service has hashed it.
    """
    id: str
    first_name: str
    last_name: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime

    # ── factories ─────────────────────────────────────────

    @classmethod
    def create(cls, first_name: str, last_name: str, email: str, password: str) -> 'User':
        """Validate fields and build a new User with a generated id and timestamps."""
        cls._validate(first_name, last_name, email, password)
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def restore(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> 'User':
        """Rehydrate a stored User. Requires id and created_at."""
        if not id or created_at is None:
            raise ValidationError("ID and createdAt are required for restoring a user")
        cls._validate(first_name, last_name, email, password)
        return cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            created_at=created_at,
            updated_at=updated_at or created_at,
        )

    @staticmethod
    def _validate(first_name, last_name, email, password) -> None:
        if _is_blank(first_name):
            raise ValidationError("First name is required")
        if _is_blank(last_name):
            raise ValidationError("Last name is required")
        if _is_blank(email):
            raise ValidationError("Email is required")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email format")
        if not password:
            raise ValidationError("Password is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 6 characters long")

    # ── mutations ─────────────────────────────────────────

    def update_password(self, new_password: str) -> None:
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 6 characters long")
        self.password = new_password
        self.updated_at = datetime.now(timezone.utc)

    def update_profile(self, first_name: str | None = None, last_name: str | None = None) -> None:
        """Apply name changes. Empty values mean "leave as is"."""
        if first_name:
            self.first_name = first_name
        if last_name:
            self.last_name = last_name

    # ── serialization ─────────────────────────────────────

    def to_dict(self) -> dict:
        """Public JSON representation. The password is never included."""
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
