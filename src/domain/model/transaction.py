# domain/model/transaction.py

import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from domain.model.errors import ValidationError


class TransactionType(str, Enum):
    """Direction of a wallet movement."""
    CREDIT = 'CREDIT'
    DEBIT = 'DEBIT'


def is_positive_amount(value) -> bool:
    """True for finite int/float values above zero. Booleans are not amounts."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value > 0


@dataclass(frozen=True)
class Balance:
    """Derived balance of a wallet (Value Object).

    Sum of CREDIT amounts minus sum of DEBIT amounts, computed by the repository.
    """
    amount: float

    def to_dict(self) -> dict:
        return {'amount': self.amount}


@dataclass(frozen=True)
class Transaction:
    """A single CREDIT or DEBIT movement. Immutable once created."""
    id: str
    user_id: str
    amount: float
    type: TransactionType
    created_at: datetime

    # ── factories ─────────────────────────────────────────

    @classmethod
    def create(cls, user_id: str, amount: float, type: TransactionType | str) -> 'Transaction':
        """Validate fields and build a new Transaction with a generated id."""
        tx_type = cls._validate(user_id, amount, type)
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            amount=amount,
            type=tx_type,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def restore(
        cls,
        user_id: str,
        amount: float,
        type: TransactionType | str,
        id: str | None = None,
        created_at: datetime | None = None,
    ) -> 'Transaction':
        """Rehydrate a stored Transaction. Requires id and created_at."""
        if not id or created_at is None:
            raise ValidationError("ID and createdAt are required for restoring a transaction")
        tx_type = cls._validate(user_id, amount, type)
        return cls(id=id, user_id=user_id, amount=amount, type=tx_type, created_at=created_at)

    @staticmethod
    def _validate(user_id, amount, type) -> TransactionType:
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValidationError("User ID is required")
        if not is_positive_amount(amount):
            raise ValidationError("Amount must be greater than 0")
        try:
            return TransactionType(type)
        except ValueError:
            raise ValidationError("Invalid transaction type") from None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'userId': self.user_id,
            'amount': self.amount,
            'type': self.type.value,
            'createdAt': self.created_at.isoformat(),
        }
