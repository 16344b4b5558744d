"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map them to HTTP status codes by type,
using the stable ``code`` each class carries.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    code = "UNEXPECTED_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    code = "NOT_FOUND"


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    code = "VALIDATION_ERROR"


class DuplicateError(ValidationError):
    """Entity with the same unique key already exists."""


class AuthenticationError(DomainError):
    """Credentials do not match a known user."""

    code = "INVALID_CREDENTIALS"


class InsufficientFundsError(DomainError):
    """Requested debit exceeds the current balance."""

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, current_balance: float, requested_amount: float):
        self.current_balance = current_balance
        self.requested_amount = requested_amount
        super().__init__("Insufficient funds for this transaction")
