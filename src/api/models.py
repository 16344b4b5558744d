"""Pydantic models for API requests, plus error formatting.

Request bodies are validated here rather than in the route signature so that
failures become 400 responses with stable, human-readable messages instead of
FastAPI's default 422 payload.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from services.auth_service import BCRYPT_MAX_PASSWORD_BYTES


class CreateUserRequest(BaseModel):
    """Request model for user registration."""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "string_too_long",
                "String should have at most {max_length} bytes",
                {"max_length": BCRYPT_MAX_PASSWORD_BYTES, "unit": "bytes"},
            )
        return value


class UpdateUserRequest(BaseModel):
    """Request model for profile updates. Omitted fields stay unchanged."""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthenticateRequest(BaseModel):
    """Request model for login: ``{"user": {"email": ..., "password": ...}}``."""
    user: Credentials


def format_validation_error(exc: ValidationError) -> str:
    """Describe the first validation failure, e.g. ``"first_name" is required``."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    kind = error["type"]

    if kind == "missing":
        return f'"{field}" is required'
    if kind == "string_too_short":
        min_length = error.get("ctx", {}).get("min_length", 1)
        if min_length <= 1:
            return f'"{field}" is not allowed to be empty'
        return f'"{field}" length must be at least {min_length} characters long'
    if kind == "string_too_long":
        ctx = error.get("ctx", {})
        unit = ctx.get("unit", "characters")
        return f'"{field}" length must be less than or equal to {ctx.get("max_length")} {unit} long'
    if kind == "string_type":
        return f'"{field}" must be a string'
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return f'"{field}" must be of type object'
    if field.split(".")[-1] == "email":
        return f'"{field}" must be a valid email'
    return f'"{field}" is invalid'
