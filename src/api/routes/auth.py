"""Authentication route (login)."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError as RequestValidationError

from api.dependencies import get_authenticate_user_use_case
from api.errors import domain_error_response, unexpected_error_response, validation_error_response
from api.models import AuthenticateRequest, format_validation_error
from domain.model.errors import AuthenticationError
from services.auth_service import AuthenticateUserUseCase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("")
async def authenticate(
    payload: Any = Body(default=None),
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
):
    """Exchange ``{"user": {"email", "password"}}`` for an access token.

    Returns:
        ``{"user": ..., "access_token": ...}``

    Unknown email and wrong password both answer 401 with the same message.
    """
    try:
        request = AuthenticateRequest.model_validate(payload or {})
    except RequestValidationError as e:
        return validation_error_response(format_validation_error(e))

    try:
        result = await use_case.execute(
            email=request.user.email,
            password=request.user.password,
        )
    except AuthenticationError as e:
        return domain_error_response(status.HTTP_401_UNAUTHORIZED, e)
    except Exception as e:
        return unexpected_error_response(
            logger, e, "authentication",
            error="Internal server error during authentication",
            with_code=True,
        )

    return {
        "user": result.user.to_dict(),
        "access_token": result.access_token,
    }
