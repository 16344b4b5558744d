"""User management routes.

- POST /users: Register a user
- GET /users: List users
- GET /users/{id}: Get a user
- PUT /users/{id}: Update first/last name
- DELETE /users/{id}: Delete a user

Everything except registration requires a bearer token.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as RequestValidationError

from api.dependencies import (
    get_all_users_use_case,
    get_create_user_use_case,
    get_delete_user_use_case,
    get_update_user_use_case,
    get_user_by_id_use_case,
)
from api.errors import (
    domain_error_response,
    unexpected_error_response,
    validation_error_response,
)
from api.models import CreateUserRequest, UpdateUserRequest, format_validation_error
from api.security import get_token_claims
from domain.model.errors import NotFoundError, ValidationError
from services.user_service import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetAllUsersUseCase,
    GetUserByIdUseCase,
    UpdateUserUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Any = Body(default=None),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    """Register a new user. The response never includes the password."""
    try:
        request = CreateUserRequest.model_validate(payload or {})
    except RequestValidationError as e:
        return validation_error_response(format_validation_error(e))

    try:
        user = await use_case.execute(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
        )
    except ValidationError as e:
        logger.info("User registration rejected", extra={"reason": e.message})
        return domain_error_response(status.HTTP_400_BAD_REQUEST, e)
    except Exception as e:
        return unexpected_error_response(
            logger, e, "user creation",
            error="Internal server error during user creation",
            with_code=True,
        )

    logger.info("User registered", extra={"userId": user.id})
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=user.to_dict())


@router.get("")
async def get_all_users(
    claims: dict = Depends(get_token_claims),
    use_case: GetAllUsersUseCase = Depends(get_all_users_use_case),
):
    try:
        users = await use_case.execute()
    except Exception as e:
        return unexpected_error_response(logger, e, "user listing")

    return [user.to_dict() for user in users]


@router.get("/{user_id}")
async def get_user_by_id(
    user_id: str,
    claims: dict = Depends(get_token_claims),
    use_case: GetUserByIdUseCase = Depends(get_user_by_id_use_case),
):
    try:
        user = await use_case.execute(id=user_id)
    except NotFoundError as e:
        return domain_error_response(status.HTTP_404_NOT_FOUND, e, with_code=False)
    except Exception as e:
        return unexpected_error_response(logger, e, "user lookup", userId=user_id)

    return user.to_dict()


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    payload: Any = Body(default=None),
    claims: dict = Depends(get_token_claims),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    """Update first and/or last name. Empty strings are rejected."""
    try:
        request = UpdateUserRequest.model_validate(payload or {})
    except RequestValidationError as e:
        return validation_error_response(format_validation_error(e))

    try:
        user = await use_case.execute(
            id=user_id,
            first_name=request.first_name,
            last_name=request.last_name,
        )
    except NotFoundError as e:
        return domain_error_response(status.HTTP_404_NOT_FOUND, e, with_code=False)
    except ValidationError as e:
        return domain_error_response(status.HTTP_400_BAD_REQUEST, e)
    except Exception as e:
        return unexpected_error_response(logger, e, "user update", userId=user_id)

    return user.to_dict()


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    claims: dict = Depends(get_token_claims),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    try:
        await use_case.execute(id=user_id)
    except NotFoundError as e:
        return domain_error_response(status.HTTP_404_NOT_FOUND, e, with_code=False)
    except Exception as e:
        return unexpected_error_response(logger, e, "user deletion", userId=user_id)

    return {"message": "User deleted successfully"}
