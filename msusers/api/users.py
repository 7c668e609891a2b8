from __future__ import annotations

import logging
from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from msusers.api.dependencies import get_account_service, require_user
from msusers.models.user_dto import UserDTO
from msusers.services.errors import (
    InvalidNameLength,
    InvalidUserData,
    UserConflictError,
    UserServiceError,
)
from msusers.services.users_service import AccountService

logger = logging.getLogger(__name__)

# Endpoint Logic - POST/GET/PUT /v1/users, delegating to AccountService

router = APIRouter(prefix="/v1/users", tags=["users"])

_UNPROCESSABLE = 422


class UserOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    first_name: str | None
    last_name: str | None
    email: str
    cpf: str | None
    birthdate: date | None
    active: bool | None

    @classmethod
    def from_dto(cls, dto: UserDTO) -> UserOut:
        return cls.model_validate(dto.model_dump(exclude={"password"}))


class PasswordChangeIn(BaseModel):
    password: str = Field(min_length=1)


def _http_error(e: UserServiceError) -> HTTPException:
    detail: dict[str, Any] = {"error": e.code, "message": e.message}
    if isinstance(e, InvalidNameLength):
        detail["field"] = e.field
    if isinstance(e, InvalidUserData) and e.errors:
        detail["errors"] = e.errors

    status_code = (
        status.HTTP_409_CONFLICT if isinstance(e, UserConflictError) else _UNPROCESSABLE
    )
    return HTTPException(status_code=status_code, detail=detail)


# The raw JSON object goes to the service untouched so schema errors come
# out of the validation pipeline (InvalidUserData) like every other rule.
UserPayload = Annotated[dict[str, Any], Body()]
Service = Annotated[AccountService, Depends(get_account_service)]


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserPayload, service: Service) -> UserOut:
    try:
        created = service.create(payload)
    except UserServiceError as e:
        logger.warning("Create user rejected: %s", e.code)
        raise _http_error(e) from None
    return UserOut.from_dto(created)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    service: Service,
    _subject: Annotated[str, Depends(require_user)],
) -> UserOut:
    found = service.get_by_id(user_id)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return UserOut.from_dto(found)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserPayload,
    service: Service,
    _subject: Annotated[str, Depends(require_user)],
) -> UserOut:
    try:
        updated = service.update(user_id, payload)
    except UserServiceError as e:
        logger.warning("Update user id=%d rejected: %s", user_id, e.code)
        raise _http_error(e) from None
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return UserOut.from_dto(updated)


@router.put("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    user_id: int,
    body: PasswordChangeIn,
    service: Service,
    _subject: Annotated[str, Depends(require_user)],
) -> Response:
    # Unknown ids are a no-op and answer 204 as well.
    service.change_password(user_id, body.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
