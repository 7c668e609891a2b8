"""External representation of a user and the entity <-> DTO mapping."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

from msusers.models.user import (
    CPF_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    EMAIL_PATTERN,
    NAME_MAX_LENGTH,
    User,
)

PASSWORD_MAX_LENGTH = 128


class UserDTO(BaseModel):
    """User as clients send and receive it (camelCase on the wire).

    Only the structural constraints live here.  Business rules such as
    minimum name length or CPF format are checked by the validation
    pipeline so they can fail in a fixed order with specific errors.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    id: int | None = None
    first_name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    email: str = Field(max_length=EMAIL_MAX_LENGTH, pattern=EMAIL_PATTERN)
    cpf: str | None = Field(default=None, max_length=CPF_MAX_LENGTH)
    birthdate: date | None = None
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LENGTH)
    active: StrictBool | None = None


def user_to_dto(user: User) -> UserDTO:
    # password is write-only: never copy the hash back out
    return UserDTO(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        cpf=user.cpf,
        birthdate=user.birthdate,
        active=user.active,
    )
