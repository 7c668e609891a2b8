from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, StrictBool

# Same shape check the register form always used: something@something.tld
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 320
CPF_MAX_LENGTH = 14


@dataclass(frozen=True, slots=True)
class User:
    email: str
    cpf: str
    password_hash: str
    active: bool
    first_name: str | None = None
    last_name: str | None = None
    birthdate: date | None = None
    id: int | None = None  # assigned by the store on first save

    @staticmethod
    def new(
        *,
        email: str,
        cpf: str,
        password_hash: str,
        active: bool,
        first_name: str | None = None,
        last_name: str | None = None,
        birthdate: date | None = None,
    ) -> User:
        return User(
            email=email,
            cpf=cpf,
            password_hash=password_hash,
            active=active,
            first_name=first_name,
            last_name=last_name,
            birthdate=birthdate,
        )

    def with_id(self, user_id: int) -> User:
        return replace(self, id=user_id)


class UserConstraints(BaseModel):
    """Declared constraints on a persisted User.

    The dataclass stays a plain value object; this model is only used to
    check a User before it is written (see validation.validate_entity).
    """

    model_config = ConfigDict(extra="forbid")

    id: int | None = None
    first_name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    email: str = Field(max_length=EMAIL_MAX_LENGTH, pattern=EMAIL_PATTERN)
    cpf: str = Field(min_length=1, max_length=CPF_MAX_LENGTH)
    birthdate: date | None = None
    password_hash: str = Field(min_length=1)
    active: StrictBool

    @classmethod
    def check(cls, user: User) -> None:
        cls.model_validate(asdict(user))
