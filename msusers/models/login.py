from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TOKEN_TYPE = "Bearer"


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str
    token_type: str = TOKEN_TYPE
    username: str


@dataclass(frozen=True, slots=True)
class LoginResult:
    """Outcome of a login attempt, already expressed as a response status.

    body is None whenever status is not 200.
    """

    status: HTTPStatus
    body: LoginResponse | None = None

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK
