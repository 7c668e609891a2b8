"""POST /v1/login: exchange email + password for a bearer token.

Wrong password and unknown email produce the same empty 401, so the
endpoint cannot be used to discover which emails are registered.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from msusers.api.dependencies import get_authenticator
from msusers.models.login import LoginRequest, LoginResponse
from msusers.services.auth_service import Authenticator

router = APIRouter(prefix="/v1", tags=["login"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid email or password (empty body)"}},
)
def login(
    payload: LoginRequest,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> LoginResponse | Response:
    result = authenticator.login(payload)
    if result.body is None:
        return Response(status_code=int(result.status))
    return result.body
