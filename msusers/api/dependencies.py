"""Collaborator wiring and shared FastAPI dependencies.

One repo, hasher and token issuer are built at import time and handed to
the services through the get_* dependencies below.  Tests swap any of
them with app.dependency_overrides.
"""

from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from msusers.core.config import SETTINGS
from msusers.db.engine import session_factory
from msusers.repos.sql_user_repo import SqlUserRepo
from msusers.repos.user_repo import InMemoryUserRepo, UserRepo
from msusers.services.auth_service import Authenticator
from msusers.services.password_hasher import Argon2PasswordHasher, PasswordHasher
from msusers.services.token_service import JwtTokenIssuer, TokenIssuer
from msusers.services.users_service import AccountService

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/login")


def _build_user_repo() -> UserRepo:
    if session_factory is None:
        return InMemoryUserRepo()
    return SqlUserRepo(session_factory)


user_repo: UserRepo = _build_user_repo()
password_hasher: PasswordHasher = Argon2PasswordHasher()
token_issuer: TokenIssuer = JwtTokenIssuer(ttl_min=SETTINGS.access_token_ttl_min)


def get_user_repo() -> UserRepo:
    return user_repo


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_account_service(
    repo: Annotated[UserRepo, Depends(get_user_repo)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AccountService:
    return AccountService(repo, hasher)


def get_authenticator(
    repo: Annotated[UserRepo, Depends(get_user_repo)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Authenticator:
    return Authenticator(repo, hasher, issuer)


def require_user(
    raw_token: Annotated[str, Depends(oauth2_scheme)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> str:
    """Validate the bearer token and return its subject (the user's email).

    Used as a FastAPI dependency on any protected endpoint.
    """
    try:
        claims = issuer.decode(raw_token)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    logger.debug("Token validated for subject=%s", claims["sub"])
    return claims["sub"]
