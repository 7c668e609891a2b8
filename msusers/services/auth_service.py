from __future__ import annotations

import logging
from dataclasses import replace
from http import HTTPStatus

from msusers.core.metrics import LOGIN_ATTEMPTS
from msusers.models.login import LoginRequest, LoginResponse, LoginResult
from msusers.models.user import User
from msusers.repos.user_repo import UserRepo
from msusers.services.errors import AuthenticationFailed
from msusers.services.password_hasher import PasswordHasher
from msusers.services.token_service import TokenIssuer

logger = logging.getLogger(__name__)


class Authenticator:
    def __init__(
        self, repo: UserRepo, hasher: PasswordHasher, issuer: TokenIssuer
    ) -> None:
        self._repo = repo
        self._hasher = hasher
        self._issuer = issuer

    def verify_credentials(self, email: str, password: str) -> User:
        """Return the user owning *email* if *password* matches.

        Unknown email and wrong password raise the same
        AuthenticationFailed so callers cannot tell them apart.  The
        active flag is not consulted.
        """
        user = self._repo.find_by_email(email)
        if user is None or not self._hasher.verify(password, user.password_hash):
            raise AuthenticationFailed()

        # Upgrade the stored hash if the hasher's parameters changed since.
        if self._hasher.needs_rehash(user.password_hash):
            user = self._repo.save(
                replace(user, password_hash=self._hasher.hash(password))
            )
            logger.info("Rehashed password for user id=%s", user.id)

        return user

    def login(self, request: LoginRequest) -> LoginResult:
        try:
            self.verify_credentials(request.email, request.password)
        except AuthenticationFailed:
            LOGIN_ATTEMPTS.labels(result="failure").inc()
            logger.warning("Login failed  email=%s", request.email)
            return LoginResult(status=HTTPStatus.UNAUTHORIZED)

        token = self._issuer.issue(request.email)
        LOGIN_ATTEMPTS.labels(result="success").inc()
        logger.info("Login succeeded  email=%s", request.email)
        return LoginResult(
            status=HTTPStatus.OK,
            body=LoginResponse(token=token, username=request.email),
        )
