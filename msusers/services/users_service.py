from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from msusers.models.user import User
from msusers.models.user_dto import UserDTO, user_to_dto
from msusers.repos.user_repo import UserRepo
from msusers.services.errors import InvalidPasswordLength
from msusers.services.password_hasher import PasswordHasher
from msusers.services.validation import (
    UserValidator,
    validate_entity,
    validate_schema,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Create, read and update user accounts.

    Holds no state of its own: every call re-reads from the repo, so one
    instance can serve concurrent requests.
    """

    def __init__(self, repo: UserRepo, hasher: PasswordHasher) -> None:
        self._repo = repo
        self._hasher = hasher
        self._validator = UserValidator(repo)

    def create(self, candidate: UserDTO | Mapping[str, Any]) -> UserDTO:
        dto = self._validator.validate(candidate)
        if dto.password is None:
            # The length check lets a missing password through; the entity
            # still needs something to hash.
            logger.warning("Rejected user without password email=%s", dto.email)
            raise InvalidPasswordLength("A password is required.")

        user = User.new(
            first_name=dto.first_name,
            last_name=dto.last_name,
            email=dto.email,
            cpf=dto.cpf,  # type: ignore[arg-type]
            birthdate=dto.birthdate,
            password_hash=self._hasher.hash(dto.password),
            active=dto.active,  # type: ignore[arg-type]
        )
        saved = self._repo.save(user)
        logger.info("Created user id=%s email=%s", saved.id, saved.email)
        return user_to_dto(saved)

    def get_by_id(self, user_id: int) -> UserDTO | None:
        user = self._repo.find_by_id(user_id)
        return None if user is None else user_to_dto(user)

    def update(
        self, user_id: int, candidate: UserDTO | Mapping[str, Any]
    ) -> UserDTO | None:
        """Replace every mutable field except the password.

        Only structural checks run here; uniqueness is left to the
        store's constraints.  Returns None when the user does not exist.
        """
        dto = validate_schema(candidate)

        existing = self._repo.find_by_id(user_id)
        if existing is None:
            logger.info("Update skipped, no user id=%s", user_id)
            return None

        merged = replace(
            existing,
            first_name=dto.first_name,
            last_name=dto.last_name,
            email=dto.email,
            cpf=dto.cpf,
            birthdate=dto.birthdate,
            active=dto.active,
        )
        validate_entity(merged)

        saved = self._repo.save(merged)
        logger.info("Updated user id=%s", saved.id)
        return user_to_dto(saved)

    def change_password(self, user_id: int, new_password: str) -> bool:
        """Hash and store a new password.

        An unknown id is a silent no-op; the return value tells the
        caller whether anything was written.  An empty password raises
        InvalidPasswordLength whether or not the user exists.
        """
        if not new_password:
            raise InvalidPasswordLength("A password is required.")

        user = self._repo.find_by_id(user_id)
        if user is None:
            logger.info("Password change skipped, no user id=%s", user_id)
            return False

        self._repo.save(replace(user, password_hash=self._hasher.hash(new_password)))
        logger.info("Password changed for user id=%s", user_id)
        return True
