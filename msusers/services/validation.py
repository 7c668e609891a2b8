"""Validation pipeline for user payloads.

UserValidator.validate() runs the checks in a fixed order and stops at
the first failure:

  1. schema (declared UserDTO constraints)    InvalidUserData
  2. firstName length                         InvalidNameLength
  3. lastName length                          InvalidNameLength
  4. password length                          InvalidPasswordLength
  5. cpf not already taken                    DuplicateCpf
  6. cpf present                              InvalidCpfFormat
  7. cpf format                               InvalidCpfFormat
  8. email not already taken                  DuplicateEmail
  9. active is a boolean                      InvalidActiveValue

The order decides which error a payload with several problems surfaces,
so clients see the same error for the same payload every time.  Name and
password length checks ignore missing values; cpf and active do not.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from msusers.core.metrics import USER_VALIDATION_FAILURES
from msusers.models.user import User, UserConstraints
from msusers.models.user_dto import UserDTO
from msusers.repos.user_repo import UserRepo
from msusers.services.errors import (
    DuplicateCpf,
    DuplicateEmail,
    InvalidActiveValue,
    InvalidCpfFormat,
    InvalidNameLength,
    InvalidPasswordLength,
    InvalidUserData,
    UserServiceError,
)

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6
CPF_DIGITS = 11
CPF_PATTERN = re.compile(r"\d{3}\.\d{3}\.\d{3}-\d{2}")
_NON_DIGITS = re.compile(r"[^0-9]")


def _error_summary(error: ValidationError) -> list[dict[str, Any]]:
    # Never echo inputs back: the payload may contain a password.
    return error.errors(include_url=False, include_context=False, include_input=False)


def validate_schema(candidate: UserDTO | Mapping[str, Any]) -> UserDTO:
    """Check the declared DTO constraints and return a fresh, validated DTO.

    Already-built DTOs are re-validated from their field values, so an
    instance created with model_construct() cannot skip the schema.
    """
    data = candidate.model_dump() if isinstance(candidate, BaseModel) else candidate
    try:
        return UserDTO.model_validate(data)
    except ValidationError as e:
        raise InvalidUserData("Invalid user data", errors=_error_summary(e)) from None


def validate_entity(user: User) -> None:
    try:
        UserConstraints.check(user)
    except ValidationError as e:
        raise InvalidUserData("Invalid user data", errors=_error_summary(e)) from None


def validate_name_length(name: str | None, field: str) -> None:
    if name is not None and len(name) < NAME_MIN_LENGTH:
        raise InvalidNameLength(field, NAME_MIN_LENGTH)


def validate_password_length(password: str | None) -> None:
    if password is not None and len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidPasswordLength(
            f"The password must have at least {PASSWORD_MIN_LENGTH} characters."
        )


def is_cpf_in_format(cpf: str) -> bool:
    """True when *cpf* has exactly 11 digits and the 000.000.000-00 punctuation."""
    if len(_NON_DIGITS.sub("", cpf)) != CPF_DIGITS:
        return False
    return CPF_PATTERN.fullmatch(cpf) is not None


def validate_cpf_format(cpf: str | None) -> None:
    if not cpf:
        raise InvalidCpfFormat("CPF is required.")
    if not is_cpf_in_format(cpf):
        raise InvalidCpfFormat("CPF is not in the expected format (000.000.000-00).")


def validate_active_value(active: bool | None) -> None:
    if not isinstance(active, bool):
        raise InvalidActiveValue("The field 'active' must be either true or false.")


class UserValidator:
    """Runs the full create-time pipeline against a UserRepo."""

    def __init__(self, repo: UserRepo) -> None:
        self._repo = repo

    def validate_unique_cpf(self, cpf: str | None) -> None:
        if cpf is not None and self._repo.exists_by_cpf(cpf):
            raise DuplicateCpf()

    def validate_unique_email(self, email: str) -> None:
        if self._repo.exists_by_email(email):
            raise DuplicateEmail()

    def validate(self, candidate: UserDTO | Mapping[str, Any]) -> UserDTO:
        try:
            dto = validate_schema(candidate)
            validate_name_length(dto.first_name, "firstName")
            validate_name_length(dto.last_name, "lastName")
            validate_password_length(dto.password)
            self.validate_unique_cpf(dto.cpf)
            validate_cpf_format(dto.cpf)
            self.validate_unique_email(dto.email)
            validate_active_value(dto.active)
        except UserServiceError as e:
            USER_VALIDATION_FAILURES.labels(reason=e.code).inc()
            logger.warning("User payload rejected  reason=%s", e.code)
            raise
        return dto
