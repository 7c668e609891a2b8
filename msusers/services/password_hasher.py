from __future__ import annotations

from typing import Protocol

from argon2 import PasswordHasher as _Argon2
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError


class PasswordHasher(Protocol):
    def hash(self, plain_password: str) -> str: ...
    def verify(self, plain_password: str, password_hash: str) -> bool: ...
    def needs_rehash(self, password_hash: str) -> bool: ...


class Argon2PasswordHasher:
    """Argon2id hashing. The encoded hash string carries salt and parameters."""

    def __init__(self, ph: _Argon2 | None = None) -> None:
        # Library defaults are generally reasonable; pass a tuned instance to pin them.
        self._ph = ph or _Argon2()

    def hash(self, plain_password: str) -> str:
        if not plain_password:
            raise ValueError("password must be non-empty")
        return self._ph.hash(plain_password)

    # verify() must catch Argon2 exceptions and return False
    def verify(self, plain_password: str, password_hash: str) -> bool:
        if not plain_password or not password_hash:
            return False
        try:
            return self._ph.verify(password_hash, plain_password)
        except (VerifyMismatchError, VerificationError, InvalidHash):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        try:
            return self._ph.check_needs_rehash(password_hash)
        except InvalidHash:
            return False
