from __future__ import annotations

import itertools
import threading
from typing import Protocol

from msusers.models.user import User
from msusers.services.errors import DuplicateCpf, DuplicateEmail


class UserRepo(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def exists_by_cpf(self, cpf: str) -> bool: ...
    def exists_by_email(self, email: str) -> bool: ...
    def save(self, user: User) -> User: ...


class InMemoryUserRepo:
    """Dict-backed store used when no DATABASE_URL is configured.

    Email and CPF are unique indexes: save() rejects a record whose email
    or cpf belongs to a different user, under the same lock that writes it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._by_id: dict[int, User] = {}
        self._by_email: dict[str, int] = {}
        self._by_cpf: dict[str, int] = {}

    def find_by_id(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        user_id = self._by_email.get(email)
        return None if user_id is None else self._by_id.get(user_id)

    def exists_by_cpf(self, cpf: str) -> bool:
        return cpf in self._by_cpf

    def exists_by_email(self, email: str) -> bool:
        return email in self._by_email

    def save(self, user: User) -> User:
        with self._lock:
            owner = self._by_cpf.get(user.cpf)
            if owner is not None and owner != user.id:
                raise DuplicateCpf()
            owner = self._by_email.get(user.email)
            if owner is not None and owner != user.id:
                raise DuplicateEmail()

            if user.id is None:
                user = user.with_id(next(self._ids))
            else:
                previous = self._by_id.get(user.id)
                if previous is not None:
                    # unique keys may change on update
                    self._by_email.pop(previous.email, None)
                    self._by_cpf.pop(previous.cpf, None)

            self._by_id[user.id] = user  # type: ignore[index]
            self._by_email[user.email] = user.id  # type: ignore[assignment]
            self._by_cpf[user.cpf] = user.id  # type: ignore[assignment]
            return user

    def clear(self) -> None:
        with self._lock:
            self._by_id.clear()
            self._by_email.clear()
            self._by_cpf.clear()
            self._ids = itertools.count(1)
