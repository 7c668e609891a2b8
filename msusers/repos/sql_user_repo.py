"""SQLAlchemy implementation of UserRepo."""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from msusers.db.tables import UserRow
from msusers.models.user import User
from msusers.services.errors import DuplicateCpf, DuplicateEmail, UserConflictError


class SqlUserRepo:
    """Satisfies the UserRepo Protocol using any SQLAlchemy database.

    Each call runs in its own session; save() commits before returning.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_id(self, user_id: int) -> User | None:
        with self._session_factory() as session:
            row = session.get(UserRow, user_id)
            return None if row is None else _row_to_user(row)

    def find_by_email(self, email: str) -> User | None:
        stmt = select(UserRow).where(UserRow.email == email)
        with self._session_factory() as session:
            row = session.execute(stmt).scalar_one_or_none()
            return None if row is None else _row_to_user(row)

    def exists_by_cpf(self, cpf: str) -> bool:
        stmt = select(exists().where(UserRow.cpf == cpf))
        with self._session_factory() as session:
            return bool(session.scalar(stmt))

    def exists_by_email(self, email: str) -> bool:
        stmt = select(exists().where(UserRow.email == email))
        with self._session_factory() as session:
            return bool(session.scalar(stmt))

    def save(self, user: User) -> User:
        try:
            with self._session_factory.begin() as session:
                row = session.get(UserRow, user.id) if user.id is not None else None
                if row is None:
                    row = UserRow(id=user.id)
                    session.add(row)
                _copy_into(row, user)
                session.flush()
                return _row_to_user(row)
        except IntegrityError as e:
            conflict = _conflict_from(e)
            if conflict is None:
                raise
            raise conflict from e


def _copy_into(row: UserRow, user: User) -> None:
    row.first_name = user.first_name
    row.last_name = user.last_name
    row.email = user.email
    row.cpf = user.cpf
    row.birthdate = user.birthdate
    row.password_hash = user.password_hash
    row.active = user.active


_CONFLICTS: dict[str, type[UserConflictError]] = {
    "uq_users_cpf": DuplicateCpf,
    "uq_users_email": DuplicateEmail,
}
_SQLITE_COLUMNS: dict[str, type[UserConflictError]] = {
    "users.cpf": DuplicateCpf,
    "users.email": DuplicateEmail,
}


def _conflict_from(error: IntegrityError) -> UserConflictError | None:
    # psycopg exposes the violated constraint; the message itself echoes
    # the duplicate value and cannot be searched for field names.
    diag = getattr(error.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is not None:
        conflict = _CONFLICTS.get(constraint)
        return None if conflict is None else conflict()

    # SQLite: "UNIQUE constraint failed: users.email"
    message = str(error.orig)
    for column, conflict in _SQLITE_COLUMNS.items():
        if f"UNIQUE constraint failed: {column}" in message:
            return conflict()
    return None


def _row_to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        cpf=row.cpf,
        birthdate=row.birthdate,
        password_hash=row.password_hash,
        active=row.active,
    )
