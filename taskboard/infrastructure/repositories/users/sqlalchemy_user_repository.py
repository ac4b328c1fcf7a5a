# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.domain.users.entities import User as DomainUser
from taskboard.domain.users.exceptions import UserAlreadyExistsError
from taskboard.domain.users.repositories import UserRepository
from taskboard.infrastructure.db.models import User
from taskboard.infrastructure.db.session import SessionLocal, session_scope
from taskboard.infrastructure.repositories._mapping import storable_id, user_from_row

_UPDATABLE = frozenset(
    {
        "username",
        "email",
        "password_hash",
        "first_name",
        "last_name",
        "profile_picture",
        "role",
        "is_active",
        "last_login",
    }
)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def find_by_id(self, user_id: int) -> DomainUser | None:
        if not storable_id(user_id):
            return None
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return user_from_row(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email.lower())).first()
            return user_from_row(row) if row else None

    def exists_with(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> bool:
        clauses = []
        if username:
            clauses.append(User.username == username)
        if email:
            clauses.append(User.email == email.lower())
        if not clauses:
            return False
        stmt = select(User.id).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        with session_scope(self._session_factory) as session:
            return session.scalars(stmt.limit(1)).first() is not None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            return self._insert(user)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc

    def _insert(self, user: DomainUser) -> DomainUser:
        with session_scope(self._session_factory) as session:
            row = User(
                username=user.username,
                email=user.email.lower(),
                password_hash=user.password_hash,
                first_name=user.first_name,
                last_name=user.last_name,
                profile_picture=user.profile_picture,
                role=user.role.value,
                is_active=user.is_active,
                created_at=user.created_at,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return user_from_row(row)

    def update(self, user_id: int, **fields: Any) -> DomainUser | None:
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"cannot update user fields: {sorted(unknown)}")
        if not storable_id(user_id):
            return None
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                if row is None:
                    return None
                for key, value in fields.items():
                    if isinstance(value, Enum):
                        value = value.value
                    if key == "email" and value:
                        value = value.lower()
                    setattr(row, key, value)
                session.flush()
                return user_from_row(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc

    def list_all(self) -> Sequence[DomainUser]:
        with session_scope(self._session_factory) as session:
            rows = session.scalars(select(User).order_by(User.id.asc())).all()
            return [user_from_row(row) for row in rows]
