# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from credential_service.domain.users.entities import User as DomainUser
from credential_service.domain.users.exceptions import UserAlreadyExistsError
from credential_service.domain.users.repositories import UserRepository
from credential_service.infrastructure.db.models import User
from credential_service.infrastructure.db.session import session_scope
from credential_service.shared.errors.base import InfrastructureError
from credential_service.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        created_at=created_at,
    )


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise UserAlreadyExistsError() from exc
    except SQLAlchemyError as exc:
        logger.error(f"users.store: {operation} failed ({type(exc).__name__})")
        raise InfrastructureError("internal_error") from exc


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with _store_errors("find_by_email"), session_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with _store_errors("find_by_id"), session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def create(self, email: str, name: str, password_hash: str) -> DomainUser:
        # users.email is UNIQUE, so a racing insert fails with IntegrityError.
        with _store_errors("create"), session_scope(self._session_factory) as session:
            row = User(
                id=uuid.uuid4().hex,
                email=email,
                name=name,
                password_hash=password_hash,
                created_at=datetime.now(UTC),
            )
            session.add(row)
            session.flush()
            return _to_domain(row)
