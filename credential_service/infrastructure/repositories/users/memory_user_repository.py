# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from threading import Lock

from credential_service.domain.users.entities import User
from credential_service.domain.users.exceptions import UserAlreadyExistsError
from credential_service.domain.users.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local user store; contents are lost on restart."""

    def __init__(self) -> None:
        self._by_email: dict[str, User] = {}
        self._by_id: dict[str, User] = {}
        self._lock = Lock()

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._by_email.get(email)

    def find_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self._by_id.get(user_id)

    def create(self, email: str, name: str, password_hash: str) -> User:
        with self._lock:
            if email in self._by_email:
                raise UserAlreadyExistsError()
            user = User(
                id=uuid.uuid4().hex,
                email=email,
                name=name,
                password_hash=password_hash,
                created_at=datetime.now(UTC),
            )
            self._by_email[email] = user
            self._by_id[user.id] = user
            return user

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_email)
