# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from credential_service.domain.users.entities import User
from credential_service.domain.users.exceptions import UserAlreadyExistsError
from credential_service.domain.users.repositories import PasswordHasher, UserRepository
from credential_service.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str, name: str) -> User:
        if self._users.find_by_email(email) is not None:
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        user = self._users.create(email, name, hashed)
        logger.info(f"users.register: created user_id={user.id}")
        return user
