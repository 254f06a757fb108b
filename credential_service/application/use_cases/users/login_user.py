# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from credential_service.domain.users.entities import User
from credential_service.domain.users.exceptions import InvalidCredentialsError
from credential_service.domain.users.repositories import (
    PasswordHasher,
    TokenIssuer,
    UserRepository,
)
from credential_service.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._decoy_hash: str | None = None

    def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._decoy_hash

    def execute(self, email: str, password: str) -> tuple[User, str]:
        user = self._users.find_by_email(email)

        if user is None:
            # Unknown emails pay the same hashing cost as wrong passwords.
            self._password_hasher.verify(password, self._decoy())
            logger.info("users.login: rejected, unknown account")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"users.login: rejected, bad password user_id={user.id}")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id)
        logger.info(f"users.login: ok user_id={user.id}")
        return user, token
