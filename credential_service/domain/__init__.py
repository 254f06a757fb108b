# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import TokenCheck, TokenStatus, User
from .users.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from .users.repositories import PasswordHasher, TokenIssuer, UserRepository

__all__ = [
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordHasher",
    "TokenCheck",
    "TokenIssuer",
    "TokenStatus",
    "User",
    "UserAlreadyExistsError",
    "UserRepository",
]
