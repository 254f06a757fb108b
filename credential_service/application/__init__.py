# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .use_cases.users.current_user import CurrentUserUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "CurrentUserUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "WerkzeugPasswordHasher",
]
