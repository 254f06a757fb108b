# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property, partial

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session

from credential_service.application.services.password_hashing import WerkzeugPasswordHasher
from credential_service.application.use_cases.users.current_user import CurrentUserUseCase
from credential_service.application.use_cases.users.login_user import LoginUserUseCase
from credential_service.application.use_cases.users.register_user import RegisterUserUseCase
from credential_service.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from credential_service.infrastructure.auth.token_issuer import SignedTokenIssuer
from credential_service.infrastructure.db import build_engine, build_session_factory, init_db
from credential_service.infrastructure.health import check_database
from credential_service.infrastructure.repositories.users.memory_user_repository import (
    InMemoryUserRepository,
)
from credential_service.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from credential_service.interfaces.http.controllers.auth_controller import AuthController
from credential_service.interfaces.http.controllers.misc_controller import MiscController
from credential_service.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @property
    def uses_database(self) -> bool:
        return self.config.store_backend == "sql"

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> scoped_session[Session]:
        return build_session_factory(self.engine)

    def init_database(self) -> None:
        init_db(self.engine)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.uses_database:
            return SqlAlchemyUserRepository(self.session_factory)
        return InMemoryUserRepository()

    @cached_property
    def token_issuer(self) -> TokenIssuer:
        return SignedTokenIssuer(
            self.config.token_signing_key(),
            ttl_seconds=self.config.security.token_ttl_seconds,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def current_user_use_case(self) -> CurrentUserUseCase:
        return CurrentUserUseCase(users=self.user_repository, tokens=self.token_issuer)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            current_user_use_case=self.current_user_use_case,
            url_prefix=self.config.auth_url_prefix,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        if not self.uses_database:
            return MiscController()
        return MiscController(check_database=partial(check_database, self.engine))


container = Container()
