# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from credential_service.application.use_cases.users.current_user import CurrentUserUseCase
from credential_service.application.use_cases.users.login_user import LoginUserUseCase
from credential_service.application.use_cases.users.register_user import RegisterUserUseCase
from credential_service.interfaces.http.dto.auth import (
    CurrentUserDTO,
    LoginRequestDTO,
    LoginSuccessDTO,
    LoginUserDTO,
    RegisterRequestDTO,
    RegisterSuccessDTO,
    UserDTO,
)
from credential_service.shared.errors.validation import raise_validation_error
from credential_service.shared.logging import logger


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _bearer_token() -> str:
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return credentials.strip()


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        current_user_use_case: CurrentUserUseCase,
        url_prefix: str = "",
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._current_user_use_case = current_user_use_case
        self._url_prefix = url_prefix

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc, code="all_fields_required")

        user = self._register_use_case.execute(dto.email, dto.password, dto.name)

        payload = RegisterSuccessDTO(user=UserDTO.from_user(user)).model_dump()
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(payload), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc, code="email_and_password_required")

        user, token = self._login_use_case.execute(dto.email, dto.password)

        payload = LoginSuccessDTO(token=token, user=LoginUserDTO.from_user(user)).model_dump()
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(payload), HTTPStatus.OK

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(_bearer_token())
        payload = CurrentUserDTO(user=UserDTO.from_user(user)).model_dump()
        return jsonify(payload), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=self._url_prefix or None)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
