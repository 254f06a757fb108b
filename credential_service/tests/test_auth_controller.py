from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from credential_service.application.use_cases.users.login_user import LoginUserUseCase
from credential_service.application.use_cases.users.register_user import RegisterUserUseCase
from credential_service.domain.users.entities import User
from credential_service.domain.users.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from credential_service.interfaces.http.controllers.auth_controller import AuthController
from credential_service.shared.middleware.error_handler import configure_error_handling


def _user(email: str = "a@x.com", name: str = "A") -> User:
    return User(
        id="u-1",
        email=email,
        name=name,
        password_hash="hash",
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _mount(flask_app: Flask, **use_cases: object) -> None:
    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, use_cases.get("register", MagicMock())),
        login_use_case=cast(LoginUserUseCase, use_cases.get("login", MagicMock())),
        current_user_use_case=use_cases.get("current", MagicMock()),  # type: ignore[arg-type]
    )
    flask_app.register_blueprint(controller.as_blueprint())


def test_register_endpoint_returns_created_user(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, email: str, password: str, name: str) -> User:
            register_called["args"] = (email, password, name)
            return _user(email, name)

    _mount(flask_app, register=StubRegister())

    with flask_app.test_client() as client:
        response = client.post(
            "/register", json={"email": "a@x.com", "password": "p1", "name": "A"}
        )

    assert response.status_code == 201
    assert register_called["args"] == ("a@x.com", "p1", "A")
    assert response.get_json() == {
        "message": "User registered successfully",
        "user": {"email": "a@x.com", "name": "A", "id": "u-1"},
    }


def test_login_endpoint_returns_token(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = (_user(), "signed-token")
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@x.com", "password": "p1"})

    assert response.status_code == 200
    login.execute.assert_called_once_with("a@x.com", "p1")
    assert response.get_json() == {
        "message": "Login successful",
        "token": "signed-token",
        "user": {"email": "a@x.com", "id": "u-1"},
    }


@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@x.com"},
        {"password": "p1"},
        {"email": "", "password": "p1"},
        {"email": "a@x.com", "password": ""},
        {"email": "a@x.com", "password": None},
        {"email": 42, "password": "p1"},
        {},
    ],
)
def test_login_missing_fields_returns_400(flask_app: Flask, body: dict) -> None:
    login = MagicMock()
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/login", json=body)

    assert response.status_code == 400
    assert response.get_json()["error"] == "email_and_password_required"
    login.execute.assert_not_called()


@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@x.com", "password": "p1"},
        {"email": "a@x.com", "name": "A"},
        {"password": "p1", "name": "A"},
        {"email": "a@x.com", "password": "p1", "name": ""},
    ],
)
def test_register_missing_fields_returns_400(flask_app: Flask, body: dict) -> None:
    register = MagicMock()
    _mount(flask_app, register=register)

    with flask_app.test_client() as client:
        response = client.post("/register", json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "all_fields_required"
    register.execute.assert_not_called()


def test_validation_context_never_echoes_values(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/register", json={"email": "a@x.com", "password": "hunter2"})

    payload = response.get_json()
    assert payload["context"]["fields"] == ["name"]
    assert "hunter2" not in response.get_data(as_text=True)


@pytest.mark.parametrize("raw", ["not json", "[1, 2, 3]", '"just a string"'])
def test_non_object_body_returns_400(flask_app: Flask, raw: str) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/login", data=raw, content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["error"] == "email_and_password_required"


def test_register_conflict_returns_409(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = UserAlreadyExistsError()
    _mount(flask_app, register=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/register", json={"email": "a@x.com", "password": "p1", "name": "A"}
        )

    assert response.status_code == 409
    assert response.get_json() == {"error": "user_already_exists"}


def test_login_bad_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@x.com", "password": "wrong"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}


def test_me_passes_bearer_token(flask_app: Flask) -> None:
    current = MagicMock()
    current.execute.return_value = _user()
    _mount(flask_app, current=current)

    with flask_app.test_client() as client:
        response = client.get("/me", headers={"Authorization": "Bearer abc.def"})

    assert response.status_code == 200
    current.execute.assert_called_once_with("abc.def")
    assert response.get_json() == {"user": {"email": "a@x.com", "name": "A", "id": "u-1"}}


def test_me_expired_token_returns_401(flask_app: Flask) -> None:
    current = MagicMock()
    current.execute.side_effect = ExpiredTokenError()
    _mount(flask_app, current=current)

    with flask_app.test_client() as client:
        response = client.get("/me", headers={"Authorization": "Bearer abc.def"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "token_expired"}


def test_unexpected_failure_is_generic_500(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = RuntimeError("db password=supersecret unreachable")
    _mount(flask_app, register=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/register", json={"email": "a@x.com", "password": "p1", "name": "A"}
        )

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
    assert "supersecret" not in response.get_data(as_text=True)


def test_url_prefix_is_applied(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = (_user(), "signed-token")
    controller = AuthController(
        register_use_case=MagicMock(),
        login_use_case=login,
        current_user_use_case=MagicMock(),
        url_prefix="/api/auth",
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        assert client.post("/api/auth/login", json={"email": "a@x.com", "password": "p1"}).status_code == 200
        assert client.post("/login", json={"email": "a@x.com", "password": "p1"}).status_code == 404
