"""Use-case for resolving the account behind a session token."""

from __future__ import annotations

from credential_service.domain.users.entities import User
from credential_service.domain.users.exceptions import InvalidTokenError
from credential_service.domain.users.repositories import TokenIssuer, UserRepository


class CurrentUserUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenIssuer) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str) -> User:
        if not token:
            raise InvalidTokenError()
        user_id = self._tokens.verify(token)
        user = self._users.find_by_id(user_id)
        if user is None:
            raise InvalidTokenError()
        return user
