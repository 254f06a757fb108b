# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens signed with itsdangerous."""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Callable

from itsdangerous import BadData, URLSafeSerializer

from credential_service.domain.users.entities import TokenCheck, TokenStatus
from credential_service.domain.users.exceptions import ExpiredTokenError, InvalidTokenError
from credential_service.domain.users.repositories import TokenIssuer
from credential_service.shared.logging import logger

_SALT = "credential-service.session"


class SignedTokenIssuer(TokenIssuer):
    """Issues ``{"sub", "iat", "exp"}`` payloads signed with HMAC-SHA256.

    Nothing is persisted: a token is accepted as long as its signature
    matches the process secret and ``exp`` lies in the future.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        ttl_seconds: int = 60 * 60 * 24,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._serializer = URLSafeSerializer(
            secret_key,
            salt=_SALT,
            signer_kwargs={"digest_method": hashlib.sha256},
        )
        self._ttl = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def issue(self, user_id: str) -> str:
        now = int(self._clock())
        payload = {"sub": user_id, "iat": now, "exp": now + self._ttl}
        return str(self._serializer.dumps(payload))

    def check(self, token: str) -> TokenCheck:
        try:
            payload = self._serializer.loads(token)
        except BadData:
            return TokenCheck.invalid()
        # base64 ignores trailing pad bits, so only the canonical encoding is accepted.
        canonical = str(self._serializer.dumps(payload))
        if not hmac.compare_digest(canonical.encode(), token.encode()):
            return TokenCheck.invalid()

        if not isinstance(payload, dict):
            return TokenCheck.invalid()
        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            return TokenCheck.invalid()
        if not isinstance(expires_at, int) or isinstance(expires_at, bool):
            return TokenCheck.invalid()

        if self._clock() >= expires_at:
            return TokenCheck.expired()
        return TokenCheck.valid(subject)

    def verify(self, token: str) -> str:
        result = self.check(token)
        if result.status is TokenStatus.EXPIRED:
            logger.info("tokens.verify: expired token")
            raise ExpiredTokenError()
        if result.status is not TokenStatus.VALID or result.user_id is None:
            logger.info("tokens.verify: invalid token")
            raise InvalidTokenError()
        return result.user_id


__all__ = ["SignedTokenIssuer"]
