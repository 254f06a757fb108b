# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    name: str
    password_hash: str
    created_at: datetime


class TokenStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


@dataclass(slots=True, frozen=True)
class TokenCheck:
    """Outcome of checking a session token.

    ``user_id`` is only set when ``status`` is ``VALID``.
    """

    status: TokenStatus
    user_id: str | None = None

    @classmethod
    def valid(cls, user_id: str) -> TokenCheck:
        return cls(status=TokenStatus.VALID, user_id=user_id)

    @classmethod
    def invalid(cls) -> TokenCheck:
        return cls(status=TokenStatus.INVALID)

    @classmethod
    def expired(cls) -> TokenCheck:
        return cls(status=TokenStatus.EXPIRED)

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID
