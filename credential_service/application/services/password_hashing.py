"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from credential_service.domain.users.repositories import PasswordHasher
from credential_service.shared.logging import logger


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted one-way hashing backed by werkzeug (scrypt unless configured otherwise)."""

    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except Exception as exc:
            logger.warning(f"password.verify: rejected malformed digest ({type(exc).__name__})")
            return False
