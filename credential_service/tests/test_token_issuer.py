from __future__ import annotations

import string

import pytest
from itsdangerous.encoding import base64_decode, base64_encode

from credential_service.domain.users.entities import TokenStatus
from credential_service.domain.users.exceptions import ExpiredTokenError, InvalidTokenError
from credential_service.infrastructure.auth.token_issuer import SignedTokenIssuer

_URLSAFE_ALPHABET = string.ascii_letters + string.digits + "-_"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def issuer(clock: FakeClock) -> SignedTokenIssuer:
    return SignedTokenIssuer("unit-test-secret", ttl_seconds=3600, clock=clock)


def test_issue_then_verify_returns_subject(issuer: SignedTokenIssuer) -> None:
    token = issuer.issue("user-123")

    assert token
    assert issuer.verify(token) == "user-123"
    check = issuer.check(token)
    assert check.status is TokenStatus.VALID
    assert check.user_id == "user-123"


def test_token_valid_until_expiry(issuer: SignedTokenIssuer, clock: FakeClock) -> None:
    token = issuer.issue("user-123")

    clock.advance(3599)
    assert issuer.verify(token) == "user-123"

    clock.advance(1)
    assert issuer.check(token).status is TokenStatus.EXPIRED
    with pytest.raises(ExpiredTokenError):
        issuer.verify(token)


def test_every_signature_byte_is_checked(issuer: SignedTokenIssuer) -> None:
    token = issuer.issue("user-123")
    payload, signature = token.rsplit(".", 1)
    raw = base64_decode(signature)

    for index in range(len(raw)):
        tampered = bytearray(raw)
        tampered[index] ^= 0x01
        forged = f"{payload}.{base64_encode(bytes(tampered)).decode()}"
        assert issuer.check(forged).status is TokenStatus.INVALID
        with pytest.raises(InvalidTokenError):
            issuer.verify(forged)


def test_every_signature_character_is_checked(issuer: SignedTokenIssuer) -> None:
    token = issuer.issue("user-123")
    payload, signature = token.rsplit(".", 1)

    for index, original in enumerate(signature):
        for replacement in _URLSAFE_ALPHABET:
            if replacement == original:
                continue
            forged = f"{payload}.{signature[:index]}{replacement}{signature[index + 1:]}"
            assert issuer.check(forged).status is TokenStatus.INVALID, forged


def test_tampered_payload_is_rejected(issuer: SignedTokenIssuer, clock: FakeClock) -> None:
    token = issuer.issue("user-123")
    _, signature = token.rsplit(".", 1)
    other_payload = issuer.issue("user-999").rsplit(".", 1)[0]

    assert issuer.check(f"{other_payload}.{signature}").status is TokenStatus.INVALID


def test_token_from_other_secret_is_rejected(clock: FakeClock) -> None:
    ours = SignedTokenIssuer("secret-one", clock=clock)
    theirs = SignedTokenIssuer("secret-two", clock=clock)

    assert ours.check(theirs.issue("user-123")).status is TokenStatus.INVALID


def test_expired_forgery_reports_invalid_not_expired(
    issuer: SignedTokenIssuer, clock: FakeClock
) -> None:
    token = issuer.issue("user-123")
    clock.advance(7200)
    payload, signature = token.rsplit(".", 1)

    assert issuer.check(f"{payload}.{signature[::-1]}").status is TokenStatus.INVALID


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "....", "dummy-jwt-token"])
def test_malformed_tokens_are_invalid(issuer: SignedTokenIssuer, token: str) -> None:
    assert issuer.check(token).status is TokenStatus.INVALID


def test_default_ttl_is_one_day() -> None:
    assert SignedTokenIssuer("secret").ttl_seconds == 24 * 60 * 60


@pytest.mark.parametrize(
    ("secret", "ttl"),
    [("", 3600), ("secret", 0), ("secret", -1)],
)
def test_constructor_rejects_bad_settings(secret: str, ttl: int) -> None:
    with pytest.raises(ValueError):
        SignedTokenIssuer(secret, ttl_seconds=ttl)
