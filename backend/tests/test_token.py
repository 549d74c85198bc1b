from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from schemas.user import TokenClaims
from utils.tokenJWT import InvalidTokenError, TokenService

CLAIMS = TokenClaims(id=7, username="admin", email="admin@example.com")


@pytest.fixture
def tokens():
    return TokenService("secret-one", algorithm="HS256", expire_minutes=60)


def test_issued_token_round_trips_claims(tokens):
    token = tokens.issue(CLAIMS)

    assert tokens.verify(token) == CLAIMS


def test_token_carries_expiry_and_subject(tokens):
    token = tokens.issue(CLAIMS)
    payload = jwt.get_unverified_claims(token)

    assert payload["sub"] == "7"
    assert payload["exp"] - payload["iat"] == 60 * 60


def test_expired_token_is_rejected(tokens):
    token = tokens.issue(CLAIMS, expires_delta=timedelta(seconds=-1))

    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_signed_with_other_secret_is_rejected(tokens):
    other = TokenService("secret-two")
    token = other.issue(CLAIMS)

    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(tokens, token):
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_without_identity_claims_is_rejected(tokens):
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"sub": "7", "exp": exp}, "secret-one", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        tokens.verify(token)
