import pytest

from utils.errors import InternalError
from utils.hashing import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_is_salted_per_call(hasher):
    first = hasher.hash("password123")
    second = hasher.hash("password123")

    assert first != second
    assert "password123" not in first


def test_verify_accepts_matching_password(hasher):
    hashed = hasher.hash("password123")

    assert hasher.verify("password123", hashed) is True
    assert hasher.verify("password124", hashed) is False


def test_work_factor_is_embedded_in_hash():
    hashed = PasswordHasher(rounds=5).hash("password123")

    assert hashed.startswith("$2b$05$")


def test_malformed_hash_is_an_internal_error(hasher):
    with pytest.raises(InternalError):
        hasher.verify("password123", "not-a-bcrypt-hash")


def test_dummy_verify_never_matches(hasher):
    assert hasher.dummy_verify() is False


@pytest.mark.parametrize("password", ["pass\x00word", "x" * 5000])
def test_unusable_password_is_a_mismatch_not_an_error(hasher, password):
    hashed = hasher.hash("password123")

    assert hasher.verify(password, hashed) is False
