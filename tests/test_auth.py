"""Tests for password hashing of seeded accounts."""

from preiposip.services.auth import hash_password, verify_password


def test_hash_is_bcrypt():
    hashed = hash_password("password")
    assert hashed.startswith("$2")
    assert hashed != "password"


def test_hash_uses_configured_rounds():
    # conftest sets BCRYPT_ROUNDS=4
    assert hash_password("password").split("$")[2] == "04"


def test_verify_password_accepts_correct_password():
    assert verify_password("password", hash_password("password")) is True


def test_verify_password_rejects_wrong_password():
    assert verify_password("Password", hash_password("password")) is False


def test_hashes_are_salted():
    assert hash_password("password") != hash_password("password")
