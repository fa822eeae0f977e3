"""Unit tests for Argon2 password hashing."""

from rolebridge.infrastructure.auth import hash_password, verify_password
from rolebridge.infrastructure.auth.password_hasher import get_hasher


def test_hash_is_argon2id():
    hashed = hash_password("secret1")

    assert hashed.startswith("$argon2id$")
    assert hashed != "secret1"


def test_hashes_are_salted():
    assert hash_password("secret1") != hash_password("secret1")


def test_verify_password():
    hashed = hash_password("secret1")

    assert verify_password("secret1", hashed) is True
    assert verify_password("secret2", hashed) is False


def test_verify_rejects_malformed_hash():
    assert verify_password("secret1", "not-a-hash") is False


def test_hash_uses_configured_time_cost():
    assert ",t=3," in hash_password("secret1")
    assert ",t=1," in get_hasher(time_cost=1).hash("secret1")
