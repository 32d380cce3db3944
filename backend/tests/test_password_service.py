"""
Programmers Backend — Password Hashing Tests
"""

from app.services.password_service import hash_password, verify_password


def test_hash_is_not_plaintext():
    hashed = hash_password("analytical")

    assert hashed != "analytical"
    assert hashed.startswith("$argon2")


def test_hash_is_salted():
    assert hash_password("analytical") != hash_password("analytical")


def test_verify():
    hashed = hash_password("analytical")

    assert verify_password(hashed, "analytical")
    assert not verify_password(hashed, "engine")


def test_verify_garbage_hash():
    assert not verify_password("not-a-hash", "analytical")
