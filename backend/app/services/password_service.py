"""
Programmers Backend — Password Hashing
========================================

What:  argon2 hashing for the write-only `password` field.
When:  Every create, and every update that supplies a new password.

The hasher is built lazily so tests can flip WEAK_PASSWORD_HASHING before
the first hash is computed.
"""

from typing import Optional

from argon2 import PasswordHasher, profiles
from argon2.exceptions import InvalidHashError, VerificationError

from app.config import settings

_hasher: Optional[PasswordHasher] = None


def _get_hasher() -> PasswordHasher:
    global _hasher
    if _hasher is not None:
        return _hasher
    if settings.weak_password_hashing:
        _hasher = PasswordHasher.from_parameters(profiles.CHEAPEST)
    else:
        _hasher = PasswordHasher.from_parameters(profiles.RFC_9106_LOW_MEMORY)
    return _hasher


def hash_password(password: str) -> str:
    return _get_hasher().hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """True when `password` matches `password_hash`; never raises on mismatch."""
    try:
        return _get_hasher().verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
