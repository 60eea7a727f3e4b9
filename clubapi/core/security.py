"""
Admin password storage.

Hashes are argon2 strings stored with an ``argon2$`` prefix. Anything without
the prefix is a plaintext password carried over from an old ``admins`` document.
"""

from __future__ import annotations

import secrets

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
_PREFIX = "argon2$"


def hash_password(password: str) -> str:
    return f"{_PREFIX}{_ph.hash(password)}"


def is_hashed(stored: str | None) -> bool:
    return (stored or "").startswith(_PREFIX)


def needs_upgrade(stored: str | None) -> bool:
    """True for plaintext values and for hashes made with older argon2 parameters."""
    if not is_hashed(stored):
        return True
    try:
        return _ph.check_needs_rehash(stored[len(_PREFIX) :])
    except argon_exc.InvalidHashError:
        return True


def verify_password(password: str, stored: str | None) -> bool:
    if not stored:
        return False
    if is_hashed(stored):
        try:
            return _ph.verify(stored[len(_PREFIX) :], password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False
    return secrets.compare_digest(stored.encode(), (password or "").encode())
