"""
Password hashing and verification.

bcrypt with a per-hash random salt and a configurable work factor.
bcrypt only reads the first 72 bytes of a password; inputs are cut
there explicitly so hashing and verifying always see the same bytes.
"""

from __future__ import annotations

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        return False
