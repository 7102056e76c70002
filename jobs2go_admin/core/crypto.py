"""bcrypt password hashing for admin console accounts."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 12
# bcrypt ignores everything past 72 bytes; longer secrets are cut the same way on both sides
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare ``password`` with a stored hash; a malformed hash never matches."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        return False


__all__ = ["DEFAULT_ROUNDS", "hash_password", "verify_password"]
