"""bcrypt password hashing adapter."""

from __future__ import annotations

import bcrypt

from courses_api.adapters.auth.base import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Hashes and verifies passwords with bcrypt's adaptive salted scheme."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, secret: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(secret.encode("utf-8"), salt).decode("utf-8")

    def verify(self, secret: str, stored_hash: str) -> bool:
        if not stored_hash:
            return False
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), stored_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash (e.g. a legacy plaintext row).
            return False


__all__ = ["BcryptPasswordHasher"]
