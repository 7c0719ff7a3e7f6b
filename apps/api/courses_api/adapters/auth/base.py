"""Authentication provider interfaces."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Provider-neutral one-way password hashing interface."""

    @abstractmethod
    def hash(self, secret: str) -> str:
        """Return a salted one-way hash suitable for storage."""

    @abstractmethod
    def verify(self, secret: str, stored_hash: str) -> bool:
        """Return whether ``secret`` matches ``stored_hash``; never raises on malformed hashes."""


__all__ = ["PasswordHasher"]
