"""Auth adapters."""

from .base import PasswordHasher
from .basic import Credential, parse_basic_authorization
from .bcrypt_hasher import BcryptPasswordHasher

__all__ = [
    "BcryptPasswordHasher",
    "Credential",
    "PasswordHasher",
    "parse_basic_authorization",
]
