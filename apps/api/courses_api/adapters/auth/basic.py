"""HTTP Basic credential extraction."""

from __future__ import annotations

import binascii
from base64 import b64decode
from dataclasses import dataclass

from fastapi.security.utils import get_authorization_scheme_param


@dataclass(frozen=True, slots=True)
class Credential:
    name: str
    secret: str

    def __repr__(self) -> str:
        return f"Credential(name={self.name!r}, secret='***')"


def parse_basic_authorization(header_value: str | None) -> Credential | None:
    """Parse ``Basic <base64(name:secret)>`` into a credential.

    Anything malformed (wrong scheme, bad base64, bad UTF-8, no colon) yields
    ``None`` exactly like a missing header. The secret may contain colons; only
    the first one separates it from the name.
    """
    if not header_value:
        return None

    scheme, param = get_authorization_scheme_param(header_value)
    if scheme.lower() != "basic" or not param:
        return None

    try:
        decoded = b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, ValueError, UnicodeDecodeError):
        return None

    name, separator, secret = decoded.partition(":")
    if not separator:
        return None

    return Credential(name=name, secret=secret)


__all__ = ["Credential", "parse_basic_authorization"]
