"""Field validation rules for persisted users and courses."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from courses_api.errors import ValidationFailure

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True, slots=True)
class FieldRule:
    field: str
    message: str
    check: Callable[[Any], bool]
    # Format rules only apply once the value is present; the required rule reports absence.
    skip_blank: bool = False


def required(field: str, message: str) -> FieldRule:
    return FieldRule(field=field, message=message, check=lambda value: not _is_blank(value))


def email(field: str, message: str) -> FieldRule:
    return FieldRule(
        field=field,
        message=message,
        check=lambda value: isinstance(value, str) and bool(_EMAIL_PATTERN.match(value.strip())),
        skip_blank=True,
    )


def max_utf8_bytes(field: str, limit: int, message: str) -> FieldRule:
    return FieldRule(
        field=field,
        message=message,
        check=lambda value: isinstance(value, str) and len(value.encode("utf-8")) <= limit,
        skip_blank=True,
    )


USER_RULES: tuple[FieldRule, ...] = (
    required("first_name", "User.firstName property is required"),
    required("last_name", "User.lastName property is required"),
    required("email_address", "User.emailAddress property is required"),
    email("email_address", "User.emailAddress property must be a valid email address"),
    required("password", "User.password property is required"),
    # bcrypt only reads the first 72 bytes of a secret.
    max_utf8_bytes("password", 72, "User.password property must be at most 72 bytes"),
)

COURSE_RULES: tuple[FieldRule, ...] = (
    required("title", "Course.title property is required"),
    required("description", "Course.description property is required"),
)

USER_EMAIL_UNIQUE_MESSAGE = "User.emailAddress property must be unique to each user"


def violations(rules: tuple[FieldRule, ...], values: Mapping[str, Any]) -> list[str]:
    """Return the message of every violated rule, in declaration order."""
    messages: list[str] = []
    for rule in rules:
        value = values.get(rule.field)
        if rule.skip_blank and _is_blank(value):
            continue
        if not rule.check(value):
            messages.append(rule.message)
    return messages


def ensure_valid(rules: tuple[FieldRule, ...], values: Mapping[str, Any]) -> None:
    messages = violations(rules, values)
    if messages:
        raise ValidationFailure(messages)


__all__ = [
    "COURSE_RULES",
    "USER_EMAIL_UNIQUE_MESSAGE",
    "USER_RULES",
    "FieldRule",
    "ensure_valid",
    "violations",
]
