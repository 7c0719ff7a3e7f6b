"""SQLAlchemy repositories for users and courses."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from courses_api.domain.field_rules import (
    COURSE_RULES,
    USER_EMAIL_UNIQUE_MESSAGE,
    USER_RULES,
    ensure_valid,
)
from courses_api.errors import UniquenessConflict
from courses_api.repositories.models import CourseRecord, UserRecord


class UserRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_email(self, email_address: str) -> UserRecord | None:
        statement = select(UserRecord).where(func.lower(UserRecord.email_address) == email_address.strip().lower())
        return self._session.scalars(statement).first()

    def get(self, user_id: int) -> UserRecord | None:
        return self._session.get(UserRecord, user_id)

    def create_user(
        self,
        *,
        first_name: str | None,
        last_name: str | None,
        email_address: str | None,
        password: str | None,
        hash_password: Callable[[str], str],
    ) -> UserRecord:
        """Validate, hash the password, and insert a user.

        Raises ``ValidationFailure`` listing every violated field rule, or
        ``UniquenessConflict`` when the email address is already registered.
        """
        ensure_valid(
            USER_RULES,
            {
                "first_name": first_name,
                "last_name": last_name,
                "email_address": email_address,
                "password": password,
            },
        )
        normalized_email = str(email_address).strip()
        if self.get_by_email(normalized_email) is not None:
            raise UniquenessConflict(USER_EMAIL_UNIQUE_MESSAGE)

        record = UserRecord(
            first_name=first_name,
            last_name=last_name,
            email_address=normalized_email,
            password=hash_password(str(password)),
        )
        self._session.add(record)
        try:
            self._session.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same email.
            self._session.rollback()
            raise UniquenessConflict(USER_EMAIL_UNIQUE_MESSAGE) from exc
        return record


class CourseRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def list_courses(self) -> list[CourseRecord]:
        statement = select(CourseRecord).order_by(CourseRecord.id)
        return list(self._session.scalars(statement).unique())

    def get(self, course_id: int) -> CourseRecord | None:
        return self._session.get(CourseRecord, course_id)

    def create_course(self, *, owner_id: int, fields: dict[str, Any]) -> CourseRecord:
        ensure_valid(COURSE_RULES, fields)
        record = CourseRecord(
            title=fields["title"],
            description=fields["description"],
            estimated_time=fields.get("estimated_time"),
            materials_needed=fields.get("materials_needed"),
            user_id=owner_id,
        )
        self._session.add(record)
        self._session.commit()
        return record

    def replace_course(self, record: CourseRecord, *, fields: dict[str, Any]) -> CourseRecord:
        """Overwrite every editable field; absent optional fields become null."""
        ensure_valid(COURSE_RULES, fields)
        record.title = fields["title"]
        record.description = fields["description"]
        record.estimated_time = fields.get("estimated_time")
        record.materials_needed = fields.get("materials_needed")
        self._session.commit()
        return record

    def delete_course(self, record: CourseRecord) -> None:
        self._session.delete(record)
        self._session.commit()


__all__ = ["CourseRepository", "UserRepository"]
