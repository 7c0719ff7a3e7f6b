"""ORM table mappings for users and courses."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from courses_api.core.database import Base


class UserRecord(Base):
    __tablename__ = "Users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column("firstName", String(255))
    last_name: Mapped[str] = mapped_column("lastName", String(255))
    email_address: Mapped[str] = mapped_column("emailAddress", String(255), unique=True)
    password: Mapped[str] = mapped_column(String(255))

    courses: Mapped[list[CourseRecord]] = relationship(back_populates="user", cascade="all, delete-orphan")


class CourseRecord(Base):
    __tablename__ = "Courses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    estimated_time: Mapped[str | None] = mapped_column("estimatedTime", String(255))
    materials_needed: Mapped[str | None] = mapped_column("materialsNeeded", String(255))
    user_id: Mapped[int] = mapped_column("userId", ForeignKey("Users.id"))

    user: Mapped[UserRecord] = relationship(back_populates="courses", lazy="joined")


__all__ = ["CourseRecord", "UserRecord"]
