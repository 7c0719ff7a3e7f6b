"""Course API schemas."""

from courses_api.schemas.base import CamelModel
from courses_api.schemas.user import User


class CourseFields(CamelModel):
    title: str | None = None
    description: str | None = None
    estimated_time: str | None = None
    materials_needed: str | None = None


class CreateCourseRequest(CourseFields):
    pass


class UpdateCourseRequest(CourseFields):
    pass


class Course(CamelModel):
    id: int
    title: str
    description: str
    estimated_time: str | None = None
    materials_needed: str | None = None
    user_id: int
    user: User
