"""Course service layer."""

from courses_api.errors import NotFound
from courses_api.repositories.models import CourseRecord
from courses_api.repositories.sql import CourseRepository
from courses_api.schemas.course import Course, CourseFields
from courses_api.services.users import UserService


class CourseService:
    def __init__(self, repository: CourseRepository) -> None:
        self._repository = repository

    def list_courses(self) -> list[Course]:
        return [self._to_course(record) for record in self._repository.list_courses()]

    def get_course(self, *, course_id: int) -> Course:
        return self._to_course(self._require(course_id))

    def create_course(self, *, owner_id: int, payload: CourseFields) -> int:
        record = self._repository.create_course(owner_id=owner_id, fields=payload.model_dump())
        return record.id

    def replace_course(self, *, course_id: int, payload: CourseFields) -> None:
        record = self._require(course_id)
        self._repository.replace_course(record, fields=payload.model_dump())

    def delete_course(self, *, course_id: int) -> None:
        self._repository.delete_course(self._require(course_id))

    def _require(self, course_id: int) -> CourseRecord:
        record = self._repository.get(course_id)
        if record is None:
            raise NotFound("Course not found")
        return record

    @staticmethod
    def _to_course(record: CourseRecord) -> Course:
        return Course(
            id=record.id,
            title=record.title,
            description=record.description,
            estimated_time=record.estimated_time,
            materials_needed=record.materials_needed,
            user_id=record.user_id,
            user=UserService.to_user(record.user),
        )
