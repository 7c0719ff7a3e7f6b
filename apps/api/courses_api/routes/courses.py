"""Course routes.

Only course creation requires credentials; reads, updates and deletes are public.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.concurrency import run_in_threadpool

from courses_api.routes.dependencies import get_authenticated_principal, get_course_service
from courses_api.schemas.auth import AuthPrincipal
from courses_api.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from courses_api.schemas.error import ErrorResponse
from courses_api.services.courses import CourseService

router = APIRouter(prefix="/courses", tags=["Courses"])

CourseId = Annotated[int, Path(alias="id", ge=1)]


@router.get("", response_model=list[Course])
async def list_courses(
    service: Annotated[CourseService, Depends(get_course_service)],
) -> list[Course]:
    return await run_in_threadpool(service.list_courses)


@router.get(
    "/{id}",
    response_model=Course,
    responses={404: {"model": ErrorResponse}},
)
async def get_course(
    course_id: CourseId,
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Course:
    return await run_in_threadpool(service.get_course, course_id=course_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_course(
    payload: CreateCourseRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Response:
    course_id = await run_in_threadpool(service.create_course, owner_id=principal.user_id, payload=payload)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": f"/api/courses/{course_id}"})


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def replace_course(
    course_id: CourseId,
    payload: UpdateCourseRequest,
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Response:
    await run_in_threadpool(service.replace_course, course_id=course_id, payload=payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete_course(
    course_id: CourseId,
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Response:
    await run_in_threadpool(service.delete_course, course_id=course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
