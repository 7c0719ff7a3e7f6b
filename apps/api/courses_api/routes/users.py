"""User routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.concurrency import run_in_threadpool

from courses_api.routes.dependencies import get_authenticated_principal, get_user_service
from courses_api.schemas.auth import AuthPrincipal
from courses_api.schemas.error import ErrorResponse
from courses_api.schemas.user import CreateUserRequest, User
from courses_api.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=User,
    responses={401: {"model": ErrorResponse}},
)
async def get_current_user(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return await run_in_threadpool(service.get_principal_user, principal)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def create_user(
    payload: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    await run_in_threadpool(service.create_user, payload)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})
