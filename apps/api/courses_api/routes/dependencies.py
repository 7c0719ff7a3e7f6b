"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request, Security
from fastapi.concurrency import run_in_threadpool
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from courses_api.adapters.auth import BcryptPasswordHasher, PasswordHasher, parse_basic_authorization
from courses_api.core.config import Settings
from courses_api.core.database import Database
from courses_api.core.logging_safety import safe_log_identifier
from courses_api.errors import AuthenticationFailure
from courses_api.repositories.sql import CourseRepository, UserRepository
from courses_api.schemas.auth import AuthPrincipal
from courses_api.services.courses import CourseService
from courses_api.services.users import UserService

# Raw header access so malformed values are treated like a missing header instead of raising.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    scheme_name="basicAuth",
    description="HTTP Basic credentials: `Basic base64(emailAddress:password)`.",
)
logger = logging.getLogger(__name__)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session(database: Annotated[Database, Depends(get_database)]) -> Iterator[Session]:
    with database.session() as session:
        yield session


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(settings: Annotated[Settings, Depends(get_app_settings)]) -> PasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def get_user_repository(session: Annotated[Session, Depends(get_session)]) -> UserRepository:
    return UserRepository(session)


def get_course_repository(session: Annotated[Session, Depends(get_session)]) -> CourseRepository:
    return CourseRepository(session)


def _deny(request: Request, reason: str, *, email_address: str | None = None) -> AuthenticationFailure:
    logger.warning(
        "auth.rejected method=%s path=%s email=%s reason=%s",
        request.method,
        request.url.path,
        safe_log_identifier(email_address, prefix="email"),
        reason,
    )
    return AuthenticationFailure()


async def get_authenticated_principal(
    request: Request,
    authorization: Annotated[str | None, Security(authorization_header)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthPrincipal:
    """Check Basic credentials against the stored hash and attach the principal to request context.

    Every rejection carries the same opaque ``access denied`` body; only the log
    line says which check failed.
    """
    credential = parse_basic_authorization(authorization)
    if credential is None:
        raise _deny(request, "missing_credentials")

    user = await run_in_threadpool(users.get_by_email, credential.name)
    if user is None:
        raise _deny(request, "unknown_user", email_address=credential.name)

    password_matches = await run_in_threadpool(hasher.verify, credential.secret, user.password)
    if not password_matches:
        raise _deny(request, "password_mismatch", email_address=credential.name)

    principal = AuthPrincipal(
        user_id=user.id,
        name=f"{user.first_name} {user.last_name}",
        email_address=user.email_address,
    )
    logger.info(
        "auth.accepted method=%s path=%s principal_id=%s",
        request.method,
        request.url.path,
        safe_log_identifier(principal.user_id, prefix="pid"),
    )
    request.state.auth_principal = principal
    return principal


def get_user_service(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(repository, hasher)


def get_course_service(
    repository: Annotated[CourseRepository, Depends(get_course_repository)],
) -> CourseService:
    return CourseService(repository)
