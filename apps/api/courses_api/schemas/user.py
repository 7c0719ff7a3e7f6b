"""User API schemas."""

from courses_api.schemas.base import CamelModel


class CreateUserRequest(CamelModel):
    # Presence rules live with the persisted model so every violation is reported at once.
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    password: str | None = None


class User(CamelModel):
    id: int
    first_name: str
    last_name: str
    email_address: str
