"""Authentication schemas."""

from pydantic import BaseModel, Field


class AuthPrincipal(BaseModel):
    """Authenticated user attached to the request for downstream handlers."""

    user_id: int = Field(ge=1)
    name: str
    email_address: str = Field(min_length=1)
