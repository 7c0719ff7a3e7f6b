"""User service layer."""

from courses_api.adapters.auth import PasswordHasher
from courses_api.errors import NotFound
from courses_api.repositories.models import UserRecord
from courses_api.repositories.sql import UserRepository
from courses_api.schemas.auth import AuthPrincipal
from courses_api.schemas.user import CreateUserRequest, User


class UserService:
    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self._repository = repository
        self._hasher = hasher

    def create_user(self, payload: CreateUserRequest) -> User:
        record = self._repository.create_user(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email_address=payload.email_address,
            password=payload.password,
            hash_password=self._hasher.hash,
        )
        return self.to_user(record)

    def get_principal_user(self, principal: AuthPrincipal) -> User:
        record = self._repository.get(principal.user_id)
        if record is None:
            raise NotFound("User not found")
        return self.to_user(record)

    @staticmethod
    def to_user(record: UserRecord) -> User:
        return User(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            email_address=record.email_address,
        )
