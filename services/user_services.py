import logging

from sqlalchemy.orm import Session

from core.actor import Actor
from core.errors import NotFoundError, ValidationFailure
from core.security import hash_password
from models.enums import Role
from models.user import User
from repositories.user_repo import UserRepository
from schemas.auth import UserCreateIn, UserUpdateIn

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepository(db)

    def _get(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _ensure_unique(self, *, username: str, email: str | None, exclude_id: int | None = None) -> None:
        existing = self.repo.get_by_username(username)
        if existing is not None and existing.id != exclude_id:
            raise ValidationFailure("Username already taken")
        if email:
            existing = self.repo.get_by_email(email)
            if existing is not None and existing.id != exclude_id:
                raise ValidationFailure("Email already registered")

    def list_users(self, *, actor: Actor, role: Role | None = None) -> list[User]:
        actor.require(Role.ADMIN)
        return self.repo.list_users(role=role)

    def create_user(self, *, actor: Actor, data: UserCreateIn) -> User:
        actor.require(Role.ADMIN)
        self._ensure_unique(username=data.username, email=data.email)
        user = self.repo.create(
            username=data.username,
            password_hash=hash_password(data.password),
            name=data.name,
            email=data.email,
            role=Role.USER,
            words_per_day=data.words_per_day,
        )
        logger.info("Admin %s created user %s", actor.id, user.id)
        return user

    def update_user(self, *, actor: Actor, user_id: int, data: UserUpdateIn) -> User:
        actor.require(Role.ADMIN)
        user = self._get(user_id)
        self._ensure_unique(username=data.username, email=data.email, exclude_id=user.id)
        updates = {
            "username": data.username,
            "name": data.name,
            "email": data.email,
            "words_per_day": data.words_per_day,
        }
        if data.password is not None:
            updates["password_hash"] = hash_password(data.password)
        return self.repo.update(user, updates)

    def delete_user(self, *, actor: Actor, user_id: int) -> None:
        actor.require(Role.ADMIN)
        user = self._get(user_id)
        if Role(user.role) is Role.ADMIN:
            raise ValidationFailure("Admin accounts cannot be deleted")
        self.repo.delete(user)
        logger.info("Admin %s deleted user %s", actor.id, user_id)
