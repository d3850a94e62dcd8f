import logging
from datetime import date
from typing import Union

from pydantic import SecretStr
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from models.user import User
from repositories.user_repo import UserRepository
from repositories.user_vocabulary_repo import UserVocabularyRepository
from services.assignment_services import AssignmentService
from core.security import verify_and_upgrade

logger = logging.getLogger(__name__)


class InvalidCredentials(Exception):
    pass


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepository(db)
        self.assignments = AssignmentService(db)
        self.user_vocabulary_repo = UserVocabularyRepository(db)

    def authenticate(self, *, username: str, password: Union[str, SecretStr]) -> User:
        user = self.repo.get_by_username(username)
        if not user:
            raise InvalidCredentials("Invalid username or password")
        ok, new_hash = verify_and_upgrade(password, user.password_hash)
        if not ok:
            raise InvalidCredentials("Invalid username or password")
        if new_hash:
            logger.info("Upgrading password hash for user %s", user.id)
            user = self.repo.update(user, {"password_hash": new_hash})
        return user

    def login(self, *, username: str, password: Union[str, SecretStr]) -> User:
        """Verify credentials, stamp the login and top up today's words."""
        user = self.authenticate(username=username, password=password)
        user = self.repo.touch_last_login(user)
        self.assignments.refill_on_login(user)
        logger.info("User %s logged in", user.id)
        return user

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def assigned_today(self, user_id: int) -> int:
        return self.user_vocabulary_repo.count_for_user(user_id, on=date.today())
