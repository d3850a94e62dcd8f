import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.actor import Actor
from core.config import settings
from core.errors import NotFoundError, UpstreamFailure, ValidationFailure
from models.enums import Role
from models.user import User
from repositories.user_repo import UserRepository
from repositories.user_vocabulary_repo import UserVocabularyRepository
from repositories.vocabulary_repo import VocabularyRepository

logger = logging.getLogger(__name__)

STATUS_ASSIGNED = "assigned"
STATUS_NO_VOCABULARY = "no_vocabulary"
STATUS_NOTHING_NEW = "nothing_new"


@dataclass(frozen=True)
class AssignmentResult:
    count: int
    status: str

    @property
    def message(self) -> str:
        if self.status == STATUS_NO_VOCABULARY:
            return "No vocabulary available in the database"
        if self.status == STATUS_NOTHING_NEW:
            return "No new vocabulary available to assign"
        return f"Assigned {self.count} vocabulary items"


def validate_quota(quota) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(quota, bool) or not isinstance(quota, int):
        raise ValidationFailure("Quota must be an integer")
    if not 1 <= quota <= settings.MAX_WORDS_PER_DAY:
        raise ValidationFailure(f"Quota must be between 1 and {settings.MAX_WORDS_PER_DAY}")
    return quota


class AssignmentService:
    """Hands out catalog words a learner has not been given yet.

    Duplicate (user, word) rows are prevented by the table's unique
    constraint together with a conflict-ignoring insert, so concurrent
    refills for the same learner need no locking here.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserVocabularyRepository(db)
        self.user_repo = UserRepository(db)
        self.vocabulary_repo = VocabularyRepository(db)

    def assign_daily(self, *, actor: Actor, user_id: int, quota: int) -> AssignmentResult:
        """Assign up to ``quota`` new words to ``user_id``.

        Learners may only refill themselves; anyone else needs the admin role.
        """
        if actor.id != user_id:
            actor.require(Role.ADMIN)
        quota = validate_quota(quota)

        try:
            if not self.user_repo.exists(user_id):
                raise NotFoundError("User not found")

            assigned = self.repo.assigned_ids(user_id)
            if self.vocabulary_repo.count() == 0:
                logger.info("No vocabulary available in the database")
                return AssignmentResult(count=0, status=STATUS_NO_VOCABULARY)

            candidates = self.vocabulary_repo.ids_excluding(assigned, limit=quota)
            if not candidates:
                logger.info("No new vocabulary available for user %s", user_id)
                return AssignmentResult(count=0, status=STATUS_NOTHING_NEW)

            inserted = self.repo.insert_ignoring_conflicts(
                user_id=user_id,
                vocabulary_ids=candidates,
                assigned_date=date.today(),
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Assigning vocabulary to user %s failed: %s", user_id, exc)
            raise UpstreamFailure("Could not assign vocabulary") from exc

        logger.info("Assigned %s new vocabulary items to user %s", inserted, user_id)
        return AssignmentResult(count=inserted, status=STATUS_ASSIGNED)

    def refill_on_login(self, user: User) -> AssignmentResult | None:
        """Top up today's words when the learner is below their quota.

        Never raises: a failed refill leaves the learner without new words
        until the next login.
        """
        if Role(user.role) is not Role.USER:
            return None
        # databases without a conflict-aware insert raise NotImplementedError
        try:
            today_count = self.repo.count_for_user(user.id, on=date.today())
            if today_count >= user.words_per_day:
                return None
            return self.assign_daily(
                actor=Actor.from_user(user),
                user_id=user.id,
                quota=user.words_per_day - today_count,
            )
        except (SQLAlchemyError, NotImplementedError, NotFoundError, UpstreamFailure, ValidationFailure) as exc:
            self.db.rollback()
            logger.warning("Daily vocabulary refill for user %s failed: %s", user.id, exc)
            return None

    def assign_word(self, *, actor: Actor, user_ids: list[int], vocabulary_id: int) -> int:
        """Give one word to each of ``user_ids``; already assigned rows are
        re-dated to today and marked unlearned. Returns the rows written."""
        actor.require(Role.ADMIN)
        user_ids = list(dict.fromkeys(user_ids))
        if not user_ids:
            raise ValidationFailure("At least one user is required")
        if self.vocabulary_repo.get(vocabulary_id) is None:
            raise NotFoundError("Vocabulary not found")
        missing = [user_id for user_id in user_ids if not self.user_repo.exists(user_id)]
        if missing:
            raise NotFoundError(f"User not found: {', '.join(str(user_id) for user_id in missing)}")
        try:
            written = self.repo.upsert_for_users(
                user_ids=user_ids,
                vocabulary_id=vocabulary_id,
                assigned_date=date.today(),
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise UpstreamFailure("Could not assign vocabulary") from exc
        logger.info("Admin %s assigned vocabulary %s to %s user(s)", actor.id, vocabulary_id, written)
        return written
