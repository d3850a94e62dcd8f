import logging

from sqlalchemy.orm import Session

from core.actor import Actor
from core.errors import NotFoundError, ValidationFailure
from models.enums import Role, SubmissionStatus
from models.submission import Submission
from repositories.submission_repo import SubmissionRepository
from repositories.user_vocabulary_repo import UserVocabularyRepository
from repositories.vocabulary_repo import VocabularyRepository

logger = logging.getLogger(__name__)

MAX_SENTENCES = 3
DECISIONS = (SubmissionStatus.APPROVED, SubmissionStatus.REJECTED)


def clean_sentences(sentences: list[str]) -> list[str]:
    cleaned = [s.strip() for s in sentences if isinstance(s, str) and s.strip()]
    if not cleaned:
        raise ValidationFailure("At least one sentence is required")
    if len(cleaned) > MAX_SENTENCES:
        raise ValidationFailure(f"At most {MAX_SENTENCES} sentences can be submitted")
    return cleaned


class SubmissionService:
    """Learner sentence submissions and their admin review.

    ``pending`` moves to ``approved`` or ``rejected``; both are terminal and
    can only be changed again through an explicit override review.
    """

    def __init__(self, db: Session):
        self.repo = SubmissionRepository(db)
        self.vocabulary_repo = VocabularyRepository(db)
        self.assignment_repo = UserVocabularyRepository(db)

    def submit(self, *, actor: Actor, vocabulary_id: int, sentences: list[str]) -> Submission:
        actor.require(Role.USER)
        cleaned = clean_sentences(sentences)
        if self.vocabulary_repo.get(vocabulary_id) is None:
            raise NotFoundError("Vocabulary not found")
        if self.assignment_repo.get_for_user_word(user_id=actor.id, vocabulary_id=vocabulary_id) is None:
            # TODO: reject once product decides whether unassigned words may be submitted
            logger.warning("User %s submitted sentences for unassigned vocabulary %s", actor.id, vocabulary_id)
        entity = self.repo.create(user_id=actor.id, vocabulary_id=vocabulary_id, sentences=cleaned)
        logger.info("User %s submitted %s sentence(s) for vocabulary %s", actor.id, len(cleaned), vocabulary_id)
        return entity

    def review(
        self,
        *,
        actor: Actor,
        submission_id: int,
        decision: SubmissionStatus,
        feedback: str = "",
        override: bool = False,
    ) -> Submission:
        actor.require(Role.ADMIN)
        try:
            decision = SubmissionStatus(decision)
        except ValueError:
            decision = None
        if decision not in DECISIONS:
            raise ValidationFailure("Decision must be approved or rejected")

        entity = self.repo.get(submission_id)
        if entity is None:
            raise NotFoundError("Submission not found")

        current = SubmissionStatus(entity.status)
        if current.is_terminal and not override:
            raise ValidationFailure(f"Submission was already {current.value}")

        entity = self.repo.record_review(
            entity,
            status=decision,
            feedback=(feedback or "").strip(),
            reviewer_id=actor.id,
        )
        logger.info(
            "Admin %s marked submission %s %s (was %s)",
            actor.id,
            submission_id,
            decision.value,
            current.value,
        )
        return entity

    def list_for_user(self, *, actor: Actor) -> list[Submission]:
        return self.repo.list_for_user(actor.id)

    def list_all(self, *, actor: Actor, status: SubmissionStatus | None = None) -> list[Submission]:
        actor.require(Role.ADMIN)
        return self.repo.list_all(status=status)
