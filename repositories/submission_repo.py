from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select

from models.enums import SubmissionStatus
from models.submission import Submission


class SubmissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, submission_id: int) -> Submission | None:
        return self.db.get(Submission, submission_id)

    def create(self, *, user_id: int, vocabulary_id: int, sentences: list[str]) -> Submission:
        entity = Submission(
            user_id=user_id,
            vocabulary_id=vocabulary_id,
            sentences=sentences,
            status=SubmissionStatus.PENDING,
            submitted_at=datetime.now(timezone.utc),
        )
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def list_for_user(self, user_id: int) -> list[Submission]:
        stmt = select(Submission).where(Submission.user_id == user_id).order_by(Submission.id.desc())
        return list(self.db.execute(stmt).scalars())

    def list_all(self, status: SubmissionStatus | None = None) -> list[Submission]:
        stmt = select(Submission).order_by(Submission.id.desc())
        if status is not None:
            stmt = stmt.where(Submission.status == status)
        return list(self.db.execute(stmt).scalars())

    def record_review(
        self,
        entity: Submission,
        *,
        status: SubmissionStatus,
        feedback: str,
        reviewer_id: int,
    ) -> Submission:
        entity.status = status
        entity.feedback = feedback
        entity.reviewed_by = reviewer_id
        entity.reviewed_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(entity)
        return entity
