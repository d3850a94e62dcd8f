from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.enums import SubmissionStatus


class SubmissionCreateIn(BaseModel):
    vocabulary_id: int = Field(gt=0)
    sentences: list[str] = Field(min_length=1, max_length=3)


class SubmissionReviewIn(BaseModel):
    decision: Literal["approved", "rejected"]
    feedback: str = ""
    override: bool = False


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    vocabulary_id: int
    word: str
    username: str | None = None
    sentences: list[str]
    status: SubmissionStatus
    feedback: str | None = None
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: int | None = None

    @classmethod
    def from_entity(cls, entity) -> "SubmissionOut":
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            vocabulary_id=entity.vocabulary_id,
            word=entity.vocabulary.word if entity.vocabulary else "",
            username=entity.user.username if entity.user else None,
            sentences=entity.sentences,
            status=entity.status,
            feedback=entity.feedback,
            submitted_at=entity.submitted_at,
            reviewed_at=entity.reviewed_at,
            reviewed_by=entity.reviewed_by,
        )
