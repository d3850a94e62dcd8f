from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, constr

from schemas.vocabulary import VocabularyOut


class AssignVocabularyIn(BaseModel):
    userId: int = Field(gt=0)
    count: int = Field(default=5, ge=1, le=20)


class AssignWordIn(BaseModel):
    user_ids: list[Annotated[int, Field(gt=0)]] = Field(min_length=1)
    vocabulary_id: int = Field(gt=0)


class AssignWordOut(BaseModel):
    vocabulary_id: int
    count: int


class AssignmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    vocabulary_id: int
    assigned_date: date
    is_learned: bool
    last_practiced: datetime | None = None


class AssignedWordOut(AssignmentOut):
    vocabulary: VocabularyOut


class AssignedDayOut(BaseModel):
    date: date
    words: list[AssignedWordOut]


class LearnedIn(BaseModel):
    learned: bool


class AnswerIn(BaseModel):
    answer: constr(strip_whitespace=True, min_length=1, max_length=100)


class AnswerOut(BaseModel):
    correct: bool
    word: str


class BlankOut(BaseModel):
    assignment_id: int
    sentence: str
