from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, constr, field_validator

from models.enums import CefrLevel


def _clean_examples(value):
    if value is None:
        return []
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return value


class VocabularyCreateIn(BaseModel):
    word: constr(strip_whitespace=True, min_length=1, max_length=100)
    cefr: CefrLevel
    part_of_speech: constr(strip_whitespace=True, min_length=1, max_length=50)
    pronunciation: constr(strip_whitespace=True, max_length=100) | None = None
    definition: constr(strip_whitespace=True, min_length=1)
    examples: list[str] = Field(default_factory=list)
    audio_url: constr(strip_whitespace=True, max_length=255) | None = None

    @field_validator("examples", mode="before")
    @classmethod
    def _drop_blank_examples(cls, value):
        # blank rows from the admin form are dropped, order is kept
        return _clean_examples(value)

    @field_validator("pronunciation", "audio_url", mode="before")
    @classmethod
    def _empty_to_none(cls, value: str | None):
        if isinstance(value, str):
            return value.strip() or None
        return value


class VocabularyUpdateIn(VocabularyCreateIn):
    pass


class VocabularyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    word: str
    cefr: CefrLevel
    part_of_speech: str
    pronunciation: str | None = None
    definition: str
    examples: list[str]
    audio_url: str | None = None
    created_at: datetime | None = None
    created_by: int | None = None


class GeneratedWord(BaseModel):
    """One word record as returned by the generation backend; every field is required."""

    model_config = ConfigDict(populate_by_name=True)

    word: constr(strip_whitespace=True, min_length=1)
    part_of_speech: constr(strip_whitespace=True, min_length=1) = Field(
        validation_alias=AliasChoices("part_of_speech", "partOfSpeech")
    )
    pronunciation: constr(strip_whitespace=True, min_length=1)
    definition: constr(strip_whitespace=True, min_length=1)
    examples: list[constr(strip_whitespace=True, min_length=1)] = Field(min_length=1)


class GenerateVocabularyIn(BaseModel):
    level: CefrLevel
    count: int = Field(ge=1, le=20)
    topic: constr(strip_whitespace=True, max_length=100) | None = None

    @field_validator("topic", mode="before")
    @classmethod
    def _empty_topic_to_none(cls, value: str | None):
        if isinstance(value, str):
            return value.strip() or None
        return value


class WordIn(BaseModel):
    word: constr(strip_whitespace=True, min_length=1, max_length=100)


class ExamplesOut(BaseModel):
    word: str
    examples: list[str]


class PronunciationOut(BaseModel):
    word: str
    pronunciation: str
    audio_url: str
