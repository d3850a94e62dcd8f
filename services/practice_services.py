import re
from itertools import groupby

from sqlalchemy.orm import Session

from core.actor import Actor
from core.errors import NotFoundError
from models.user_vocabulary import UserVocabulary
from repositories.user_vocabulary_repo import UserVocabularyRepository

BLANK = "_______"


def blank_out(sentence: str, word: str) -> str:
    return re.sub(re.escape(word), BLANK, sentence, flags=re.IGNORECASE)


class PracticeService:
    """Flashcard and fill-in-the-blank practice over a learner's assigned words."""

    def __init__(self, db: Session):
        self.repo = UserVocabularyRepository(db)

    def _owned(self, actor: Actor, assignment_id: int) -> UserVocabulary:
        entity = self.repo.get_owned(assignment_id=assignment_id, user_id=actor.id)
        if entity is None:
            raise NotFoundError("Assigned vocabulary not found")
        return entity

    def list_assigned(self, *, actor: Actor) -> list[UserVocabulary]:
        return self.repo.list_for_user(actor.id)

    def list_by_day(self, *, actor: Actor) -> list[dict]:
        """Assignments grouped by assigned date, most recent day first."""
        rows = self.list_assigned(actor=actor)
        return [
            {"date": day, "words": list(items)}
            for day, items in groupby(rows, key=lambda row: row.assigned_date)
        ]

    def set_learned(self, *, actor: Actor, assignment_id: int, learned: bool) -> UserVocabulary:
        return self.repo.set_learned(self._owned(actor, assignment_id), learned)

    def fill_in_blank(self, *, actor: Actor, assignment_id: int) -> str:
        entity = self._owned(actor, assignment_id)
        examples = entity.vocabulary.examples or []
        if not examples:
            return ""
        return blank_out(examples[0], entity.vocabulary.word)

    def check_answer(self, *, actor: Actor, assignment_id: int, answer: str) -> dict:
        """Compare the answer to the word, ignoring case, and stamp the practice time."""
        entity = self._owned(actor, assignment_id)
        self.repo.touch_practiced(entity)
        word = entity.vocabulary.word
        return {"correct": answer.strip().lower() == word.lower(), "word": word}
