import logging

from sqlalchemy.orm import Session

from core.actor import Actor
from core.errors import NotFoundError
from models.enums import CefrLevel, Role
from models.vocabulary import Vocabulary
from repositories.vocabulary_repo import VocabularyRepository
from schemas.vocabulary import VocabularyCreateIn, VocabularyUpdateIn

logger = logging.getLogger(__name__)


class VocabularyService:
    def __init__(self, db: Session):
        self.repo = VocabularyRepository(db)

    def list_words(self, cefr: CefrLevel | None = None) -> list[Vocabulary]:
        return self.repo.list_words(cefr=cefr)

    def get_word(self, vocabulary_id: int) -> Vocabulary:
        entity = self.repo.get(vocabulary_id)
        if entity is None:
            raise NotFoundError("Vocabulary not found")
        return entity

    def create_word(self, *, actor: Actor, data: VocabularyCreateIn) -> Vocabulary:
        actor.require(Role.ADMIN)
        entity = self.repo.add(**data.model_dump(), created_by=actor.id)
        logger.info("Admin %s added vocabulary %r (%s)", actor.id, entity.word, entity.id)
        return entity

    def update_word(self, *, actor: Actor, vocabulary_id: int, data: VocabularyUpdateIn) -> Vocabulary:
        actor.require(Role.ADMIN)
        entity = self.get_word(vocabulary_id)
        return self.repo.update(entity, data.model_dump())

    def delete_word(self, *, actor: Actor, vocabulary_id: int) -> None:
        actor.require(Role.ADMIN)
        entity = self.get_word(vocabulary_id)
        self.repo.delete(entity)
        logger.info("Admin %s deleted vocabulary %s", actor.id, vocabulary_id)
