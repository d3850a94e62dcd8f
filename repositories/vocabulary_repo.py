from sqlalchemy.orm import Session
from sqlalchemy import func, select

from models.enums import CefrLevel
from models.vocabulary import Vocabulary


class VocabularyRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, vocabulary_id: int) -> Vocabulary | None:
        return self.db.get(Vocabulary, vocabulary_id)

    def count(self) -> int:
        return self.db.execute(select(func.count(Vocabulary.id))).scalar_one()

    def list_words(self, cefr: CefrLevel | None = None) -> list[Vocabulary]:
        stmt = select(Vocabulary).order_by(Vocabulary.id.desc())
        if cefr is not None:
            stmt = stmt.where(Vocabulary.cefr == cefr)
        return list(self.db.execute(stmt).scalars())

    def ids_excluding(self, excluded: set[int], limit: int) -> list[int]:
        """Catalog ids not in ``excluded``, in catalog order."""
        stmt = select(Vocabulary.id).order_by(Vocabulary.id).limit(limit)
        if excluded:
            stmt = stmt.where(Vocabulary.id.not_in(excluded))
        return list(self.db.execute(stmt).scalars())

    def add(self, **fields) -> Vocabulary:
        entity = Vocabulary(**fields)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def add_many(self, rows: list[dict]) -> list[Vocabulary]:
        entities = [Vocabulary(**row) for row in rows]
        self.db.add_all(entities)
        self.db.commit()
        for entity in entities:
            self.db.refresh(entity)
        return entities

    def update(self, entity: Vocabulary, updates: dict) -> Vocabulary:
        for field, value in updates.items():
            setattr(entity, field, value)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: Vocabulary) -> None:
        self.db.delete(entity)
        self.db.commit()
