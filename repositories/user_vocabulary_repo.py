from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from models.user_vocabulary import UserVocabulary

CONFLICT_TARGET = ["user_id", "vocabulary_id"]

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserVocabularyRepository:
    def __init__(self, db: Session):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _DIALECT_INSERTS[dialect](UserVocabulary)
        except KeyError:
            raise NotImplementedError(f"Conflict-aware insert is not available for {dialect}") from None

    def assigned_ids(self, user_id: int) -> set[int]:
        stmt = select(UserVocabulary.vocabulary_id).where(UserVocabulary.user_id == user_id)
        return set(self.db.execute(stmt).scalars())

    def count_for_user(self, user_id: int, on: date | None = None) -> int:
        stmt = select(func.count(UserVocabulary.id)).where(UserVocabulary.user_id == user_id)
        if on is not None:
            stmt = stmt.where(UserVocabulary.assigned_date == on)
        return self.db.execute(stmt).scalar_one()

    def insert_ignoring_conflicts(self, *, user_id: int, vocabulary_ids: list[int], assigned_date: date) -> int:
        """Insert one row per word in a single statement; rows hitting the
        (user, word) constraint are skipped. Returns the number inserted."""
        if not vocabulary_ids:
            return 0
        rows = [
            {
                "user_id": user_id,
                "vocabulary_id": vocabulary_id,
                "assigned_date": assigned_date,
                "is_learned": False,
            }
            for vocabulary_id in vocabulary_ids
        ]
        stmt = (
            self._insert()
            .values(rows)
            .on_conflict_do_nothing(index_elements=CONFLICT_TARGET)
            .returning(UserVocabulary.id)
        )
        inserted = self.db.execute(stmt).scalars().all()
        self.db.commit()
        return len(inserted)

    def upsert_for_users(self, *, user_ids: list[int], vocabulary_id: int, assigned_date: date) -> int:
        """Assign one word to every user in a single statement; existing rows
        are re-dated and marked unlearned. Returns the number of rows written."""
        if not user_ids:
            return 0
        rows = [
            {
                "user_id": user_id,
                "vocabulary_id": vocabulary_id,
                "assigned_date": assigned_date,
                "is_learned": False,
            }
            for user_id in user_ids
        ]
        stmt = self._insert().values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=CONFLICT_TARGET,
            set_={"assigned_date": stmt.excluded.assigned_date, "is_learned": False},
        ).returning(UserVocabulary.id)
        written = self.db.execute(stmt).scalars().all()
        self.db.commit()
        return len(written)

    def get_for_user_word(self, *, user_id: int, vocabulary_id: int) -> UserVocabulary | None:
        stmt = select(UserVocabulary).where(
            UserVocabulary.user_id == user_id,
            UserVocabulary.vocabulary_id == vocabulary_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_owned(self, *, assignment_id: int, user_id: int) -> UserVocabulary | None:
        stmt = select(UserVocabulary).where(
            UserVocabulary.id == assignment_id,
            UserVocabulary.user_id == user_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> list[UserVocabulary]:
        stmt = (
            select(UserVocabulary)
            .where(UserVocabulary.user_id == user_id)
            .order_by(UserVocabulary.assigned_date.desc(), UserVocabulary.id)
        )
        return list(self.db.execute(stmt).scalars())

    def set_learned(self, entity: UserVocabulary, learned: bool) -> UserVocabulary:
        entity.is_learned = learned
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def touch_practiced(self, entity: UserVocabulary) -> UserVocabulary:
        entity.last_practiced = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(entity)
        return entity
