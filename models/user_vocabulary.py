from datetime import date

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from core.database import Base
from models.vocabulary import Vocabulary


class UserVocabulary(Base):
    __tablename__ = "user_vocabulary"
    __table_args__ = (
        UniqueConstraint("user_id", "vocabulary_id", name="uq_user_vocabulary_user_vocabulary"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vocabulary_id = Column(Integer, ForeignKey("vocabulary.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_date = Column(Date, nullable=False, default=date.today, index=True)
    is_learned = Column(Boolean, nullable=False, default=False)
    last_practiced = Column(DateTime(timezone=True), nullable=True)

    vocabulary = relationship(Vocabulary, lazy="joined")
