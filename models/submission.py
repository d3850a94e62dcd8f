from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from core.database import Base
from models.enums import SubmissionStatus, enum_values
from models.user import User
from models.vocabulary import Vocabulary


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vocabulary_id = Column(Integer, ForeignKey("vocabulary.id", ondelete="CASCADE"), nullable=False, index=True)
    sentences = Column(JSON, nullable=False)
    status = Column(
        Enum(SubmissionStatus, native_enum=False, values_callable=enum_values, length=10),
        nullable=False,
        default=SubmissionStatus.PENDING,
        index=True,
    )
    feedback = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    user = relationship(User, foreign_keys=[user_id], lazy="joined")
    vocabulary = relationship(Vocabulary, lazy="joined")
