from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, String, Text, func

from core.database import Base
from models.enums import CefrLevel, enum_values


class Vocabulary(Base):
    __tablename__ = "vocabulary"

    id = Column(Integer, primary_key=True)
    word = Column(String(100), nullable=False, index=True)
    cefr = Column(
        Enum(CefrLevel, native_enum=False, values_callable=enum_values, length=2),
        nullable=False,
        index=True,
    )
    part_of_speech = Column(String(50), nullable=False)
    pronunciation = Column(String(100), nullable=True)
    definition = Column(Text, nullable=False)
    # ordered; the first example feeds the fill-in-the-blank exercise
    examples = Column(JSON, nullable=False, default=list)
    audio_url = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
