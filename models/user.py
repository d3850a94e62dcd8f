from sqlalchemy import Column, DateTime, Enum, Integer, String, func

from core.database import Base
from models.enums import Role, enum_values


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=True, index=True)
    role = Column(
        Enum(Role, native_enum=False, values_callable=enum_values, length=10),
        nullable=False,
        server_default=Role.USER.value,
    )
    words_per_day = Column(Integer, nullable=False, server_default="5")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
