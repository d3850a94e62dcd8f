from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import func, select
from models.enums import Role
from models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_username(self, username: str) -> User | None:
        return self.db.execute(select(User).where(User.username == username)).scalar_one_or_none()

    def get_by_email(self, email: str) -> User | None:
        return self.db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def exists(self, user_id: int) -> bool:
        stmt = select(User.id).where(User.id == user_id)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def count(self) -> int:
        return self.db.execute(select(func.count(User.id))).scalar_one()

    def list_users(self, role: Role | None = None) -> list[User]:
        stmt = select(User).order_by(User.id.desc())
        if role is not None:
            stmt = stmt.where(User.role == role)
        return list(self.db.execute(stmt).scalars())

    def create(
        self,
        *,
        username: str,
        password_hash: str,
        name: str,
        email: str | None = None,
        role: Role = Role.USER,
        words_per_day: int = 5,
    ) -> User:
        user = User(
            username=username,
            password_hash=password_hash,
            name=name,
            email=email,
            role=role,
            words_per_day=words_per_day,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User, updates: dict) -> User:
        for field, value in updates.items():
            setattr(user, field, value)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def touch_last_login(self, user: User) -> User:
        return self.update(user, {"last_login": datetime.now(timezone.utc)})

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()
