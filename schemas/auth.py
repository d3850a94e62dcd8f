from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, constr, field_validator

from models.enums import Role


class LoginIn(BaseModel):
    username: constr(strip_whitespace=True, min_length=1, max_length=50)
    password: SecretStr = Field(min_length=1, max_length=128)


class SessionOut(BaseModel):
    """Identity the client keeps for view gating; not a credential."""

    id: int
    username: str
    name: str
    role: Role
    words_per_day: int
    home: str
    assigned_today: int = 0


class UserCreateIn(BaseModel):
    username: constr(strip_whitespace=True, min_length=3, max_length=50)
    password: SecretStr = Field(min_length=6, max_length=128)
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    email: EmailStr | None = None
    words_per_day: int = Field(default=5, ge=1, le=20)

    @field_validator("email", mode="before")
    @classmethod
    def _empty_email_to_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class UserUpdateIn(BaseModel):
    username: constr(strip_whitespace=True, min_length=3, max_length=50)
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    email: EmailStr | None = None
    words_per_day: int = Field(default=5, ge=1, le=20)
    # left empty to keep the current password
    password: SecretStr | None = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def _empty_to_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: str | None = None
    role: Role
    words_per_day: int
    created_at: datetime | None = None
    last_login: datetime | None = None
