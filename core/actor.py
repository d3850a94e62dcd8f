"""The acting user, passed explicitly into every service call."""
from dataclasses import dataclass

from core.errors import PermissionDenied
from models.enums import Role

# landing page per role; every Role must have an entry
ROLE_HOME: dict[Role, str] = {
    Role.ADMIN: "/admin",
    Role.USER: "/user",
}


@dataclass(frozen=True)
class Actor:
    id: int
    role: Role
    words_per_day: int

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=user.id, role=Role(user.role), words_per_day=user.words_per_day)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def home(self) -> str:
        return home_for(self.role)

    def require(self, role: Role) -> "Actor":
        if self.role is not role:
            raise PermissionDenied(f"This action requires the {role.value} role")
        return self


def home_for(role: Role) -> str:
    try:
        return ROLE_HOME[role]
    except KeyError:
        raise ValueError(f"Unhandled role: {role!r}") from None
