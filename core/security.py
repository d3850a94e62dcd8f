from typing import Union

from passlib.context import CryptContext
from pydantic import SecretStr

Secret = Union[str, SecretStr]

# hashes made with outdated argon2 parameters are replaced on the next login
pwd_ctx = CryptContext(schemes=["argon2"], deprecated="auto")


def _to_plain(p: Secret) -> str:
    return p.get_secret_value() if isinstance(p, SecretStr) else p


def hash_password(password: Secret) -> str:
    return pwd_ctx.hash(_to_plain(password))


def verify_and_upgrade(plain: Secret, hashed: str) -> tuple[bool, str | None]:
    """Check ``plain`` against ``hashed``.

    The second item is a fresh hash when the stored one should be replaced,
    otherwise None. Malformed stored hashes count as a failed check.
    """
    try:
        return pwd_ctx.verify_and_update(_to_plain(plain), hashed)
    except ValueError:
        return False, None
