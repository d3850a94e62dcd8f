import os

# settings are read at import time, so point them at a throwaway database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["JWT_COOKIE_CSRF_PROTECT"] = "false"
os.environ["GEMINI_API_KEY"] = "test-key"

from typing import Any, Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from core import database
from core.actor import Actor
from core.security import hash_password
from main import app
from models.enums import CefrLevel, Role
from models.user import User
from models.vocabulary import Vocabulary
from routers.auth import security
from routers.deps import get_generation_gateway
from services.generation_gateway import GenerationGateway

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fresh_db() -> Generator[None, None, None]:
    database.Base.metadata.drop_all(bind=database.engine)
    database.init_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user(db) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(username: str | None = None, role: Role = Role.USER, words_per_day: int = 5) -> User:
        counter["n"] += 1
        user = User(
            username=username or f"user{counter['n']}",
            password_hash=hash_password(PASSWORD),
            name=f"Test User {counter['n']}",
            role=role,
            words_per_day=words_per_day,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_word(db) -> Callable[..., Vocabulary]:
    counter = {"n": 0}

    def _make(word: str | None = None, examples: list[str] | None = None, cefr: CefrLevel = CefrLevel.B1) -> Vocabulary:
        counter["n"] += 1
        entity = Vocabulary(
            word=word or f"word{counter['n']}",
            cefr=cefr,
            part_of_speech="noun",
            pronunciation="/wɜːd/",
            definition="a test word",
            examples=examples if examples is not None else [],
        )
        db.add(entity)
        db.commit()
        db.refresh(entity)
        return entity

    return _make


@pytest.fixture
def admin(make_user) -> User:
    return make_user(username="admin", role=Role.ADMIN, words_per_day=10)


@pytest.fixture
def learner(make_user) -> User:
    return make_user(username="learner")


def actor_for(user: User) -> Actor:
    return Actor.from_user(user)


def auth_headers(user: User) -> dict[str, str]:
    token = security.create_access_token(uid=str(user.id))
    return {"Authorization": f"Bearer {token}"}


def gemini_reply(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def make_gateway(handler: Callable[[httpx.Request], Any], api_key: str | None = "test-key") -> GenerationGateway:
    return GenerationGateway(
        api_key=api_key,
        model="gemini-test",
        base_url="https://generation.test/v1beta",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def use_gateway() -> Callable[[Callable[[httpx.Request], Any]], list[httpx.Request]]:
    """Route the app's generation calls to ``handler``; returns the captured requests."""

    def _use(handler: Callable[[httpx.Request], Any]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def _record(request: httpx.Request):
            seen.append(request)
            return handler(request)

        app.dependency_overrides[get_generation_gateway] = lambda: make_gateway(_record)
        return seen

    return _use
