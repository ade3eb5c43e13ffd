"""Pytest fixtures for service and API tests."""

import os
from collections.abc import Callable, Generator

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["REDIS_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from academy.api.deps import get_db
from academy.core.security import get_password_hash
from academy.db import models  # noqa: F401  # Imported for side effects
from academy.db.base import Base
from academy.db.models import Module, Quiz, User
from academy.main import create_app
from academy.services.gamification import DEFAULT_BADGES, GamificationService
from academy.utils.cache import cache_backend

TEST_PASSWORD = "securepass123"


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def clear_cache() -> Generator[None, None, None]:
    cache_backend.clear()
    try:
        yield
    finally:
        cache_backend.clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def user_factory(db_session: Session) -> Callable[..., User]:
    counter = {"value": 0}

    def create(**overrides) -> User:
        counter["value"] += 1
        values = {
            "email": f"learner{counter['value']}@example.com",
            "hashed_password": get_password_hash(TEST_PASSWORD),
            "first_name": f"Learner{counter['value']}",
            "role": "student",
            "xp": 0,
            "level": 1,
            "xp_version": 0,
        }
        values.update(overrides)
        user = User(**values)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return create


@pytest.fixture()
def student(user_factory) -> User:
    return user_factory(email="student@example.com", first_name="Camille")


@pytest.fixture()
def admin(user_factory) -> User:
    return user_factory(email="admin@example.com", first_name="Admin", role="admin")


@pytest.fixture()
def seeded_badges(db_session: Session):
    GamificationService(db_session).seed_badges(DEFAULT_BADGES)
    return {badge.name: badge for badge in GamificationService(db_session).list_badges()}


@pytest.fixture()
def catalog(db_session: Session) -> dict:
    """Two published modules, one quiz each."""

    twitch = Module(
        title="Introduction au Streaming sur Twitch",
        order=1,
        xp_reward=150,
        platform="twitch",
        is_published=True,
    )
    tiktok = Module(
        title="Créer du Contenu Viral sur TikTok",
        order=2,
        xp_reward=120,
        platform="tiktok",
        is_published=True,
    )
    draft = Module(title="Branding Personnel", order=3, xp_reward=250, is_published=False)
    db_session.add_all([twitch, tiktok, draft])
    db_session.flush()
    twitch_quiz = Quiz(module_id=twitch.id, title="Quiz : Bases de Twitch", questions=[], xp_reward=50)
    tiktok_quiz = Quiz(module_id=tiktok.id, title="Quiz : TikTok Viral", questions=[], xp_reward=50)
    db_session.add_all([twitch_quiz, tiktok_quiz])
    db_session.commit()
    return {
        "twitch": twitch,
        "tiktok": tiktok,
        "draft": draft,
        "twitch_quiz": twitch_quiz,
        "tiktok_quiz": tiktok_quiz,
    }


def login(client: TestClient, email: str, password: str = TEST_PASSWORD) -> dict[str, str]:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def student_headers(client: TestClient, student: User) -> dict[str, str]:
    return login(client, student.email)


@pytest.fixture()
def admin_headers(client: TestClient, admin: User) -> dict[str, str]:
    return login(client, admin.email)
