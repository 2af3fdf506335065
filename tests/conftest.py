from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from videoshare.core.config import Settings
from videoshare.db.models.users import User, UserRole
from videoshare.db.models.videos import Video
from videoshare.db.session import init_db
from videoshare.main import create_app
from videoshare.security.password import hash_password
from videoshare.security.tokens import create_access_token

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY="test-secret",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    init_db(app.state.engine)
    yield app
    app.dependency_overrides.clear()
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(app):
    with Session(app.state.engine) as s:
        yield s


@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    def _make(
        name: Optional[str] = "Ann",
        email: Optional[str] = None,
        image: Optional[str] = "https://cdn.example.com/ann.png",
        password: str = "password123",
        role: UserRole = UserRole.user,
    ) -> User:
        counter["n"] += 1
        user = User(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            image=image,
            role=role,
            hashed_password=hash_password(password),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_video(session):
    counter = {"n": 0}

    # par défaut un propriétaire qui n'existe pas (owner_id est toujours renseigné)
    def _make(owner_id: str = "0" * 32, minutes: Optional[int] = None, **fields) -> Video:
        counter["n"] += 1
        n = counter["n"]
        created = BASE_TIME + timedelta(minutes=n if minutes is None else minutes)
        video = Video(
            title=fields.pop("title", f"Video {n}"),
            description=fields.pop("description", f"Description {n}"),
            video_url=fields.pop("video_url", f"https://cdn.example.com/v{n}.mp4"),
            thumbnail_url=fields.pop("thumbnail_url", f"https://cdn.example.com/t{n}.jpg"),
            owner_id=owner_id,
            created_at=created,
            updated_at=created,
            **fields,
        )
        session.add(video)
        session.commit()
        session.refresh(video)
        return video

    return _make


@pytest.fixture
def auth_headers(settings):
    def _headers(user: User) -> dict:
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
            settings=settings.jwt,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
