# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["BCRYPT_ROUNDS"] = "4"

from social_api.core.credentials import (  # noqa: E402
    CredentialClaims,
    CredentialCodec,
    CredentialConfig,
    get_credential_codec,
)
from social_api.core.policy import Caller, Role  # noqa: E402
from social_api.db.session import Base, configure_sqlite  # noqa: E402
from social_api.db.session import get_db as app_get_session  # noqa: E402
from social_api.main import app as fastapi_app  # noqa: E402
from social_api.models import Comment, Post, User  # noqa: E402
from social_api.services.user_service import hash_password  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"

_USER_COUNTER = count(1)
_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)
_TIME_COUNTER = count(1)


def next_timestamp() -> datetime:
    """Return strictly increasing timestamps so ordering assertions are stable."""
    return _BASE_TIME + timedelta(seconds=next(_TIME_COUNTER))


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = configure_sqlite(
        create_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def codec() -> CredentialCodec:
    """The codec the running app verifies tokens with."""
    return get_credential_codec()


@pytest.fixture()
def standalone_codec() -> CredentialCodec:
    """A codec with its own secret, independent of application settings."""
    return CredentialCodec(CredentialConfig(secret="unit-test-secret"))


def _create_user(db: Session, role: Role = Role.USER, **overrides: str) -> User:
    n = next(_USER_COUNTER)
    user = User(
        username=overrides.get("username", f"user{n}"),
        email=overrides.get("email", f"user{n}@example.com"),
        password_hash=hash_password(overrides.get("password", TEST_PASSWORD)),
        role=role,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _factory(role: Role = Role.USER, **overrides: str) -> User:
        return _create_user(db_session, role, **overrides)

    return _factory


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted regular user."""
    return make_user()


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user()


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user(Role.ADMIN)


def caller_for(user: User) -> Caller:
    return Caller(id=user.id, role=user.role, username=user.username)


def token_for(codec: CredentialCodec, user: User, **kwargs) -> str:
    return codec.issue(
        CredentialClaims(subject=user.id, username=user.username, role=user.role),
        **kwargs,
    )


@pytest.fixture()
def auth_headers(codec: CredentialCodec) -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(codec, user)}"}

    return _headers


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    def _factory(author: User, caption: str | None = "hello") -> Post:
        post = Post(
            user_id=author.id,
            media_file="https://cdn.example.com/media/photo.jpg",
            caption=caption,
            created_at=next_timestamp(),
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _factory


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    return make_post(test_user)


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _factory(
        author: User,
        post: Post,
        content: str = "nice",
        parent: Comment | None = None,
    ) -> Comment:
        comment = Comment(
            user_id=author.id,
            post_id=post.id,
            content=content,
            parent_id=parent.id if parent is not None else None,
            created_at=next_timestamp(),
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _factory
