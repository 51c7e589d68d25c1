"""Shared fixtures: a throwaway sqlite database and collaborator factories."""

from __future__ import annotations

import itertools
import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"taskhub-tests-{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"

from taskhub.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from taskhub.infrastructure import database  # noqa: E402
from taskhub.infrastructure.models import (  # noqa: E402
    TaskModel,
    TeamMemberModel,
    TeamModel,
    UserModel,
)
from taskhub.infrastructure.security import create_user_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test empty tables."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture(scope="session", autouse=True)
def remove_database_file():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def make_user(db_session):
    counter = itertools.count(1)

    def _make_user(name: str | None = None, *, role: str = "user", is_active: bool = True):
        index = next(counter)
        model = UserModel(
            name=name if name is not None else f"User {index}",
            email=f"user{index}@example.com",
            role=role,
            is_active=is_active,
        )
        db_session.add(model)
        db_session.commit()
        db_session.refresh(model)
        return model

    return _make_user


@pytest.fixture()
def make_team(db_session):
    def _make_team(name: str, owner, members=(), *, member_role: str = "member"):
        team = TeamModel(name=name, owner_id=owner.id)
        team.members.append(TeamMemberModel(user_id=owner.id, role="creator", can_write=True))
        for member in members:
            team.members.append(TeamMemberModel(user_id=member.id, role=member_role))
        db_session.add(team)
        db_session.commit()
        db_session.refresh(team)
        return team

    return _make_team


@pytest.fixture()
def make_task(db_session):
    def _make_task(
        title: str,
        *,
        group: str = "ungrouped",
        team_id: int | None = None,
        team_group: str = "ungrouped",
    ):
        task = TaskModel(title=title, group=group, team_id=team_id, team_group=team_group)
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        return task

    return _make_task


@pytest.fixture()
def auth_headers():
    def _auth_headers(user) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user.id)}"}

    return _auth_headers


@pytest.fixture()
def app():
    from taskhub.main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
