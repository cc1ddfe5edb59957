from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from workdesk.domain.entities import UserEntity
from workdesk.domain.enums import UserRole
from workdesk.infra.db import create_schema, create_session_factory
from workdesk.infra.sql_store import SqlRecordStore

from fakes import NOW, FakeStore, FixedClock, SequentialIds, make_user


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def manager() -> UserEntity:
    return make_user("manager", UserRole.MANAGER)


@pytest.fixture()
def officer() -> UserEntity:
    return make_user("officer")


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def sql_store(session_factory) -> SqlRecordStore:
    return SqlRecordStore(session_factory, clock=lambda: NOW)
