"""Shared fixtures: an in-memory SQLite store per test and an API client
bound to it."""

import os

# Must be set before localization.core.config is imported
os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Generator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from localization.core.db import get_db, init_db
from localization.glossary import GlossaryTermCreate, GlossaryTranslation, create_term
from localization.main import app
from localization.translations import upsert_entry
from localization.publication import publish


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def published_entry(session: Session):
    """Factory that upserts and publishes one entry."""

    def _make(namespace: str, key: str, locale: str, value: str):
        upsert_entry(
            session=session, namespace=namespace, key=key, locale=locale, value=value
        )
        publish(session=session, namespace=namespace, keys=[key])

    return _make


@pytest.fixture
def make_term(session: Session):
    """Factory that creates a glossary term for tenant t1 by default."""

    def _make(term: str, *translations: GlossaryTranslation, tenant_id: str = "t1"):
        return create_term(
            session=session,
            tenant_id=tenant_id,
            term_in=GlossaryTermCreate(term=term, translations=list(translations)),
        )

    return _make
