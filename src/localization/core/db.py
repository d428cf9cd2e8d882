from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

from localization.core.config import settings


def build_engine(url: str) -> Engine:
    """Create the SQLAlchemy engine for the entity store.

    SQLite URLs (local runs, tests) skip the connection-pool tuning that only
    applies to server databases.
    """
    echo = settings.DEBUG and settings.ENVIRONMENT == "local"
    if url.startswith("sqlite"):
        return create_engine(
            url, connect_args={"check_same_thread": False}, echo=echo
        )
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=echo,
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db(bind: Any = None) -> None:
    """Create all tables registered on SQLModel metadata."""
    # Table modules must be imported so their metadata is registered
    from localization.glossary import models as _glossary_models  # noqa: F401
    from localization.translations import models as _translation_models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
