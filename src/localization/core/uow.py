"""Unit of Work helpers for entity store calls.

Every store operation runs inside `atomic()`: it commits on success, rolls
back on failure, and translates driver errors into the application's error
taxonomy so callers never see raw SQLAlchemy exceptions.

Based on patterns from Cosmic Python:
https://www.cosmicpython.com/book/chapter_06_uow.html
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlmodel import Session

from localization.core.db import engine
from localization.core.exceptions import ConflictError, StoreUnavailableError
from localization.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """One store transaction; commits at most once."""

    def __init__(self, session: Session):
        self._session = session
        self._done = False

    @property
    def session(self) -> Session:
        return self._session

    def commit(self) -> None:
        if self._done:
            return
        self._session.commit()
        self._done = True
        logger.debug("store_committed")

    def rollback(self) -> None:
        """Roll back unless already committed; repeated calls are harmless."""
        if self._done:
            return
        self._session.rollback()
        logger.debug("store_rolled_back")


@contextmanager
def atomic(
    session: Session | None = None,
    *,
    resource: str = "Record",
) -> Generator[UnitOfWork, None, None]:
    """Run the enclosed store writes as one transaction.

    Args:
        session: Session to run in; a private one is opened when omitted
        resource: Name reported by ConflictError on a unique-key violation

    Raises:
        ConflictError: A unique constraint rejected the write
        StoreUnavailableError: The database could not be reached

    Usage:
        with atomic(session, resource="Glossary term") as uow:
            uow.session.add(term)
    """
    owns_session = session is None
    active_session = Session(engine) if owns_session else session
    assert active_session is not None

    uow = UnitOfWork(active_session)

    try:
        yield uow
        uow.commit()
    except IntegrityError as e:
        uow.rollback()
        logger.info("store_conflict", resource=resource, error=str(e.orig))
        raise ConflictError(resource) from e
    except (OperationalError, InterfaceError) as e:
        uow.rollback()
        logger.error("store_unavailable", resource=resource, error=str(e.orig))
        raise StoreUnavailableError(type(e.orig).__name__) from e
    except Exception:
        uow.rollback()
        raise
    finally:
        if owns_session:
            active_session.close()


@contextmanager
def read_only(session: Session) -> Generator[Session, None, None]:
    """Context manager for read operations.

    Never commits; only translates connection failures.
    """
    try:
        yield session
    except (OperationalError, InterfaceError) as e:
        session.rollback()
        logger.error("store_unavailable", error=str(e.orig))
        raise StoreUnavailableError(type(e.orig).__name__) from e
