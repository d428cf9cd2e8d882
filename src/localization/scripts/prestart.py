"""Wait for the entity store before the service starts.

Usage:
    python -m localization.scripts.prestart
    alembic upgrade head
"""

import logging

from sqlalchemy import Engine
from sqlmodel import Session
from tenacity import after_log, before_log, retry, stop_after_attempt, wait_fixed

from localization.core.db import engine
from localization.core.store import check_connection

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

max_tries = 60 * 5  # 5 minutes
wait_seconds = 1


@retry(
    stop=stop_after_attempt(max_tries),
    wait=wait_fixed(wait_seconds),
    before=before_log(logger, logging.INFO),
    after=after_log(logger, logging.WARN),
)
def wait_for_store(bind: Engine) -> None:
    """Raise StoreUnavailableError until a trivial query succeeds."""
    with Session(bind) as session:
        check_connection(session)


def main() -> None:
    logger.info("Waiting for entity store")
    wait_for_store(engine)
    logger.info("Entity store is ready")


if __name__ == "__main__":
    main()
