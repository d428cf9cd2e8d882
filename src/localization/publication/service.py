"""Bulk publication of translation entries."""

from collections.abc import Sequence

from sqlmodel import Session, SQLModel, col, func

from localization.core import store
from localization.core.base_models import utcnow
from localization.core.logging import get_logger
from localization.core.validation import require_text
from localization.translations import (
    PUBLISHABLE_STATUSES,
    TranslationEntry,
    TranslationStatus,
    parse_namespace,
)
from localization.translations.models import ACTOR_MAX_LENGTH, Namespace

logger = get_logger(__name__)


class PublishRequest(SQLModel):
    namespace: str
    keys: list[str]
    published_by: str = "system"


class PublishResult(SQLModel):
    modified_count: int


def publish(
    *,
    session: Session,
    namespace: str | Namespace,
    keys: Sequence[str],
    published_by: str = "system",
) -> int:
    """Publish every active draft or reviewed entry of `keys` in `namespace`.

    Runs as one UPDATE, so each call is atomic on its own. Entries that are
    already published or archived do not match the filter, which makes a
    repeated call a no-op. published_at keeps its first value; published_by
    is recorded as the entry's last modifier.

    Returns:
        Number of entries moved to published
    """
    ns = parse_namespace(namespace)
    require_text(published_by, "published_by", ACTOR_MAX_LENGTH)
    key_set = list(dict.fromkeys(keys))
    if not key_set:
        return 0

    now = utcnow()
    modified = store.update_many(
        session,
        TranslationEntry,
        TranslationEntry.namespace == ns,
        col(TranslationEntry.key).in_(key_set),
        col(TranslationEntry.status).in_(list(PUBLISHABLE_STATUSES)),
        TranslationEntry.is_active == True,  # noqa: E712
        values={
            "status": TranslationStatus.PUBLISHED,
            "published_at": func.coalesce(col(TranslationEntry.published_at), now),
            "created_by": published_by,
            "updated_at": now,
        },
        resource="Translation",
    )
    logger.info(
        "translations_published",
        namespace=ns.value,
        keys=key_set,
        published_by=published_by,
        modified_count=modified,
    )
    return modified
