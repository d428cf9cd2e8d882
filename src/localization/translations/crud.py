from collections.abc import Iterable, Sequence
from typing import Any

from sqlmodel import Session, col

from localization.core import store
from localization.core.base_models import utcnow
from localization.core.exceptions import AppException, NotFoundError
from localization.core.logging import get_logger
from localization.core.validation import (
    optional_text,
    parse_choice,
    require_text,
)
from localization.translations.lifecycle import transition_status
from localization.translations.models import (
    ACTOR_MAX_LENGTH,
    CONTEXT_MAX_LENGTH,
    KEY_MAX_LENGTH,
    LOCALE_MAX_LENGTH,
    VALUE_MAX_LENGTH,
    BundleRow,
    EntryLocaleView,
    LocaleUpsertResult,
    MissingKeyReport,
    Namespace,
    StatusCount,
    TranslationEntry,
    TranslationEntryPublic,
    TranslationEntryUpdate,
    TranslationKeyCreate,
    TranslationStatus,
    TranslationVariable,
)

__all__ = [
    "archive_entry",
    "find_missing",
    "get_entry",
    "get_entry_record",
    "parse_namespace",
    "resolve_bundle",
    "review_entry",
    "stats_by_status",
    "update_entry",
    "upsert_entry",
    "upsert_key",
]

logger = get_logger(__name__)

RESOURCE = "Translation"

# Columns replaced when an upsert hits an existing (namespace, key, locale)
UPSERT_FIELDS = (
    "value",
    "context",
    "variables",
    "status",
    "is_active",  # an upsert brings an archived entry back as a draft
    "created_by",
    "updated_at",
)


def parse_namespace(namespace: str | Namespace) -> Namespace:
    return parse_choice(Namespace, namespace, "namespace")


def _dump_variables(
    variables: Iterable[TranslationVariable | dict[str, Any]] | None,
) -> list[dict[str, Any]]:
    return [
        TranslationVariable.model_validate(variable).model_dump(mode="json")
        for variable in variables or []
    ]


def _entry_identity(namespace: Namespace, key: str, locale: str) -> str:
    return f"{namespace.value}/{key}/{locale}"


def upsert_entry(
    *,
    session: Session,
    namespace: str | Namespace,
    key: str,
    locale: str,
    value: str,
    context: str | None = None,
    variables: Iterable[TranslationVariable | dict[str, Any]] | None = None,
    created_by: str = "system",
) -> TranslationEntry:
    """Create or replace the entry for (namespace, key, locale).

    The entry always comes back as an active draft, whatever its previous
    status: changed content has to be reviewed and published again.
    published_at is kept from any earlier publication.

    Raises:
        ValidationError: Unknown namespace or a field outside its bounds
    """
    ns = parse_namespace(namespace)
    require_text(key, "key", KEY_MAX_LENGTH)
    require_text(locale, "locale", LOCALE_MAX_LENGTH)
    require_text(value, "value", VALUE_MAX_LENGTH)
    optional_text(context, "context", CONTEXT_MAX_LENGTH)
    require_text(created_by, "created_by", ACTOR_MAX_LENGTH)

    draft = TranslationEntry(
        namespace=ns,
        key=key,
        locale=locale,
        value=value,
        context=context,
        variables=_dump_variables(variables),
        status=TranslationStatus.DRAFT,
        is_active=True,
        created_by=created_by,
    )
    entry = store.upsert_by_key(
        session,
        TranslationEntry,
        key_fields=("namespace", "key", "locale"),
        values=draft.model_dump(),
        update_fields=UPSERT_FIELDS,
        resource=RESOURCE,
    )
    logger.info(
        "translation_upserted",
        namespace=ns.value,
        key=key,
        locale=locale,
        created_by=created_by,
    )
    return entry


def upsert_key(
    *, session: Session, key_in: TranslationKeyCreate
) -> list[LocaleUpsertResult]:
    """Upsert one entry per locale in `key_in.translations`.

    Each locale is an independent write. A failure is reported in that
    locale's result and does not undo locales already written.
    """
    results: list[LocaleUpsertResult] = []
    for locale, value in key_in.translations.items():
        try:
            entry = upsert_entry(
                session=session,
                namespace=key_in.namespace,
                key=key_in.key,
                locale=locale,
                value=value,
                context=key_in.context,
                variables=key_in.variables,
                created_by=key_in.created_by,
            )
        except AppException as e:
            logger.warning(
                "translation_upsert_failed",
                namespace=key_in.namespace,
                key=key_in.key,
                locale=locale,
                error_code=e.error_code,
                error=e.message,
            )
            results.append(LocaleUpsertResult(locale=locale, ok=False, error=e.to_dict()))
        else:
            results.append(
                LocaleUpsertResult(
                    locale=locale,
                    ok=True,
                    entry=TranslationEntryPublic.model_validate(entry),
                )
            )
    return results


def get_entry_record(
    *, session: Session, namespace: str | Namespace, key: str, locale: str
) -> TranslationEntry | None:
    """Get the stored entry for (namespace, key, locale), active or not."""
    ns = parse_namespace(namespace)
    return store.find_one(
        session,
        TranslationEntry,
        TranslationEntry.namespace == ns,
        TranslationEntry.key == key,
        TranslationEntry.locale == locale,
    )


def _require_entry(
    session: Session, namespace: str | Namespace, key: str, locale: str
) -> TranslationEntry:
    entry = get_entry_record(
        session=session, namespace=namespace, key=key, locale=locale
    )
    if entry is None:
        raise NotFoundError(
            RESOURCE, _entry_identity(parse_namespace(namespace), key, locale)
        )
    return entry


def get_entry(
    *, session: Session, namespace: str | Namespace, key: str, locales: Sequence[str]
) -> dict[str, EntryLocaleView]:
    """Get the active values of one key for the requested locales.

    Locales without an active entry are absent from the result.
    """
    ns = parse_namespace(namespace)
    if not locales:
        return {}

    entries = store.find_many(
        session,
        TranslationEntry,
        TranslationEntry.namespace == ns,
        TranslationEntry.key == key,
        col(TranslationEntry.locale).in_(list(locales)),
        TranslationEntry.is_active == True,  # noqa: E712
        order_by=[col(TranslationEntry.locale).asc()],
    )
    return {
        entry.locale: EntryLocaleView(
            value=entry.value,
            context=entry.context,
            status=entry.status,
            variables=entry.variables,
        )
        for entry in entries
    }


def update_entry(
    *,
    session: Session,
    namespace: str | Namespace,
    key: str,
    locale: str,
    entry_in: TranslationEntryUpdate,
) -> TranslationEntry:
    """Update value, context, variables, or status in place.

    Status is left alone unless `entry_in` sets it, and then only moves
    along the lifecycle state machine.

    Raises:
        NotFoundError: No entry for (namespace, key, locale)
        ValidationError: Forbidden status transition
    """
    entry = _require_entry(session, namespace, key, locale)

    update_data = entry_in.model_dump(
        exclude_unset=True, exclude={"status", "updated_by", "variables"}
    )
    if "value" in update_data:
        require_text(update_data["value"], "value", VALUE_MAX_LENGTH)
    if "variables" in entry_in.model_fields_set:
        update_data["variables"] = _dump_variables(entry_in.variables)

    # Checked before any field changes so a rejected update leaves the row clean
    if entry_in.status is not None:
        transition_status(entry, entry_in.status, actor=entry_in.updated_by)
    entry.sqlmodel_update(update_data)

    entry.created_by = entry_in.updated_by
    entry.updated_at = utcnow()
    entry = store.save(session, entry, resource=RESOURCE)

    logger.info(
        "translation_updated",
        namespace=entry.namespace.value,
        key=key,
        locale=locale,
        status=entry.status.value,
        fields=sorted(entry_in.model_fields_set),
    )
    return entry


def review_entry(
    *,
    session: Session,
    namespace: str | Namespace,
    key: str,
    locale: str,
    reviewed_by: str,
) -> TranslationEntry:
    """Mark a draft as reviewed, stamping reviewer and time."""
    entry = _require_entry(session, namespace, key, locale)
    transition_status(entry, TranslationStatus.REVIEWED, actor=reviewed_by)
    entry = store.save(session, entry, resource=RESOURCE)
    logger.info(
        "translation_reviewed",
        namespace=entry.namespace.value,
        key=key,
        locale=locale,
        reviewed_by=reviewed_by,
    )
    return entry


def archive_entry(
    *, session: Session, namespace: str | Namespace, key: str, locale: str
) -> TranslationEntry:
    """Archive an entry from any status; it stops appearing anywhere."""
    entry = _require_entry(session, namespace, key, locale)
    transition_status(entry, TranslationStatus.ARCHIVED)
    entry = store.save(session, entry, resource=RESOURCE)
    logger.info(
        "translation_archived",
        namespace=entry.namespace.value,
        key=key,
        locale=locale,
    )
    return entry


def resolve_bundle(
    *,
    session: Session,
    namespaces: Sequence[str | Namespace],
    locales: Sequence[str],
    status: str | TranslationStatus = TranslationStatus.PUBLISHED,
) -> list[BundleRow]:
    """Active entries in any of `namespaces` x `locales` with exactly `status`.

    Archived entries are inactive, so they never resolve, even when
    `status` is archived.
    """
    parsed_namespaces = [parse_namespace(ns) for ns in namespaces]
    parsed_status = parse_choice(TranslationStatus, status, "status")
    if not parsed_namespaces or not locales:
        return []

    rows = store.find_rows(
        session,
        [
            TranslationEntry.namespace,
            TranslationEntry.key,
            TranslationEntry.locale,
            TranslationEntry.value,
            TranslationEntry.variables,
        ],
        col(TranslationEntry.namespace).in_(parsed_namespaces),
        col(TranslationEntry.locale).in_(list(locales)),
        TranslationEntry.status == parsed_status,
        TranslationEntry.is_active == True,  # noqa: E712
        order_by=[
            col(TranslationEntry.namespace).asc(),
            col(TranslationEntry.locale).asc(),
            col(TranslationEntry.key).asc(),
        ],
    )
    return [
        BundleRow(
            namespace=row.namespace,
            key=row.key,
            locale=row.locale,
            value=row.value,
            variables=row.variables,
        )
        for row in rows
    ]


def find_missing(
    *,
    session: Session,
    namespace: str | Namespace,
    required_locales: Sequence[str],
) -> list[MissingKeyReport]:
    """Report published keys that lack some of `required_locales`.

    Only keys with at least one active published entry are considered.
    """
    ns = parse_namespace(namespace)
    groups = store.grouped_difference(
        session,
        TranslationEntry.key,
        TranslationEntry.locale,
        required_locales,
        TranslationEntry.namespace == ns,
        TranslationEntry.status == TranslationStatus.PUBLISHED,
        TranslationEntry.is_active == True,  # noqa: E712
    )
    return [
        MissingKeyReport(key=key, locales=present, missing=missing)
        for key, present, missing in groups
    ]


def stats_by_status(
    *, session: Session, namespace: str | Namespace, locale: str
) -> list[StatusCount]:
    """Count active entries for (namespace, locale) per status."""
    ns = parse_namespace(namespace)
    counts = store.group_count(
        session,
        TranslationEntry.status,
        TranslationEntry.namespace == ns,
        TranslationEntry.locale == locale,
        TranslationEntry.is_active == True,  # noqa: E712
    )
    return [StatusCount(status=status, count=count) for status, count in counts]
