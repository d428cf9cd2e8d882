from localization.translations.crud import (
    archive_entry,
    find_missing,
    get_entry,
    get_entry_record,
    parse_namespace,
    resolve_bundle,
    review_entry,
    stats_by_status,
    update_entry,
    upsert_entry,
    upsert_key,
)
from localization.translations.lifecycle import (
    ALLOWED_TRANSITIONS,
    PUBLISHABLE_STATUSES,
    can_transition,
    transition_status,
)
from localization.translations.models import (
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
    TranslationReview,
    TranslationSource,
    TranslationStatus,
    TranslationVariable,
    VariableType,
)

__all__ = [
    # Models
    "BundleRow",
    "EntryLocaleView",
    "LocaleUpsertResult",
    "MissingKeyReport",
    "Namespace",
    "StatusCount",
    "TranslationEntry",
    "TranslationEntryPublic",
    "TranslationEntryUpdate",
    "TranslationKeyCreate",
    "TranslationReview",
    "TranslationSource",
    "TranslationStatus",
    "TranslationVariable",
    "VariableType",
    # Lifecycle
    "ALLOWED_TRANSITIONS",
    "PUBLISHABLE_STATUSES",
    "can_transition",
    "transition_status",
    # CRUD
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
