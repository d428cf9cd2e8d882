from localization.glossary.crud import (
    add_or_replace_translation,
    archive_term,
    create_term,
    get_term,
    list_for_locale,
    most_used_terms,
    record_usage,
    require_term,
    search_terms,
    update_term,
)
from localization.glossary.models import (
    GlossaryCategory,
    GlossaryItem,
    GlossaryTerm,
    GlossaryTermCreate,
    GlossaryTermPublic,
    GlossaryTermUpdate,
    GlossaryTranslation,
    GlossaryTranslationUpsert,
    ResolvedTranslation,
)
from localization.glossary.resolution import (
    add_or_replace,
    locale_context,
    normalize_translations,
    resolve_translation,
    translations_of,
)

__all__ = [
    # Models
    "GlossaryCategory",
    "GlossaryItem",
    "GlossaryTerm",
    "GlossaryTermCreate",
    "GlossaryTermPublic",
    "GlossaryTermUpdate",
    "GlossaryTranslation",
    "GlossaryTranslationUpsert",
    "ResolvedTranslation",
    # Resolution
    "add_or_replace",
    "locale_context",
    "normalize_translations",
    "resolve_translation",
    "translations_of",
    # CRUD
    "add_or_replace_translation",
    "archive_term",
    "create_term",
    "get_term",
    "list_for_locale",
    "most_used_terms",
    "record_usage",
    "require_term",
    "search_terms",
    "update_term",
]
