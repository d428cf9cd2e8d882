import uuid

from sqlmodel import Session, col

from localization.core import store
from localization.core.base_models import utcnow
from localization.core.exceptions import ConflictError, NotFoundError
from localization.core.logging import get_logger
from localization.core.validation import (
    optional_text,
    parse_choice,
    require_non_negative,
    require_text,
)
from localization.glossary.models import (
    ACTOR_MAX_LENGTH,
    CONTEXT_MAX_LENGTH,
    LOCALE_MAX_LENGTH,
    TENANT_MAX_LENGTH,
    TERM_MAX_LENGTH,
    VALUE_MAX_LENGTH,
    GlossaryCategory,
    GlossaryItem,
    GlossaryTerm,
    GlossaryTermCreate,
    GlossaryTermUpdate,
    GlossaryTranslation,
)
from localization.glossary.resolution import (
    add_or_replace,
    dump_translations,
    locale_context,
    normalize_translations,
    resolve_translation,
    translations_of,
)

__all__ = [
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

logger = get_logger(__name__)

RESOURCE = "Glossary term"

# Ordering shared by listings: most used first, then alphabetical
_USAGE_ORDER = (
    col(GlossaryTerm.usage_count).desc(),
    col(GlossaryTerm.term).asc(),
)


def _escape_like(query: str) -> str:
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def create_term(
    *, session: Session, tenant_id: str, term_in: GlossaryTermCreate
) -> GlossaryTerm:
    """Create a glossary term for a tenant.

    The translation list is normalized to one entry per locale and at most
    one preferred entry before it is stored.

    Raises:
        ConflictError: The tenant already has this term
        ValidationError: Missing tenant or term, or a bound is exceeded
    """
    require_text(tenant_id, "tenant_id", TENANT_MAX_LENGTH)
    require_text(term_in.term, "term", TERM_MAX_LENGTH)
    require_text(term_in.created_by, "created_by", ACTOR_MAX_LENGTH)

    existing = store.find_one(
        session,
        GlossaryTerm,
        GlossaryTerm.tenant_id == tenant_id,
        GlossaryTerm.term == term_in.term,
    )
    if existing is not None:
        raise ConflictError(RESOURCE, "term")

    db_term = GlossaryTerm.model_validate(
        term_in,
        update={
            "tenant_id": tenant_id,
            "translations": dump_translations(
                normalize_translations(term_in.translations)
            ),
        },
    )
    db_term = store.save(session, db_term, resource=RESOURCE)
    logger.info(
        "glossary_term_created",
        tenant_id=tenant_id,
        term_id=str(db_term.id),
        term=db_term.term,
        locales=[t["locale"] for t in db_term.translations],
    )
    return db_term


def get_term(
    *, session: Session, tenant_id: str, term_id: uuid.UUID
) -> GlossaryTerm | None:
    """Get a term by id within a tenant, active or not."""
    return store.find_one(
        session,
        GlossaryTerm,
        GlossaryTerm.id == term_id,
        GlossaryTerm.tenant_id == tenant_id,
    )


def require_term(
    *, session: Session, tenant_id: str, term_id: uuid.UUID
) -> GlossaryTerm:
    """Like get_term, but raises NotFoundError when there is no such term."""
    db_term = get_term(session=session, tenant_id=tenant_id, term_id=term_id)
    if db_term is None:
        raise NotFoundError(RESOURCE, str(term_id))
    return db_term


def update_term(
    *,
    session: Session,
    tenant_id: str,
    term_id: uuid.UUID,
    term_in: GlossaryTermUpdate,
) -> GlossaryTerm:
    """Apply a partial update to a tenant's term.

    Raises:
        NotFoundError: No such term for this tenant
    """
    db_term = require_term(session=session, tenant_id=tenant_id, term_id=term_id)

    update_data = term_in.model_dump(
        exclude_unset=True, exclude={"translations", "updated_by"}
    )
    # Explicit nulls would violate NOT NULL columns
    update_data = {
        field: value
        for field, value in update_data.items()
        if value is not None or field == "notes"
    }
    if term_in.translations is not None:
        update_data["translations"] = dump_translations(
            normalize_translations(term_in.translations)
        )
    update_data["created_by"] = term_in.updated_by
    update_data["updated_at"] = utcnow()

    db_term.sqlmodel_update(update_data)
    db_term = store.save(session, db_term, resource=RESOURCE)
    logger.info(
        "glossary_term_updated",
        tenant_id=tenant_id,
        term_id=str(term_id),
        fields=sorted(term_in.model_fields_set),
    )
    return db_term


def add_or_replace_translation(
    *,
    session: Session,
    term: GlossaryTerm,
    locale: str,
    value: str,
    context: str = "",
    is_preferred: bool = False,
) -> GlossaryTerm:
    """Set the translation of `term` for `locale`.

    Any existing translation for the locale is removed and the new one is
    appended; marking it preferred clears the flag on every other locale.
    """
    require_text(locale, "locale", LOCALE_MAX_LENGTH)
    require_text(value, "value", VALUE_MAX_LENGTH)
    optional_text(context, "context", CONTEXT_MAX_LENGTH)

    new = GlossaryTranslation(
        locale=locale, value=value, context=context or "", is_preferred=is_preferred
    )
    term.translations = dump_translations(add_or_replace(translations_of(term), new))
    term.updated_at = utcnow()
    term = store.save(session, term, resource=RESOURCE)
    logger.info(
        "glossary_translation_set",
        tenant_id=term.tenant_id,
        term_id=str(term.id),
        locale=locale,
        is_preferred=is_preferred,
    )
    return term


def record_usage(*, session: Session, term: GlossaryTerm) -> GlossaryTerm:
    """Count one use of `term` and stamp last_used.

    The counter is incremented in the store, so concurrent calls never lose
    an update. Each call counts again.
    """
    now = utcnow()
    store.increment_field(
        session,
        GlossaryTerm,
        GlossaryTerm.id == term.id,
        field=GlossaryTerm.usage_count,
        values={"last_used": now, "updated_at": now},
        resource=RESOURCE,
    )
    session.refresh(term)
    logger.debug(
        "glossary_usage_recorded",
        tenant_id=term.tenant_id,
        term_id=str(term.id),
        usage_count=term.usage_count,
    )
    return term


def archive_term(
    *,
    session: Session,
    tenant_id: str,
    term_id: uuid.UUID,
    archived_by: str | None = None,
) -> GlossaryTerm:
    """Deactivate a term. It stays stored but drops out of every listing.

    The last-modifier stamp moves to `archived_by` when given and is left
    as it was otherwise.
    """
    db_term = require_term(session=session, tenant_id=tenant_id, term_id=term_id)
    if archived_by is not None:
        require_text(archived_by, "archived_by", ACTOR_MAX_LENGTH)
        db_term.created_by = archived_by

    db_term.is_active = False
    db_term.updated_at = utcnow()
    db_term = store.save(session, db_term, resource=RESOURCE)
    logger.info(
        "glossary_term_archived",
        tenant_id=tenant_id,
        term_id=str(term_id),
        archived_by=db_term.created_by,
    )
    return db_term


def search_terms(
    *, session: Session, tenant_id: str, query: str, limit: int = 20
) -> list[GlossaryTerm]:
    """Case-insensitive substring search over a tenant's active terms."""
    require_text(query, "q", TERM_MAX_LENGTH)
    require_non_negative(limit, "limit")

    pattern = f"%{_escape_like(query)}%"
    return store.find_many(
        session,
        GlossaryTerm,
        GlossaryTerm.tenant_id == tenant_id,
        GlossaryTerm.is_active == True,  # noqa: E712
        col(GlossaryTerm.term).ilike(pattern, escape="\\"),
        order_by=_USAGE_ORDER,
        limit=limit,
    )


def most_used_terms(
    *, session: Session, tenant_id: str, limit: int = 10
) -> list[GlossaryTerm]:
    require_non_negative(limit, "limit")
    return store.find_many(
        session,
        GlossaryTerm,
        GlossaryTerm.tenant_id == tenant_id,
        GlossaryTerm.is_active == True,  # noqa: E712
        order_by=_USAGE_ORDER,
        limit=limit,
    )


def list_for_locale(
    *,
    session: Session,
    tenant_id: str,
    locale: str,
    category: str | GlossaryCategory | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[GlossaryItem]:
    """List a tenant's active terms, each resolved for `locale`.

    Every item carries the fallback-resolved translation and the context of
    the exact-locale translation ("" when the locale has none).
    """
    require_non_negative(limit, "limit")
    require_non_negative(offset, "offset")

    conditions = [
        GlossaryTerm.tenant_id == tenant_id,
        GlossaryTerm.is_active == True,  # noqa: E712
    ]
    if category is not None:
        conditions.append(
            GlossaryTerm.category == parse_choice(GlossaryCategory, category, "category")
        )

    terms = store.find_many(
        session,
        GlossaryTerm,
        *conditions,
        order_by=_USAGE_ORDER,
        limit=limit,
        offset=offset,
    )

    items = []
    for db_term in terms:
        translations = translations_of(db_term)
        items.append(
            GlossaryItem(
                term=db_term.term,
                translation=resolve_translation(db_term.term, translations, locale),
                category=db_term.category,
                context=locale_context(translations, locale),
                usage_count=db_term.usage_count,
            )
        )
    return items
