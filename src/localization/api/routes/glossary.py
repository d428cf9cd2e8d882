"""Tenant glossary routes."""

from typing import Annotated, Any
import uuid

from fastapi import APIRouter, Path, Query, Request, status

from localization.api.deps import SessionDep, SettingsDep
from localization.core.base_models import PaginatedResponse
from localization.core.rate_limit import WRITE_RATE_LIMIT, limiter
from localization.glossary import (
    GlossaryCategory,
    GlossaryItem,
    GlossaryTermCreate,
    GlossaryTermPublic,
    GlossaryTermUpdate,
    GlossaryTranslationUpsert,
    ResolvedTranslation,
    add_or_replace_translation,
    archive_term,
    create_term,
    list_for_locale,
    most_used_terms,
    record_usage,
    require_term,
    resolve_translation,
    search_terms,
    translations_of,
    update_term,
)
from localization.glossary.models import ACTOR_MAX_LENGTH

router = APIRouter(prefix="/glossary/{tenant_id}", tags=["glossary"])

TenantPath = Annotated[str, Path(description="Tenant ID")]
TermPath = Annotated[uuid.UUID, Path(description="Glossary term ID")]


@router.get("", response_model=PaginatedResponse[GlossaryItem])
def get_glossary(
    session: SessionDep,
    settings: SettingsDep,
    tenant_id: TenantPath,
    locale: Annotated[str, Query()] = "en",
    category: Annotated[GlossaryCategory | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> Any:
    """List a tenant's active terms resolved for one locale, most used first."""
    items = list_for_locale(
        session=session,
        tenant_id=tenant_id,
        locale=locale,
        category=category,
        limit=limit or settings.GLOSSARY_PAGE_LIMIT,
        offset=offset,
    )
    return PaginatedResponse[GlossaryItem](data=items, count=len(items))


@router.get("/search", response_model=PaginatedResponse[GlossaryTermPublic])
def search_glossary(
    session: SessionDep,
    settings: SettingsDep,
    tenant_id: TenantPath,
    q: Annotated[str, Query(description="Substring to match in term names")] = "",
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> Any:
    terms = search_terms(
        session=session,
        tenant_id=tenant_id,
        query=q,
        limit=limit or settings.GLOSSARY_SEARCH_LIMIT,
    )
    return PaginatedResponse[GlossaryTermPublic](
        data=[GlossaryTermPublic.model_validate(t) for t in terms],
        count=len(terms),
    )


@router.get("/most-used", response_model=PaginatedResponse[GlossaryTermPublic])
def get_most_used_terms(
    session: SessionDep,
    settings: SettingsDep,
    tenant_id: TenantPath,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> Any:
    terms = most_used_terms(
        session=session,
        tenant_id=tenant_id,
        limit=limit or settings.GLOSSARY_MOST_USED_LIMIT,
    )
    return PaginatedResponse[GlossaryTermPublic](
        data=[GlossaryTermPublic.model_validate(t) for t in terms],
        count=len(terms),
    )


@router.post(
    "", response_model=GlossaryTermPublic, status_code=status.HTTP_201_CREATED
)
@limiter.limit(WRITE_RATE_LIMIT)
def create_glossary_term(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    tenant_id: TenantPath,
    term_in: GlossaryTermCreate,
) -> Any:
    """Create a term. A tenant cannot hold the same term twice."""
    term = create_term(session=session, tenant_id=tenant_id, term_in=term_in)
    return GlossaryTermPublic.model_validate(term)


@router.put("/{term_id}", response_model=GlossaryTermPublic)
@limiter.limit(WRITE_RATE_LIMIT)
def update_glossary_term(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    tenant_id: TenantPath,
    term_id: TermPath,
    term_in: GlossaryTermUpdate,
) -> Any:
    term = update_term(
        session=session, tenant_id=tenant_id, term_id=term_id, term_in=term_in
    )
    return GlossaryTermPublic.model_validate(term)


@router.put("/{term_id}/translations/{locale}", response_model=GlossaryTermPublic)
@limiter.limit(WRITE_RATE_LIMIT)
def put_glossary_translation(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    tenant_id: TenantPath,
    term_id: TermPath,
    locale: Annotated[str, Path(description="Locale")],
    translation_in: GlossaryTranslationUpsert,
) -> Any:
    """Add or replace the translation of a term for one locale."""
    term = require_term(session=session, tenant_id=tenant_id, term_id=term_id)
    term = add_or_replace_translation(
        session=session,
        term=term,
        locale=locale,
        value=translation_in.value,
        context=translation_in.context,
        is_preferred=translation_in.is_preferred,
    )
    return GlossaryTermPublic.model_validate(term)


@router.get("/{term_id}/resolve", response_model=ResolvedTranslation)
def resolve_glossary_term(
    session: SessionDep,
    tenant_id: TenantPath,
    term_id: TermPath,
    locale: Annotated[str, Query()] = "en",
) -> Any:
    """Resolve a term for a locale through the fallback chain."""
    term = require_term(session=session, tenant_id=tenant_id, term_id=term_id)
    return ResolvedTranslation(
        term=term.term,
        locale=locale,
        translation=resolve_translation(term.term, translations_of(term), locale),
    )


@router.post("/{term_id}/usage", response_model=GlossaryTermPublic)
def record_glossary_usage(
    session: SessionDep,
    tenant_id: TenantPath,
    term_id: TermPath,
) -> Any:
    term = require_term(session=session, tenant_id=tenant_id, term_id=term_id)
    term = record_usage(session=session, term=term)
    return GlossaryTermPublic.model_validate(term)


@router.delete("/{term_id}", response_model=GlossaryTermPublic)
@limiter.limit(WRITE_RATE_LIMIT)
def archive_glossary_term(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    tenant_id: TenantPath,
    term_id: TermPath,
    archived_by: Annotated[
        str | None, Query(min_length=1, max_length=ACTOR_MAX_LENGTH)
    ] = None,
) -> Any:
    """Deactivate a term; it is kept but no longer listed."""
    term = archive_term(
        session=session,
        tenant_id=tenant_id,
        term_id=term_id,
        archived_by=archived_by,
    )
    return GlossaryTermPublic.model_validate(term)
