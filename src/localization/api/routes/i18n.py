"""Translation bundle routes.

Comma-separated query parameters (namespaces, locales) mirror how clients
already request bundles, e.g. `?namespaces=ui,emails&locales=en,fr`.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Path, Query, Request, status

from localization.api.deps import SessionDep, SettingsDep
from localization.bundles import build_bundles, build_namespace_bundle
from localization.core.rate_limit import (
    BUNDLE_RATE_LIMIT,
    PUBLISH_RATE_LIMIT,
    WRITE_RATE_LIMIT,
    limiter,
)
from localization.publication import PublishRequest, PublishResult, publish
from localization.translations import (
    EntryLocaleView,
    LocaleUpsertResult,
    MissingKeyReport,
    StatusCount,
    TranslationEntryPublic,
    TranslationEntryUpdate,
    TranslationKeyCreate,
    TranslationReview,
    archive_entry,
    find_missing,
    get_entry,
    review_entry,
    stats_by_status,
    update_entry,
    upsert_key,
)

router = APIRouter(prefix="/i18n", tags=["i18n"])


def _split(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@router.get("", response_model=dict[str, dict[str, dict[str, str]]])
@limiter.limit(BUNDLE_RATE_LIMIT)
def get_bundles(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    settings: SettingsDep,
    namespaces: Annotated[
        str | None, Query(description="Comma-separated namespaces")
    ] = None,
    locales: Annotated[str | None, Query(description="Comma-separated locales")] = None,
    entry_status: Annotated[
        str | None, Query(alias="status", description="Entry status")
    ] = None,
) -> Any:
    """Get bundles for several namespaces, keyed namespace -> locale -> key."""
    return build_bundles(
        session=session,
        namespaces=_split(namespaces, settings.DEFAULT_BUNDLE_NAMESPACES),
        locales=_split(locales, settings.DEFAULT_BUNDLE_LOCALES),
        status=entry_status or settings.DEFAULT_BUNDLE_STATUS,
    )


@router.post(
    "/keys",
    response_model=list[LocaleUpsertResult],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(WRITE_RATE_LIMIT)
def create_translation_key(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    key_in: TranslationKeyCreate,
) -> Any:
    """Upsert a key in every locale given.

    Each locale succeeds or fails on its own; the response lists one result
    per locale.
    """
    return upsert_key(session=session, key_in=key_in)


@router.post("/publish", response_model=PublishResult)
@limiter.limit(PUBLISH_RATE_LIMIT)
def publish_translations(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    publish_in: PublishRequest,
) -> Any:
    """Publish the draft and reviewed entries of the given keys."""
    modified = publish(
        session=session,
        namespace=publish_in.namespace,
        keys=publish_in.keys,
        published_by=publish_in.published_by,
    )
    return PublishResult(modified_count=modified)


@router.get("/stats/{namespace}", response_model=list[StatusCount])
def get_translation_stats(
    session: SessionDep,
    namespace: Annotated[str, Path(description="Namespace")],
    locale: Annotated[str, Query()] = "en",
) -> Any:
    """Count active entries of a namespace and locale per status."""
    return stats_by_status(session=session, namespace=namespace, locale=locale)


@router.get("/missing/{namespace}", response_model=list[MissingKeyReport])
def get_missing_translations(
    session: SessionDep,
    settings: SettingsDep,
    namespace: Annotated[str, Path(description="Namespace")],
    locales: Annotated[str | None, Query(description="Comma-separated locales")] = None,
) -> Any:
    """List published keys lacking some of the requested locales."""
    return find_missing(
        session=session,
        namespace=namespace,
        required_locales=_split(locales, settings.DEFAULT_MISSING_LOCALES),
    )


@router.get("/{namespace}", response_model=dict[str, dict[str, str]])
@limiter.limit(BUNDLE_RATE_LIMIT)
def get_namespace_bundle(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    settings: SettingsDep,
    namespace: Annotated[str, Path(description="Namespace")],
    locales: Annotated[str | None, Query(description="Comma-separated locales")] = None,
    entry_status: Annotated[
        str | None, Query(alias="status", description="Entry status")
    ] = None,
) -> Any:
    """Get the bundle of one namespace, keyed locale -> key."""
    return build_namespace_bundle(
        session=session,
        namespace=namespace,
        locales=_split(locales, settings.DEFAULT_BUNDLE_LOCALES),
        status=entry_status or settings.DEFAULT_BUNDLE_STATUS,
    )


@router.get("/{namespace}/{key}", response_model=dict[str, EntryLocaleView])
def get_translation_entry(
    session: SessionDep,
    settings: SettingsDep,
    namespace: Annotated[str, Path(description="Namespace")],
    key: Annotated[str, Path(description="Translation key")],
    locales: Annotated[str | None, Query(description="Comma-separated locales")] = None,
) -> Any:
    """Get the active values of a key, one per requested locale."""
    return get_entry(
        session=session,
        namespace=namespace,
        key=key,
        locales=_split(locales, settings.DEFAULT_BUNDLE_LOCALES),
    )


@router.put("/{namespace}/{key}/{locale}", response_model=TranslationEntryPublic)
@limiter.limit(WRITE_RATE_LIMIT)
def update_translation_entry(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    namespace: Annotated[str, Path(description="Namespace")],
    key: Annotated[str, Path(description="Translation key")],
    locale: Annotated[str, Path(description="Locale")],
    entry_in: TranslationEntryUpdate,
) -> Any:
    """Update one entry in place."""
    entry = update_entry(
        session=session,
        namespace=namespace,
        key=key,
        locale=locale,
        entry_in=entry_in,
    )
    return TranslationEntryPublic.model_validate(entry)


@router.post(
    "/{namespace}/{key}/{locale}/review", response_model=TranslationEntryPublic
)
@limiter.limit(WRITE_RATE_LIMIT)
def review_translation_entry(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    namespace: Annotated[str, Path(description="Namespace")],
    key: Annotated[str, Path(description="Translation key")],
    locale: Annotated[str, Path(description="Locale")],
    review_in: TranslationReview | None = None,
) -> Any:
    review_in = review_in or TranslationReview()
    entry = review_entry(
        session=session,
        namespace=namespace,
        key=key,
        locale=locale,
        reviewed_by=review_in.reviewed_by,
    )
    return TranslationEntryPublic.model_validate(entry)


@router.post(
    "/{namespace}/{key}/{locale}/archive", response_model=TranslationEntryPublic
)
@limiter.limit(WRITE_RATE_LIMIT)
def archive_translation_entry(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    namespace: Annotated[str, Path(description="Namespace")],
    key: Annotated[str, Path(description="Translation key")],
    locale: Annotated[str, Path(description="Locale")],
) -> Any:
    entry = archive_entry(session=session, namespace=namespace, key=key, locale=locale)
    return TranslationEntryPublic.model_validate(entry)
