"""Assemble translation bundles from stored entries.

Bundles are structurally complete: every requested namespace and locale is
present in the output, with an empty map when nothing matched, so callers
can iterate the request dimensions without existence checks.
"""

from collections.abc import Sequence

from sqlmodel import Session

from localization.core.logging import get_logger
from localization.translations import (
    BundleRow,
    Namespace,
    TranslationStatus,
    parse_namespace,
    resolve_bundle,
)

logger = get_logger(__name__)

LocaleBundle = dict[str, dict[str, str]]
NamespaceBundles = dict[str, LocaleBundle]


def _unique(values: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(values))


def group_bundles(
    rows: Sequence[BundleRow],
    namespaces: Sequence[str],
    locales: Sequence[str],
) -> NamespaceBundles:
    """Group flat bundle rows into namespace -> locale -> key -> value.

    Rows outside the requested namespaces or locales are ignored.
    """
    result: NamespaceBundles = {
        namespace: {locale: {} for locale in locales} for namespace in namespaces
    }
    for row in rows:
        by_locale = result.get(row.namespace.value)
        if by_locale is None or row.locale not in by_locale:
            continue
        by_locale[row.locale][row.key] = row.value
    return result


def build_bundles(
    *,
    session: Session,
    namespaces: Sequence[str | Namespace],
    locales: Sequence[str],
    status: str | TranslationStatus = TranslationStatus.PUBLISHED,
) -> NamespaceBundles:
    """Resolve bundles for several namespaces at once."""
    requested_namespaces = _unique([parse_namespace(ns).value for ns in namespaces])
    requested_locales = _unique(locales)

    rows = resolve_bundle(
        session=session,
        namespaces=requested_namespaces,
        locales=requested_locales,
        status=status,
    )
    logger.debug(
        "bundles_resolved",
        namespaces=requested_namespaces,
        locales=requested_locales,
        rows=len(rows),
    )
    return group_bundles(rows, requested_namespaces, requested_locales)


def build_namespace_bundle(
    *,
    session: Session,
    namespace: str | Namespace,
    locales: Sequence[str],
    status: str | TranslationStatus = TranslationStatus.PUBLISHED,
) -> LocaleBundle:
    """Resolve one namespace, keyed by locale only."""
    ns = parse_namespace(namespace)
    bundles = build_bundles(
        session=session, namespaces=[ns], locales=locales, status=status
    )
    return bundles[ns.value]
