"""Pure functions over a glossary term's translation list.

Nothing here touches the store; the CRUD layer loads and persists terms and
delegates every rule about the list itself to these functions.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from localization.glossary.models import GlossaryTerm, GlossaryTranslation


def translations_of(term: GlossaryTerm) -> list[GlossaryTranslation]:
    """Parse the stored translation list of `term`."""
    return [GlossaryTranslation.model_validate(t) for t in term.translations]


def dump_translations(
    translations: Iterable[GlossaryTranslation],
) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json") for t in translations]


def resolve_translation(
    term: str, translations: Sequence[GlossaryTranslation], locale: str
) -> str:
    """Pick the value to display for `locale`.

    Fallback chain, first hit wins:
    1. the translation for exactly `locale`
    2. the preferred translation
    3. the first stored translation
    4. the term itself
    """
    for translation in translations:
        if translation.locale == locale:
            return translation.value
    for translation in translations:
        if translation.is_preferred:
            return translation.value
    if translations:
        return translations[0].value
    return term


def locale_context(translations: Sequence[GlossaryTranslation], locale: str) -> str:
    """Context of the exact-locale translation, or "" when there is none."""
    for translation in translations:
        if translation.locale == locale:
            return translation.context or ""
    return ""


def add_or_replace(
    translations: Sequence[GlossaryTranslation], new: GlossaryTranslation
) -> list[GlossaryTranslation]:
    """Return a new list with `new` replacing any entry for its locale.

    The old entry is removed and `new` is appended at the end. When `new` is
    preferred, every other entry loses its preferred flag.
    """
    result = [t.model_copy() for t in translations if t.locale != new.locale]
    if new.is_preferred:
        for translation in result:
            translation.is_preferred = False
    result.append(new.model_copy())
    return result


def normalize_translations(
    translations: Iterable[GlossaryTranslation],
) -> list[GlossaryTranslation]:
    """Fold a raw list through add_or_replace.

    The result has one entry per locale (the last one given wins) and at
    most one preferred entry (the last preferred one given wins).
    """
    result: list[GlossaryTranslation] = []
    for translation in translations:
        result = add_or_replace(result, translation)
    return result
