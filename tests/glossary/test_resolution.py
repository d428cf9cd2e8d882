"""Tests for the pure glossary translation-list functions."""

from localization.glossary import (
    GlossaryTranslation,
    add_or_replace,
    locale_context,
    normalize_translations,
    resolve_translation,
)


def tr(locale: str, value: str, *, preferred: bool = False, context: str = ""):
    return GlossaryTranslation(
        locale=locale, value=value, is_preferred=preferred, context=context
    )


class TestResolveTranslation:
    def test_exact_locale_beats_preferred(self):
        translations = [tr("fr", "Boutique", preferred=True), tr("ar", "متجر")]

        assert resolve_translation("Store", translations, "ar") == "متجر"

    def test_preferred_beats_first(self):
        translations = [tr("en", "Shop"), tr("fr", "Boutique", preferred=True)]

        assert resolve_translation("Store", translations, "es") == "Boutique"

    def test_first_when_nothing_preferred(self):
        translations = [tr("en", "Shop"), tr("fr", "Boutique")]

        assert resolve_translation("Store", translations, "es") == "Shop"

    def test_term_when_no_translations(self):
        assert resolve_translation("Store", [], "es") == "Store"


def test_add_or_replace_moves_locale_to_end():
    translations = [tr("en", "Shop"), tr("fr", "Boutique")]

    result = add_or_replace(translations, tr("en", "Store"))

    assert [(t.locale, t.value) for t in result] == [("fr", "Boutique"), ("en", "Store")]
    # Input is left untouched
    assert translations[0].value == "Shop"


def test_setting_preferred_clears_others():
    translations = add_or_replace([], tr("en", "Shop", preferred=True))

    result = add_or_replace(translations, tr("fr", "Boutique", preferred=True))

    assert [t.locale for t in result if t.is_preferred] == ["fr"]


def test_non_preferred_add_keeps_existing_preferred():
    translations = [tr("en", "Shop", preferred=True)]

    result = add_or_replace(translations, tr("fr", "Boutique"))

    assert [t.locale for t in result if t.is_preferred] == ["en"]


def test_normalize_deduplicates_locales_and_preferred():
    result = normalize_translations(
        [
            tr("en", "Shop", preferred=True),
            tr("fr", "Boutique", preferred=True),
            tr("en", "Store"),
        ]
    )

    assert [(t.locale, t.value, t.is_preferred) for t in result] == [
        ("fr", "Boutique", True),
        ("en", "Store", False),
    ]


def test_locale_context_only_for_exact_locale():
    translations = [tr("en", "Shop", context="Retail", preferred=True)]

    assert locale_context(translations, "en") == "Retail"
    assert locale_context(translations, "fr") == ""
