"""Tests for translation entry persistence against an in-memory store."""

import time

import pytest
from sqlmodel import Session

from localization.core.exceptions import NotFoundError, ValidationError
from localization.publication import publish
from localization.translations import (
    MissingKeyReport,
    Namespace,
    TranslationEntryUpdate,
    TranslationKeyCreate,
    TranslationStatus,
    archive_entry,
    find_missing,
    get_entry,
    get_entry_record,
    resolve_bundle,
    review_entry,
    stats_by_status,
    update_entry,
    upsert_entry,
    upsert_key,
)


def test_upsert_then_get_returns_draft(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )

    result = get_entry(session=session, namespace="ui", key="greeting", locales=["en"])

    assert result["en"].value == "Hello"
    assert result["en"].status == TranslationStatus.DRAFT


def test_upsert_replaces_existing_entry(session: Session):
    first = upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    second = upsert_entry(
        session=session,
        namespace="ui",
        key="greeting",
        locale="en",
        value="Hi there",
        created_by="editor",
    )

    assert second.id == first.id
    assert second.value == "Hi there"
    assert second.created_by == "editor"


def test_upsert_resets_published_entry_to_draft(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    publish(session=session, namespace="ui", keys=["greeting"])
    published = get_entry_record(
        session=session, namespace="ui", key="greeting", locale="en"
    )
    published_at = published.published_at

    entry = upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hey"
    )

    assert entry.status == TranslationStatus.DRAFT
    assert entry.published_at == published_at


def test_upsert_reactivates_archived_entry(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    archive_entry(session=session, namespace="ui", key="greeting", locale="en")

    entry = upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )

    assert entry.is_active is True
    assert entry.status == TranslationStatus.DRAFT


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"namespace": "sidebar"}, "namespace"),
        ({"key": "k" * 201}, "key"),
        ({"locale": "x" * 11}, "locale"),
        ({"value": ""}, "value"),
        ({"value": "v" * 2001}, "value"),
        ({"context": "c" * 501}, "context"),
    ],
)
def test_upsert_rejects_invalid_input(session: Session, overrides, field):
    kwargs = {"namespace": "ui", "key": "greeting", "locale": "en", "value": "Hello"}
    kwargs.update(overrides)

    with pytest.raises(ValidationError) as exc_info:
        upsert_entry(session=session, **kwargs)

    assert exc_info.value.details["field"] == field


def test_upsert_key_reports_each_locale(session: Session):
    key_in = TranslationKeyCreate(
        namespace="ui",
        key="farewell",
        translations={"en": "Bye", "fr": "Au revoir", "toolonglocale": "x"},
    )

    results = upsert_key(session=session, key_in=key_in)

    assert [r.locale for r in results] == ["en", "fr", "toolonglocale"]
    assert [r.ok for r in results] == [True, True, False]
    assert results[0].entry.value == "Bye"
    assert results[2].error["error_code"] == "VALIDATION_ERROR"
    # Earlier locales stay written
    assert set(
        get_entry(session=session, namespace="ui", key="farewell", locales=["en", "fr"])
    ) == {"en", "fr"}


def test_get_entry_orders_by_locale_and_skips_missing(session: Session):
    for locale, value in [("fr", "Bonjour"), ("ar", "مرحبا"), ("en", "Hello")]:
        upsert_entry(
            session=session, namespace="ui", key="greeting", locale=locale, value=value
        )

    result = get_entry(
        session=session, namespace="ui", key="greeting", locales=["fr", "en", "es", "ar"]
    )

    assert list(result) == ["ar", "en", "fr"]


def test_update_entry_keeps_status_unless_given(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    publish(session=session, namespace="ui", keys=["greeting"])

    entry = update_entry(
        session=session,
        namespace="ui",
        key="greeting",
        locale="en",
        entry_in=TranslationEntryUpdate(context="Home page", updated_by="editor"),
    )

    assert entry.status == TranslationStatus.PUBLISHED
    assert entry.context == "Home page"
    assert entry.value == "Hello"
    assert entry.created_by == "editor"


def test_update_entry_rejects_forbidden_status(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    publish(session=session, namespace="ui", keys=["greeting"])

    with pytest.raises(ValidationError):
        update_entry(
            session=session,
            namespace="ui",
            key="greeting",
            locale="en",
            entry_in=TranslationEntryUpdate(status=TranslationStatus.DRAFT),
        )


def test_rejected_update_is_not_saved_by_a_later_write(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Original"
    )
    publish(session=session, namespace="ui", keys=["greeting"], published_by="bot")

    with pytest.raises(ValidationError):
        update_entry(
            session=session,
            namespace="ui",
            key="greeting",
            locale="en",
            entry_in=TranslationEntryUpdate(
                value="Rejected", status=TranslationStatus.DRAFT, updated_by="editor"
            ),
        )
    upsert_entry(
        session=session, namespace="ui", key="other", locale="en", value="Other"
    )
    session.expire_all()

    entry = get_entry_record(
        session=session, namespace="ui", key="greeting", locale="en"
    )
    assert entry.value == "Original"
    assert entry.status == TranslationStatus.PUBLISHED
    assert entry.created_by == "bot"


def _stored_updated_at(session: Session, key: str = "greeting"):
    session.expire_all()
    return get_entry_record(
        session=session, namespace="ui", key=key, locale="en"
    ).updated_at


def test_upsert_of_existing_entry_moves_updated_at(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    before = _stored_updated_at(session)
    time.sleep(0.01)

    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hi"
    )

    assert _stored_updated_at(session) > before


def test_update_entry_moves_updated_at(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )
    before = _stored_updated_at(session)
    time.sleep(0.01)

    update_entry(
        session=session,
        namespace="ui",
        key="greeting",
        locale="en",
        entry_in=TranslationEntryUpdate(value="Hi"),
    )

    assert _stored_updated_at(session) > before


def test_update_entry_missing_raises_not_found(session: Session):
    with pytest.raises(NotFoundError) as exc_info:
        update_entry(
            session=session,
            namespace="ui",
            key="nope",
            locale="en",
            entry_in=TranslationEntryUpdate(value="x"),
        )

    assert exc_info.value.error_code == "TRANSLATION_NOT_FOUND"


def test_review_entry_stamps_reviewer(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )

    entry = review_entry(
        session=session,
        namespace="ui",
        key="greeting",
        locale="en",
        reviewed_by="reviewer",
    )

    assert entry.status == TranslationStatus.REVIEWED
    assert entry.reviewed_by == "reviewer"
    assert entry.reviewed_at is not None


def test_archived_entry_is_hidden(session: Session, published_entry):
    published_entry("ui", "greeting", "en", "Hello")

    entry = archive_entry(session=session, namespace="ui", key="greeting", locale="en")

    assert entry.status == TranslationStatus.ARCHIVED
    assert entry.is_active is False
    assert get_entry(session=session, namespace="ui", key="greeting", locales=["en"]) == {}
    assert resolve_bundle(session=session, namespaces=["ui"], locales=["en"]) == []


def test_resolve_bundle_filters_by_status(session: Session, published_entry):
    published_entry("ui", "greeting", "en", "Hello")
    upsert_entry(
        session=session, namespace="ui", key="draft_only", locale="en", value="WIP"
    )

    published = resolve_bundle(session=session, namespaces=["ui"], locales=["en"])
    drafts = resolve_bundle(
        session=session, namespaces=["ui"], locales=["en"], status="draft"
    )

    assert [(r.namespace, r.key, r.value) for r in published] == [
        (Namespace.UI, "greeting", "Hello")
    ]
    assert [r.key for r in drafts] == ["draft_only"]


def test_resolve_bundle_rejects_unknown_status(session: Session):
    with pytest.raises(ValidationError):
        resolve_bundle(
            session=session, namespaces=["ui"], locales=["en"], status="live"
        )


def test_find_missing_reports_absent_locales(session: Session, published_entry):
    published_entry("ui", "greeting", "en", "Hello")
    published_entry("ui", "greeting", "ar", "مرحبا")
    published_entry("ui", "farewell", "en", "Bye")
    published_entry("ui", "farewell", "ar", "وداعا")
    published_entry("ui", "farewell", "fr", "Au revoir")

    report = find_missing(
        session=session, namespace="ui", required_locales=["en", "ar", "fr"]
    )

    assert report == [
        MissingKeyReport(key="greeting", locales=["ar", "en"], missing=["fr"])
    ]


def test_find_missing_ignores_unpublished_keys(session: Session):
    upsert_entry(
        session=session, namespace="ui", key="greeting", locale="en", value="Hello"
    )

    assert find_missing(session=session, namespace="ui", required_locales=["fr"]) == []


def test_stats_by_status_counts_active_entries(session: Session, published_entry):
    published_entry("ui", "greeting", "en", "Hello")
    upsert_entry(session=session, namespace="ui", key="a", locale="en", value="A")
    upsert_entry(session=session, namespace="ui", key="b", locale="en", value="B")
    upsert_entry(session=session, namespace="ui", key="c", locale="en", value="C")
    archive_entry(session=session, namespace="ui", key="c", locale="en")

    stats = stats_by_status(session=session, namespace="ui", locale="en")

    assert {s.status: s.count for s in stats} == {
        TranslationStatus.DRAFT: 2,
        TranslationStatus.PUBLISHED: 1,
    }
