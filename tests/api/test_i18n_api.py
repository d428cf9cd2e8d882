"""Tests for the translation bundle routes."""

from fastapi.testclient import TestClient

API = "/v1/i18n"


def create_key(client: TestClient, key: str, translations: dict[str, str], **extra):
    response = client.post(
        f"{API}/keys",
        json={"namespace": "ui", "key": key, "translations": translations, **extra},
    )
    assert response.status_code == 201
    return response.json()


def test_create_key_returns_per_locale_results(client: TestClient):
    results = create_key(client, "greeting", {"en": "Hello", "fr": "Bonjour"})

    assert [r["locale"] for r in results] == ["en", "fr"]
    assert all(r["ok"] for r in results)
    assert results[0]["entry"]["status"] == "draft"


def test_create_key_with_unknown_namespace_fails_per_locale(client: TestClient):
    response = client.post(
        f"{API}/keys",
        json={"namespace": "sidebar", "key": "greeting", "translations": {"en": "Hi"}},
    )

    assert response.status_code == 201
    [result] = response.json()
    assert result["ok"] is False
    assert result["error"]["error_code"] == "VALIDATION_ERROR"


def test_create_key_requires_translations(client: TestClient):
    response = client.post(
        f"{API}/keys", json={"namespace": "ui", "key": "greeting", "translations": {}}
    )

    assert response.status_code == 422


def test_publish_then_fetch_bundles(client: TestClient):
    create_key(client, "greeting", {"en": "Hello", "fr": "Bonjour"})
    create_key(client, "farewell", {"en": "Bye"})

    # Nothing is visible before publication
    assert client.get(API, params={"namespaces": "ui", "locales": "en"}).json() == {
        "ui": {"en": {}}
    }

    response = client.post(
        f"{API}/publish", json={"namespace": "ui", "keys": ["greeting", "farewell"]}
    )
    assert response.status_code == 200
    assert response.json() == {"modified_count": 3}

    again = client.post(
        f"{API}/publish", json={"namespace": "ui", "keys": ["greeting", "farewell"]}
    )
    assert again.json() == {"modified_count": 0}

    bundles = client.get(API, params={"namespaces": "ui,emails", "locales": "en,fr"})
    assert bundles.json() == {
        "ui": {
            "en": {"farewell": "Bye", "greeting": "Hello"},
            "fr": {"greeting": "Bonjour"},
        },
        "emails": {"en": {}, "fr": {}},
    }

    single = client.get(f"{API}/ui", params={"locales": "fr"})
    assert single.json() == {"fr": {"greeting": "Bonjour"}}


def test_bundle_defaults(client: TestClient):
    response = client.get(API)

    assert response.status_code == 200
    assert response.json() == {"ui": {"en": {}}, "emails": {"en": {}}}


def test_bundle_with_unknown_namespace_is_rejected(client: TestClient):
    response = client.get(f"{API}/sidebar")

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert response.json()["details"] == {"field": "namespace"}


def test_get_entry(client: TestClient):
    create_key(client, "greeting", {"en": "Hello", "fr": "Bonjour"}, context="Home")

    response = client.get(f"{API}/ui/greeting", params={"locales": "fr,en,de"})

    assert response.status_code == 200
    body = response.json()
    assert list(body) == ["en", "fr"]
    assert body["fr"] == {
        "value": "Bonjour",
        "context": "Home",
        "status": "draft",
        "variables": [],
    }


def test_update_review_and_archive_entry(client: TestClient):
    create_key(client, "greeting", {"en": "Hello"})

    updated = client.put(
        f"{API}/ui/greeting/en", json={"value": "Hello!", "updated_by": "editor"}
    )
    assert updated.status_code == 200
    assert updated.json()["value"] == "Hello!"
    assert updated.json()["status"] == "draft"

    reviewed = client.post(
        f"{API}/ui/greeting/en/review", json={"reviewed_by": "reviewer"}
    )
    assert reviewed.status_code == 200
    assert reviewed.json()["status"] == "reviewed"
    assert reviewed.json()["reviewed_by"] == "reviewer"

    archived = client.post(f"{API}/ui/greeting/en/archive")
    assert archived.status_code == 200
    assert archived.json()["status"] == "archived"
    assert archived.json()["is_active"] is False

    assert client.get(f"{API}/ui/greeting").json() == {}


def test_update_missing_entry_is_not_found(client: TestClient):
    response = client.put(f"{API}/ui/missing/en", json={"value": "x"})

    assert response.status_code == 404
    assert response.json()["error_code"] == "TRANSLATION_NOT_FOUND"


def test_forbidden_status_change_is_rejected(client: TestClient):
    create_key(client, "greeting", {"en": "Hello"})
    client.post(f"{API}/publish", json={"namespace": "ui", "keys": ["greeting"]})

    response = client.put(f"{API}/ui/greeting/en", json={"status": "reviewed"})

    assert response.status_code == 422
    assert response.json()["details"] == {"field": "status"}


def test_stats_and_missing(client: TestClient):
    create_key(client, "greeting", {"en": "Hello", "ar": "مرحبا"})
    create_key(client, "draft_only", {"en": "WIP"})
    client.post(f"{API}/publish", json={"namespace": "ui", "keys": ["greeting"]})

    stats = client.get(f"{API}/stats/ui", params={"locale": "en"})
    assert stats.status_code == 200
    assert sorted((s["status"], s["count"]) for s in stats.json()) == [
        ("draft", 1),
        ("published", 1),
    ]

    missing = client.get(f"{API}/missing/ui", params={"locales": "en,ar,fr"})
    assert missing.json() == [
        {"key": "greeting", "locales": ["ar", "en"], "missing": ["fr"]}
    ]

    default_missing = client.get(f"{API}/missing/ui")
    assert default_missing.json()[0]["missing"] == ["es", "fr"]


def test_request_id_is_echoed(client: TestClient):
    response = client.get(API, headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
