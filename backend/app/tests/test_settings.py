"""
Tests for user settings and their evolving schema.
"""
from sqlalchemy import text

from app.db.base import Base
from app.models import User


def test_defaults_when_nothing_saved(client, auth_headers):
    response = client.get("/api/settings", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "currency": "DZD",
        "language": "en",
        "custom_categories": [],
        "accounts": [],
        "analytics_preferences": {},
    }


def test_save_replaces_everything(client, auth_headers):
    client.post("/api/settings", headers=auth_headers, json={
        "currency": "EUR",
        "language": "fr",
        "accounts": [{"id": "a1", "name": "Wallet", "type": "cash"}],
    })
    response = client.post("/api/settings", headers=auth_headers, json={"currency": "USD"})
    assert response.status_code == 200
    assert response.json()["currency"] == "USD"
    assert response.json()["language"] == "en"
    assert response.json()["accounts"] == []


def test_update_changes_only_supplied_fields(client, auth_headers):
    client.post("/api/settings", headers=auth_headers, json={
        "currency": "EUR",
        "custom_categories": [{"id": "c1", "name": "Pets", "icon": "paw", "type": "expense"}],
    })
    response = client.put("/api/settings", headers=auth_headers, json={"language": "ar"})
    assert response.status_code == 200

    settings = client.get("/api/settings", headers=auth_headers).json()
    assert settings["currency"] == "EUR"
    assert settings["language"] == "ar"
    assert settings["custom_categories"] == [{"id": "c1", "name": "Pets", "icon": "paw", "type": "expense"}]


def test_update_without_row_creates_one(client, auth_headers):
    response = client.put("/api/settings", headers=auth_headers, json={"analytics_preferences": {"chart": "pie"}})
    assert response.status_code == 200
    assert response.json()["analytics_preferences"] == {"chart": "pie"}
    assert response.json()["currency"] == "DZD"


def test_save_on_legacy_settings_table(engine, bare_client, register):
    """A settings table missing the newer columns is migrated by the write itself."""
    Base.metadata.create_all(engine, tables=[User.__table__])
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE user_settings ("
            "id VARCHAR(36) PRIMARY KEY, user_id VARCHAR(36) NOT NULL UNIQUE, "
            "created_at DATETIME, updated_at DATETIME)"
        ))
    headers, _ = register(bare_client)

    response = bare_client.post("/api/settings", headers=headers, json={"currency": "EUR"})
    assert response.status_code == 200

    settings = bare_client.get("/api/settings", headers=headers).json()
    assert settings["currency"] == "EUR"
    assert settings["language"] == "en"


def test_settings_validation(client, auth_headers):
    response = client.post("/api/settings", headers=auth_headers, json={"accounts": [{"name": "No id"}]})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"
