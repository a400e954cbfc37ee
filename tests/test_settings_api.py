from types import SimpleNamespace

import pytest

from worktracker.core.errors import ConfigurationError
from worktracker.domains.settings.repository import SettingsRepository

BASE = "/api/settings"


def test_missing_setting_returns_404(client):
    response = client.get(f"{BASE}/defaultHourlyRate")

    assert response.status_code == 404
    assert response.json() == {"message": "Setting not found"}


def test_put_creates_then_overwrites(client):
    first = client.put(f"{BASE}/defaultHourlyRate", json={"value": "3500"})
    second = client.put(f"{BASE}/defaultHourlyRate", json={"value": "4000"})

    assert first.status_code == 200
    assert first.json() == {"key": "defaultHourlyRate", "value": "3500"}
    assert second.json() == {"key": "defaultHourlyRate", "value": "4000"}

    response = client.get(f"{BASE}/defaultHourlyRate")
    assert response.status_code == 200
    assert response.json() == {"key": "defaultHourlyRate", "value": "4000"}


def test_put_requires_string_value(client):
    response = client.put(f"{BASE}/defaultHourlyRate", json={})

    assert response.status_code == 400
    assert response.json()["field"] == "value"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_upsert_on_unsupported_dialect_is_a_configuration_error():
    db = SimpleNamespace(get_bind=lambda: SimpleNamespace(dialect=SimpleNamespace(name="mysql")))

    with pytest.raises(ConfigurationError, match="mysql"):
        SettingsRepository(db).set("defaultHourlyRate", "3500")
