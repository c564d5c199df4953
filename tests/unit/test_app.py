import threading
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from investment_tracker import app as app_module
from investment_tracker.config import Settings
from investment_tracker.models import Config, Investment
from investment_tracker.quotes import StaticQuoteProvider
from investment_tracker.storage import load_config, write_config


@pytest.fixture()
def client(config_path, monkeypatch):
    monkeypatch.setattr(app_module, "settings", Settings(config_path=config_path))
    monkeypatch.setattr(app_module, "schedule", {"hour": 2, "minute": 0, "timezone": "UTC"})
    # Startup hooks only run inside a ``with`` block, so the scheduler stays idle.
    return TestClient(app_module.app)


def test_dashboard_renders_report(client, config_path, sample_config):
    write_config(config_path, sample_config)

    response = client.get("/")

    assert response.status_code == 200
    assert "===VTI 1000.00 03-Jan-23 ===" in response.text
    assert "14-Mar-24 6.13 %" in response.text
    assert "02:00 UTC" in response.text


def test_dashboard_with_malformed_state(client, config_path):
    config_path.write_text("{")

    assert client.get("/").status_code == 500


def test_manual_run_appends_history(client, config_path, fixed_now, monkeypatch):
    bought = fixed_now - timedelta(days=400)
    write_config(config_path, Config(investments=[Investment("VTI", bought, 100.0, 1.0)]))
    monkeypatch.setattr(app_module, "create_quote_provider", lambda name: StaticQuoteProvider({"VTI": 120.0}))

    response = client.post("/run", follow_redirects=False)

    assert response.status_code == 303
    assert len(load_config(config_path).history["VTI"]) == 1


def test_manual_run_failure_returns_bad_gateway(client, config_path, fixed_now, monkeypatch):
    write_config(config_path, Config(investments=[Investment("VTI", fixed_now, 100.0, 1.0)]))
    before = config_path.read_bytes()
    monkeypatch.setattr(app_module, "create_quote_provider", lambda name: StaticQuoteProvider({}))

    response = client.post("/run", follow_redirects=False)

    assert response.status_code == 502
    assert "VTI" in response.text
    assert config_path.read_bytes() == before


def test_schedule_update(client):
    response = client.post("/schedule", data={"time": "07:15"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/schedule?updated=1"
    assert app_module.schedule["hour"] == 7
    assert "07:15" in client.get("/schedule?updated=1").text


def test_invalid_schedule_is_rejected(client):
    response = client.post("/schedule", data={"time": "noon"})

    assert response.status_code == 400
    assert "HH:MM" in response.text
    assert app_module.schedule["hour"] == 2


class _OverlappingProvider(StaticQuoteProvider):
    """Starts a second run from inside the first one's price fetch."""

    def __init__(self, prices):
        super().__init__(prices)
        self.second = None
        self.blocked = None

    def get_price(self, symbol):
        if self.second is None:
            self.second = threading.Thread(target=app_module.run_analysis)
            self.second.start()
            self.second.join(timeout=0.2)
            self.blocked = self.second.is_alive()
        return super().get_price(symbol)


def test_overlapping_runs_are_serialized(config_path, fixed_now, monkeypatch):
    bought = fixed_now - timedelta(days=400)
    write_config(config_path, Config(investments=[Investment("VTI", bought, 100.0, 1.0)]))
    monkeypatch.setattr(app_module, "settings", Settings(config_path=config_path))
    provider = _OverlappingProvider({"VTI": 120.0})
    monkeypatch.setattr(app_module, "create_quote_provider", lambda name: provider)

    app_module.run_analysis()
    provider.second.join(timeout=5)

    assert provider.blocked is True
    assert not provider.second.is_alive()
    assert len(load_config(config_path).history["VTI"]) == 2
    assert provider.requested == ["VTI", "VTI"]
