"""
Tests for demo reset endpoint. Demo reset is only available when DEMO_MODE=true.
"""
import pytest
from fastapi.testclient import TestClient

import main
from main import app
from seed import DEMO_EPISODES, seed_data
from settings import Settings


client = TestClient(app)


@pytest.fixture(autouse=True)
def restore_store():
    """Put back whatever store was live before the test."""
    original = main.ledger
    yield
    main.ledger = original


class TestDemoResetEndpoint:
    """Test POST /demo/reset is gated by DEMO_MODE and behaves correctly."""

    def test_demo_reset_endpoint_disabled_when_demo_mode_false(self, monkeypatch):
        """When DEMO_MODE is false, POST /demo/reset returns 404."""
        monkeypatch.setenv("DEMO_MODE", "false")

        resp = client.post("/demo/reset")
        assert resp.status_code == 404
        assert "detail" in resp.json()

    def test_demo_reset_endpoint_disabled_when_demo_mode_unset(self, monkeypatch):
        """When DEMO_MODE is unset, POST /demo/reset returns 404."""
        monkeypatch.delenv("DEMO_MODE", raising=False)

        resp = client.post("/demo/reset")
        assert resp.status_code == 404

    def test_demo_status(self, monkeypatch):
        monkeypatch.setenv("DEMO_MODE", "TRUE")
        assert client.get("/demo/status").json() == {"demoMode": True}
        monkeypatch.delenv("DEMO_MODE")
        assert client.get("/demo/status").json() == {"demoMode": False}

    def test_demo_reset_replaces_store_with_seed(self, monkeypatch):
        """When DEMO_MODE=true, the admin's reset swaps in a fresh store holding only the demo episodes."""
        monkeypatch.setenv("DEMO_MODE", "true")
        main.ledger = seed_data(main.settings)
        admin = {"X-Participant-Id": main.settings.admin_id}

        headers = {"X-Participant-Id": "someone-else"}
        _, fields = DEMO_EPISODES[0]
        assert client.post("/episodes", json=fields, headers=headers).status_code == 201
        assert client.get("/status").json()["totalEpisodes"] == len(DEMO_EPISODES) + 1

        reset_resp = client.post("/demo/reset", headers=admin)
        assert reset_resp.status_code == 200
        data = reset_resp.json()
        assert data["totalEpisodes"] == len(DEMO_EPISODES)
        assert data["totalParticipants"] == 2
        assert data["acceptingSubmissions"] is True
        assert data["admin"] == main.settings.admin_id
        assert client.get("/participants/someone-else").json()["registered"] is False

    def test_demo_reset_refused_for_non_admin(self, monkeypatch):
        """A participant cannot wipe the store: 403 and every episode is still there."""
        monkeypatch.setenv("DEMO_MODE", "true")
        main.ledger = seed_data(main.settings)
        _, fields = DEMO_EPISODES[0]
        for _ in range(3):
            client.post("/episodes", json=fields, headers={"X-Participant-Id": "random-patient"})
        before = client.get("/status").json()["totalEpisodes"]
        assert before == len(DEMO_EPISODES) + 3

        resp = client.post("/demo/reset", headers={"X-Participant-Id": "random-patient"})
        assert resp.status_code == 403
        assert resp.json()["detail"]["code"] == "unauthorized"
        assert client.get("/status").json()["totalEpisodes"] == before

    def test_demo_reset_requires_identity(self, monkeypatch):
        """Anonymous reset is rejected with 401 and changes nothing."""
        monkeypatch.setenv("DEMO_MODE", "true")
        main.ledger = seed_data(main.settings)
        original = main.ledger

        resp = client.post("/demo/reset")
        assert resp.status_code == 401
        assert main.ledger is original


class TestSeedData:
    def test_seed_matches_demo_episodes(self):
        ledger = seed_data(Settings(admin_id="root", accepting=True, frontend_url="", log_level="INFO"))
        assert ledger.total_episodes() == len(DEMO_EPISODES)
        assert ledger.get_episode(1).warningTimeMinutes == 45

    def test_seed_honours_closed_setting(self):
        ledger = seed_data(Settings(admin_id="root", accepting=False, frontend_url="", log_level="INFO"))
        assert ledger.total_episodes() == len(DEMO_EPISODES)
        assert ledger.access.accepting_submissions is False
