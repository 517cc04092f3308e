"""
Tests for the Flask HTTP surface.
"""
import pytest

import app as service


@pytest.fixture
def client():
    service.app.config["TESTING"] = True
    with service.app.test_client() as client:
        yield client


class TestResolveEndpoint:
    """Tests for POST /live-count/resolve."""

    def test_resolves_alias_command(self, client):
        """Test the full response contract."""
        response = client.post("/live-count/resolve", json={
            "transcript": "add 5 shrimp",
            "alternatives": [],
            "canonicalItems": ["SHRIMP SKEWER"],
            "aliasTable": {"SHRIMP SKEWER": ["shrimp"]},
            "allowAliasAutoSave": True,
        })

        assert response.status_code == 200
        assert response.get_json() == {
            "canonicalItem": "SHRIMP SKEWER",
            "operation": "ADD",
            "value": 5,
            "decisionState": "AUTO_COMMIT",
            "topChoices": ["SHRIMP SKEWER", "UNMAPPED", "UNMAPPED"],
            "aliasToSave": None,
        }

    def test_ambiguity_is_not_an_error(self, client):
        """Test that NEEDS_CONFIRMATION is a 200 response."""
        response = client.post("/live-count/resolve", json={
            "transcript": "rebs at twelve",
            "canonicalItems": ["RIBS", "CRABS"],
        })

        assert response.status_code == 200
        assert response.get_json()["decisionState"] == "NEEDS_CONFIRMATION"

    def test_alias_recommendation(self, client):
        """Test that allowAliasAutoSave returns the normalized transcript."""
        response = client.post("/live-count/resolve", json={
            "transcript": "add 4 jumbo shrimp",
            "canonicalItems": ["SHRIMP SKEWER"],
            "aliasTable": {"SHRIMP SKEWER": ["shrimp"]},
            "allowAliasAutoSave": True,
        })

        assert response.get_json()["aliasToSave"] == "add 4 jumbo shrimp"

    def test_silence_is_unmapped(self, client):
        """Test that an empty transcript is a valid request."""
        response = client.post("/live-count/resolve", json={
            "transcript": "",
            "canonicalItems": ["RIBS"],
        })

        assert response.status_code == 200
        assert response.get_json()["decisionState"] == "UNMAPPED"

    @pytest.mark.parametrize("body", [
        {"transcript": "add 5 ribs"},
        {"transcript": "add 5 ribs", "canonicalItems": []},
        {"transcript": "add 5 ribs", "canonicalItems": "RIBS"},
        {"transcript": "add 5 ribs", "canonicalItems": ["RIBS"], "alternatives": ["a", "b", "c", "d"]},
        {"transcript": 12, "canonicalItems": ["RIBS"]},
        {"transcript": "x" * 501, "canonicalItems": ["RIBS"]},
        {"transcript": "add 5 ribs", "canonicalItems": ["  "]},
    ])
    def test_invalid_requests_rejected(self, client, body):
        """Test that precondition violations return 400."""
        response = client.post("/live-count/resolve", json=body)

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_json_body_rejected(self, client):
        """Test that a non-JSON body returns 400."""
        response = client.post("/live-count/resolve", data="add 5 ribs", content_type="text/plain")

        assert response.status_code == 400


class TestAlignEndpoint:
    """Tests for POST /live-count/align."""

    def test_align(self, client):
        """Test sheet alignment over HTTP."""
        response = client.post("/live-count/align", json={
            "scannedItems": ["chicken breast", "pork chip"],
            "masterList": ["CHICKEN BREAST", "PORK CHOP"],
        })

        data = response.get_json()
        assert response.status_code == 200
        assert data["matched"][0]["masterName"] == "CHICKEN BREAST"
        assert data["unmatched"][0]["suggestedMatch"] == "PORK CHOP"

    def test_align_requires_master_list(self, client):
        """Test that an empty master list returns 400."""
        response = client.post("/live-count/align", json={"scannedItems": ["ribs"], "masterList": []})

        assert response.status_code == 400


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.get_json() == {"status": "ok"}
