"""
Tests for the FastAPI backend.
"""

import os
import tempfile

os.environ.setdefault("ICOW_LOG_DIR", tempfile.mkdtemp())

from fastapi.testclient import TestClient  # noqa: E402

from backend.api import app  # noqa: E402


client = TestClient(app)


class TestEndpoints:
    """Test suite for the HTTP API."""

    def test_health(self):
        """Test: Health endpoint responds."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_scenarios(self):
        """Test: Scenarios are listed with their levers."""
        response = client.get("/scenarios")
        assert response.status_code == 200
        names = [s["name"] for s in response.json()]
        assert "full_protection" in names
        full = next(s for s in response.json() if s["name"] == "full_protection")
        assert full["levers"] == {"W": 2, "B": 1, "R": 3, "P": 0.8, "D": 5}

    def test_evaluate(self):
        """Test: Evaluate returns the characteristics record."""
        response = client.post("/evaluate", json={"W": 2, "B": 1, "R": 3, "P": 0.8, "D": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["characteristics"]["case_number"] == 2
        assert body["characteristics"]["zone2_value"] == 0.0
        assert body["warnings"] == []

    def test_evaluate_domain_error(self):
        """Test: Out-of-domain levers return 400."""
        response = client.post("/evaluate", json={"W": 17, "B": 0, "R": 0, "P": 0, "D": 0})
        assert response.status_code == 400
        assert "withdrawal_height" in response.json()["detail"]

    def test_evaluate_bad_constants(self):
        """Test: Unknown constants return 400."""
        response = client.post(
            "/evaluate",
            json={"W": 0, "B": 0, "R": 0, "P": 0, "D": 5, "constants": {"CityHeight": 3}},
        )
        assert response.status_code == 400

    def test_evaluate_missing_lever(self):
        """Test: Missing lever fails request validation."""
        response = client.post("/evaluate", json={"W": 0, "B": 0, "R": 0, "P": 0})
        assert response.status_code == 422
        assert "D" in response.json()["detail"]

    def test_batch(self):
        """Test: Batch reports successes and failures."""
        response = client.post("/evaluate/batch", json={"levers": [
            {"W": 0, "B": 0, "R": 0, "P": 0, "D": 5},
            {"W": 17, "B": 0, "R": 0, "P": 0, "D": 0},
        ]})
        assert response.status_code == 200
        body = response.json()
        assert [r["index"] for r in body["results"]] == [0]
        assert body["failures"][0]["index"] == 1

    def test_sweep(self):
        """Test: Sweep returns one row per value."""
        response = client.post("/sweep", json={
            "base": {"W": 0, "B": 0, "R": 0, "P": 0, "D": 0},
            "lever": "D",
            "values": [0, 5, 30],
        })
        assert response.status_code == 200
        rows = response.json()["rows"]
        assert [row.get("case_number") for row in rows] == [9, 4, None]
        assert "error" in rows[2]
