"""Tests for the HTTP routes."""

import itertools

import pytest
from fastapi.testclient import TestClient

from shamir_service.core.field import PrimeField
from shamir_service.core.sharing_service import SecretSharingService, get_sharing_service
from shamir_service.main import app


@pytest.fixture
def client():
    """Client against a service over GF(2083)."""
    app.dependency_overrides[get_sharing_service] = lambda: SecretSharingService(PrimeField(2083))
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def default_client():
    """Client against the service built from default settings."""
    yield TestClient(app)


class TestInfo:
    """Tests for GET /api/sss/info."""

    def test_info(self, client):
        response = client.get("/api/sss/info")

        assert response.status_code == 200
        data = response.json()
        assert data["algorithm"] == "Shamir's Secret Sharing"
        assert data["prime"] == "2083"
        assert data["usage"] == {
            "split": "POST /api/sss/split",
            "reconstruct": "POST /api/sss/reconstruct",
            "recover_share": "POST /api/sss/recover-share",
        }

    def test_info_reports_configured_modulus(self, default_client):
        response = default_client.get("/api/sss/info")
        assert response.json()["prime"] == str((1 << 127) - 1)


class TestSplit:
    """Tests for POST /api/sss/split."""

    def test_split(self, client):
        response = client.post("/api/sss/split", json={"secret": 42, "k": 2, "n": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Secret split successfully"
        assert data["threshold"] == 2
        assert data["totalShares"] == 3
        assert [s["x"] for s in data["shares"]] == [1, 2, 3]
        for share in data["shares"]:
            assert isinstance(share["y"], str)
            assert 0 <= int(share["y"]) < 2083

    def test_secret_as_decimal_string(self, default_client):
        big = str((1 << 126) + 12345)
        response = default_client.post("/api/sss/split", json={"secret": big, "k": 3, "n": 5})
        assert response.status_code == 200

        shares = response.json()["shares"][2:]
        response = default_client.post("/api/sss/reconstruct", json={"shares": shares})
        assert response.json()["secret"] == big

    @pytest.mark.parametrize("body", [
        {"secret": -1, "k": 2, "n": 3},
        {"secret": 5, "k": 3, "n": 2},
        {"secret": 5, "k": 1, "n": 3},
        {"secret": 2083, "k": 2, "n": 3},
    ])
    def test_invalid_parameters(self, client, body):
        response = client.post("/api/sss/split", json=body)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_parameters"

    def test_missing_fields(self, client):
        response = client.post("/api/sss/split", json={"secret": 5})
        assert response.status_code == 422


class TestReconstruct:
    """Tests for POST /api/sss/reconstruct."""

    def test_round_trip(self, client):
        shares = client.post("/api/sss/split", json={"secret": 42, "k": 2, "n": 3}).json()["shares"]

        for pair in itertools.combinations(shares, 2):
            response = client.post("/api/sss/reconstruct", json={"shares": list(pair), "k": 2})
            assert response.status_code == 200
            assert response.json() == {
                "message": "Secret reconstructed successfully",
                "secret": "42",
            }

    def test_known_shares(self, client):
        body = {"shares": [{"x": 1, "y": "49"}, {"x": 3, "y": 63}]}
        response = client.post("/api/sss/reconstruct", json=body)
        assert response.json()["secret"] == "42"

    @pytest.mark.parametrize("body", [
        {"shares": []},
        {"shares": [{"x": 1, "y": "49"}]},
        {"shares": [{"x": 1, "y": "49"}, {"x": 2, "y": "56"}], "k": 3},
    ])
    def test_insufficient_shares(self, client, body):
        response = client.post("/api/sss/reconstruct", json=body)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "insufficient_shares"

    def test_duplicate_x(self, client):
        body = {"shares": [{"x": 1, "y": "49"}, {"x": 1, "y": "50"}]}
        response = client.post("/api/sss/reconstruct", json=body)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "division_by_zero"

    def test_non_positive_x_is_a_schema_error(self, client):
        body = {"shares": [{"x": 0, "y": "49"}, {"x": 1, "y": "50"}]}
        response = client.post("/api/sss/reconstruct", json=body)
        assert response.status_code == 422

    def test_y_outside_field_rejected(self, client):
        """Share values are not reduced modulo the prime."""
        body = {"shares": [{"x": 1, "y": "2132"}, {"x": 3, "y": 63}]}
        response = client.post("/api/sss/reconstruct", json=body)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_parameters"

    def test_fractional_x_is_a_schema_error(self, client):
        body = {"shares": [{"x": 1.5, "y": "49"}, {"x": 3, "y": "63"}]}
        response = client.post("/api/sss/reconstruct", json=body)
        assert response.status_code == 422


class TestRecoverShare:
    """Tests for POST /api/sss/recover-share."""

    def test_recover_share(self, client):
        shares = client.post("/api/sss/split", json={"secret": 7, "k": 2, "n": 3}).json()["shares"]

        response = client.post(
            "/api/sss/recover-share",
            json={"shares": [shares[0], shares[2]], "x": 2},
        )

        assert response.status_code == 200
        assert response.json()["share"] == shares[1]

    def test_existing_x(self, client):
        body = {"shares": [{"x": 1, "y": "49"}, {"x": 2, "y": "56"}], "x": 2}
        response = client.post("/api/sss/recover-share", json=body)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_parameters"


class TestAppEndpoints:
    """Tests for the root, health and metrics endpoints."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Shamir Secret Sharing Service"

    def test_request_id_propagated(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_request_id_generated(self, client):
        response = client.get("/health")
        assert response.headers["X-Request-ID"]

    def test_metrics(self, client):
        client.post("/api/sss/split", json={"secret": 42, "k": 2, "n": 3})

        response = client.get("/metrics")
        assert response.status_code == 200
        assert "sss_operations_total" in response.text
