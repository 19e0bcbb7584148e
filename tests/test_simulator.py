"""Tests for the WaveSimulator."""

import httpx
import pytest

from wave_adapter.simulator import SimulatorConfig, SimulatorScenario, WaveSimulator

from conftest import TEST_API_KEY


@pytest.fixture
def client(simulator):
    with httpx.Client(
        transport=httpx.MockTransport(simulator),
        base_url="https://api.wave.com",
        headers={"Authorization": f"Bearer {TEST_API_KEY}"},
    ) as client:
        yield client


SESSION_BODY = {
    "amount": "1000",
    "currency": "XOF",
    "error_url": "https://r",
    "success_url": "https://r",
    "reference": "ref_1",
}


class TestSimulatorCheckout:
    """Test checkout session simulation."""

    def test_create_session(self, client, simulator):
        """Test a session starts as created with a launch URL."""
        response = client.post("/checkout/sessions", json=SESSION_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["id"].startswith("cos-")
        assert data["status"] == "created"
        assert data["launch_url"] == f"https://pay.wave.com/c/{data['id']}"
        assert data["id"] in simulator.sessions

    def test_missing_fields(self, client):
        """Test missing fields are rejected with details."""
        response = client.post("/checkout/sessions", json={"amount": "1000"})

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "REQUEST_VALIDATION_ERROR"
        assert len(data["details"]) == 4

    def test_unknown_aggregated_merchant(self, client):
        """Test sessions referencing unknown merchants are rejected."""
        response = client.post("/checkout/sessions", json={**SESSION_BODY, "aggregated_merchant_id": "am-x1"})
        assert response.status_code == 404
        assert response.json()["code"] == "AGGREGATED_MERCHANT_NOT_FOUND"

    def test_complete_session(self, client, simulator):
        """Test completing a session creates a transaction."""
        session_id = client.post("/checkout/sessions", json=SESSION_BODY).json()["id"]
        txn_id = simulator.complete_session(session_id)

        data = client.get(f"/checkout/sessions/{session_id}").json()
        assert data["status"] == "completed"
        assert data["transaction_id"] == txn_id
        assert simulator.transactions[txn_id]["amount"] == 1000


class TestSimulatorBehaviour:
    """Test scenarios, authentication and queued failures."""

    def test_rejects_wrong_key(self, simulator):
        """Test requests without the configured key get 401."""
        with httpx.Client(transport=httpx.MockTransport(simulator), base_url="https://api.wave.com") as client:
            response = client.get("/v1/aggregated_merchants")
        assert response.status_code == 401
        assert simulator.request_count == 1

    def test_fail_next(self, client, simulator):
        """Test queued responses are served once, in order."""
        simulator.fail_next(503, "unavailable", count=2)

        assert client.get("/v1/aggregated_merchants").status_code == 503
        assert client.get("/v1/aggregated_merchants").status_code == 503
        assert client.get("/v1/aggregated_merchants").status_code == 200

    @pytest.mark.parametrize("scenario,status_code", [
        (SimulatorScenario.SERVER_ERROR, 500),
        (SimulatorScenario.UNPARSEABLE_ERROR, 502),
        (SimulatorScenario.RATE_LIMIT, 429),
    ])
    def test_scenarios(self, scenario, status_code):
        """Test gateway-wide failure scenarios."""
        simulator = WaveSimulator(SimulatorConfig(scenario=scenario))
        with httpx.Client(transport=httpx.MockTransport(simulator), base_url="https://api.wave.com") as client:
            assert client.get("/v1/aggregated_merchants").status_code == status_code

    def test_unknown_route(self, client):
        """Test unknown routes get 404."""
        response = client.get("/v2/nothing")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_deterministic_ids(self):
        """Test a seed makes generated ids reproducible."""
        ids = []
        for _ in range(2):
            simulator = WaveSimulator(SimulatorConfig(seed=7))
            with httpx.Client(transport=httpx.MockTransport(simulator), base_url="https://api.wave.com") as client:
                ids.append(client.post("/checkout/sessions", json=SESSION_BODY).json()["id"])
        assert ids[0] == ids[1]

    def test_clear(self, client, simulator):
        """Test clear resets stored state."""
        client.post("/checkout/sessions", json=SESSION_BODY)
        simulator.fail_next(500)
        simulator.clear()

        assert simulator.sessions == {}
        assert simulator.request_count == 0
        assert client.get("/v1/aggregated_merchants").status_code == 200


class TestSimulatorMerchants:
    """Test aggregated merchant simulation."""

    def test_invalid_business_type(self, client):
        """Test unknown business types are rejected."""
        response = client.post(
            "/v1/aggregated_merchants",
            json={"name": "Shop", "business_type": "casino", "business_description": "x"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_BUSINESS_TYPE"

    def test_delete_returns_no_content(self, client):
        """Test delete answers 204."""
        merchant = client.post(
            "/v1/aggregated_merchants",
            json={"name": "Shop", "business_type": "other", "business_description": "x"},
        ).json()
        assert merchant["status"] == "active"
        assert client.delete(f"/v1/aggregated_merchants/{merchant['id']}").status_code == 204
        assert client.get(f"/v1/aggregated_merchants/{merchant['id']}").status_code == 404
