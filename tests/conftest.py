"""Shared test fixtures and configuration."""

import json
from typing import Any, Dict, List

import pytest

from wave_adapter.config import WaveConfig
from wave_adapter.connectors.base import AuthType, ConnectorAuthType
from wave_adapter.connectors.wave import WaveAuthConfig, WaveConnector
from wave_adapter.connectors.wave.aggregated_merchants import AggregatedMerchantService
from wave_adapter.simulator import SimulatorConfig, WaveSimulator
from wave_adapter.transport import HttpRequest, HttpResponse, Transport

TEST_API_KEY = "wave_sn_prod_test_key_12345"


class RecordingTransport(Transport):
    """Fake transport returning queued responses and recording every request."""

    def __init__(self, responses: List[HttpResponse] = None):
        self.responses = list(responses or [])
        self.requests: List[HttpRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def queue(self, status_code: int, body: Any = None) -> None:
        if isinstance(body, (dict, list)):
            raw = json.dumps(body).encode("utf-8")
        else:
            raw = (body or "").encode("utf-8")
        self.responses.append(HttpResponse(status_code=status_code, body=raw))

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)


@pytest.fixture
def fast_config() -> WaveConfig:
    """Connector config without backoff delays."""
    return WaveConfig(validation_backoff_seconds=0, validation_backoff_max_seconds=0)


@pytest.fixture
def simulator() -> WaveSimulator:
    return WaveSimulator(SimulatorConfig(api_key=TEST_API_KEY, seed=42))


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def connector(simulator, fast_config) -> WaveConnector:
    return WaveConnector(transport=simulator.transport(), config=fast_config)


@pytest.fixture
def header_key_auth() -> ConnectorAuthType:
    """Key-only credentials: aggregated merchants disabled."""
    return ConnectorAuthType(auth_type=AuthType.HEADER_KEY, api_key=TEST_API_KEY)


@pytest.fixture
def enhanced_config() -> Dict[str, Any]:
    return {
        "aggregated_merchants_enabled": True,
        "auto_create_aggregated_merchant": False,
        "default_business_type": "other",
        "cache_ttl_seconds": 600,
    }


@pytest.fixture
def body_key_auth(enhanced_config) -> ConnectorAuthType:
    """Key + enhanced config: aggregated merchants enabled."""
    return ConnectorAuthType(
        auth_type=AuthType.BODY_KEY,
        api_key=TEST_API_KEY,
        key1=json.dumps(enhanced_config),
    )


@pytest.fixture
def enabled_auth() -> WaveAuthConfig:
    return WaveAuthConfig(api_key=TEST_API_KEY, aggregated_merchants_enabled=True)


@pytest.fixture
def merchant_service(simulator, enabled_auth) -> AggregatedMerchantService:
    return AggregatedMerchantService(enabled_auth, simulator.transport())


@pytest.fixture
def valid_authorize_request_data(header_key_auth) -> Dict[str, Any]:
    """Return valid authorize request data."""
    return {
        "amount": 1000,
        "currency": "XOF",
        "reference_id": "pay_ref_123",
        "connector_auth": header_key_auth,
        "return_url": "https://merchant.example.com/return",
        "email": "a@b.com",
        "billing": {"first_name": "Awa", "last_name": "Diop"},
        "profile_name": "dakar-shop",
    }


@pytest.fixture
def merchant_payload() -> Dict[str, Any]:
    """Aggregated merchant body as Wave returns it."""
    return {
        "id": "am-7lks22ap113t4",
        "name": "Dakar Shop",
        "business_type": "other",
        "business_description": "Payment processing for dakar-shop",
        "status": "active",
        "created_at": "2026-01-15T10:00:00+00:00",
    }
