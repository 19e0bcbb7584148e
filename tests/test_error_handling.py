"""Tests for Wave error classification."""

import json

import pytest

from wave_adapter.config import NO_ERROR_CODE, NO_ERROR_MESSAGE
from wave_adapter.connectors.wave.error_handling import (
    UNPARSEABLE_ERROR_REASON,
    build_error_response,
    classify_aggregated_merchant_error,
)
from wave_adapter.errors import (
    AuthenticationFailed,
    InvalidConfiguration,
    MerchantNotFound,
    ProcessingStepFailed,
    RateLimitExceeded,
)


class TestBuildErrorResponse:
    """Tests for the canonical error triple."""

    def test_structured_body(self):
        """Test code, message and first detail are extracted."""
        body = json.dumps({
            "code": "REQUEST_VALIDATION_ERROR",
            "message": "Invalid request",
            "details": [{"loc": ["body", "amount"], "msg": "amount must be positive"}, {"msg": "second"}],
        })
        error = build_error_response(400, body)

        assert error.code == "REQUEST_VALIDATION_ERROR"
        assert error.message == "Invalid request"
        assert error.reason == "amount must be positive"
        assert error.status_code == 400

    def test_missing_code(self):
        """Test a body without code falls back to the placeholder code."""
        error = build_error_response(500, json.dumps({"message": "boom"}))
        assert error.code == NO_ERROR_CODE
        assert error.message == "boom"
        assert error.reason is None

    def test_empty_details(self):
        """Test an empty details list yields no reason."""
        error = build_error_response(400, json.dumps({"code": "X", "message": "m", "details": []}))
        assert error.reason is None

    @pytest.mark.parametrize("body", [b"<html>Bad Gateway</html>", b"", b"{}", b'{"code": "X"}'])
    def test_unparseable_body(self, body):
        """Test unparseable bodies yield placeholders and the parse-failure reason."""
        error = build_error_response(502, body)
        assert error.code == NO_ERROR_CODE
        assert error.message == NO_ERROR_MESSAGE
        assert error.reason == UNPARSEABLE_ERROR_REASON
        assert error.status_code == 502


class TestClassifyAggregatedMerchantError:
    """Tests for the aggregated-merchant error classifier."""

    def test_merchant_not_found(self):
        """Test 404 with the not-found code maps to MerchantNotFound."""
        body = json.dumps({"code": "AGGREGATED_MERCHANT_NOT_FOUND", "message": "x"})
        error = classify_aggregated_merchant_error(404, body)
        assert isinstance(error, MerchantNotFound)
        assert error.status_code == 404

    def test_plain_404_is_generic(self):
        """Test a 404 with another code is a generic processing failure."""
        body = json.dumps({"code": "NOT_FOUND", "message": "no route"})
        error = classify_aggregated_merchant_error(404, body)
        assert type(error) is ProcessingStepFailed
        assert "404" in error.message
        assert "no route" in error.message

    def test_invalid_business_type(self):
        """Test 400 with INVALID_BUSINESS_TYPE maps to InvalidConfiguration."""
        body = json.dumps({"code": "INVALID_BUSINESS_TYPE", "message": "unknown type"})
        error = classify_aggregated_merchant_error(400, body)
        assert isinstance(error, InvalidConfiguration)
        assert "business_type" in error.details

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_authentication_failed(self, status_code):
        """Test 401 and 403 map to AuthenticationFailed whatever the code."""
        error = classify_aggregated_merchant_error(status_code, json.dumps({"message": "nope"}))
        assert isinstance(error, AuthenticationFailed)

    def test_rate_limited(self):
        """Test 429 maps to RateLimitExceeded."""
        error = classify_aggregated_merchant_error(429, json.dumps({"code": "RATE_LIMITED", "message": "slow"}))
        assert isinstance(error, RateLimitExceeded)

    def test_unparseable_body_keeps_raw_text(self):
        """Test an unparseable 500 is generic and carries the raw body."""
        error = classify_aggregated_merchant_error(500, b"upstream exploded")
        assert type(error) is ProcessingStepFailed
        assert "upstream exploded" in error.message
        assert "500" in error.message

    def test_unparseable_auth_failure(self):
        """Test status-only rules still apply to unparseable bodies."""
        assert isinstance(classify_aggregated_merchant_error(401, "denied"), AuthenticationFailed)

    def test_semantic_kinds_are_processing_failures(self):
        """Test remote kinds derive from ProcessingStepFailed."""
        for error_class in (MerchantNotFound, AuthenticationFailed, RateLimitExceeded):
            assert issubclass(error_class, ProcessingStepFailed)
        assert not issubclass(InvalidConfiguration, ProcessingStepFailed)
