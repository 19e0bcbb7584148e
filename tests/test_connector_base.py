"""Tests for ConnectorBase abstract class and data models."""

import pytest
from abc import ABC
from pydantic import ValidationError

from wave_adapter.connectors.base import (
    AttemptStatus,
    AuthType,
    BillingAddress,
    ConnectorAuthType,
    ConnectorBase,
    PaymentsAuthorizeRequest,
    PaymentsResponse,
    RefundsResponse,
    RefundStatus,
)


class TestConnectorBaseAbstraction:
    """Tests to verify ConnectorBase is properly abstract."""

    def test_cannot_instantiate_directly(self):
        """Test that ConnectorBase cannot be instantiated directly."""
        with pytest.raises(TypeError) as exc_info:
            ConnectorBase()
        assert "abstract" in str(exc_info.value).lower()

    def test_is_abstract_class(self):
        """Test that ConnectorBase inherits from ABC."""
        assert issubclass(ConnectorBase, ABC)

    def test_partial_implementation_fails(self):
        """Test that partial implementation still fails."""
        class PartialConnector(ConnectorBase):
            def authorize(self, request):
                return None

        with pytest.raises(TypeError):
            PartialConnector()

    def test_full_implementation_succeeds(self):
        """Test that full implementation can be instantiated."""
        class FullConnector(ConnectorBase):
            def authorize(self, request):
                return PaymentsResponse(status=AttemptStatus.PENDING)

            def sync(self, request):
                return PaymentsResponse(status=AttemptStatus.CHARGED)

            def capture(self, request, amount):
                return PaymentsResponse(status=AttemptStatus.CHARGED)

            def void(self, request):
                return PaymentsResponse(status=AttemptStatus.VOIDED)

            def refund(self, request):
                return RefundsResponse(refund_status=RefundStatus.PENDING)

            def refund_sync(self, request):
                return RefundsResponse(refund_status=RefundStatus.SUCCESS)

            def parse_webhook(self, headers, body):
                return {}

        assert FullConnector() is not None


class TestAuthorizeRequestValidation:
    """Tests for PaymentsAuthorizeRequest field validation."""

    def test_defaults(self, valid_authorize_request_data):
        """Test optional fields take their defaults."""
        del valid_authorize_request_data["profile_name"]
        request = PaymentsAuthorizeRequest(**valid_authorize_request_data)
        assert request.profile_name == "default"
        assert request.connector_metadata is None

    def test_negative_amount_rejected(self, valid_authorize_request_data):
        """Test that negative amounts are rejected."""
        valid_authorize_request_data["amount"] = -1
        with pytest.raises(ValidationError):
            PaymentsAuthorizeRequest(**valid_authorize_request_data)

    @pytest.mark.parametrize("currency", ["XO", "XOFF"])
    def test_currency_length(self, valid_authorize_request_data, currency):
        """Test that currency must be a three-letter code."""
        valid_authorize_request_data["currency"] = currency
        with pytest.raises(ValidationError):
            PaymentsAuthorizeRequest(**valid_authorize_request_data)

    def test_empty_reference_rejected(self, valid_authorize_request_data):
        """Test that the reference id must not be empty."""
        valid_authorize_request_data["reference_id"] = ""
        with pytest.raises(ValidationError):
            PaymentsAuthorizeRequest(**valid_authorize_request_data)


class TestModels:
    """Tests for supporting models."""

    def test_billing_full_name(self):
        """Test the full name joins the non-empty parts."""
        assert BillingAddress(first_name="Awa", last_name="Diop").full_name() == "Awa Diop"
        assert BillingAddress(first_name=" Awa ").full_name() == "Awa"
        assert BillingAddress(last_name="  ").full_name() is None

    def test_auth_secret_masked(self):
        """Test credentials do not leak through repr."""
        auth = ConnectorAuthType(auth_type=AuthType.HEADER_KEY, api_key="secret_value")
        assert "secret_value" not in repr(auth)
        assert auth.api_key.get_secret_value() == "secret_value"
