import logging
from typing import Any, Dict, Optional, Sequence

from ...config import WaveConfig
from ...errors import FlowNotImplemented, MissingConnectorTransactionID, WebhooksNotImplemented
from ...transport import HttpRequest, HttpResponse, HttpxTransport, Transport
from ..base import (
    AttemptStatus,
    ConnectorBase,
    CurrencyUnit,
    PaymentsAuthorizeRequest,
    PaymentsCancelRequest,
    PaymentsResponse,
    PaymentsSyncRequest,
    RefundsRequest,
    RefundsResponse,
    RefundStatus,
    RefundSyncRequest,
)
from .aggregated_merchants import (
    AggregatedMerchantResolver,
    AggregatedMerchantService,
    ConnectorMetadata,
    FallbackStrategy,
    SingleFlight,
)
from .auth import WaveAuthConfig
from .error_handling import build_error_response
from .transformers import (
    WaveCheckoutSessionResponse,
    WaveRefundResponse,
    WaveTransactionResponse,
    build_cancel_request,
    build_checkout_session_request,
    build_refund_request,
    parse_response,
    transform_cancel_response,
    transform_checkout_session_response,
    transform_refund_response,
)

logger = logging.getLogger(__name__)

WAVE_CHECKOUT_SESSIONS = "checkout/sessions"
WAVE_CHECKOUT_SESSION = "checkout/sessions/{session_id}"
WAVE_CANCEL_FOR_TXN = "v1/transactions/{txn_id}/cancel"
WAVE_REFUND_FOR_TXN = "v1/transactions/{txn_id}/refunds"
WAVE_REFUND = "v1/refunds/{refund_id}"


class WaveConnector(ConnectorBase):
    """
    Wave connector. Payments go through hosted checkout sessions: authorize
    creates a session and returns its launch URL as redirection data, and the
    final status is picked up with ``sync``.

    When the merchant account enables aggregated merchants, authorize first
    resolves the sub-merchant id (see ``AggregatedMerchantResolver``).
    """

    id = "wave"
    currency_unit = CurrencyUnit.MINOR

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[WaveConfig] = None,
        fallback_strategies: Sequence[FallbackStrategy] = (),
        coordinator: Optional[SingleFlight] = None,
    ):
        self.config = config or WaveConfig()
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(timeout=self.config.timeout_seconds)
        self.fallback_strategies = list(fallback_strategies)
        self.coordinator = coordinator

    def close(self) -> None:
        """Close the HTTP transport if this connector created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "WaveConnector":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def base_url(self) -> str:
        base = self.config.base_url
        return base if base.endswith("/") else f"{base}/"

    def build_headers(self, auth: WaveAuthConfig) -> Dict[str, str]:
        return {"Content-Type": "application/json", **auth.auth_headers()}

    def _send(
        self,
        method: str,
        path: str,
        auth: WaveAuthConfig,
        body: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        return self.transport.send(
            HttpRequest(
                method=method,
                url=f"{self.base_url}{path}",
                headers=self.build_headers(auth),
                body=body,
            )
        )

    def _payment_error(self, flow: str, response: HttpResponse) -> PaymentsResponse:
        error = build_error_response(response.status_code, response.body)
        logger.warning(f"Wave {flow} failed with status {response.status_code}: {error.code}")
        return PaymentsResponse(status=AttemptStatus.FAILURE, error=error)

    def _refund_error(self, flow: str, response: HttpResponse) -> RefundsResponse:
        error = build_error_response(response.status_code, response.body)
        logger.warning(f"Wave {flow} failed with status {response.status_code}: {error.code}")
        return RefundsResponse(refund_status=RefundStatus.FAILURE, error=error)

    def aggregated_merchant_resolver(self, auth: WaveAuthConfig) -> AggregatedMerchantResolver:
        service = AggregatedMerchantService(auth, self.transport, base_url=self.base_url)
        return AggregatedMerchantResolver(
            service, auth, config=self.config, coordinator=self.coordinator
        )

    def resolve_aggregated_merchant(
        self,
        request: PaymentsAuthorizeRequest,
        auth: WaveAuthConfig,
    ) -> Optional[str]:
        if not auth.aggregated_merchants_enabled:
            return None
        metadata = ConnectorMetadata.from_value(request.connector_metadata)
        resolver = self.aggregated_merchant_resolver(auth)
        return resolver.resolve_with_fallback(
            metadata, request.profile_name, self.fallback_strategies
        )

    def authorize(self, request: PaymentsAuthorizeRequest) -> PaymentsResponse:
        auth = WaveAuthConfig.from_connector_auth(request.connector_auth)
        session_request = build_checkout_session_request(request)
        merchant_id = self.resolve_aggregated_merchant(request, auth)
        if merchant_id:
            session_request = session_request.model_copy(
                update={"aggregated_merchant_id": merchant_id}
            )

        response = self._send(
            "POST",
            WAVE_CHECKOUT_SESSIONS,
            auth,
            body=session_request.model_dump(mode="json", exclude_none=True),
        )
        if not response.is_success:
            return self._payment_error("authorize", response)

        session = parse_response(WaveCheckoutSessionResponse, response.body)
        logger.info(f"Created Wave checkout session {session.id} for {request.reference_id}")
        return transform_checkout_session_response(session, request)

    def sync(self, request: PaymentsSyncRequest) -> PaymentsResponse:
        if not request.connector_transaction_id:
            raise MissingConnectorTransactionID()
        auth = WaveAuthConfig.from_connector_auth(request.connector_auth)
        path = WAVE_CHECKOUT_SESSION.format(session_id=request.connector_transaction_id)
        response = self._send("GET", path, auth)
        if not response.is_success:
            return self._payment_error("sync", response)
        session = parse_response(WaveCheckoutSessionResponse, response.body)
        return transform_checkout_session_response(session, request)

    def capture(self, request: PaymentsSyncRequest, amount: int) -> PaymentsResponse:
        # Checkout sessions settle on completion; there is no separate capture.
        raise FlowNotImplemented("capture")

    def void(self, request: PaymentsCancelRequest) -> PaymentsResponse:
        if not request.connector_transaction_id:
            raise MissingConnectorTransactionID()
        auth = WaveAuthConfig.from_connector_auth(request.connector_auth)
        path = WAVE_CANCEL_FOR_TXN.format(txn_id=request.connector_transaction_id)
        body = build_cancel_request(request).model_dump(mode="json", exclude_none=True)
        response = self._send("POST", path, auth, body=body)
        if not response.is_success:
            return self._payment_error("void", response)
        transaction = parse_response(WaveTransactionResponse, response.body)
        logger.info(f"Cancelled Wave transaction {transaction.id}")
        return transform_cancel_response(transaction, request)

    def refund(self, request: RefundsRequest) -> RefundsResponse:
        if not request.connector_transaction_id:
            raise MissingConnectorTransactionID()
        auth = WaveAuthConfig.from_connector_auth(request.connector_auth)
        path = WAVE_REFUND_FOR_TXN.format(txn_id=request.connector_transaction_id)
        body = build_refund_request(request).model_dump(mode="json", exclude_none=True)
        response = self._send("POST", path, auth, body=body)
        if not response.is_success:
            return self._refund_error("refund", response)
        refund = parse_response(WaveRefundResponse, response.body)
        logger.info(f"Requested Wave refund {refund.id} for {request.refund_id}")
        return transform_refund_response(refund, request)

    def refund_sync(self, request: RefundSyncRequest) -> RefundsResponse:
        if not request.connector_refund_id:
            raise MissingConnectorTransactionID()
        auth = WaveAuthConfig.from_connector_auth(request.connector_auth)
        path = WAVE_REFUND.format(refund_id=request.connector_refund_id)
        response = self._send("GET", path, auth)
        if not response.is_success:
            return self._refund_error("refund sync", response)
        refund = parse_response(WaveRefundResponse, response.body)
        return transform_refund_response(refund, request)

    def parse_webhook(self, headers: Dict[str, str], body: bytes) -> Dict[str, Any]:
        raise WebhooksNotImplemented()
