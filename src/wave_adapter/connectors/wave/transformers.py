"""Wave wire models, request builders and response transformers."""

import logging
from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel, HttpUrl, TypeAdapter, ValidationError

from ...errors import InvalidConnectorConfig, ResponseDeserializationFailed
from ..base import (
    PaymentsAuthorizeRequest,
    PaymentsCancelRequest,
    PaymentsResponse,
    PaymentsSyncRequest,
    RedirectForm,
    RefundsRequest,
    RefundsResponse,
    RefundSyncRequest,
)
from .status import WavePaymentStatus, WaveRefundStatus, map_payment_status, map_refund_status

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_http_url = TypeAdapter(HttpUrl)


# Requests
class WaveCustomer(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class WaveCheckoutSessionRequest(BaseModel):
    amount: str
    currency: str
    error_url: str
    success_url: str
    reference: str
    customer: Optional[WaveCustomer] = None
    aggregated_merchant_id: Optional[str] = None


class WaveCancelRequest(BaseModel):
    reason: Optional[str] = None


class WaveRefundRequest(BaseModel):
    amount: str
    reason: Optional[str] = None


# Responses
class WaveCheckoutSessionResponse(BaseModel):
    id: str
    status: WavePaymentStatus
    launch_url: Optional[str] = None
    reference: Optional[str] = None
    transaction_id: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None


class WaveTransactionResponse(BaseModel):
    id: str
    status: WavePaymentStatus
    reference: Optional[str] = None


class WaveRefundResponse(BaseModel):
    id: str
    status: WaveRefundStatus
    amount: Optional[str] = None
    transaction_id: Optional[str] = None


def build_customer(request: PaymentsAuthorizeRequest) -> Optional[WaveCustomer]:
    name = request.billing.full_name() if request.billing else None
    email = request.email or (request.billing.email if request.billing else None)
    if not name and not email:
        return None
    return WaveCustomer(name=name, email=email)


def build_checkout_session_request(
    request: PaymentsAuthorizeRequest,
    aggregated_merchant_id: Optional[str] = None,
) -> WaveCheckoutSessionRequest:
    """Build the create-session payload. Wave redirects to the same URL on success and error."""
    if not request.return_url:
        raise InvalidConnectorConfig("return_url is required to create a checkout session")
    return WaveCheckoutSessionRequest(
        amount=str(request.amount),
        currency=request.currency.upper(),
        error_url=request.return_url,
        success_url=request.return_url,
        reference=request.reference_id,
        customer=build_customer(request),
        aggregated_merchant_id=aggregated_merchant_id,
    )


def build_cancel_request(request: PaymentsCancelRequest) -> WaveCancelRequest:
    return WaveCancelRequest(reason=request.cancellation_reason)


def build_refund_request(request: RefundsRequest) -> WaveRefundRequest:
    return WaveRefundRequest(amount=str(request.refund_amount), reason=request.reason)


def parse_response(model: Type[T], body: Union[str, bytes]) -> T:
    """Deserialize a gateway body; any schema mismatch is a hard failure."""
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Failed to deserialize Wave {model.__name__}: {e.error_count()} error(s)")
        raise ResponseDeserializationFailed(f"invalid {model.__name__} body") from e


def parse_redirection(launch_url: Optional[str]) -> Optional[RedirectForm]:
    """Best effort: an invalid launch URL means no redirection."""
    if not launch_url:
        return None
    try:
        _http_url.validate_python(launch_url)
    except ValidationError:
        logger.warning("Ignoring invalid Wave launch URL")
        return None
    return RedirectForm(endpoint=launch_url, method="GET")


def transform_checkout_session_response(
    response: WaveCheckoutSessionResponse,
    request: Union[PaymentsAuthorizeRequest, PaymentsSyncRequest],
) -> PaymentsResponse:
    connector_metadata = None
    if response.transaction_id:
        connector_metadata = {"transaction_id": response.transaction_id}
    return PaymentsResponse(
        status=map_payment_status(response.status),
        resource_id=response.id,
        redirection_data=parse_redirection(response.launch_url),
        connector_reference_id=response.reference or request.reference_id,
        connector_metadata=connector_metadata,
    )


def transform_cancel_response(
    response: WaveTransactionResponse,
    request: PaymentsCancelRequest,
) -> PaymentsResponse:
    return PaymentsResponse(
        status=map_payment_status(response.status),
        resource_id=response.id,
        connector_reference_id=response.reference or request.reference_id,
    )


def transform_refund_response(
    response: WaveRefundResponse,
    request: Union[RefundsRequest, RefundSyncRequest],
) -> RefundsResponse:
    refund_status = map_refund_status(response.status)
    logger.debug(f"Refund {request.refund_id} is {refund_status.value} at Wave ({response.id})")
    return RefundsResponse(refund_status=refund_status, connector_refund_id=response.id)
