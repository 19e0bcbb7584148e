"""Payment gateway connectors."""

from .base import (
    ConnectorBase,
    AttemptStatus,
    RefundStatus,
    CurrencyUnit,
    AuthType,
    ConnectorAuthType,
    BillingAddress,
    PaymentsAuthorizeRequest,
    PaymentsSyncRequest,
    PaymentsCancelRequest,
    RefundsRequest,
    RefundSyncRequest,
    RedirectForm,
    ErrorResponse,
    PaymentsResponse,
    RefundsResponse,
)
from .wave import WaveConnector, WaveAuthConfig

__all__ = [
    # Base classes and models
    "ConnectorBase",
    "AttemptStatus",
    "RefundStatus",
    "CurrencyUnit",
    "AuthType",
    "ConnectorAuthType",
    "BillingAddress",
    "PaymentsAuthorizeRequest",
    "PaymentsSyncRequest",
    "PaymentsCancelRequest",
    "RefundsRequest",
    "RefundSyncRequest",
    "RedirectForm",
    "ErrorResponse",
    "PaymentsResponse",
    "RefundsResponse",
    # Connectors
    "WaveConnector",
    "WaveAuthConfig",
]
