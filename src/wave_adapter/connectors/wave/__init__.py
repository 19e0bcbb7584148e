"""Wave connector."""

# Import order matters: aggregated_merchants depends on auth, error_handling
# and transformers, and the connector depends on all of them.
from .auth import BusinessType, WaveAuthConfig, WaveEnhancedConfig
from .status import (
    WavePaymentStatus,
    WaveRefundStatus,
    map_payment_status,
    map_refund_status,
)
from .error_handling import build_error_response, classify_aggregated_merchant_error
from .transformers import (
    build_cancel_request,
    build_checkout_session_request,
    build_refund_request,
)
from .aggregated_merchants import (
    AggregatedMerchant,
    AggregatedMerchantResolver,
    AggregatedMerchantService,
    ConnectorMetadata,
    FallbackStrategy,
    SingleFlight,
)
from .connector import WaveConnector

__all__ = [
    "BusinessType",
    "WaveAuthConfig",
    "WaveEnhancedConfig",
    "WavePaymentStatus",
    "WaveRefundStatus",
    "map_payment_status",
    "map_refund_status",
    "build_error_response",
    "classify_aggregated_merchant_error",
    "build_cancel_request",
    "build_checkout_session_request",
    "build_refund_request",
    "AggregatedMerchant",
    "AggregatedMerchantResolver",
    "AggregatedMerchantService",
    "ConnectorMetadata",
    "FallbackStrategy",
    "SingleFlight",
    "WaveConnector",
]
