"""Wave aggregated merchant support."""

from .models import (
    AggregatedMerchant,
    AggregatedMerchantList,
    ConnectorMetadata,
    CreateAggregatedMerchantRequest,
    FallbackStrategy,
    PageInfo,
    UpdateAggregatedMerchantRequest,
)
from .validation import (
    validate_connector_metadata,
    validate_create_request,
    validate_merchant_id,
    validate_merchant_source,
    validate_update_request,
)
from .service import AggregatedMerchantService
from .coordination import SingleFlight
from .resolver import AggregatedMerchantResolver

__all__ = [
    # Models
    "AggregatedMerchant",
    "AggregatedMerchantList",
    "ConnectorMetadata",
    "CreateAggregatedMerchantRequest",
    "FallbackStrategy",
    "PageInfo",
    "UpdateAggregatedMerchantRequest",
    # Validation
    "validate_connector_metadata",
    "validate_create_request",
    "validate_merchant_id",
    "validate_merchant_source",
    "validate_update_request",
    # Remote service and resolution
    "AggregatedMerchantService",
    "AggregatedMerchantResolver",
    "SingleFlight",
]
