"""Models for Wave aggregated merchants (sub-merchant identities)."""

import enum
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..auth import BusinessType

logger = logging.getLogger(__name__)


class AggregatedMerchant(BaseModel):
    """Aggregated merchant as returned by Wave."""
    id: str = Field(..., description="Wave id, formatted am-<suffix>")
    name: str
    business_type: BusinessType
    business_description: str
    business_registration_identifier: Optional[str] = None
    business_sector: Optional[str] = None
    website_url: Optional[str] = None
    manager_name: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateAggregatedMerchantRequest(BaseModel):
    name: str
    business_type: BusinessType
    business_description: str
    business_registration_identifier: Optional[str] = None
    business_sector: Optional[str] = None
    website_url: Optional[str] = None
    manager_name: Optional[str] = None


class UpdateAggregatedMerchantRequest(BaseModel):
    name: Optional[str] = None
    business_type: Optional[BusinessType] = None
    business_description: Optional[str] = None
    business_registration_identifier: Optional[str] = None
    business_sector: Optional[str] = None
    website_url: Optional[str] = None
    manager_name: Optional[str] = None


class PageInfo(BaseModel):
    has_next_page: bool = False
    end_cursor: Optional[str] = None


class AggregatedMerchantList(BaseModel):
    items: List[AggregatedMerchant] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


class ConnectorMetadata(BaseModel):
    """Aggregated-merchant settings attached to a merchant connector account.

    Every field is optional; unknown keys from the platform are ignored.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    aggregated_merchant_id: Optional[str] = None
    aggregated_merchant_name: Optional[str] = None
    auto_create_aggregated_merchant: Optional[bool] = None
    business_type: Optional[BusinessType] = None
    business_description: Optional[str] = None
    manager_name: Optional[str] = None
    business_registration_identifier: Optional[str] = None
    business_sector: Optional[str] = None
    website_url: Optional[str] = None
    cache_enabled: Optional[bool] = None
    cache_ttl_seconds: Optional[int] = None

    @classmethod
    def from_value(cls, value: Optional[Union[Dict[str, Any], str, bytes]]) -> Optional["ConnectorMetadata"]:
        """Parse the opaque metadata blob; anything unparseable counts as absent."""
        if value is None:
            return None
        try:
            if isinstance(value, (str, bytes)):
                return cls.model_validate_json(value)
            return cls.model_validate(value)
        except ValidationError as e:
            logger.warning(f"Ignoring unparseable Wave connector metadata ({e.error_count()} error(s))")
            return None


class FallbackStrategy(str, enum.Enum):
    """What to try, in caller-given order, when resolution yields no merchant."""
    USE_DEFAULT = "use_default"
    CREATE_TEMPORARY = "create_temporary"
    SKIP = "skip"
