"""Wave credentials and aggregated-merchant feature flags."""

import enum
import logging
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from ...config import DEFAULT_CACHE_TTL_SECONDS, MAX_CACHE_TTL_SECONDS, MIN_CACHE_TTL_SECONDS
from ...errors import FailedToObtainAuthType, InvalidConnectorConfig
from ..base import AuthType, ConnectorAuthType

logger = logging.getLogger(__name__)


class BusinessType(str, enum.Enum):
    """Business categories accepted by Wave for aggregated merchants."""
    FINTECH = "fintech"
    OTHER = "other"


class WaveEnhancedConfig(BaseModel):
    """Optional JSON blob stored next to the API key (``key1`` of a BodyKey)."""
    aggregated_merchants_enabled: bool = False
    auto_create_aggregated_merchant: bool = False
    default_business_type: BusinessType = BusinessType.OTHER
    cache_ttl_seconds: int = Field(
        DEFAULT_CACHE_TTL_SECONDS, ge=MIN_CACHE_TTL_SECONDS, le=MAX_CACHE_TTL_SECONDS
    )


class WaveAuthConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    aggregated_merchants_enabled: bool = False
    auto_create_aggregated_merchant: bool = False
    default_business_type: BusinessType = BusinessType.OTHER
    cache_ttl_seconds: int = Field(
        DEFAULT_CACHE_TTL_SECONDS, ge=MIN_CACHE_TTL_SECONDS, le=MAX_CACHE_TTL_SECONDS
    )

    @classmethod
    def from_api_key(cls, api_key: Union[str, SecretStr]) -> "WaveAuthConfig":
        """Key-only form: aggregated merchants disabled."""
        secret = api_key if isinstance(api_key, SecretStr) else SecretStr(api_key or "")
        if not secret.get_secret_value().strip():
            raise InvalidConnectorConfig("api_key must not be empty")
        return cls(api_key=secret)

    @classmethod
    def from_api_key_and_config(
        cls,
        api_key: Union[str, SecretStr],
        config_blob: Optional[Union[str, bytes]],
    ) -> "WaveAuthConfig":
        """Key + enhanced config. A missing or malformed blob yields the defaults."""
        base = cls.from_api_key(api_key)
        if not config_blob:
            return base
        try:
            enhanced = WaveEnhancedConfig.model_validate_json(config_blob)
        except ValidationError:
            logger.debug("Ignoring unparseable Wave enhanced config, using defaults")
            return base
        return cls(api_key=base.api_key, **enhanced.model_dump())

    @classmethod
    def from_connector_auth(cls, auth: ConnectorAuthType) -> "WaveAuthConfig":
        if auth.api_key is None:
            raise FailedToObtainAuthType()
        if auth.auth_type == AuthType.HEADER_KEY:
            return cls.from_api_key(auth.api_key)
        if auth.auth_type == AuthType.BODY_KEY:
            return cls.from_api_key_and_config(auth.api_key, auth.key1)
        raise FailedToObtainAuthType()

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key.get_secret_value()}"}
