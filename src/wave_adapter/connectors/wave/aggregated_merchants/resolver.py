"""Decides which aggregated merchant, if any, an authorization is made for."""

import logging
from typing import Optional, Sequence

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ....config import WaveConfig
from ....errors import ConnectorError, InvalidConfiguration
from ..auth import WaveAuthConfig
from .coordination import SingleFlight
from .models import ConnectorMetadata, CreateAggregatedMerchantRequest, FallbackStrategy
from .service import AggregatedMerchantService
from .validation import (
    validate_cache_ttl,
    validate_connector_metadata,
    validate_merchant_id,
    validate_merchant_source,
)

logger = logging.getLogger(__name__)


class AggregatedMerchantResolver:
    """
    Resolution order for one authorization:

    1. feature disabled: no merchant, no remote call;
    2. explicit ``aggregated_merchant_id`` in metadata: use it if Wave confirms it exists;
    3. auto-create (metadata flag, else the auth-config default): use the new merchant;
    4. otherwise no merchant.

    Steps 2 and 3 degrade to "no merchant" on any failure, including a malformed id,
    metadata that breaks a validation rule, or a creation request that does.
    Metadata asking for both an explicit id and auto-creation raises
    ``InvalidConfiguration`` before any remote call.
    """

    def __init__(
        self,
        service: AggregatedMerchantService,
        auth: WaveAuthConfig,
        config: Optional[WaveConfig] = None,
        coordinator: Optional[SingleFlight] = None,
    ):
        self.service = service
        self.auth = auth
        self.config = config or WaveConfig()
        self.coordinator = coordinator

    def resolve(self, metadata: Optional[ConnectorMetadata], profile_name: str) -> Optional[str]:
        if not self.auth.aggregated_merchants_enabled:
            logger.debug("Aggregated merchants disabled for this Wave account")
            return None

        if metadata is not None:
            validate_merchant_source(metadata)

        merchant_id = metadata.aggregated_merchant_id if metadata else None
        if merchant_id:
            if self.validate_merchant(merchant_id):
                logger.info(f"Using Wave aggregated merchant {merchant_id}")
                return merchant_id
            logger.warning(
                f"Wave aggregated merchant {merchant_id} could not be validated, "
                "falling back to auto-creation settings"
            )

        auto_create = self.auth.auto_create_aggregated_merchant
        if metadata is not None and metadata.auto_create_aggregated_merchant is not None:
            auto_create = metadata.auto_create_aggregated_merchant
        if not auto_create:
            return None
        return self.auto_create(metadata, profile_name)

    def resolve_with_fallback(
        self,
        metadata: Optional[ConnectorMetadata],
        profile_name: str,
        strategies: Sequence[FallbackStrategy],
    ) -> Optional[str]:
        if not self.auth.aggregated_merchants_enabled:
            return None
        merchant_id = self.resolve(metadata, profile_name)
        if merchant_id:
            return merchant_id

        for strategy in strategies:
            if strategy == FallbackStrategy.SKIP:
                logger.info("Skipping aggregated merchant for this payment")
                return None
            if strategy == FallbackStrategy.USE_DEFAULT:
                logger.info("Default aggregated merchant fallback is not yet supported, continuing")
                continue
            if strategy == FallbackStrategy.CREATE_TEMPORARY:
                merchant_id = self.auto_create(None, profile_name)
                if merchant_id:
                    return merchant_id
        return None

    def validate_merchant(self, merchant_id: str) -> bool:
        """Check existence remotely, retrying any failure with exponential backoff."""
        try:
            validate_merchant_id(merchant_id)
        except InvalidConfiguration as e:
            logger.warning(f"Wave aggregated merchant id {merchant_id!r} rejected: {e.details}")
            return False

        retrying = Retrying(
            stop=stop_after_attempt(self.config.validation_attempts),
            wait=wait_exponential(
                multiplier=self.config.validation_backoff_seconds,
                max=self.config.validation_backoff_max_seconds,
            ),
            retry=retry_if_exception_type(ConnectorError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self.service.get_aggregated_merchant(merchant_id)
        except ConnectorError as e:
            logger.warning(
                f"Validation of Wave aggregated merchant {merchant_id} failed after "
                f"{self.config.validation_attempts} attempts: {e.message}"
            )
            return False
        return True

    def build_create_request(
        self,
        metadata: Optional[ConnectorMetadata],
        profile_name: str,
    ) -> CreateAggregatedMerchantRequest:
        metadata = metadata or ConnectorMetadata()
        return CreateAggregatedMerchantRequest(
            name=metadata.aggregated_merchant_name or profile_name,
            business_type=metadata.business_type or self.auth.default_business_type,
            business_description=(
                metadata.business_description or f"Payment processing for {profile_name}"
            ),
            manager_name=metadata.manager_name,
            business_registration_identifier=metadata.business_registration_identifier,
            business_sector=metadata.business_sector,
            website_url=metadata.website_url,
        )

    def auto_create(self, metadata: Optional[ConnectorMetadata], profile_name: str) -> Optional[str]:
        """Create a merchant for the profile. Never raises: failure means no merchant."""

        def create() -> str:
            request = self.build_create_request(metadata, profile_name)
            return self.service.create_aggregated_merchant(request).id

        try:
            if metadata is not None:
                # the explicit id was already settled before auto-creation
                validate_connector_metadata(
                    metadata.model_copy(update={"aggregated_merchant_id": None})
                )
            if self.coordinator is not None:
                merchant_id = self.coordinator.do(profile_name, create)
            else:
                merchant_id = create()
        except ConnectorError as e:
            logger.warning(
                f"Auto-creation of Wave aggregated merchant for profile {profile_name} failed, "
                f"continuing without one: {e.message}"
            )
            return None
        logger.info(f"Auto-created Wave aggregated merchant {merchant_id} for profile {profile_name}")
        return merchant_id

    def cache_ttl_hint(self, metadata: Optional[ConnectorMetadata]) -> Optional[int]:
        """Seconds a caller may cache the resolved id; None when caching is disabled."""
        if metadata is not None:
            if metadata.cache_enabled is False:
                return None
            if metadata.cache_ttl_seconds is not None:
                validate_cache_ttl(metadata.cache_ttl_seconds)
                return metadata.cache_ttl_seconds
        return self.auth.cache_ttl_seconds
