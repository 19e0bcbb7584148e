"""Pure validation rules applied before any aggregated-merchant create or update."""

from typing import Optional

from ....config import MAX_CACHE_TTL_SECONDS, MIN_CACHE_TTL_SECONDS
from ....errors import InvalidConfiguration
from .models import (
    ConnectorMetadata,
    CreateAggregatedMerchantRequest,
    UpdateAggregatedMerchantRequest,
)

MERCHANT_ID_PREFIX = "am-"
MERCHANT_ID_MIN_LENGTH = 4
MAX_BUSINESS_DESCRIPTION_LENGTH = 500
MAX_MANAGER_NAME_LENGTH = 100
MAX_WEBSITE_URL_LENGTH = 2083
MAX_REGISTRATION_IDENTIFIER_LENGTH = 50
MAX_BUSINESS_SECTOR_LENGTH = 100


def validate_merchant_id(merchant_id: Optional[str]) -> None:
    """Format check only; existence is checked remotely."""
    if not merchant_id:
        raise InvalidConfiguration("aggregated_merchant_id: must not be empty")
    if not merchant_id.startswith(MERCHANT_ID_PREFIX):
        raise InvalidConfiguration(
            f"aggregated_merchant_id: must start with '{MERCHANT_ID_PREFIX}'"
        )
    if len(merchant_id) < MERCHANT_ID_MIN_LENGTH:
        raise InvalidConfiguration(
            f"aggregated_merchant_id: must be at least {MERCHANT_ID_MIN_LENGTH} characters"
        )


def validate_business_description(description: Optional[str]) -> None:
    if description is None or not description.strip():
        raise InvalidConfiguration("business_description: must not be blank")
    if len(description) > MAX_BUSINESS_DESCRIPTION_LENGTH:
        raise InvalidConfiguration(
            f"business_description: must be at most {MAX_BUSINESS_DESCRIPTION_LENGTH} characters"
        )


def validate_manager_name(manager_name: Optional[str]) -> None:
    if manager_name is None:
        return
    if not manager_name.strip():
        raise InvalidConfiguration("manager_name: must not be blank")
    if len(manager_name) > MAX_MANAGER_NAME_LENGTH:
        raise InvalidConfiguration(
            f"manager_name: must be at most {MAX_MANAGER_NAME_LENGTH} characters"
        )


def validate_website_url(website_url: Optional[str]) -> None:
    if website_url is None:
        return
    if len(website_url) > MAX_WEBSITE_URL_LENGTH:
        raise InvalidConfiguration(
            f"website_url: must be at most {MAX_WEBSITE_URL_LENGTH} characters"
        )
    if not website_url.startswith(("http://", "https://")):
        raise InvalidConfiguration("website_url: must start with http:// or https://")


def validate_business_registration_identifier(identifier: Optional[str]) -> None:
    if identifier is not None and len(identifier) > MAX_REGISTRATION_IDENTIFIER_LENGTH:
        raise InvalidConfiguration(
            f"business_registration_identifier: must be at most "
            f"{MAX_REGISTRATION_IDENTIFIER_LENGTH} characters"
        )


def validate_business_sector(sector: Optional[str]) -> None:
    if sector is not None and len(sector) > MAX_BUSINESS_SECTOR_LENGTH:
        raise InvalidConfiguration(
            f"business_sector: must be at most {MAX_BUSINESS_SECTOR_LENGTH} characters"
        )


def validate_cache_ttl(ttl_seconds: Optional[int]) -> None:
    if ttl_seconds is None:
        return
    if not MIN_CACHE_TTL_SECONDS <= ttl_seconds <= MAX_CACHE_TTL_SECONDS:
        raise InvalidConfiguration(
            f"cache_ttl_seconds: must be between {MIN_CACHE_TTL_SECONDS} and "
            f"{MAX_CACHE_TTL_SECONDS} seconds"
        )


def validate_merchant_source(metadata: ConnectorMetadata) -> None:
    """An explicit merchant id and auto-creation are mutually exclusive."""
    if metadata.auto_create_aggregated_merchant and metadata.aggregated_merchant_id:
        raise InvalidConfiguration(
            "auto_create_aggregated_merchant: cannot be enabled together with an "
            "explicit aggregated_merchant_id"
        )


def validate_connector_metadata(metadata: ConnectorMetadata) -> None:
    """Check connector metadata before it drives any remote call."""
    validate_merchant_source(metadata)
    if metadata.aggregated_merchant_id is not None:
        validate_merchant_id(metadata.aggregated_merchant_id)
    if metadata.business_description is not None:
        validate_business_description(metadata.business_description)
    validate_manager_name(metadata.manager_name)
    validate_website_url(metadata.website_url)
    validate_business_registration_identifier(metadata.business_registration_identifier)
    validate_business_sector(metadata.business_sector)
    validate_cache_ttl(metadata.cache_ttl_seconds)


def validate_create_request(request: CreateAggregatedMerchantRequest) -> None:
    if not request.name.strip():
        raise InvalidConfiguration("name: must not be blank")
    validate_business_description(request.business_description)
    validate_manager_name(request.manager_name)
    validate_website_url(request.website_url)
    validate_business_registration_identifier(request.business_registration_identifier)
    validate_business_sector(request.business_sector)


def validate_update_request(request: UpdateAggregatedMerchantRequest) -> None:
    if request.name is not None and not request.name.strip():
        raise InvalidConfiguration("name: must not be blank")
    if request.business_description is not None:
        validate_business_description(request.business_description)
    validate_manager_name(request.manager_name)
    validate_website_url(request.website_url)
    validate_business_registration_identifier(request.business_registration_identifier)
    validate_business_sector(request.business_sector)
