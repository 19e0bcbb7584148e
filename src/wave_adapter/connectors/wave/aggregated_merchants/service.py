"""Remote CRUD for Wave aggregated merchants."""

import logging
from typing import Any, Dict, List, Optional

from ....config import WAVE_BASE_URL
from ....errors import ConnectorError, InvalidConfiguration, ProcessingStepFailed
from ....transport import HttpRequest, HttpResponse, Transport
from ..auth import WaveAuthConfig
from ..error_handling import classify_aggregated_merchant_error
from ..transformers import parse_response
from .models import (
    AggregatedMerchant,
    AggregatedMerchantList,
    CreateAggregatedMerchantRequest,
    UpdateAggregatedMerchantRequest,
)
from .validation import validate_create_request, validate_merchant_id, validate_update_request

logger = logging.getLogger(__name__)

AGGREGATED_MERCHANTS_PATH = "v1/aggregated_merchants"


class AggregatedMerchantService:
    """One HTTP call per operation; non-2xx responses are classified and raised."""

    def __init__(self, auth: WaveAuthConfig, transport: Transport, base_url: str = WAVE_BASE_URL):
        self.auth = auth
        self.transport = transport
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    def _url(self, merchant_id: Optional[str] = None) -> str:
        url = f"{self.base_url}{AGGREGATED_MERCHANTS_PATH}"
        return f"{url}/{merchant_id}" if merchant_id else url

    def _send(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        headers = {"Content-Type": "application/json", **self.auth.auth_headers()}
        response = self.transport.send(
            HttpRequest(method=method, url=url, headers=headers, body=body, params=params)
        )
        if not response.is_success:
            error = classify_aggregated_merchant_error(response.status_code, response.body)
            logger.warning(f"Wave {method} {url} failed: {type(error).__name__}")
            raise error
        return response

    def create_aggregated_merchant(self, request: CreateAggregatedMerchantRequest) -> AggregatedMerchant:
        validate_create_request(request)
        response = self._send(
            "POST", self._url(), body=request.model_dump(mode="json", exclude_none=True)
        )
        merchant = parse_response(AggregatedMerchant, response.body)
        logger.info(f"Created Wave aggregated merchant {merchant.id}")
        return merchant

    def get_aggregated_merchant(self, merchant_id: str) -> AggregatedMerchant:
        validate_merchant_id(merchant_id)
        response = self._send("GET", self._url(merchant_id))
        return parse_response(AggregatedMerchant, response.body)

    def update_aggregated_merchant(
        self,
        merchant_id: str,
        request: UpdateAggregatedMerchantRequest,
    ) -> AggregatedMerchant:
        validate_merchant_id(merchant_id)
        validate_update_request(request)
        response = self._send(
            "PATCH",
            self._url(merchant_id),
            body=request.model_dump(mode="json", exclude_none=True),
        )
        merchant = parse_response(AggregatedMerchant, response.body)
        logger.info(f"Updated Wave aggregated merchant {merchant.id}")
        return merchant

    def delete_aggregated_merchant(self, merchant_id: str) -> None:
        validate_merchant_id(merchant_id)
        self._send("DELETE", self._url(merchant_id))
        logger.info(f"Deleted Wave aggregated merchant {merchant_id}")

    def list_aggregated_merchants(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> AggregatedMerchantList:
        if limit is not None and limit < 1:
            raise InvalidConfiguration("limit: must be a positive integer")
        params: Dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if cursor:
            params["cursor"] = cursor
        response = self._send("GET", self._url(), params=params or None)
        return parse_response(AggregatedMerchantList, response.body)

    def merchant_exists(self, merchant_id: str) -> bool:
        """False when the gateway call fails; other error kinds propagate."""
        try:
            self.get_aggregated_merchant(merchant_id)
        except ProcessingStepFailed as e:
            logger.info(f"Wave aggregated merchant {merchant_id} not accessible: {e.message}")
            return False
        return True

    def get_multiple_aggregated_merchants(
        self,
        merchant_ids: List[str],
    ) -> Dict[str, Optional[AggregatedMerchant]]:
        """Look ids up one at a time; a failed lookup maps to None."""
        results: Dict[str, Optional[AggregatedMerchant]] = {}
        for merchant_id in merchant_ids:
            try:
                results[merchant_id] = self.get_aggregated_merchant(merchant_id)
            except ConnectorError as e:
                logger.warning(f"Lookup of Wave aggregated merchant {merchant_id} failed: {e.message}")
                results[merchant_id] = None
        return results
