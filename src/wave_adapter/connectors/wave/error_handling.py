"""Classification of Wave error bodies."""

import logging
from typing import List, Optional, Union

from pydantic import BaseModel, ValidationError

from ...config import NO_ERROR_CODE, NO_ERROR_MESSAGE
from ...errors import (
    AuthenticationFailed,
    ConnectorError,
    InvalidConfiguration,
    MerchantNotFound,
    ProcessingStepFailed,
    RateLimitExceeded,
)
from ..base import ErrorResponse

logger = logging.getLogger(__name__)

UNPARSEABLE_ERROR_REASON = "unable to parse error response"

AGGREGATED_MERCHANT_NOT_FOUND = "AGGREGATED_MERCHANT_NOT_FOUND"
INVALID_BUSINESS_TYPE = "INVALID_BUSINESS_TYPE"


class WaveErrorDetail(BaseModel):
    loc: Optional[List[Union[str, int]]] = None
    msg: str


class WaveErrorBody(BaseModel):
    code: Optional[str] = None
    message: str
    details: Optional[List[WaveErrorDetail]] = None


def parse_error_body(body: Union[str, bytes]) -> Optional[WaveErrorBody]:
    if not body:
        return None
    try:
        return WaveErrorBody.model_validate_json(body)
    except ValidationError:
        return None


def build_error_response(status_code: int, body: Union[str, bytes]) -> ErrorResponse:
    """Turn a non-2xx gateway response into the canonical error triple."""
    parsed = parse_error_body(body)
    if parsed is None:
        logger.warning(f"Unparseable Wave error response with status {status_code}")
        return ErrorResponse(
            code=NO_ERROR_CODE,
            message=NO_ERROR_MESSAGE,
            reason=UNPARSEABLE_ERROR_REASON,
            status_code=status_code,
        )
    reason = parsed.details[0].msg if parsed.details else None
    return ErrorResponse(
        code=parsed.code or NO_ERROR_CODE,
        message=parsed.message,
        reason=reason,
        status_code=status_code,
    )


def classify_aggregated_merchant_error(status_code: int, body: Union[str, bytes]) -> ConnectorError:
    """Map an aggregated-merchant API failure to a semantic error kind.

    Works on unparseable bodies too: the raw text is carried in the generic error.
    """
    parsed = parse_error_body(body)
    raw = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    code = parsed.code if parsed else None
    message = parsed.message if parsed else raw

    if status_code == 404 and code == AGGREGATED_MERCHANT_NOT_FOUND:
        return MerchantNotFound(f"aggregated merchant not found: {message}", status_code=status_code)
    if status_code == 400 and code == INVALID_BUSINESS_TYPE:
        return InvalidConfiguration(f"business_type: rejected by gateway ({message})")
    if status_code in (401, 403):
        return AuthenticationFailed(f"authentication failed: {message}", status_code=status_code)
    if status_code == 429:
        return RateLimitExceeded(f"rate limit exceeded: {message}", status_code=status_code)
    return ProcessingStepFailed(
        f"aggregated merchant request failed with status {status_code}: {message}",
        status_code=status_code,
    )
