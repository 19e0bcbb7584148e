"""Generic HTTP request/response interface used by the connector."""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .errors import ProcessingStepFailed, RequestEncodingFailed

logger = logging.getLogger(__name__)


@dataclass
class HttpRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, Any]] = None


@dataclass
class HttpResponse:
    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(ABC):
    """Sends one request and returns the raw response, whatever its status."""

    @abstractmethod
    def send(self, request: HttpRequest) -> HttpResponse:
        raise NotImplementedError


class HttpxTransport(Transport):
    """Transport backed by a synchronous ``httpx.Client``.

    Timeouts live here; the connector enforces none of its own.
    """

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 30.0):
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def send(self, request: HttpRequest) -> HttpResponse:
        try:
            content = json.dumps(request.body).encode("utf-8") if request.body is not None else None
        except (TypeError, ValueError) as e:
            raise RequestEncodingFailed(f"failed to encode request body: {e}") from e

        logger.debug(f"Sending {request.method} {request.url}")
        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=content,
                params=request.params,
            )
        except httpx.HTTPError as e:
            logger.error(f"Transport error on {request.method} {request.url}: {type(e).__name__}")
            raise ProcessingStepFailed(f"transport error: {e}") from e

        logger.debug(f"Received {response.status_code} from {request.method} {request.url}")
        return HttpResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._client.close()
