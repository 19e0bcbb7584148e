"""Connector error hierarchy.

Every failure the adapter raises derives from :class:`ConnectorError`. Gateway
error *responses* on lifecycle flows are not raised; they are returned as
failed canonical responses carrying an ``ErrorResponse``.
"""

from typing import Optional


class ConnectorError(Exception):
    """Base class for all adapter errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RequestEncodingFailed(ConnectorError):
    """Building the outbound payload or headers failed."""

    def __init__(self, detail: str = "failed to encode connector request"):
        super().__init__(detail)


class ResponseDeserializationFailed(ConnectorError):
    """The gateway body did not match the expected schema."""

    def __init__(self, detail: str = "failed to deserialize connector response"):
        super().__init__(detail)


class InvalidConnectorConfig(ConnectorError):
    """Malformed id or auth configuration."""

    def __init__(self, config: str):
        self.config = config
        super().__init__(f"invalid connector configuration: {config}")


class InvalidConfiguration(ConnectorError):
    """A validation rule was violated. ``details`` names the field and constraint."""

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"invalid configuration: {details}")


class ProcessingStepFailed(ConnectorError):
    """Generic remote-call failure."""

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail or "processing step failed")


class MerchantNotFound(ProcessingStepFailed):
    """The gateway does not know the requested aggregated merchant."""


class AuthenticationFailed(ProcessingStepFailed):
    """The gateway rejected the API key (401/403)."""


class RateLimitExceeded(ProcessingStepFailed):
    """The gateway throttled the request (429)."""


class MissingConnectorTransactionID(ConnectorError):
    def __init__(self):
        super().__init__("missing connector transaction id")


class FailedToObtainAuthType(ConnectorError):
    def __init__(self):
        super().__init__("failed to obtain authentication type")


class FlowNotImplemented(ConnectorError, NotImplementedError):
    """The gateway flow is not supported by this connector."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} is not implemented for this connector")


class WebhooksNotImplemented(ConnectorError):
    def __init__(self):
        super().__init__("webhooks are not implemented for this connector")
