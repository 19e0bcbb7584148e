import enum
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, SecretStr


class AttemptStatus(str, enum.Enum):
    """Canonical payment attempt statuses."""
    PENDING = "pending"
    CHARGED = "charged"
    FAILURE = "failure"
    VOIDED = "voided"


class RefundStatus(str, enum.Enum):
    """Canonical refund statuses."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class CurrencyUnit(str, enum.Enum):
    MINOR = "minor"
    BASE = "base"


class AuthType(str, enum.Enum):
    HEADER_KEY = "HeaderKey"
    BODY_KEY = "BodyKey"
    SIGNATURE_KEY = "SignatureKey"
    NO_KEY = "NoKey"


class ConnectorAuthType(BaseModel):
    """Credentials as stored by the platform for a merchant connector account."""
    auth_type: AuthType
    api_key: Optional[SecretStr] = None
    key1: Optional[str] = None  # BodyKey: JSON-encoded enhanced config


# Canonical models
class BillingAddress(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    def full_name(self) -> Optional[str]:
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts) or None


class PaymentsAuthorizeRequest(BaseModel):
    amount: int = Field(..., ge=0, description="Amount in minor units")
    currency: str = Field(..., min_length=3, max_length=3)
    reference_id: str = Field(..., min_length=1, description="Connector request reference id")
    connector_auth: ConnectorAuthType
    return_url: Optional[str] = None
    email: Optional[str] = None
    billing: Optional[BillingAddress] = None
    profile_name: str = "default"
    connector_metadata: Optional[Dict[str, Any]] = None


class PaymentsSyncRequest(BaseModel):
    connector_transaction_id: Optional[str] = None
    connector_auth: ConnectorAuthType
    reference_id: Optional[str] = None


class PaymentsCancelRequest(BaseModel):
    connector_transaction_id: Optional[str] = None
    connector_auth: ConnectorAuthType
    cancellation_reason: Optional[str] = None
    reference_id: Optional[str] = None


class RefundsRequest(BaseModel):
    connector_transaction_id: Optional[str] = None
    connector_auth: ConnectorAuthType
    refund_id: str = Field(..., min_length=1)
    refund_amount: int = Field(..., ge=0, description="Refund amount in minor units")
    currency: str = Field(..., min_length=3, max_length=3)
    reason: Optional[str] = None


class RefundSyncRequest(BaseModel):
    connector_refund_id: Optional[str] = None
    connector_auth: ConnectorAuthType
    refund_id: str = Field(..., min_length=1)


class RedirectForm(BaseModel):
    endpoint: str
    method: str = "GET"
    form_fields: Dict[str, str] = {}


class ErrorResponse(BaseModel):
    code: str
    message: str
    reason: Optional[str] = None
    status_code: int


class PaymentsResponse(BaseModel):
    status: AttemptStatus
    resource_id: Optional[str] = None
    redirection_data: Optional[RedirectForm] = None
    connector_reference_id: Optional[str] = None
    connector_metadata: Optional[Dict[str, Any]] = None
    error: Optional[ErrorResponse] = None


class RefundsResponse(BaseModel):
    refund_status: RefundStatus
    connector_refund_id: Optional[str] = None
    error: Optional[ErrorResponse] = None


class ConnectorBase(ABC):
    """
    Connector interface driven by the orchestration platform. Implementations
    should be side-effect free until the method makes a network call to the gateway.
    """

    @abstractmethod
    def authorize(self, request: PaymentsAuthorizeRequest) -> PaymentsResponse:
        """
        Authorize a payment. Hosted-page gateways return a pending status with
        redirection data.
        """
        raise NotImplementedError

    @abstractmethod
    def sync(self, request: PaymentsSyncRequest) -> PaymentsResponse:
        raise NotImplementedError

    @abstractmethod
    def capture(self, request: PaymentsSyncRequest, amount: int) -> PaymentsResponse:
        raise NotImplementedError

    @abstractmethod
    def void(self, request: PaymentsCancelRequest) -> PaymentsResponse:
        raise NotImplementedError

    @abstractmethod
    def refund(self, request: RefundsRequest) -> RefundsResponse:
        raise NotImplementedError

    @abstractmethod
    def refund_sync(self, request: RefundSyncRequest) -> RefundsResponse:
        raise NotImplementedError

    @abstractmethod
    def parse_webhook(self, headers: Dict[str, str], body: bytes) -> Dict[str, Any]:
        """
        Validate and canonicalize a gateway webhook payload; return a canonical event dict.
        """
        raise NotImplementedError
