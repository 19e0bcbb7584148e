# wave_adapter package
__version__ = "0.1.0"

from .errors import (
    ConnectorError,
    RequestEncodingFailed,
    ResponseDeserializationFailed,
    InvalidConnectorConfig,
    InvalidConfiguration,
    ProcessingStepFailed,
    MerchantNotFound,
    AuthenticationFailed,
    RateLimitExceeded,
    MissingConnectorTransactionID,
    FailedToObtainAuthType,
    FlowNotImplemented,
    WebhooksNotImplemented,
)
from .config import WaveConfig
from .transport import HttpRequest, HttpResponse, Transport, HttpxTransport

# Connectors
from .connectors import (
    ConnectorBase,
    AttemptStatus,
    RefundStatus,
    ConnectorAuthType,
    AuthType,
    PaymentsAuthorizeRequest,
    PaymentsSyncRequest,
    PaymentsCancelRequest,
    RefundsRequest,
    RefundSyncRequest,
    PaymentsResponse,
    RefundsResponse,
    ErrorResponse,
    WaveConnector,
    WaveAuthConfig,
)
from .connectors.wave.aggregated_merchants import (
    AggregatedMerchantService,
    AggregatedMerchantResolver,
    ConnectorMetadata,
    FallbackStrategy,
    SingleFlight,
)
from .simulator import WaveSimulator, SimulatorConfig, SimulatorScenario
