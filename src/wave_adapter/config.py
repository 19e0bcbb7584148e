"""Static configuration for the Wave adapter."""

from dataclasses import dataclass

WAVE_BASE_URL = "https://api.wave.com/"

# Error body placeholders used when the gateway gives nothing usable.
NO_ERROR_CODE = "No error code"
NO_ERROR_MESSAGE = "No error message"

DEFAULT_CACHE_TTL_SECONDS = 3600
MIN_CACHE_TTL_SECONDS = 60
MAX_CACHE_TTL_SECONDS = 86400


@dataclass
class WaveConfig:
    """Connector behaviour that is not part of the merchant's credentials."""
    base_url: str = WAVE_BASE_URL
    timeout_seconds: float = 30.0
    validation_attempts: int = 3
    validation_backoff_seconds: float = 0.1  # 100ms * 2^(attempt-1)
    validation_backoff_max_seconds: float = 2.0
