"""Core functionality - configuration, exceptions, bounded retry."""

from mtd085zb.core.config import (
    EXPECTED_MANUFACTURER_NAME,
    EXPECTED_MODEL_ID,
    MAX_RETRIES,
    RETRY_DELAY_MS,
    EnrollmentMode,
    SensorConfig,
)
from mtd085zb.core.exceptions import (
    ClusterUnavailableError,
    ConfigurationError,
    ManifestError,
    OperationFailedError,
    PresenceSensorError,
)
from mtd085zb.core.retry import (
    AttemptResult,
    RetryOutcome,
    run_with_retry,
    run_with_retry_async,
)

__all__ = [
    # Config
    "EXPECTED_MODEL_ID",
    "EXPECTED_MANUFACTURER_NAME",
    "MAX_RETRIES",
    "RETRY_DELAY_MS",
    "EnrollmentMode",
    "SensorConfig",
    # Exceptions
    "PresenceSensorError",
    "ConfigurationError",
    "ClusterUnavailableError",
    "ManifestError",
    "OperationFailedError",
    # Retry
    "AttemptResult",
    "RetryOutcome",
    "run_with_retry",
    "run_with_retry_async",
]
