"""Custom exception hierarchy for presence sensor operations."""

from __future__ import annotations


class PresenceSensorError(Exception):
    """Base exception for all presence sensor errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class OperationFailedError(PresenceSensorError):
    """An attempt reported failure without supplying its own error."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__("Operation failed", details)


class ConfigurationError(PresenceSensorError):
    """Sensor configuration could not be completed."""

    pass


class ClusterUnavailableError(ConfigurationError):
    """The IAS Zone cluster is missing on the expected endpoint."""

    def __init__(self, endpoint_id: int, details: str | None = None) -> None:
        self.endpoint_id = endpoint_id
        message = f"IAS Zone cluster not available on endpoint {endpoint_id}"
        super().__init__(message, details)


class ManifestError(PresenceSensorError):
    """App descriptor or locale resource could not be loaded."""

    pass
