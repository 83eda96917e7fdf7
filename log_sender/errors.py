"""Error taxonomy for the log sender pipeline."""


class LogSenderError(Exception):
    """Base class for all log sender errors."""


class ConfigError(LogSenderError):
    """Raised when configuration values are invalid or unreadable."""


class SourceUnavailable(LogSenderError):
    """Raised when the input log file cannot be opened. Fatal for the run."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Log file {path} unavailable: {reason}")
        self.path = path
        self.reason = reason


class MalformedTimestamp(LogSenderError):
    """Raised when a line matches the grammar but its date-time is impossible."""

    def __init__(self, value: str):
        super().__init__(f"Malformed timestamp: {value!r}")
        self.value = value


class DeliveryFailure(LogSenderError):
    """Raised when an event could not be delivered to the ingestion endpoint."""
