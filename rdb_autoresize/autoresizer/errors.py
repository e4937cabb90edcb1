"""Error types for the autoresizer.

Fatal errors stop the process. Cycle errors abandon the current cycle only;
the scheduler logs them and carries on with the next tick.
"""

from rdb_autoresize.shared.units import format_size


class AutoResizeError(Exception):
    """Base class for all autoresizer errors."""

    pass


class FatalError(AutoResizeError):
    """Raised when no further progress is possible; the process must exit."""

    pass


class ConfigError(FatalError):
    """Raised when the configuration is missing or invalid."""

    pass


class PreflightError(FatalError):
    """Raised when the startup checks on the instance fail."""

    pass


class CycleError(AutoResizeError):
    """Raised when a single evaluation cycle has to be abandoned."""

    pass


class MalformedMetricError(CycleError):
    """Raised when the usage metric does not have exactly one data point."""

    pass


class ProviderQueryError(CycleError):
    """Raised when a provider call fails or times out."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        reason = str(cause) or cause.__class__.__name__
        super().__init__(f"{operation} failed: {reason}")


class ResizeRequestError(CycleError):
    """Raised when the provider rejects or fails the resize request."""

    def __init__(self, target_bytes: int, cause: Exception):
        self.target_bytes = target_bytes
        self.cause = cause
        reason = str(cause) or cause.__class__.__name__
        super().__init__(f"resize to {format_size(target_bytes)} failed: {reason}")


class RejectionError(CycleError):
    """Raised when a resize was warranted but is not allowed."""

    pass


class PreconditionError(RejectionError):
    """Raised when the instance is not eligible for an online resize."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"instance not eligible for resize: {field}={value}")


class LimitExceededError(RejectionError):
    """Raised when the target size would exceed the configured ceiling."""

    def __init__(self, target_bytes: int, limit_bytes: int):
        self.target_bytes = target_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"target size {format_size(target_bytes)} exceeds limit {format_size(limit_bytes)}"
        )


class FatalRejectionError(FatalError):
    """Raised for a rejection when the rejection policy is ``exit``."""

    def __init__(self, rejection: RejectionError):
        self.rejection = rejection
        super().__init__(str(rejection))
