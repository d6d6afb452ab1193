"""Project-wide exception types."""

class MarketRegimeError(Exception):
    """Base exception for all engine errors."""


class ConfigError(MarketRegimeError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""


class InvalidRangeError(ConfigValidationError):
    """Raised when the symbol is empty or the start date is after the end date."""


class DegenerateRangeError(MarketRegimeError):
    """Raised when a date range contains no trading days to simulate."""


class MetricUndefinedError(MarketRegimeError):
    """Raised when a summary metric cannot be computed from the series."""


class SchemaError(MarketRegimeError):
    """Raised when schema validation fails."""


class DependencyError(MarketRegimeError):
    """Raised when required dependencies are missing or incompatible."""


class ReportingServiceError(MarketRegimeError):
    """Raised when the text-generation service fails or returns unusable text."""

    def __init__(self, status: int | None, message: str) -> None:
        self.status = status
        self.message = message
        label = f"HTTP {status}" if status is not None else "transport"
        super().__init__(f"Reporting service error ({label}): {message}")
