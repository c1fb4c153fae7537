"""Typed failures raised by the gateway core.

These carry a human-readable message only. Mapping them to HTTP status
codes is the job of the API layer (see ``src.api.error_handlers``).
"""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    default_message = "An error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailure(GatewayError):
    """Caller input was rejected. Recoverable by correcting the request."""


class InvalidWallet(ValidationFailure):
    default_message = "Valid wallet address is required"


class MissingDateRange(ValidationFailure):
    default_message = "Both start and end dates are required (YYYY-MM-DD)"


class InvalidDateFormat(ValidationFailure):
    default_message = "Invalid date format. Use YYYY-MM-DD"


class InvalidDateValue(ValidationFailure):
    default_message = "Invalid date object"


class RangeOrderError(ValidationFailure):
    default_message = "End date must be after start date"


class FutureStartDate(ValidationFailure):
    default_message = "Start date cannot be in the future"


class RangeTooLarge(ValidationFailure):
    default_message = "Date range is too large"

    def __init__(self, max_days: int | None = None):
        message = None
        if max_days is not None:
            message = f"Date range cannot exceed {max_days} days"
        super().__init__(message)
        self.max_days = max_days


class InvalidInsightRequest(ValidationFailure):
    default_message = "Invalid insight request"


class TokenNotFoundError(GatewayError):
    """Raised when the market data provider does not know a token."""

    def __init__(self, token_id: str):
        self.token_id = token_id
        super().__init__(f"Token '{token_id}' not found on CoinGecko")


class UpstreamServiceError(GatewayError):
    """Raised when an external provider fails or is unreachable."""

    default_message = "Upstream service unavailable"
