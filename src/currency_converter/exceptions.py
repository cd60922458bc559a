"""Exception hierarchy for the currency converter.

All application exceptions inherit from CurrencyConverterError so the API
can render any of them with a single handler while callers still catch the
specific types they care about.
"""

import math
from typing import Any


class CurrencyConverterError(Exception):
    """Base exception for all currency converter errors.

    Carries an error_code and HTTP status for API responses plus extra context.
    """

    error_code: str = "CONVERTER_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


# =============================================================================
# Input Errors
# =============================================================================


class UnsupportedCurrencyError(CurrencyConverterError):
    """Raised when a currency code is not supported or has no published rate."""

    error_code = "UNSUPPORTED_CURRENCY"
    status_code = 400

    def __init__(self, currency: str, message: str | None = None) -> None:
        super().__init__(
            message or "Unsupported currency",
            context={"currency": currency},
        )


class InvalidAmountError(CurrencyConverterError):
    """Raised when an amount is missing, non-numeric or not positive."""

    error_code = "INVALID_AMOUNT"
    status_code = 400

    def __init__(self, amount: Any) -> None:
        super().__init__("Invalid value", context={"amount": str(amount)})


# =============================================================================
# Rate Errors
# =============================================================================


class ExchangeRateUnavailableError(CurrencyConverterError):
    """Raised when the upstream rate provider cannot supply a rate."""

    error_code = "EXCHANGE_RATE_UNAVAILABLE"
    status_code = 502

    def __init__(
        self,
        from_currency: str,
        to_currency: str,
        message: str = "Error getting exchange rate. Try again.",
    ) -> None:
        super().__init__(
            message,
            context={"from_currency": from_currency, "to_currency": to_currency},
        )


class RateLimitExceededError(CurrencyConverterError):
    """Raised when a client exceeds the request budget for a window."""

    error_code = "RATE_LIMIT_EXCEEDED"
    status_code = 429

    def __init__(self, client: str, retry_after: float) -> None:
        super().__init__(
            "Too many requests. Try again in 1 minute.",
            context={"client": client, "retry_after": math.ceil(retry_after)},
        )
        self.retry_after = retry_after
