"""Per-client rate limiting for the form endpoint."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from currency_converter.config import get_settings

limiter = Limiter(key_func=get_remote_address, strategy="fixed-window")


def form_rate_limit() -> str:
    """Limit for ``POST /converter``, read from settings on every request."""
    settings = get_settings()
    return (
        f"{settings.rate_limit_max_requests}/"
        f"{settings.rate_limit_window_seconds} seconds"
    )
