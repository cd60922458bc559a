"""Exchange rate domain model for currency conversion."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class ExchangeRateSource(str, Enum):
    """Where a rate came from."""

    API = "api"
    CACHE = "cache"
    IDENTITY = "identity"


def _utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """Immutable exchange rate value object.

    ``rate`` converts one unit of ``from_currency`` into ``to_currency``.
    """

    from_currency: str
    to_currency: str
    rate: float
    source: ExchangeRateSource = ExchangeRateSource.API
    fetched_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate and coerce rate to float."""
        if not isinstance(self.rate, float):
            object.__setattr__(self, "rate", float(self.rate))
        if self.rate <= 0:
            raise ValueError(f"Exchange rate must be positive, got {self.rate}")

    @classmethod
    def identity(cls, currency: str) -> "ExchangeRate":
        """Rate of a currency against itself."""
        return cls(
            from_currency=currency,
            to_currency=currency,
            rate=1.0,
            source=ExchangeRateSource.IDENTITY,
        )

    def convert(self, amount: float) -> float:
        return amount * self.rate
