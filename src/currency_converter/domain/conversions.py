"""Conversion request and log record models."""

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

from currency_converter.domain.value_objects import Currency


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """A single conversion attempt; built per request and never stored."""

    from_currency: Currency
    to_currency: Currency
    amount: float

    @property
    def is_identity(self) -> bool:
        return self.from_currency == self.to_currency


@dataclass(frozen=True, slots=True)
class ConversionRecord:
    """A completed conversion as written to the conversion log."""

    from_currency: str
    to_currency: str
    amount: float
    result: float
    rate: float
    ip: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversionRecord":
        return cls(
            from_currency=str(data["from_currency"]),
            to_currency=str(data["to_currency"]),
            amount=float(data["amount"]),
            result=float(data["result"]),
            rate=float(data["rate"]),
            ip=data.get("ip"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )
