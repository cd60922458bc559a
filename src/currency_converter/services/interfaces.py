from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from currency_converter.domain.exchange_rates import ExchangeRate


class RateGateway(ABC):
    """Supplies the multiplier that turns one unit of ``from`` into ``to``."""

    @abstractmethod
    async def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        """Return the current rate; raise on network, timeout or unknown currency."""


class ExchangeRateService(RateGateway):
    @abstractmethod
    async def get_rate(self, from_currency: str, to_currency: str) -> ExchangeRate:
        pass

    @abstractmethod
    def clear_cache(self) -> None:
        pass

    async def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        rate = await self.get_rate(from_currency, to_currency)
        return rate.rate


class AmountFieldView(Protocol):
    """Text surface the conversion controller renders one amount field into."""

    def set_text(self, text: str) -> None: ...

    def set_cursor(self, index: int) -> None: ...

    def set_readonly(self, readonly: bool) -> None: ...

    def set_loading(self, loading: bool) -> None: ...

    def set_currency(self, code: str) -> None: ...

    def focus(self) -> None: ...


class SymbolView(Protocol):
    """Badge showing the origin currency symbol."""

    def set_symbol(self, symbol: str) -> None: ...
