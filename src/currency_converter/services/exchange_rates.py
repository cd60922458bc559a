"""Exchange rates from the upstream provider with a short-lived in-memory cache."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, replace

import httpx

from currency_converter.domain.conversions import ConversionRecord, ConversionRequest
from currency_converter.domain.exchange_rates import ExchangeRate, ExchangeRateSource
from currency_converter.exceptions import (
    ExchangeRateUnavailableError,
    UnsupportedCurrencyError,
)
from currency_converter.logging_config import get_logger
from currency_converter.services.interfaces import ExchangeRateService

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _CachedRate:
    rate: ExchangeRate
    stored_at: float


class ExchangeRateServiceImpl(ExchangeRateService):
    """Looks rates up at ``{base_url}/{from}`` and reads ``rates[to]``.

    Rates are cached per pair for ``cache_ttl`` seconds. The cache is only
    filled on success, so a failed lookup is retried by the next caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = "https://api.exchangerate-api.com/v4/latest",
        timeout: float = 5.0,
        cache_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._cache_ttl = cache_ttl
        self._clock = clock
        self._cache: dict[str, _CachedRate] = {}

    async def aclose(self) -> None:
        await self._client.aclose()

    def clear_cache(self) -> None:
        self._cache.clear()

    def _cached(self, key: str) -> ExchangeRate | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self._cache_ttl:
            del self._cache[key]
            return None
        return entry.rate

    async def get_rate(self, from_currency: str, to_currency: str) -> ExchangeRate:
        if from_currency == to_currency:
            return ExchangeRate.identity(from_currency)

        key = f"{from_currency}-{to_currency}"
        cached = self._cached(key)
        if cached is not None:
            logger.debug("rate_cache_hit", pair=key, rate=cached.rate)
            return replace(cached, source=ExchangeRateSource.CACHE)

        url = f"{self._base_url}/{from_currency}"
        try:
            response = await self._client.get(url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("rate_fetch_failed", pair=key, error=str(e))
            raise ExchangeRateUnavailableError(from_currency, to_currency) from e

        rates = payload.get("rates") if isinstance(payload, dict) else None
        value = rates.get(to_currency) if isinstance(rates, dict) else None
        if not value:
            logger.warning("rate_not_published", pair=key)
            raise UnsupportedCurrencyError(
                to_currency, f"Exchange rate not found for {to_currency}"
            )

        rate = ExchangeRate(
            from_currency=from_currency,
            to_currency=to_currency,
            rate=float(value),
            source=ExchangeRateSource.API,
        )
        self._cache[key] = _CachedRate(rate=rate, stored_at=self._clock())
        logger.info("rate_fetched", pair=key, rate=rate.rate)
        return rate

    async def convert(self, request: ConversionRequest) -> ConversionRecord:
        """Convert ``request.amount``; identical currencies convert at rate 1."""
        rate = await self.get_rate(
            request.from_currency.value, request.to_currency.value
        )
        return ConversionRecord(
            from_currency=request.from_currency.value,
            to_currency=request.to_currency.value,
            amount=request.amount,
            result=rate.convert(request.amount),
            rate=rate.rate,
        )
