from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from currency_converter.config import get_settings
from currency_converter.repositories.json_file import JsonConversionLogRepository
from currency_converter.services.exchange_rates import ExchangeRateServiceImpl

from fakes import FakeClock, upstream_handler

UPSTREAM_URL = "https://rates.test/v4/latest"


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_rate_service(
    fake_clock: FakeClock,
) -> Callable[..., ExchangeRateServiceImpl]:
    """Build a rate service whose upstream is an httpx.MockTransport."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] = upstream_handler,
        cache_ttl: float = 300.0,
    ) -> ExchangeRateServiceImpl:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ExchangeRateServiceImpl(
            client,
            base_url=UPSTREAM_URL,
            cache_ttl=cache_ttl,
            clock=fake_clock,
        )

    return _make


@pytest.fixture
def conversion_log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "conversions.json"


@pytest.fixture
def conversion_log(conversion_log_path: Path) -> JsonConversionLogRepository:
    return JsonConversionLogRepository(conversion_log_path, max_entries=100)


@pytest.fixture
def form_limiter(monkeypatch: pytest.MonkeyPatch):
    """Allow three form submissions per minute with fresh counters."""
    from currency_converter.api.limiter import limiter

    monkeypatch.setenv("CC_RATE_LIMIT_MAX_REQUESTS", "3")
    get_settings.cache_clear()
    limiter.reset()
    yield limiter
    limiter.reset()
    get_settings.cache_clear()


@pytest.fixture
def api_app(make_rate_service, conversion_log, form_limiter):
    """FastAPI app wired to the mock upstream and a temporary conversion log."""
    from currency_converter.api.app import create_app
    from currency_converter.container import get_conversion_log, get_rate_service

    app = create_app()
    rate_service = make_rate_service()

    app.dependency_overrides[get_rate_service] = lambda: rate_service
    app.dependency_overrides[get_conversion_log] = lambda: conversion_log
    return app
