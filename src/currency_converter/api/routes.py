"""API routes for the currency converter."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request
from starlette.concurrency import run_in_threadpool

from currency_converter.api.limiter import form_rate_limit, limiter
from currency_converter.api.schemas import (
    ConversionLogEntry,
    ConverterFormResponse,
    ConvertResponse,
    CurrencyResponse,
    HealthResponse,
    RateCheckResponse,
    RateResponse,
)
from currency_converter.config import get_settings
from currency_converter.container import get_conversion_log, get_rate_service
from currency_converter.domain.conversions import ConversionRecord, ConversionRequest
from currency_converter.domain.value_objects import Currency
from currency_converter.exceptions import (
    CurrencyConverterError,
    InvalidAmountError,
    UnsupportedCurrencyError,
)
from currency_converter.formatting import display, parse_amount
from currency_converter.logging_config import get_logger
from currency_converter.repositories.interfaces import ConversionLogRepository
from currency_converter.services.exchange_rates import ExchangeRateServiceImpl

logger = get_logger(__name__)

# Create routers
health_router = APIRouter(tags=["health"])
currency_router = APIRouter(prefix="/api", tags=["currency"])
converter_router = APIRouter(tags=["converter"])
log_router = APIRouter(tags=["logs"])

RateServiceDep = Annotated[ExchangeRateServiceImpl, Depends(get_rate_service)]
ConversionLogDep = Annotated[ConversionLogRepository, Depends(get_conversion_log)]

EXAMPLE_AMOUNTS = (1, 100, 1000, 100000)


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _require_currency(code: str) -> Currency:
    if not Currency.is_supported(code):
        raise UnsupportedCurrencyError(code)
    return Currency(code)


def _missing_parameters() -> CurrencyConverterError:
    return CurrencyConverterError(
        "Required parameters", error_code="MISSING_PARAMETERS", status_code=400
    )


def _require_pair(
    from_currency: str | None, to_currency: str | None
) -> tuple[Currency, Currency]:
    if not from_currency or not to_currency:
        raise _missing_parameters()
    return _require_currency(from_currency), _require_currency(to_currency)


def _parse_positive(amount: str) -> float:
    try:
        value = float(amount)
    except ValueError as e:
        raise InvalidAmountError(amount) from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmountError(amount)
    return value


async def _record_conversion(
    log: ConversionLogRepository, record: ConversionRecord
) -> None:
    # A failed log write must never fail the conversion itself.
    try:
        await run_in_threadpool(log.add, record)
    except OSError as e:
        logger.error("conversion_log_write_failed", error=str(e))


# Health endpoint
@health_router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=get_settings().app_version)


# Currency endpoints
@currency_router.get("/currencies", response_model=list[CurrencyResponse])
def list_currencies() -> list[CurrencyResponse]:
    """List the supported currencies."""
    return [
        CurrencyResponse(code=c.value, name=c.display_name, symbol=c.symbol)
        for c in Currency
    ]


@currency_router.get("/rate", response_model=RateResponse)
async def get_rate(
    rate_service: RateServiceDep,
    from_currency: Annotated[str | None, Query(alias="from")] = None,
    to_currency: Annotated[str | None, Query(alias="to")] = None,
) -> RateResponse:
    """Get the rate converting one unit of ``from`` into ``to``."""
    source, target = _require_pair(from_currency, to_currency)
    rate = await rate_service.get_rate(source.value, target.value)
    return RateResponse(
        from_currency=rate.from_currency,
        to_currency=rate.to_currency,
        rate=rate.rate,
        source=rate.source.value,
    )


@currency_router.get("/convert", response_model=ConvertResponse)
async def convert(
    request: Request,
    rate_service: RateServiceDep,
    conversion_log: ConversionLogDep,
    from_currency: Annotated[str | None, Query(alias="from")] = None,
    to_currency: Annotated[str | None, Query(alias="to")] = None,
    amount: str | None = None,
) -> ConvertResponse:
    """Convert a canonical amount (``1234.56``) between two currencies."""
    if not amount:
        raise _missing_parameters()
    source, target = _require_pair(from_currency, to_currency)
    value = _parse_positive(str(amount))

    conversion = ConversionRequest(from_currency=source, to_currency=target, amount=value)
    if conversion.is_identity:
        return ConvertResponse(result=value, rate=1.0)

    record = await rate_service.convert(conversion)
    await _record_conversion(
        conversion_log,
        ConversionRecord(
            from_currency=record.from_currency,
            to_currency=record.to_currency,
            amount=record.amount,
            result=record.result,
            rate=record.rate,
            ip=_client_ip(request),
        ),
    )
    logger.info(
        "conversion_completed",
        from_currency=record.from_currency,
        to_currency=record.to_currency,
        amount=record.amount,
        rate=record.rate,
    )
    return ConvertResponse(result=record.result, rate=record.rate)


# Form fallback endpoint
@converter_router.post(
    "/converter",
    response_model=ConverterFormResponse,
)
@limiter.limit(form_rate_limit)
async def submit_converter_form(
    request: Request,
    rate_service: RateServiceDep,
    conversion_log: ConversionLogDep,
    origin_currency: Annotated[str | None, Form(alias="originCurrency")] = None,
    destination_currency: Annotated[str | None, Form(alias="destinationCurrency")] = None,
    value: Annotated[str | None, Form()] = None,
) -> ConverterFormResponse:
    """Convert a typed amount submitted from a plain HTML form.

    Validation and upstream problems are reported in ``error`` rather than
    as HTTP errors so the page can show them inline.
    """
    response = ConverterFormResponse(
        origin_currency=origin_currency,
        destination_currency=destination_currency,
        value=value,
    )
    if not origin_currency or not destination_currency or not value:
        response.error = "All fields are required."
        return response
    if not Currency.is_supported(origin_currency) or not Currency.is_supported(
        destination_currency
    ):
        response.error = "Unsupported currency."
        return response

    amount = parse_amount(value)
    if amount <= 0:
        response.error = "Value must be a positive number."
        return response

    if origin_currency == destination_currency:
        response.result = amount
        response.formatted_result = display(amount)
        response.error = "Same currencies selected."
        return response

    conversion = ConversionRequest(
        from_currency=Currency(origin_currency),
        to_currency=Currency(destination_currency),
        amount=amount,
    )
    try:
        record = await rate_service.convert(conversion)
    except CurrencyConverterError as e:
        logger.warning("form_conversion_failed", error=e.message)
        response.error = e.message
        return response

    await _record_conversion(
        conversion_log,
        ConversionRecord(
            from_currency=record.from_currency,
            to_currency=record.to_currency,
            amount=record.amount,
            result=record.result,
            rate=record.rate,
            ip=_client_ip(request),
        ),
    )
    response.result = record.result
    response.formatted_result = display(record.result)
    return response


# Conversion log endpoints
@log_router.get("/logs", response_model=list[ConversionLogEntry])
def list_logs(
    conversion_log: ConversionLogDep,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[ConversionLogEntry]:
    """Return the retained conversions, oldest first."""
    return [
        ConversionLogEntry.model_validate(record)
        for record in conversion_log.list_recent(limit)
    ]


@log_router.get("/test-rate/{from_currency}/{to_currency}", response_model=RateCheckResponse)
async def test_rate(
    from_currency: str,
    to_currency: str,
    rate_service: RateServiceDep,
) -> RateCheckResponse:
    """Show a live rate with sample conversions."""
    rate = await rate_service.get_rate(from_currency.upper(), to_currency.upper())
    return RateCheckResponse(
        from_currency=rate.from_currency,
        to_currency=rate.to_currency,
        rate=rate.rate,
        examples={str(n): n * rate.rate for n in EXAMPLE_AMOUNTS},
    )
