"""Pydantic v2 schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str
    version: str | None = None


# Currency Schemas
class CurrencyResponse(BaseModel):
    """A supported currency."""

    code: str
    name: str
    symbol: str


class RateResponse(BaseModel):
    """Rate converting one unit of ``from_currency`` into ``to_currency``."""

    from_currency: str
    to_currency: str
    rate: float
    source: str


class ConvertResponse(BaseModel):
    """Schema for the live conversion endpoint."""

    result: float
    rate: float


class RateCheckResponse(BaseModel):
    """Rate plus sample conversions, for manual checks."""

    from_currency: str
    to_currency: str
    rate: float
    examples: dict[str, float]


# Form fallback Schemas
class ConverterFormResponse(BaseModel):
    """Outcome of the non-JavaScript conversion form."""

    model_config = ConfigDict(populate_by_name=True)

    origin_currency: str | None = Field(default=None, alias="originCurrency")
    destination_currency: str | None = Field(default=None, alias="destinationCurrency")
    value: str | None = None
    result: float | None = None
    formatted_result: str | None = None
    error: str | None = None


# Conversion log Schemas
class ConversionLogEntry(BaseModel):
    """One retained conversion."""

    model_config = ConfigDict(from_attributes=True)

    timestamp: datetime
    from_currency: str
    to_currency: str
    amount: float
    result: float
    rate: float
    ip: str | None = None
