from currency_converter.domain.conversions import ConversionRecord, ConversionRequest
from currency_converter.domain.exchange_rates import ExchangeRate, ExchangeRateSource
from currency_converter.domain.fields import (
    ERROR_MARKER,
    LOADING_PLACEHOLDER,
    ZERO_SENTINEL,
    AmountField,
)
from currency_converter.domain.value_objects import Currency, FieldRole

__all__ = [
    "ERROR_MARKER",
    "LOADING_PLACEHOLDER",
    "ZERO_SENTINEL",
    "AmountField",
    "ConversionRecord",
    "ConversionRequest",
    "Currency",
    "ExchangeRate",
    "ExchangeRateSource",
    "FieldRole",
]
