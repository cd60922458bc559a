from currency_converter.services.conversion_controller import ConversionController
from currency_converter.services.exchange_rates import ExchangeRateServiceImpl
from currency_converter.services.interfaces import (
    AmountFieldView,
    ExchangeRateService,
    RateGateway,
    SymbolView,
)
from currency_converter.services.scheduling import SingleSlotTimer, TaskTracker

__all__ = [
    "AmountFieldView",
    "ConversionController",
    "ExchangeRateService",
    "ExchangeRateServiceImpl",
    "RateGateway",
    "SingleSlotTimer",
    "SymbolView",
    "TaskTracker",
]
