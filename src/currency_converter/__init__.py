from currency_converter.domain.conversions import ConversionRequest
from currency_converter.domain.fields import AmountField
from currency_converter.domain.value_objects import Currency, FieldRole
from currency_converter.formatting import FormatResult, display, parse_amount, reformat

__all__ = [
    "AmountField",
    "ConversionRequest",
    "Currency",
    "FieldRole",
    "FormatResult",
    "display",
    "parse_amount",
    "reformat",
]

__version__ = "0.1.0"
