"""Amount parsing and Brazilian-style formatting."""

from currency_converter.formatting.live_formatter import (
    FormatResult,
    display,
    group_thousands,
    reformat,
)
from currency_converter.formatting.number_parser import (
    normalize_amount_text,
    parse_amount,
)

__all__ = [
    "FormatResult",
    "display",
    "group_thousands",
    "normalize_amount_text",
    "parse_amount",
    "reformat",
]
