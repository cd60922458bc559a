"""UI constants for the converter page."""

from __future__ import annotations

from typing import Final

from currency_converter.domain.value_objects import Currency

CURRENCY_OPTIONS: Final[list[dict[str, str]]] = [
    {"value": c.value, "label": f"{c.value} - {c.display_name}", "symbol": c.symbol}
    for c in Currency
]



def currency_options(currencies: list[dict[str, str]]) -> list[dict[str, str]]:
    """Build picker options from ``GET /api/currencies`` entries."""
    return [
        {"value": c["code"], "label": f"{c['code']} - {c['name']}", "symbol": c["symbol"]}
        for c in currencies
    ]


# Tailwind class constants
CARD: Final[str] = (
    "bg-white dark:bg-slate-800 rounded-lg shadow-sm border border-slate-200"
)
CARD_PAD: Final[str] = "p-6"

SYMBOL_BADGE: Final[str] = (
    "text-2xl font-semibold text-blue-600 w-12 text-center select-none"
)
AMOUNT_INPUT: Final[str] = "text-xl w-full"
CURRENCY_LABEL: Final[str] = (
    "cursor-pointer font-mono text-slate-700 dark:text-slate-200 hover:text-blue-600"
)

LOADING: Final[str] = "opacity-50"
