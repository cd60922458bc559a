"""Live Brazilian-style formatting for amount inputs.

``reformat`` runs on every keystroke against the raw field text; ``display``
renders numbers that come back from a rate lookup.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from currency_converter.domain.fields import ZERO_SENTINEL

_NOT_DIGIT_OR_COMMA = re.compile(r"[^0-9,]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")
_CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class FormatResult:
    text: str
    cursor: int
    changed: bool = False


def group_thousands(digits: str) -> str:
    """Insert ``.`` every three digits from the right."""
    return _THOUSANDS.sub(".", digits)


def reformat(current_text: str, cursor_index: int) -> FormatResult:
    """Reformat typed text into grouped display form.

    Anything but digits and commas is dropped, the integer part is grouped
    with dots and at most two decimals are kept after the comma. An empty
    field, or one with no integer digits yet (",5"), is left alone so the
    user can keep typing. When the text changes the cursor moves to the end.

    Examples:
        >>> reformat("1000", 4).text
        '1.000'
        >>> reformat("1234,567", 8).text
        '1.234,56'
    """
    unchanged = FormatResult(text=current_text, cursor=cursor_index)

    clean = _NOT_DIGIT_OR_COMMA.sub("", current_text)
    if not clean:
        return unchanged

    parts = clean.split(",")
    integer_part = parts[0]
    decimal_part = parts[1] if len(parts) > 1 else None
    if not integer_part:
        return unchanged

    formatted = group_thousands(integer_part)
    if decimal_part is not None:
        formatted += "," + decimal_part[:2]

    if formatted == current_text:
        return unchanged
    return FormatResult(text=formatted, cursor=len(formatted), changed=True)


def display(value: float | None) -> str:
    """Render a number as ``1.234,56`` with exactly two decimals."""
    if value is None or not math.isfinite(value):
        return ZERO_SENTINEL
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # Room for every integer digit plus the cents.
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        amount = exact.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if amount == 0:
        return ZERO_SENTINEL
    formatted = f"{amount:,.2f}"
    return formatted.replace(",", "X").replace(".", ",").replace("X", ".")
