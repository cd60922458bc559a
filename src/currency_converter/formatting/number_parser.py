"""Parse amounts typed in either Brazilian (1.234,56) or American (1234.56) style."""

from __future__ import annotations

import math
import re

# Longest leading decimal literal, as accepted by a browser's parseFloat.
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_float_prefix(text: str) -> float:
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def normalize_amount_text(text: str) -> str:
    """Rewrite amount text so that ``.`` is the only (decimal) separator.

    A comma means Brazilian notation: dots are thousands separators and the
    first comma is the decimal point. Without a comma, dots are guessed:
    several dots are grouping (``1.234.567``), a single dot followed by at
    most two digits is a decimal point (``1234.5``), and a single dot followed
    by three or more digits is grouping again (``1.234``).
    """
    clean = text.strip()
    if "," in clean:
        return clean.replace(".", "").replace(",", ".", 1)

    segments = clean.split(".")
    if len(segments) > 2:
        return clean.replace(".", "")
    if len(segments) == 2 and len(segments[1]) > 2:
        return clean.replace(".", "")
    return clean


def parse_amount(text: str | None) -> float:
    """Parse free-form amount text into a plain number.

    Never raises: empty, missing or unparseable input yields ``0.0``.

    Examples:
        >>> parse_amount("1.234,56")
        1234.56
        >>> parse_amount("1.234.567")
        1234567.0
        >>> parse_amount("1234.5")
        1234.5
        >>> parse_amount("abc")
        0.0
    """
    if not text:
        return 0.0
    clean = normalize_amount_text(str(text))
    if not clean:
        return 0.0
    return _parse_float_prefix(clean)
