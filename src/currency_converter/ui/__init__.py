"""NiceGUI-based web UI for the currency converter.

This package is intentionally optional: it requires the `frontend` extra.
Importing `currency_converter.ui` should not eagerly import NiceGUI.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
