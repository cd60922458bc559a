# pyright: reportMissingImports=false

"""NiceGUI entry point and routing."""

from __future__ import annotations

from typing import Any

import httpx

from currency_converter.logging_config import get_logger
from currency_converter.ui.api_client import APIError, ConverterAPIClient
from currency_converter.ui.constants import CURRENCY_OPTIONS, currency_options

logger = get_logger(__name__)


def _require_nicegui() -> Any:
    try:
        from nicegui import ui
    except ImportError as e:  # pragma: no cover
        raise ImportError(
            "NiceGUI is required for the frontend. Install with 'currency-converter[frontend]'."
        ) from e
    return ui


async def load_currency_options(client: ConverterAPIClient) -> list[dict[str, str]]:
    """Ask the API for its currencies, falling back to the built-in list."""
    try:
        return currency_options(await client.list_currencies())
    except (APIError, httpx.HTTPError) as e:
        logger.warning("currency_list_unavailable", error=str(e))
        return CURRENCY_OPTIONS


def add_global_styles() -> None:
    ui = _require_nicegui()
    ui.add_head_html(
        """
<style type="text/tailwindcss">
  @layer components {
    .converter-page {
      @apply bg-slate-50 min-h-screen;
    }
  }
</style>
"""
    )


def create_ui() -> None:
    ui = _require_nicegui()

    from nicegui import Client

    from currency_converter.ui.api_client import api
    from currency_converter.ui.pages import converter

    @ui.page("/")  # type: ignore[untyped-decorator]
    async def index(client: Client) -> None:
        options = await load_currency_options(api)
        add_global_styles()
        with ui.column().classes("converter-page w-full"):  # noqa: SIM117
            with ui.column().classes("max-w-[560px] w-full mx-auto p-6 gap-4"):
                converter.render(client, api, options)


def run(
    *,
    port: int = 8080,
    api_url: str = "http://localhost:3000",
    reload: bool = False,
    storage_secret: str = "currency-converter",
) -> None:
    ui = _require_nicegui()

    from currency_converter.ui.api_client import api

    api.set_base_url(api_url)

    create_ui()
    ui.run(
        title="Currency Converter",
        port=port,
        reload=reload,
        storage_secret=storage_secret,
    )
