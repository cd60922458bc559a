# pyright: reportMissingImports=false

"""Currency picker dialog."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from nicegui import ui  # pyright: ignore[reportMissingImports]

from currency_converter.ui.constants import CURRENCY_OPTIONS


def currency_dialog(
    options: list[dict[str, str]] | None = None,
    *,
    on_select: Callable[[str], Any],
    on_close: Callable[[], None] | None = None,
) -> Any:
    """Build a dialog listing ``options``, every supported currency by default.

    ``on_select`` receives the chosen code. ``on_close`` runs whenever the
    dialog is dismissed, including after a selection.
    """
    with ui.dialog() as dialog, ui.card().classes("w-[22rem]"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Select currency").classes("text-lg font-semibold")
            ui.button(icon="close", on_click=dialog.close).props("flat round")

        with ui.list().props("separator").classes("w-full"):
            for option in options or CURRENCY_OPTIONS:

                def _choose(code: str = option["value"]) -> None:
                    dialog.close()
                    on_select(code)

                with ui.item(on_click=_choose):
                    with ui.item_section().props("avatar"):
                        ui.label(option["symbol"]).classes("font-semibold")
                    with ui.item_section():
                        ui.item_label(option["label"])

    if on_close is not None:
        dialog.on("hide", lambda _: on_close())
    return dialog
