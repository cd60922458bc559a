# pyright: reportMissingImports=false

"""Converter page: an origin amount, a destination amount and their currencies."""

from __future__ import annotations

from typing import Any

from nicegui import Client, app, ui  # pyright: ignore[reportMissingImports]

from currency_converter.domain.value_objects import FieldRole
from currency_converter.logging_config import get_logger, page_context
from currency_converter.services.conversion_controller import ConversionController
from currency_converter.services.interfaces import RateGateway
from currency_converter.ui.components.currency_menu import currency_dialog
from currency_converter.ui.constants import (
    AMOUNT_INPUT,
    CARD,
    CARD_PAD,
    CURRENCY_LABEL,
    LOADING,
    SYMBOL_BADGE,
)

logger = get_logger(__name__)


class NiceGUIFieldView:
    """Renders one amount field into a NiceGUI input and its currency label."""

    def __init__(self, input_element: Any, currency_label: Any) -> None:
        self.input = input_element
        self.currency_label = currency_label

    def set_text(self, text: str) -> None:
        self.input.value = text

    def set_cursor(self, index: int) -> None:
        # The browser owns the caret; move it after the new value renders.
        self.input.client.run_javascript(
            f"const el = document.getElementById('{self.input.html_id}')"
            f"?.querySelector('input'); if (el) el.setSelectionRange({index}, {index});"
        )

    def set_readonly(self, readonly: bool) -> None:
        if readonly:
            self.input.props("readonly")
        else:
            self.input.props(remove="readonly")

    def set_loading(self, loading: bool) -> None:
        if loading:
            self.input.classes(LOADING)
        else:
            self.input.classes(remove=LOADING)

    def set_currency(self, code: str) -> None:
        self.currency_label.text = code

    def focus(self) -> None:
        self.input.run_method("focus")


class SymbolBadge:
    def __init__(self, label: Any) -> None:
        self.label = label

    def set_symbol(self, symbol: str) -> None:
        self.label.text = symbol


def _amount_row(label: str) -> tuple[Any, Any]:
    with ui.row().classes("w-full items-center gap-3 no-wrap"):
        amount = ui.input(label=label).classes(AMOUNT_INPUT).props("outlined")
        currency = ui.label("").classes(CURRENCY_LABEL)
    return amount, currency


def render(
    client: Client,
    gateway: RateGateway,
    currency_options: list[dict[str, str]] | None = None,
) -> ConversionController:
    """Build the converter widgets and wire them to a fresh controller."""
    # Theme choice survives reloads through the per-browser user storage.
    dark = ui.dark_mode(False).bind_value(app.storage.user, "dark_mode")

    with ui.row().classes("w-full items-center justify-between"):
        ui.label("Currency Converter").classes("text-xl font-semibold")
        ui.button(icon="dark_mode", on_click=dark.toggle).props("flat round")

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full"):
        with ui.row().classes("w-full items-center gap-3 no-wrap"):
            symbol = ui.label("").classes(SYMBOL_BADGE)
            with ui.column().classes("w-full gap-1"):
                origin_input, origin_currency = _amount_row("Amount")
        destination_input, destination_currency = _amount_row("Converted")

    controller = ConversionController.from_settings(
        gateway,
        NiceGUIFieldView(origin_input, origin_currency),
        NiceGUIFieldView(destination_input, destination_currency),
        symbol_view=SymbolBadge(symbol),
    )

    picker = currency_dialog(
        currency_options,
        on_select=controller.choose_currency,
        on_close=controller.close_currency_menu,
    )

    def open_picker(role: FieldRole) -> None:
        controller.open_currency_menu(role)
        picker.open()

    # Client-originated edits only; programmatic writes do not emit these.
    origin_input.on("update:model-value", lambda e: controller.on_origin_input(e.args or ""))
    origin_input.on("paste", lambda _: controller.on_paste_into_origin())
    destination_input.on(
        "update:model-value", lambda e: controller.on_destination_input(e.args or "")
    )
    destination_input.on("click", lambda _: controller.unlock_destination_for_editing())
    destination_input.on("blur", lambda _: controller.on_destination_blur())
    origin_currency.on("click", lambda _: open_picker(FieldRole.ORIGIN))
    destination_currency.on("click", lambda _: open_picker(FieldRole.DESTINATION))

    with page_context(client.id):
        controller.start()
        logger.debug("converter_page_rendered")
    client.on_disconnect(controller.close)
    return controller
