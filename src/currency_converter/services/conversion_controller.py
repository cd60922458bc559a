"""Bidirectional conversion controller for the origin/destination amount pair.

The controller owns both AmountField models and pushes every change into the
host's views. Typing in the origin is debounced before a rate lookup; the
destination can be unlocked for reverse entry, which converts on every
keystroke. All rate lookups run as tracked asyncio tasks so overlapping
requests are possible; each target field keeps a write sequence so that a
late response never overwrites a newer value.
"""

from __future__ import annotations

import asyncio
from typing import Any

from currency_converter.config import Settings, get_settings
from currency_converter.domain.conversions import ConversionRequest
from currency_converter.domain.fields import (
    ERROR_MARKER,
    LOADING_PLACEHOLDER,
    ZERO_SENTINEL,
    AmountField,
)
from currency_converter.domain.value_objects import Currency, FieldRole
from currency_converter.exceptions import UnsupportedCurrencyError
from currency_converter.formatting import display, parse_amount, reformat
from currency_converter.logging_config import get_logger
from currency_converter.services.interfaces import (
    AmountFieldView,
    RateGateway,
    SymbolView,
)
from currency_converter.services.scheduling import SingleSlotTimer, TaskTracker

logger = get_logger(__name__)


class ConversionController:
    """Keeps the origin and destination amount fields consistent.

    One instance per page session. Call ``start()`` once the views exist and
    ``close()`` on teardown.
    """

    def __init__(
        self,
        gateway: RateGateway,
        origin_view: AmountFieldView,
        destination_view: AmountFieldView,
        *,
        symbol_view: SymbolView | None = None,
        debounce_delay: float = 0.3,
        paste_delay: float = 0.01,
        initial_conversion_delay: float = 1.0,
        origin_currency: Currency = Currency.USD,
        destination_currency: Currency = Currency.BRL,
    ) -> None:
        self._gateway = gateway
        self.origin = AmountField.origin(origin_currency)
        self.destination = AmountField.destination(destination_currency)
        self._views: dict[FieldRole, AmountFieldView] = {
            FieldRole.ORIGIN: origin_view,
            FieldRole.DESTINATION: destination_view,
        }
        self._symbol_view = symbol_view

        self._tasks = TaskTracker()
        self._debounce = SingleSlotTimer(
            self._tasks, debounce_delay, self._convert_forward, name="debounce"
        )
        self._paste = SingleSlotTimer(
            self._tasks, paste_delay, self._settle_paste, name="paste"
        )
        self._initial = SingleSlotTimer(
            self._tasks,
            initial_conversion_delay,
            self._convert_forward,
            name="initial_conversion",
        )
        self._pasted_text: str | None = None

        self._write_seq: dict[FieldRole, int] = {role: 0 for role in FieldRole}
        self._in_flight: dict[FieldRole, int] = {role: 0 for role in FieldRole}

        self.active_menu_role: FieldRole | None = None

    @classmethod
    def from_settings(
        cls,
        gateway: RateGateway,
        origin_view: AmountFieldView,
        destination_view: AmountFieldView,
        *,
        symbol_view: SymbolView | None = None,
        settings: Settings | None = None,
    ) -> "ConversionController":
        settings = settings or get_settings()
        return cls(
            gateway,
            origin_view,
            destination_view,
            symbol_view=symbol_view,
            debounce_delay=settings.debounce_delay,
            paste_delay=settings.paste_delay,
            initial_conversion_delay=settings.initial_conversion_delay,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def field(self, role: FieldRole) -> AmountField:
        if role is FieldRole.ORIGIN:
            return self.origin
        return self.destination

    def start(self) -> None:
        """Render the initial state and schedule the first conversion."""
        for amount_field in (self.origin, self.destination):
            view = self._views[amount_field.role]
            view.set_text(amount_field.raw_text)
            view.set_currency(amount_field.currency.value)
            view.set_readonly(amount_field.read_only)
        self._refresh_symbol()
        self._initial.arm()
        logger.debug(
            "controller_started",
            origin_currency=self.origin.currency.value,
            destination_currency=self.destination.currency.value,
        )

    def close(self) -> None:
        """Cancel every pending timer and in-flight conversion."""
        for timer in self._timers:
            timer.cancel()
        self._tasks.cancel_all()
        self.active_menu_role = None
        logger.debug("controller_closed", pending_tasks=self._tasks.pending)

    async def wait_idle(self) -> None:
        """Wait until no timer is armed and no conversion is running."""
        while True:
            if self._tasks.pending:
                await self._tasks.join()
                continue
            armed = [timer for timer in self._timers if timer.armed]
            if not armed:
                return
            await asyncio.sleep(min(timer.remaining for timer in armed))

    @property
    def _timers(self) -> tuple[SingleSlotTimer, ...]:
        return (self._debounce, self._paste, self._initial)

    @property
    def debounce_pending(self) -> bool:
        return self._debounce.armed

    # ------------------------------------------------------------------
    # Origin events
    # ------------------------------------------------------------------

    def on_origin_input(self, raw_text: str) -> None:
        """Handle a keystroke in the origin field (debounced conversion)."""
        self._apply_typed_text(self.origin, raw_text)
        self._debounce.arm()

    def on_paste_into_origin(self, raw_text: str | None = None) -> None:
        """Handle a paste into the origin field.

        The paste settles for ``paste_delay`` before the field is reformatted
        and converted without debouncing. When ``raw_text`` is omitted the
        origin text at settle time is used, which lets hosts forward the
        paste event before the pasted value arrives.
        """
        if raw_text is not None:
            self._pasted_text = raw_text
        self._paste.arm()

    async def _settle_paste(self) -> None:
        text = self._pasted_text if self._pasted_text is not None else self.origin.raw_text
        self._pasted_text = None
        self._debounce.cancel()
        self._apply_typed_text(self.origin, text)
        await self.convert(FieldRole.ORIGIN, FieldRole.DESTINATION)

    async def _convert_forward(self) -> None:
        await self.convert(FieldRole.ORIGIN, FieldRole.DESTINATION)

    # ------------------------------------------------------------------
    # Destination (reverse entry) events
    # ------------------------------------------------------------------

    def unlock_destination_for_editing(self) -> bool:
        """Make the read-only destination editable and focus it."""
        if self.destination.editable:
            return False
        self.destination.editable = True
        view = self._views[FieldRole.DESTINATION]
        view.set_readonly(False)
        view.focus()
        logger.debug("destination_unlocked")
        return True

    def on_destination_input(self, raw_text: str) -> asyncio.Task[Any] | None:
        """Handle a keystroke in the unlocked destination (immediate reverse conversion)."""
        if not self.destination.editable:
            logger.debug("destination_input_ignored", reason="read_only")
            return None
        self._apply_typed_text(self.destination, raw_text)
        return self._tasks.spawn(
            self.convert(FieldRole.DESTINATION, FieldRole.ORIGIN),
            name="reverse_conversion",
        )

    def on_destination_blur(self) -> None:
        """Reformat the destination once more and lock it again."""
        if not self.destination.editable:
            return
        self._apply_format(self.destination)
        self.destination.editable = False
        self._views[FieldRole.DESTINATION].set_readonly(True)
        logger.debug("destination_locked")

    # ------------------------------------------------------------------
    # Currency selection
    # ------------------------------------------------------------------

    def open_currency_menu(self, role: FieldRole) -> None:
        self.active_menu_role = role

    def close_currency_menu(self) -> None:
        self.active_menu_role = None

    def choose_currency(self, code: str) -> asyncio.Task[Any] | None:
        """Apply a picker selection to whichever field opened the menu."""
        role = self.active_menu_role
        if role is None:
            logger.warning("currency_choice_without_menu", currency=code)
            return None
        self.close_currency_menu()
        return self.select_currency(role, code)

    def select_currency(self, role: FieldRole, code: str) -> asyncio.Task[Any]:
        """Change a field's currency and re-run the forward conversion."""
        if not Currency.is_supported(code):
            raise UnsupportedCurrencyError(code)
        currency = Currency(code)
        amount_field = self.field(role)
        amount_field.currency = currency
        self._views[role].set_currency(currency.value)
        if role is FieldRole.ORIGIN:
            self._refresh_symbol()
        logger.debug("currency_selected", role=role.value, currency=currency.value)
        return self._tasks.spawn(
            self.convert(FieldRole.ORIGIN, FieldRole.DESTINATION),
            name="currency_conversion",
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    async def convert(
        self,
        source_role: FieldRole = FieldRole.ORIGIN,
        target_role: FieldRole | None = None,
    ) -> None:
        """Convert the source field's amount into the target field.

        Non-positive amounts write the zero sentinel without a rate lookup.
        A failed lookup writes the error marker. Loading is cleared on every
        exit path.
        """
        source = self.field(source_role)
        target = self.field(target_role or source_role.other)
        request = ConversionRequest(
            from_currency=source.currency,
            to_currency=target.currency,
            amount=parse_amount(source.raw_text),
        )
        seq = self._claim_write(target.role)

        if request.amount <= 0:
            self._write(target, ZERO_SENTINEL, 0.0)
            return

        self._begin_loading(target)
        try:
            rate = await self._gateway.fetch_rate(
                request.from_currency.value, request.to_currency.value
            )
        except Exception as e:
            if self._is_latest(target.role, seq):
                logger.warning(
                    "conversion_failed",
                    from_currency=request.from_currency.value,
                    to_currency=request.to_currency.value,
                    amount=request.amount,
                    error=str(e),
                )
                self._write(target, ERROR_MARKER, 0.0)
        else:
            if not self._is_latest(target.role, seq):
                logger.debug("stale_rate_discarded", target=target.role.value, seq=seq)
                return
            try:
                result = request.amount * rate
                text = display(result)
            except (ArithmeticError, TypeError, ValueError) as e:
                logger.warning(
                    "result_format_failed",
                    amount=request.amount,
                    rate=rate,
                    error=str(e),
                )
                self._write(target, ERROR_MARKER, 0.0)
                return
            self._write(target, text, result)
            logger.debug(
                "conversion_applied",
                from_currency=request.from_currency.value,
                to_currency=request.to_currency.value,
                amount=request.amount,
                rate=rate,
                result=result,
            )
        finally:
            self._end_loading(target)

    # ------------------------------------------------------------------
    # Field helpers
    # ------------------------------------------------------------------

    def _apply_typed_text(self, amount_field: AmountField, raw_text: str) -> None:
        # User edits count as writes so slower responses aimed here are dropped.
        self._claim_write(amount_field.role)
        amount_field.raw_text = raw_text
        self._apply_format(amount_field)

    def _apply_format(self, amount_field: AmountField) -> None:
        result = reformat(amount_field.raw_text, len(amount_field.raw_text))
        if result.changed:
            amount_field.raw_text = result.text
            view = self._views[amount_field.role]
            view.set_text(result.text)
            view.set_cursor(result.cursor)
        amount_field.canonical_value = parse_amount(amount_field.raw_text)

    def _claim_write(self, role: FieldRole) -> int:
        self._write_seq[role] += 1
        return self._write_seq[role]

    def _is_latest(self, role: FieldRole, seq: int) -> bool:
        return self._write_seq[role] == seq

    def _write(self, amount_field: AmountField, text: str, value: float) -> None:
        amount_field.raw_text = text
        amount_field.canonical_value = value
        self._views[amount_field.role].set_text(text)

    def _begin_loading(self, amount_field: AmountField) -> None:
        self._in_flight[amount_field.role] += 1
        amount_field.is_loading = True
        amount_field.raw_text = LOADING_PLACEHOLDER
        view = self._views[amount_field.role]
        view.set_loading(True)
        view.set_text(LOADING_PLACEHOLDER)

    def _end_loading(self, amount_field: AmountField) -> None:
        self._in_flight[amount_field.role] -= 1
        if self._in_flight[amount_field.role] == 0:
            amount_field.is_loading = False
            self._views[amount_field.role].set_loading(False)

    def _refresh_symbol(self) -> None:
        if self._symbol_view is not None:
            self._symbol_view.set_symbol(self.origin.currency.symbol)
