"""Tests for ConversionController."""

import asyncio

import pytest

from currency_converter.config import Settings
from currency_converter.domain.value_objects import Currency, FieldRole
from currency_converter.exceptions import UnsupportedCurrencyError
from currency_converter.services.conversion_controller import ConversionController

from fakes import FakeFieldView, FakeSymbolView, StubGateway


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def origin_view() -> FakeFieldView:
    return FakeFieldView()


@pytest.fixture
def destination_view() -> FakeFieldView:
    return FakeFieldView()


@pytest.fixture
def symbol_view() -> FakeSymbolView:
    return FakeSymbolView()


@pytest.fixture
def make_controller(gateway, origin_view, destination_view, symbol_view):
    controllers: list[ConversionController] = []

    def _make(**kwargs) -> ConversionController:
        options = {
            "debounce_delay": 0.02,
            "paste_delay": 0.01,
            "initial_conversion_delay": 0.01,
        }
        options.update(kwargs)
        controller = ConversionController(
            options.pop("gateway", gateway),
            origin_view,
            destination_view,
            symbol_view=symbol_view,
            **options,
        )
        controllers.append(controller)
        return controller

    yield _make
    for controller in controllers:
        controller.close()


class TestStart:
    async def test_renders_initial_state(
        self, make_controller, origin_view, destination_view, symbol_view
    ):
        controller = make_controller(initial_conversion_delay=10)
        controller.start()

        assert origin_view.text == "1"
        assert origin_view.currency == "USD"
        assert not origin_view.readonly
        assert destination_view.text == "0,00"
        assert destination_view.currency == "BRL"
        assert destination_view.readonly
        assert symbol_view.symbol == "$"

    async def test_initial_conversion_runs_after_delay(
        self, make_controller, gateway, destination_view
    ):
        controller = make_controller()
        controller.start()
        assert gateway.calls == []

        await controller.wait_idle()

        assert gateway.calls == [("USD", "BRL")]
        assert destination_view.text == "5,25"
        assert controller.destination.canonical_value == pytest.approx(5.25)

    async def test_from_settings_uses_configured_delays(
        self, gateway, origin_view, destination_view
    ):
        settings = Settings(debounce_delay=0.5, paste_delay=0.05, initial_conversion_delay=2)
        controller = ConversionController.from_settings(
            gateway, origin_view, destination_view, settings=settings
        )

        assert controller._debounce.delay == 0.5
        assert controller._paste.delay == 0.05
        assert controller._initial.delay == 2


class TestOriginInput:
    async def test_typing_1000_shows_grouped_text(self, make_controller, origin_view):
        controller = make_controller()
        text = ""
        for key in "1000":
            controller.on_origin_input(text + key)
            text = controller.origin.raw_text

        assert origin_view.text == "1.000"
        assert origin_view.cursor == 5
        assert controller.origin.canonical_value == 1000.0

    async def test_debounce_collapses_burst_into_one_lookup(
        self, make_controller, gateway, destination_view
    ):
        controller = make_controller()
        for text in ("1", "10", "100"):
            controller.on_origin_input(text)
        assert controller.debounce_pending

        await controller.wait_idle()

        assert gateway.calls == [("USD", "BRL")]
        assert destination_view.text == "525,00"

    async def test_zero_amount_never_calls_gateway(
        self, make_controller, gateway, destination_view
    ):
        controller = make_controller()
        controller.on_origin_input("0")
        await controller.wait_idle()

        assert gateway.calls == []
        assert destination_view.text == "0,00"
        assert destination_view.loading_history == []

    async def test_cleared_field_writes_zero_sentinel(
        self, make_controller, gateway, destination_view
    ):
        controller = make_controller()
        controller.on_origin_input("")
        await controller.wait_idle()

        assert gateway.calls == []
        assert destination_view.text == "0,00"

    async def test_shows_loading_placeholder_while_waiting(
        self, make_controller, destination_view
    ):
        gateway = StubGateway(hold=True)
        controller = make_controller(gateway=gateway)
        controller.on_origin_input("2")
        while not gateway.gates:
            await asyncio.sleep(0.01)

        assert destination_view.text == "..."
        assert destination_view.loading
        assert controller.destination.is_loading

        gateway.release(0)
        await controller.wait_idle()

        assert destination_view.text == "10,50"
        assert not destination_view.loading
        assert not controller.destination.is_loading

    async def test_gateway_failure_shows_error_and_clears_loading(
        self, make_controller, destination_view
    ):
        controller = make_controller(gateway=StubGateway(fail=True))
        controller.on_origin_input("10")
        await controller.wait_idle()

        assert destination_view.text == "Error"
        assert destination_view.loading_history == [True, False]
        assert not controller.destination.is_loading

    async def test_huge_amount_is_rendered_not_left_loading(
        self, make_controller, destination_view
    ):
        controller = make_controller()
        controller.on_origin_input("1" + "0" * 27)
        await controller.wait_idle()

        assert destination_view.text not in ("...", "Error")
        assert destination_view.text.endswith(",00")
        assert not destination_view.loading
        assert controller.destination.canonical_value == pytest.approx(5.25e27)


class TestPaste:
    async def test_paste_converts_without_debounce(
        self, make_controller, gateway, origin_view, destination_view
    ):
        controller = make_controller(debounce_delay=10)
        controller.on_paste_into_origin("1234,5")
        await controller.wait_idle()

        assert origin_view.text == "1.234,5"
        assert destination_view.text == "6.481,13"
        assert gateway.calls == [("USD", "BRL")]

    async def test_paste_supersedes_pending_debounce(
        self, make_controller, gateway, destination_view
    ):
        controller = make_controller(debounce_delay=0.05)
        controller.on_origin_input("1000")
        controller.on_paste_into_origin()
        await controller.wait_idle()

        assert gateway.calls == [("USD", "BRL")]
        assert destination_view.text == "5.250,00"


class TestReverseEntry:
    async def test_unlock_makes_destination_editable_and_focused(
        self, make_controller, destination_view
    ):
        controller = make_controller()
        controller.start()

        assert controller.unlock_destination_for_editing() is True
        assert not destination_view.readonly
        assert destination_view.focused
        assert controller.unlock_destination_for_editing() is False

    async def test_input_while_locked_is_ignored(self, make_controller, gateway):
        controller = make_controller()

        assert controller.on_destination_input("10") is None
        assert gateway.calls == []

    async def test_destination_input_converts_back_into_origin(
        self, make_controller, gateway, origin_view, destination_view
    ):
        controller = make_controller(initial_conversion_delay=10)
        controller.start()
        controller.unlock_destination_for_editing()

        task = controller.on_destination_input("1000")
        assert task is not None
        await task

        assert destination_view.text == "1.000"
        assert gateway.calls == [("BRL", "USD")]
        assert origin_view.text == "190,00"

    async def test_blur_relocks_destination(self, make_controller, destination_view):
        controller = make_controller(initial_conversion_delay=10)
        controller.start()
        controller.unlock_destination_for_editing()

        controller.on_destination_blur()

        assert destination_view.readonly
        assert controller.destination.read_only
        assert controller.on_destination_input("5") is None


class TestCurrencySelection:
    async def test_origin_selection_refreshes_symbol_and_converts(
        self, make_controller, gateway, origin_view, destination_view, symbol_view
    ):
        controller = make_controller()
        await controller.select_currency(FieldRole.ORIGIN, "EUR")

        assert controller.origin.currency is Currency.EUR
        assert origin_view.currency == "EUR"
        assert symbol_view.symbol == "€"
        assert gateway.calls == [("EUR", "BRL")]
        assert destination_view.text == "5,70"

    async def test_destination_selection_keeps_symbol(
        self, make_controller, gateway, destination_view, symbol_view
    ):
        controller = make_controller()
        controller.start()
        symbol_view.symbol = None

        await controller.select_currency(FieldRole.DESTINATION, "GBP")

        assert destination_view.currency == "GBP"
        assert symbol_view.symbol is None
        assert ("USD", "GBP") in gateway.calls

    async def test_unknown_currency_is_rejected(self, make_controller):
        controller = make_controller()

        with pytest.raises(UnsupportedCurrencyError):
            controller.select_currency(FieldRole.ORIGIN, "XYZ")

    async def test_menu_choice_applies_to_opening_field(
        self, make_controller, destination_view
    ):
        controller = make_controller()
        controller.open_currency_menu(FieldRole.DESTINATION)
        assert controller.active_menu_role is FieldRole.DESTINATION

        task = controller.choose_currency("PYG")
        assert task is not None
        await task

        assert controller.active_menu_role is None
        assert controller.destination.currency is Currency.PYG
        assert destination_view.text == "7.300,00"

    async def test_choice_without_open_menu_does_nothing(self, make_controller, gateway):
        controller = make_controller()

        assert controller.choose_currency("EUR") is None
        assert gateway.calls == []

    async def test_closing_menu_clears_target(self, make_controller):
        controller = make_controller()
        controller.open_currency_menu(FieldRole.ORIGIN)
        controller.close_currency_menu()

        assert controller.active_menu_role is None


class TestOrdering:
    async def test_late_response_does_not_overwrite_newer_one(
        self, make_controller, destination_view
    ):
        gateway = StubGateway(hold=True)
        controller = make_controller(gateway=gateway)

        first = controller.select_currency(FieldRole.DESTINATION, "EUR")
        await asyncio.sleep(0)
        second = controller.select_currency(FieldRole.DESTINATION, "GBP")
        await asyncio.sleep(0)

        gateway.release(1)
        await second
        assert destination_view.text == "0,79"
        assert destination_view.loading

        gateway.release(0)
        await first
        assert destination_view.text == "0,79"
        assert not destination_view.loading

    async def test_typing_discards_response_aimed_at_field(
        self, make_controller, origin_view
    ):
        gateway = StubGateway(hold=True)
        controller = make_controller(gateway=gateway, initial_conversion_delay=10)
        controller.start()
        controller.unlock_destination_for_editing()
        task = controller.on_destination_input("100")
        await asyncio.sleep(0)

        controller.on_origin_input("7")
        gateway.release(0)
        await task

        assert controller.origin.raw_text == "7"
        assert controller.origin.canonical_value == 7.0
        assert "19,00" not in origin_view.texts


class TestClose:
    async def test_close_cancels_pending_timers(self, make_controller, gateway):
        controller = make_controller(initial_conversion_delay=0.05)
        controller.start()
        controller.on_origin_input("5")

        controller.close()
        await asyncio.sleep(0.1)

        assert gateway.calls == []
        assert not controller.debounce_pending

    async def test_close_cancels_in_flight_conversion(self, make_controller):
        gateway = StubGateway(hold=True)
        controller = make_controller(gateway=gateway)
        task = controller.select_currency(FieldRole.DESTINATION, "EUR")
        await asyncio.sleep(0)

        controller.close()
        await controller.wait_idle()

        assert task.cancelled()
        assert not controller.destination.is_loading
