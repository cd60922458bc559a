from __future__ import annotations

from currency_converter.domain.value_objects import FieldRole
from currency_converter.services.conversion_controller import ConversionController

from fakes import FakeFieldView, FakeSymbolView


class TestControllerOverHTTP:
    async def test_typing_converts_through_api(self, api_client) -> None:
        origin, destination = FakeFieldView(), FakeFieldView()
        controller = ConversionController(
            api_client,
            origin,
            destination,
            symbol_view=FakeSymbolView(),
            debounce_delay=0.01,
            initial_conversion_delay=0.01,
        )
        try:
            controller.start()
            await controller.wait_idle()
            assert destination.text == "5,25"

            controller.on_origin_input("1000")
            await controller.wait_idle()
            assert origin.text == "1.000"
            assert destination.text == "5.250,00"

            await controller.select_currency(FieldRole.DESTINATION, "EUR")
            assert destination.text == "920,00"
        finally:
            controller.close()

    async def test_api_error_shows_error_marker(self, api_client) -> None:
        origin, destination = FakeFieldView(), FakeFieldView()
        controller = ConversionController(
            api_client, origin, destination, initial_conversion_delay=10
        )
        try:
            await controller.select_currency(FieldRole.ORIGIN, "GBP")
            assert destination.text == "Error"
            assert not destination.loading
        finally:
            controller.close()
