"""Test doubles shared by the converter tests."""

import asyncio

import httpx

from currency_converter.services.interfaces import RateGateway

# Rates published by the fake upstream, keyed by base currency.
UPSTREAM_RATES: dict[str, dict[str, float]] = {
    "USD": {"USD": 1.0, "BRL": 5.25, "EUR": 0.92, "GBP": 0.79, "PYG": 7300.0},
    "BRL": {"BRL": 1.0, "USD": 0.19, "EUR": 0.175},
    "EUR": {"EUR": 1.0, "USD": 1.087, "BRL": 5.7},
}


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFieldView:
    """Records everything the controller pushes into one amount field."""

    def __init__(self) -> None:
        self.texts: list[str] = []
        self.cursor: int | None = None
        self.readonly = False
        self.loading_history: list[bool] = []
        self.currency: str | None = None
        self.focused = False

    @property
    def text(self) -> str | None:
        return self.texts[-1] if self.texts else None

    @property
    def loading(self) -> bool:
        return bool(self.loading_history) and self.loading_history[-1]

    def set_text(self, text: str) -> None:
        self.texts.append(text)

    def set_cursor(self, index: int) -> None:
        self.cursor = index

    def set_readonly(self, readonly: bool) -> None:
        self.readonly = readonly

    def set_loading(self, loading: bool) -> None:
        self.loading_history.append(loading)

    def set_currency(self, code: str) -> None:
        self.currency = code

    def focus(self) -> None:
        self.focused = True


class FakeSymbolView:
    def __init__(self) -> None:
        self.symbol: str | None = None

    def set_symbol(self, symbol: str) -> None:
        self.symbol = symbol


class StubGateway(RateGateway):
    """Answers from UPSTREAM_RATES and counts lookups.

    With ``hold=True`` every lookup waits until released, so tests decide
    the order in which responses arrive.
    """

    def __init__(self, *, fail: bool = False, hold: bool = False) -> None:
        self.fail = fail
        self.hold = hold
        self.calls: list[tuple[str, str]] = []
        self.gates: list[asyncio.Event] = []

    async def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        self.calls.append((from_currency, to_currency))
        if self.hold:
            gate = asyncio.Event()
            self.gates.append(gate)
            await gate.wait()
        if self.fail:
            raise httpx.ConnectError("upstream unreachable")
        return UPSTREAM_RATES[from_currency][to_currency]

    def release(self, index: int) -> None:
        self.gates[index].set()


def upstream_handler(request: httpx.Request) -> httpx.Response:
    """Mock of the upstream ``GET /latest/{base}`` endpoint."""
    base = request.url.path.rsplit("/", 1)[-1]
    if base not in UPSTREAM_RATES:
        return httpx.Response(404, json={"result": "error"})
    return httpx.Response(200, json={"base": base, "rates": UPSTREAM_RATES[base]})
