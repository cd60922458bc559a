from __future__ import annotations

import pytest


@pytest.fixture
async def api_client(api_app):
    """ConverterAPIClient wired to the in-process FastAPI app."""

    from httpx import ASGITransport, AsyncClient

    from currency_converter.ui.api_client import ConverterAPIClient

    async with AsyncClient(
        transport=ASGITransport(app=api_app), base_url="http://test"
    ) as c:
        yield ConverterAPIClient(base_url="http://test", client=c)
