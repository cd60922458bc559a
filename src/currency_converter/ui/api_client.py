"""HTTP client wrapper for the converter API.

Implements the rate gateway the conversion controller asks for rates, so the
web UI can run against a separate API process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from currency_converter.services.interfaces import RateGateway


@dataclass(frozen=True, slots=True)
class APIError(Exception):
    status_code: int
    detail: str

    def __str__(self) -> str:
        return f"APIError({self.status_code}): {self.detail}"


class ConverterAPIClient(RateGateway):
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = (
            client
            if client is not None
            else httpx.AsyncClient(base_url=base_url, timeout=timeout)
        )
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, base_url: str) -> None:
        """Update base_url for the internal client.

        If a client was injected, this only updates the stored base_url.
        """
        self._base_url = base_url
        if hasattr(self._client, "base_url"):
            self._client.base_url = httpx.URL(base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        r = await self._client.request(method, path, params=params)
        if 200 <= r.status_code < 300:
            return r.json()

        detail = ""
        try:
            payload = r.json()
            raw_detail = payload.get("error", payload.get("detail"))
            detail = raw_detail if isinstance(raw_detail, str) else str(raw_detail)
        except ValueError:
            detail = r.text

        raise APIError(status_code=r.status_code, detail=detail)

    async def list_currencies(self) -> list[dict[str, Any]]:
        data = await self._request_json("GET", "/api/currencies")
        assert isinstance(data, list)
        return data

    async def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        data = await self._request_json(
            "GET", "/api/rate", params={"from": from_currency, "to": to_currency}
        )
        return float(data["rate"])


api = ConverterAPIClient()
