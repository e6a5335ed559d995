"""Outbound HTTP client used by the transactional email API backend."""

from typing import Any

import httpx

DEFAULT_USER_AGENT = "portfolio-api/1.0"


class HttpClient:
    """Async httpx client sharing one connection pool for the app's lifetime.

    Created in the app lifespan and closed on shutdown.
    """

    def __init__(
        self, timeout: float = 5.0, user_agent: str = DEFAULT_USER_AGENT
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": user_agent}
        )

    @property
    def timeout(self) -> httpx.Timeout:
        return self._client.timeout

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(url, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
