"""Async HTTP transport for the service catalog API using httpx."""

from typing import Any

import httpx
import structlog

from service_catalog.errors import ApiError

logger = structlog.get_logger()


class ApiClient:
    """Thin wrapper over httpx.AsyncClient that speaks JSON and raises ApiError."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Backend base URL
            transport: Optional custom transport (used by tests)
            headers: Extra headers sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            headers={"Accept": "application/json", **(headers or {})},
            timeout=None,
        )
        logger.debug("API client initialized", base_url=self.base_url)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters
            json: JSON request body

        Returns:
            Decoded body, or None when the response has no JSON body

        Raises:
            ApiError: On any non-2xx response or transport failure
        """
        logger.debug("Sending request", method=method, path=path, params=params)
        try:
            response = await self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = ApiError.from_http_error(e)
            logger.debug("Request failed", method=method, path=path, status=error.status, code=error.code)
            raise error from e
        except httpx.RequestError as e:
            logger.debug("Request failed", method=method, path=path, error=str(e))
            raise ApiError.from_request_error(e) from e

        logger.debug("Request completed", method=method, path=path, status=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug("Response body is not JSON", method=method, path=path)
            return None

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
