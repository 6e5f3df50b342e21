"""
Remote Configuration Sync

Client for the Heroku Platform API config-vars endpoints.

Optimized for low overhead:
- Reuses single HTTP client (no connection overhead per request)
- Every request carries a bounded timeout
"""

from typing import Any

import httpx

from hybrid_config.common.exceptions import RemoteSyncError
from hybrid_config.common.logging_setup import get_service_logger

logger = get_service_logger("config.sync")

HEROKU_API_URL = "https://api.heroku.com"
REQUEST_TIMEOUT_SECONDS = 10.0


class HerokuConfigSync:
    """
    Talks to the remote platform's config-vars store.

    Operations:
    - Fetch all config vars for the app
    - Patch a single key/value
    - Delete the app's dynos (platform restarts them)
    """

    def __init__(
        self,
        api_key: str,
        app_name: str,
        base_url: str = HEROKU_API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.app_name = app_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        # Reusable HTTP client - avoids connection overhead per request
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.heroku+json; version=3",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch_config_vars(self) -> dict[str, str]:
        """
        Fetch every config var for the app.

        Returns:
            Mapping of config var names to values

        Raises:
            RemoteSyncError: Network, auth or HTTP failure
        """
        data = await self._request("GET", f"/apps/{self.app_name}/config-vars", "fetch")

        if not isinstance(data, dict):
            raise RemoteSyncError("Unexpected config-vars payload", operation="fetch")

        return {key: "" if value is None else str(value) for key, value in data.items()}

    async def update_config_var(self, key: str, value: str) -> None:
        """Set a single config var on the app"""
        await self._request(
            "PATCH",
            f"/apps/{self.app_name}/config-vars",
            "update",
            json={key: value},
        )
        logger.debug(f"Remote config var updated: {key}", extra={"key": key})

    async def restart_dynos(self) -> None:
        """Delete all running dynos so the platform restarts the app"""
        await self._request("DELETE", f"/apps/{self.app_name}/dynos", "restart")
        logger.info(f"Dyno restart requested for {self.app_name}")

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        client = await self._get_client()

        try:
            response = await client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteSyncError(
                f"{method} {path} returned {e.response.status_code}",
                operation=operation,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteSyncError(f"{method} {path} failed: {e}", operation=operation) from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RemoteSyncError(f"Invalid JSON from {path}", operation=operation) from e
