"""
Restart Handler

Tiered bot restart used by operational tooling:
1. Ask the local control endpoint (GET /restart) to restart the bot
2. Ask the remote platform to recycle the app's dynos
3. Exit the process and let the external supervisor relaunch it

Each tier runs only after the previous one is unavailable or failed.
Nothing blocks the caller; the tiers run as a scheduled task.
"""

import asyncio
import os
from typing import Callable

import httpx

from hybrid_config.common.exceptions import RemoteSyncError, RestartError
from hybrid_config.common.logging_setup import get_service_logger
from hybrid_config.services.config.service import ConfigStore

logger = get_service_logger("system.restart")

TIER_PRIMARY = "primary"
TIER_FALLBACK = "fallback"
TIER_EMERGENCY = "emergency"


class RestartHandler:
    """
    Restarts the bot process through the first tier that works.

    Flow:
    1. After PRIMARY_DELAY, GET http://<host>:<port>/restart
    2. On failure (or no port), after FALLBACK_DELAY, delete remote dynos
    3. On failure (or no remote), after EMERGENCY_DELAY, exit with status 0
    """

    PRIMARY_DELAY_SECONDS = 0.5
    FALLBACK_DELAY_SECONDS = 1.0
    EMERGENCY_DELAY_SECONDS = 1.0
    PROBE_TIMEOUT_SECONDS = 5.0

    def __init__(
        self,
        store: ConfigStore,
        port: int | None = 3000,
        host: str = "localhost",
        exit_func: Callable[[int], None] = os._exit,
        transport: httpx.AsyncBaseTransport | None = None,
        primary_delay: float | None = None,
        fallback_delay: float | None = None,
        emergency_delay: float | None = None,
    ):
        self.store = store
        self.port = port
        self.host = host
        self.exit_func = exit_func
        self._transport = transport

        self.primary_delay = self.PRIMARY_DELAY_SECONDS if primary_delay is None else primary_delay
        self.fallback_delay = self.FALLBACK_DELAY_SECONDS if fallback_delay is None else fallback_delay
        self.emergency_delay = self.EMERGENCY_DELAY_SECONDS if emergency_delay is None else emergency_delay

        self._task: asyncio.Task | None = None

    @property
    def restart_url(self) -> str | None:
        if self.port is None:
            return None
        return f"http://{self.host}:{self.port}/restart"

    def restart_bot(self) -> asyncio.Task:
        """
        Schedule the restart tiers on the running event loop.

        Returns:
            The scheduled task; its result is the tier that handled the restart
        """
        logger.info("Initiating safe bot restart")

        if self._task and not self._task.done():
            logger.warning("Restart already in progress")
            return self._task

        self._task = asyncio.create_task(self._run_tiers())
        return self._task

    async def _run_tiers(self) -> str:
        if self.restart_url:
            await asyncio.sleep(self.primary_delay)
            try:
                await self._request_local_restart()
                logger.info("Safe restart request sent")
                return TIER_PRIMARY
            except RestartError as e:
                logger.warning(f"{e}, trying remote platform restart", extra={"tier": e.tier})
        else:
            logger.info("No local control endpoint configured, skipping to remote restart")

        await asyncio.sleep(self.fallback_delay)
        try:
            await self._request_remote_restart()
            logger.info("Bot restart triggered via remote platform")
            return TIER_FALLBACK
        except RestartError as e:
            logger.error(str(e), extra={"tier": e.tier})

        await self._emergency_restart()
        return TIER_EMERGENCY

    async def _request_local_restart(self) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self.PROBE_TIMEOUT_SECONDS,
                transport=self._transport,
                trust_env=False,
            ) as client:
                response = await client.get(self.restart_url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise RestartError(f"Local restart request failed: {e}", TIER_PRIMARY) from e

    async def _request_remote_restart(self) -> None:
        if not self.store.is_remote_available or self.store.remote is None:
            raise RestartError("Remote platform not available", TIER_FALLBACK)

        try:
            await self.store.remote.restart_dynos()
        except RemoteSyncError as e:
            raise RestartError(f"Remote restart failed: {e}", TIER_FALLBACK) from e

    async def _emergency_restart(self) -> None:
        """Exit the process; an external supervisor relaunches it"""
        logger.critical("Emergency restart initiated")
        await asyncio.sleep(self.emergency_delay)
        self.exit_func(0)
