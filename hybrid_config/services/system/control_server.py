"""
Control Server

Local HTTP endpoint owned by the bot process:
- GET /health   - liveness plus store status
- GET /settings - snapshot of every setting
- GET /restart  - acknowledge, then run the restart callback

The primary restart tier of RestartHandler calls /restart here.
"""

import asyncio
import os
from datetime import datetime, timezone
from typing import Any, Callable

from aiohttp import web

from hybrid_config.common.logging_setup import get_service_logger
from hybrid_config.services.config.service import ConfigStore

logger = get_service_logger("system.control")

# Give the /restart response time to reach the caller
RESTART_CALLBACK_DELAY_SECONDS = 0.5


def _exit_process() -> None:
    os._exit(0)


class ControlServer:
    """aiohttp control endpoint bound to 127.0.0.1"""

    def __init__(
        self,
        store: ConfigStore,
        port: int = 3000,
        host: str = "127.0.0.1",
        on_restart: Callable[[], Any] | None = None,
        restart_delay: float = RESTART_CALLBACK_DELAY_SECONDS,
    ):
        self.store = store
        self.port = port
        self.host = host
        self.on_restart = on_restart or _exit_process
        self.restart_delay = restart_delay

        self._start_time = datetime.now(timezone.utc)
        self._runner: web.AppRunner | None = None
        self.restart_requested = False

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/health", self._health_handler)
        app.router.add_get("/settings", self._settings_handler)
        app.router.add_get("/restart", self._restart_handler)
        return app

    async def start(self) -> None:
        """Start serving on host:port"""
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()

        logger.info(f"Control server started on port {self.port}")

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
        logger.info("Control server stopped")

    async def _health_handler(self, request: web.Request) -> web.Response:
        uptime = (datetime.now(timezone.utc) - self._start_time).total_seconds()
        status = self.store.status()

        return web.json_response({
            "status": "healthy",
            "service": "hybrid_config",
            "uptime": int(uptime),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "session_id": status["session_id"],
            "remote_available": status["remote_available"],
            "settings_count": status["settings_count"],
        })

    async def _settings_handler(self, request: web.Request) -> web.Response:
        return web.json_response(self.store.get_all_settings())

    async def _restart_handler(self, request: web.Request) -> web.Response:
        logger.warning("Restart requested via control endpoint")
        self.restart_requested = True

        loop = asyncio.get_running_loop()
        loop.call_later(self.restart_delay, self.on_restart)

        return web.json_response({"restarting": True})
