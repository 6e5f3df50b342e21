"""
Control Server Tests

The bot-owned /health, /settings and /restart endpoints, plus the
primary restart tier talking to a live control server.
"""

import asyncio

from aiohttp import test_utils

from hybrid_config.services.config.service import ConfigStore
from hybrid_config.services.system.control_server import ControlServer
from hybrid_config.services.system.restart_handler import TIER_PRIMARY, RestartHandler


def test_health_reports_store_status(config_dir):
    store = ConfigStore(config_dir=config_dir, environ={})
    server = ControlServer(store, on_restart=lambda: None)

    async def scenario():
        async with test_utils.TestClient(test_utils.TestServer(server.build_app())) as client:
            response = await client.get("/health")
            return response.status, await response.json()

    status, body = asyncio.run(scenario())

    assert status == 200
    assert body["status"] == "healthy"
    assert body["session_id"] == store.get_session_id()
    assert body["remote_available"] is False
    assert body["settings_count"] == len(store.get_all_settings())


def test_settings_endpoint_returns_snapshot(config_dir):
    store = ConfigStore(config_dir=config_dir, environ={})
    server = ControlServer(store, on_restart=lambda: None)

    async def scenario():
        await store.set_setting("CHATBOT", "yes")
        async with test_utils.TestClient(test_utils.TestServer(server.build_app())) as client:
            response = await client.get("/settings")
            return await response.json()

    assert asyncio.run(scenario())["CHATBOT"] == "yes"


def test_restart_endpoint_runs_callback_after_response(config_dir):
    store = ConfigStore(config_dir=config_dir, environ={})
    restarts: list[bool] = []
    server = ControlServer(store, on_restart=lambda: restarts.append(True), restart_delay=0.2)

    async def scenario():
        async with test_utils.TestClient(test_utils.TestServer(server.build_app())) as client:
            response = await client.get("/restart")
            body = await response.json()
            assert restarts == []
            await asyncio.sleep(0.4)
            return body

    assert asyncio.run(scenario()) == {"restarting": True}
    assert restarts == [True]
    assert server.restart_requested is True


def test_primary_tier_reaches_control_server(config_dir):
    store = ConfigStore(config_dir=config_dir, environ={})
    restarts: list[bool] = []
    exits: list[int] = []
    server = ControlServer(store, on_restart=lambda: restarts.append(True), restart_delay=0)

    async def scenario():
        test_server = test_utils.TestServer(server.build_app())
        await test_server.start_server()
        try:
            handler = RestartHandler(
                store,
                port=test_server.port,
                host=test_server.host,
                exit_func=exits.append,
                primary_delay=0,
            )
            tier = await handler.restart_bot()
            await asyncio.sleep(0.05)
            return tier
        finally:
            await test_server.close()

    assert asyncio.run(scenario()) == TIER_PRIMARY
    assert restarts == [True]
    assert exits == []
