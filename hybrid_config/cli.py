#!/usr/bin/env python3
"""
Hybrid Config CLI - Inspect and change bot settings

Command-line front-end for the settings store. Output is JSON for easy
parsing by operational tooling.

Usage:
    # Read a setting
    python -m hybrid_config get AUTO_READ

    # Change a setting (pushed to the remote store when reachable)
    python -m hybrid_config set CHATBOT yes

    # Pull remote values, re-read the file, show status
    python -m hybrid_config sync
    python -m hybrid_config reload
    python -m hybrid_config status

    # Restart the bot, or run the local control endpoint
    python -m hybrid_config restart
    python -m hybrid_config serve --port 3000
"""

import argparse
import asyncio
import json
import signal
import sys
from typing import Any

from hybrid_config.common.config import DEFAULT_ENV_FILE, EnvironmentConfig, load_environment
from hybrid_config.common.logging_setup import redirect_logs
from hybrid_config.services.config.service import ConfigStore
from hybrid_config.services.config.sync import HerokuConfigSync
from hybrid_config.services.system.control_server import ControlServer
from hybrid_config.services.system.restart_handler import RestartHandler


def build_store(args: argparse.Namespace) -> tuple[ConfigStore, EnvironmentConfig]:
    """Load the environment once and construct the single store instance"""
    environ = load_environment(args.env_file)
    env = EnvironmentConfig(_env_file=args.env_file)

    remote = None
    if env.has_remote_credentials:
        remote = HerokuConfigSync(api_key=env.heroku_api_key, app_name=env.heroku_app_name)

    store = ConfigStore(
        config_dir=args.config_dir or env.config_dir,
        environ=environ,
        remote=remote,
    )
    return store, env


async def cmd_get(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    return {"key": args.key, "value": store.get_setting(args.key, args.default)}


async def cmd_list(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    return {"settings": store.get_all_settings()}


async def cmd_set(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    await store.start()
    success = await store.set_setting(args.key, args.value)
    return {
        "success": success,
        "key": args.key,
        "value": store.get_setting(args.key),
        "remote_available": store.is_remote_available,
    }


async def cmd_status(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    return store.status()


async def cmd_sync(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    available = await store.check_remote_availability()
    return {"remote_available": available, "settings": store.get_all_settings()}


async def cmd_reload(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    return {"loaded": store.reload()}


async def cmd_restart(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    await store.start()
    handler = RestartHandler(store, port=args.port or env.port)
    tier = await handler.restart_bot()
    return {"restarted_via": tier}


async def cmd_serve(store: ConfigStore, env: EnvironmentConfig, args: argparse.Namespace) -> dict[str, Any]:
    await store.start()
    server = ControlServer(store, port=args.port or env.port)
    shutdown = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, shutdown.set)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            signal.signal(sig, lambda s, f: shutdown.set())

    await server.start()
    try:
        await shutdown.wait()
    finally:
        await server.stop()

    return {"stopped": True}


COMMANDS = {
    "get": cmd_get,
    "list": cmd_list,
    "set": cmd_set,
    "status": cmd_status,
    "sync": cmd_sync,
    "reload": cmd_reload,
    "restart": cmd_restart,
    "serve": cmd_serve,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage bot runtime settings")
    parser.add_argument("--config-dir", help="Directory holding settings.json and backups/")
    parser.add_argument("--env-file", default=DEFAULT_ENV_FILE, help="Optional dotenv file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Read one setting")
    get_parser.add_argument("key")
    get_parser.add_argument("--default", help="Value returned when unset or empty")

    set_parser = subparsers.add_parser("set", help="Change one setting")
    set_parser.add_argument("key")
    set_parser.add_argument("value")

    subparsers.add_parser("list", help="Show every setting")
    subparsers.add_parser("status", help="Show store status")
    subparsers.add_parser("sync", help="Pull values from the remote store")
    subparsers.add_parser("reload", help="Re-read settings from disk")

    restart_parser = subparsers.add_parser("restart", help="Restart the bot")
    restart_parser.add_argument("--port", type=int, help="Local control endpoint port")

    serve_parser = subparsers.add_parser("serve", help="Run the local control endpoint")
    serve_parser.add_argument("--port", type=int, help="Port to listen on")

    return parser


async def run(args: argparse.Namespace) -> dict[str, Any]:
    store, env = build_store(args)
    try:
        return await COMMANDS[args.command](store, env, args)
    finally:
        await store.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # stdout carries only the JSON result
    redirect_logs(sys.stderr)
    result = asyncio.run(run(args))

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0 if result.get("success", True) else 1


if __name__ == "__main__":
    sys.exit(main())
