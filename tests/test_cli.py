"""
CLI Tests

Commands run end-to-end against a temp config directory, local-only.
"""

import asyncio
import json
import sys

import pytest

from hybrid_config.cli import build_parser, build_store, main
from hybrid_config.common.logging_setup import redirect_logs


@pytest.fixture(autouse=True)
def local_only(monkeypatch):
    monkeypatch.delenv("HEROKU_API_KEY", raising=False)
    monkeypatch.delenv("HEROKU_APP_NAME", raising=False)
    yield
    # main() points logs at the per-test capture stream, which closes after the test
    redirect_logs(sys.__stderr__)


def run_cli(capsys, config_dir, tmp_path, *argv) -> tuple[int, dict]:
    code = main([
        "--config-dir", str(config_dir),
        "--env-file", str(tmp_path / "missing.env"),
        *argv,
    ])
    return code, json.loads(capsys.readouterr().out)


def test_set_then_get_round_trips_through_file(capsys, config_dir, tmp_path):
    code, result = run_cli(capsys, config_dir, tmp_path, "set", "CHATBOT", "yes")
    assert code == 0
    assert result["success"] is True
    assert result["remote_available"] is False

    code, result = run_cli(capsys, config_dir, tmp_path, "get", "CHATBOT")
    assert code == 0
    assert result == {"key": "CHATBOT", "value": "yes"}


def test_get_with_default(capsys, config_dir, tmp_path):
    _, result = run_cli(capsys, config_dir, tmp_path, "get", "UNKNOWN", "--default", "fallback")

    assert result["value"] == "fallback"


def test_list_and_status(capsys, config_dir, tmp_path):
    _, listed = run_cli(capsys, config_dir, tmp_path, "list")
    assert listed["settings"]["AUTO_READ"] == "yes"

    _, status = run_cli(capsys, config_dir, tmp_path, "status")
    assert status["remote_available"] is False
    assert status["config_file"].endswith("settings.json")


def test_sync_and_reload_local_only(capsys, config_dir, tmp_path):
    _, synced = run_cli(capsys, config_dir, tmp_path, "sync")
    assert synced["remote_available"] is False

    _, reloaded = run_cli(capsys, config_dir, tmp_path, "reload")
    assert reloaded["loaded"] == len(synced["settings"])


def test_logs_go_to_stderr_and_stdout_is_pure_json(capsys, config_dir, tmp_path):
    code = main([
        "--config-dir", str(config_dir),
        "--env-file", str(tmp_path / "missing.env"),
        "list",
    ])
    captured = capsys.readouterr()

    assert code == 0
    assert json.loads(captured.out)["settings"]["CHATBOT"] == "no"
    assert "Hybrid config manager initialized" in captured.err


def test_build_store_uses_environment_credentials(monkeypatch, config_dir, tmp_path):
    monkeypatch.setenv("HEROKU_API_KEY", "token")
    monkeypatch.setenv("HEROKU_APP_NAME", "my-bot")
    args = build_parser().parse_args([
        "--config-dir", str(config_dir),
        "--env-file", str(tmp_path / "missing.env"),
        "status",
    ])

    store, env = build_store(args)
    try:
        assert env.has_remote_credentials is True
        assert store.remote is not None
        assert store.app_name == "my-bot"
        assert store.is_remote_available is False
    finally:
        asyncio.run(store.close())
