"""Shared fixtures: temp config directories and a fake remote config-vars API."""

import json

import httpx
import pytest

from hybrid_config.services.config.sync import HerokuConfigSync


class FakeHerokuApi:
    """In-memory stand-in for the platform API, served through httpx.MockTransport"""

    def __init__(self, config_vars: dict[str, str] | None = None):
        self.config_vars = dict(config_vars or {})
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.fail_methods: set[str] = set()
        self.dynos_deleted = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with and (not self.fail_methods or request.method in self.fail_methods):
            return httpx.Response(self.fail_with, json={"id": "forbidden"})

        if request.url.path.endswith("/config-vars"):
            if request.method == "GET":
                return httpx.Response(200, json=self.config_vars)
            if request.method == "PATCH":
                self.config_vars.update(json.loads(request.content))
                return httpx.Response(200, json=self.config_vars)

        if request.url.path.endswith("/dynos") and request.method == "DELETE":
            self.dynos_deleted += 1
            return httpx.Response(202, content=b"")

        return httpx.Response(404, json={"id": "not_found"})

    def calls(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    def client(self) -> HerokuConfigSync:
        return HerokuConfigSync(
            api_key="test-token",
            app_name="test-app",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config"


@pytest.fixture
def fake_api():
    return FakeHerokuApi()


@pytest.fixture
def read_document(config_dir):
    def _read() -> dict:
        with open(config_dir / "settings.json", "r", encoding="utf-8") as f:
            return json.load(f)
    return _read
