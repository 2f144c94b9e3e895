from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from vultr_client import ClientConfig, VultrClient

BASE_URL = "https://api.example.test/v1/"
TOKEN = "tok123"


class MockApi:
    """Routes requests by path to canned responses and records them."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, *, status: int = 200, json_body: Any = None, text: str | None = None) -> None:
        def _respond(_request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, content=json.dumps(json_body).encode("utf-8"))

        self.routes[path] = _respond

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/" + path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1/")
        respond = self.routes.get(path)
        if respond is None:
            return httpx.Response(404, text="not found")
        return respond(request)

    def client(self, **overrides: Any) -> VultrClient:
        cfg = ClientConfig(
            token=TOKEN,
            base_url=BASE_URL,
            transport=httpx.MockTransport(self.handler),
            **overrides,
        )
        return VultrClient(cfg)


@pytest.fixture
def mock_api() -> MockApi:
    return MockApi()
