"""
Unit Test Fixtures.

HTTP is served by httpx.MockTransport; no test reaches the network.
"""

from functools import partial
from urllib.parse import parse_qsl

import httpx
import pytest

from sync_admin.cli.client import APIClient


class FakeApi:
    """
    Canned responses keyed by (method, raw path), with request capture.

    Usage:
        fake_api.add("GET", "/api/42", json={"host": "acme.atlassian.net"})
        ...
        assert fake_api.requests[0].method == "GET"
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: dict[tuple[str, str], httpx.Response] = {}

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: object | None = None,
        text: str | None = None,
    ) -> None:
        if json is not None:
            response = httpx.Response(status_code, json=json)
        else:
            response = httpx.Response(status_code, text=text or "")
        self._responses[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.split(b"?")[0].decode("ascii")
        response = self._responses.get((request.method, path))
        if response is None:
            return httpx.Response(599, text=f"unexpected {request.method} {path}")
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=response.content,
        )

    @staticmethod
    def form(request: httpx.Request) -> dict[str, str]:
        """Decode a form-encoded request body."""
        return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))

    @staticmethod
    def query(request: httpx.Request) -> dict[str, str]:
        """Decode the query string of a request."""
        return dict(request.url.params)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, token: str = "test-token", debug: bool = False) -> APIClient:
        return APIClient("http://api.test", token, debug=debug, transport=self.transport)


@pytest.fixture
def fake_api() -> FakeApi:
    """Provide an empty FakeApi."""
    return FakeApi()


@pytest.fixture
def patched_api(fake_api: FakeApi, monkeypatch: pytest.MonkeyPatch) -> FakeApi:
    """Route every client the CLI creates through fake_api."""
    monkeypatch.setattr(
        "sync_admin.cli.context.APIClient",
        partial(APIClient, transport=fake_api.transport),
    )
    return fake_api
