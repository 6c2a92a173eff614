from __future__ import annotations

import json as jsonlib

import pytest

from program_portal.api.connection import ApiConfig, ApiConnection
from program_portal.main import create_app

BASE_URL = "http://api.test/api/v1"


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, content: bytes | None = None):
        self.status_code = status_code
        self._body = body
        if content is not None:
            self.content = content
        elif body is None:
            self.content = b""
        else:
            self.content = jsonlib.dumps(body).encode("utf-8")

    def json(self):
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


class FakeHttp:
    """Stand-in for ``requests.Session``: canned responses per (method, path), every call recorded."""

    def __init__(self):
        self.calls: list[dict] = []
        self._routes: dict[tuple[str, str], FakeResponse] = {}
        self.error: Exception | None = None

    def route(self, method: str, path: str, *, status: int = 200, data=None, body=None, content: bytes | None = None):
        if body is None and content is None and data is not None:
            body = {"statusCode": status, "data": data, "message": "ok"}
        self._routes[(method.upper(), path)] = FakeResponse(status, body, content)

    def request(self, method, url, **kwargs):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append({"method": method, "path": path, **kwargs})
        if self.error is not None:
            raise self.error
        return self._routes.get((method.upper(), path), FakeResponse(404, {"message": "Not found"}))

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def conn(http):
    return ApiConnection(ApiConfig(base_url=BASE_URL, timeout=5), token_provider=lambda: "tok-123", http=http)


@pytest.fixture
def app(http):
    app = create_app("program_portal.config.testing", http=http)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sign_in(client):
    def _sign_in(role: str, user_id: str = "u1", token: str = "tok-123"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["name"] = "Test User"
            sess["role"] = role
            sess["access_token"] = token
        return client

    return _sign_in
