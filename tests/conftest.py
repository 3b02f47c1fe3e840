"""
Pytest configuration and fixtures.
"""

import json
import os
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest
import requests

from highway_notes.api import http_client
from highway_notes.api.http_client import ApiClient
from highway_notes.state.session import MemoryTokenStore, SessionContext

pytest_plugins = ["nicegui.testing.user_plugin"]

API_BASE_URL = "http://api.test/api"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Setup test environment variables."""

    test_env = {
        "HIGHWAY_NOTES_ENV": "development",
        "HIGHWAY_NOTES_API_URL_LOCAL": API_BASE_URL,
        "HIGHWAY_NOTES_STORAGE_SECRET": "test-secret",
    }

    for key, value in test_env.items():
        os.environ[key] = value

    yield

    # Cleanup
    for key in test_env:
        os.environ.pop(key, None)


def make_response(status_code: int, payload: Any = None) -> requests.Response:
    """Build a real ``requests.Response`` carrying a JSON body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = API_BASE_URL
    if payload is None:
        response._content = b""
    else:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class FakeHttp(requests.Session):
    """
    ``requests.Session`` that answers from a route table instead of the network.

    Each ``(METHOD, path)`` route holds a queue of responses or exceptions;
    the last entry keeps answering once the others are used up.
    """

    def __init__(self) -> None:
        super().__init__()
        self.routes: Dict[Tuple[str, str], list] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, path: str, status_code: int, payload: Any = None) -> None:
        self.routes.setdefault((method, path), []).append(
            make_response(status_code, payload)
        )

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes.setdefault((method, path), []).append(exc)

    def paths(self) -> List[str]:
        return [call["path"] for call in self.calls]

    def request(self, method, url, **kwargs):
        path = urlsplit(url).path[len(urlsplit(API_BASE_URL).path):]
        headers = dict(self.headers)
        headers.update(kwargs.get("headers") or {})
        self.calls.append(
            {
                "method": method,
                "path": path,
                "json": kwargs.get("json"),
                "headers": headers,
            }
        )

        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {path}")

        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result


async def inline_runner(func, *args, **kwargs):
    return func(*args, **kwargs)


class Recorder:
    """Collects calls made to a notify / navigate sink."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def __call__(self, *args) -> None:
        self.calls.append(args)

    @property
    def last(self) -> Optional[tuple]:
        return self.calls[-1] if self.calls else None

    def messages(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def session_ctx() -> SessionContext:
    return SessionContext(MemoryTokenStore())


@pytest.fixture
def notifier() -> Recorder:
    return Recorder()


@pytest.fixture
def navigator() -> Recorder:
    return Recorder()


@pytest.fixture
def api_client(fake_http, session_ctx, navigator) -> ApiClient:
    return ApiClient(
        API_BASE_URL,
        session=session_ctx,
        on_unauthorized=lambda: navigator("/signin"),
        http=fake_http,
        runner=inline_runner,
    )


@pytest.fixture
def backend(monkeypatch, fake_http) -> FakeHttp:
    """Answer every request of the clients the running app builds from ``fake_http``."""
    monkeypatch.setattr(http_client.requests, "Session", lambda: fake_http)
    return fake_http
