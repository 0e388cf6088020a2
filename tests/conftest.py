"""Shared fixtures: app wired to a scripted upstream, logs isolated per test.

Invariants:
    - The real VibeLive API is never contacted (httpx.MockTransport)
    - Request logs land in tmp_path, never in ./logs
    - CONTEXT_AUTH_TOKEN from the developer's shell never leaks into tests
"""

from typing import Any, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import ui.log_utils as log_utils
from app import create_app
from core.config import TOKEN_ENV_VAR, AuthSettings, Config
from services.upstream import UpstreamClient

SECRET = "S3CRET"


class RecordingLogger:
    """RequestLogger that keeps calls in memory."""

    def __init__(self) -> None:
        self.forwards: list[dict[str, Any]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_forward(self, body, headers, *, path, target_url) -> None:
        self.forwards.append(
            {"body": body, "headers": headers, "path": path, "target_url": target_url}
        )

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


class FakeUpstream:
    """Records outbound requests and answers with `reply`."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.reply: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"status": "ok"}
        )

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
    monkeypatch.setattr(log_utils, "LOG_ROOT", tmp_path / "logs")
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "logs" / "proxy.log")


@pytest.fixture
def config():
    return Config(auth=AuthSettings(context_auth_token=SECRET))


@pytest.fixture
def request_logger():
    return RecordingLogger()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
async def client(config, request_logger, upstream):
    """Proxy app behind an ASGI test client; lifespan is not run."""
    app = create_app(config, request_logger)
    upstream_http = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handle))
    app.state.upstream_client = UpstreamClient(upstream_http)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    await upstream_http.aclose()
