"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_forward, handle_method_not_allowed, handle_preflight
from auth import require_token
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.transform import PayloadInjector
from services.forwarding_service import ForwardingService
from services.upstream import UpstreamClient


def create_app(config: Config, logger: RequestLogger) -> FastAPI:
    """Create and configure the FastAPI application.

    Raises:
        ConfigurationError: If no secret token is configured
    """
    token = require_token(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        client = httpx.AsyncClient(limits=limits)
        upstream_client = UpstreamClient(client, timeout=config.upstream.timeout)
        app.state.upstream_client = upstream_client
        try:
            yield
        finally:
            await upstream_client.aclose()

    app = FastAPI(
        title="VibeLive Proxy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.header_builder = HeaderBuilder()
    app.state.forwarding_service = ForwardingService(
        config=config,
        logger=logger,
        injector=PayloadInjector(token),
        header_builder=app.state.header_builder,
    )

    @app.options("/{path:path}")
    async def preflight(request: Request):
        return await handle_preflight(request)

    @app.post("/{path:path}")
    async def forward(request: Request):
        return await handle_forward(request, config, logger)

    @app.exception_handler(405)
    async def method_not_allowed(request: Request, _exc: Exception):
        return await handle_method_not_allowed(request)

    return app
