"""FastAPI route handlers."""

from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import InvalidJSON, RequestTooLarge, UpstreamError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.upstream import decode_json
from ui.log_utils import write_incoming_log

ERROR_ROUTE = "inbound"


def error_response(
    message: str,
    status_code: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the fixed-shape `{"error": ...}` response."""
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


async def _parse_json_body(request: Request, max_body_size: int) -> Any:
    """Parse request body as JSON.

    Raises:
        RequestTooLarge: Body exceeds the configured limit
        InvalidJSON: Body is empty or not well-formed JSON
    """
    raw_body = await request.body()
    if len(raw_body) > max_body_size:
        raise RequestTooLarge(f"Request body exceeds {max_body_size} bytes")

    text_body = raw_body.decode("utf-8", errors="replace")
    try:
        body = decode_json(text_body)
    except ValueError as e:
        write_incoming_log(request.method, request.url.path, dict(request.headers), text_body)
        raise InvalidJSON(str(e)) from e

    write_incoming_log(request.method, request.url.path, dict(request.headers), body)
    return body


async def handle_preflight(request: Request) -> Response:
    """Answer CORS preflight with static permissive headers."""
    header_builder: HeaderBuilder = request.app.state.header_builder
    return Response(status_code=200, headers=header_builder.build_preflight_headers())


async def handle_forward(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Inject the secret token and relay the body to the upstream API."""
    header_builder: HeaderBuilder = request.app.state.header_builder
    cors = header_builder.build_cors_headers()

    try:
        body = await _parse_json_body(request, config.limits.max_body_size)
    except RequestTooLarge as e:
        logger.log_error(ERROR_ROUTE, 413, str(e))
        return error_response("Request body too large", 413, cors)
    except InvalidJSON as e:
        logger.log_error(ERROR_ROUTE, 400, f"Invalid JSON: {e}")
        return error_response("Invalid JSON", 400, cors)

    forwarding_service = request.app.state.forwarding_service
    prepared = forwarding_service.prepare(body, path=request.url.path)
    upstream = request.app.state.upstream_client

    try:
        content = await upstream.forward(prepared, logger)
        return Response(content=content, media_type="application/json", headers=cors)
    except UpstreamError:
        return error_response("Failed to reach VibeLive API", 502, cors)


async def handle_method_not_allowed(request: Request) -> Response:
    """Reject anything that is neither POST nor a preflight."""
    return error_response("Method not allowed", 405)
