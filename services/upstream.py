"""HTTP forwarding to the upstream VibeLive API."""

import json
import math
import re
from typing import Any

import httpx

from core.exceptions import (
    InvalidUpstreamResponse,
    UpstreamConnectionError,
    UpstreamTimeoutError,
)
from core.protocols import RequestLogger
from core.request_types import PreparedRequest

ROUTE_NAME = "VibeLive"

# Surrogates left in a decoded str are always unpaired
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_float(text: str) -> float | None:
    value = float(text)
    # Out-of-range literals such as 1e400 serialize as null
    return value if math.isfinite(value) else None


def encode_json(payload: Any) -> bytes:
    """Serialize compactly, without whitespace between tokens.

    Unpaired surrogates are written as \\uXXXX escapes so the output is
    always valid UTF-8.
    """
    text = json.dumps(
        payload,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    text = _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)
    return text.encode("utf-8")


def decode_json(text: str) -> Any:
    """Parse strict JSON; NaN and Infinity literals are rejected."""
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)


class UpstreamClient:
    """Forward prepared requests to the upstream API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self._timeout = timeout

    async def forward(
        self,
        prepared: PreparedRequest,
        logger: RequestLogger,
    ) -> bytes:
        """POST the prepared payload and return the upstream JSON, re-encoded.

        Raises:
            UpstreamError: On transport failure or an unusable body
        """
        try:
            response = await self._client.post(
                prepared.target_url,
                content=encode_json(prepared.body),
                headers=prepared.headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            logger.log_error(ROUTE_NAME, 502, f"Upstream timeout: {e}")
            raise UpstreamTimeoutError("Upstream timeout") from e
        except httpx.RequestError as e:
            logger.log_error(ROUTE_NAME, 502, f"Upstream connection error: {e}")
            raise UpstreamConnectionError(f"Upstream connection error: {e}") from e

        if response.is_error:
            # Passed through unchanged; only recorded
            logger.log_error(ROUTE_NAME, response.status_code, response.text)

        try:
            return encode_json(decode_json(response.text))
        except ValueError as e:
            logger.log_error(ROUTE_NAME, 502, f"Invalid upstream JSON: {response.text}")
            raise InvalidUpstreamResponse(
                "Upstream returned invalid JSON",
                status_code=response.status_code,
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()
