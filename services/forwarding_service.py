"""Forwarding orchestration for proxy requests."""

from typing import Any

from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import PreparedRequest
from core.transform import PayloadInjector


class ForwardingService:
    """Prepare inbound requests for forwarding to the VibeLive API."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        injector: PayloadInjector,
        header_builder: HeaderBuilder,
    ) -> None:
        self._config = config
        self._logger = logger
        self._injector = injector
        self._headers = header_builder

    def prepare(self, body: Any, *, path: str) -> PreparedRequest:
        """Build the augmented payload and upstream headers."""
        payload = self._injector.inject(body)
        upstream_headers = self._headers.build_upstream_headers()
        target_url = self._config.upstream.url
        self._logger.log_forward(
            payload,
            upstream_headers,
            path=path,
            target_url=target_url,
        )
        return PreparedRequest(target_url, upstream_headers, payload)
