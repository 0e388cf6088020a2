"""Custom exception hierarchy for the VibeLive proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class UpstreamError(ProxyError):
    """Raised when the upstream API cannot be used.

    Attributes:
        message: Error message
        status_code: HTTP status code from upstream (optional)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream request times out."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None)


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to the upstream API."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None)


class InvalidUpstreamResponse(UpstreamError):
    """Upstream answered with a body that is not valid JSON."""


class RequestTooLarge(ProxyError):
    """Request body exceeds size limit."""


class InvalidJSON(ProxyError):
    """Request body is not valid JSON."""
