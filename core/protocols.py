"""Shared protocol definitions."""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_forward(
        self,
        body: dict[str, Any],
        headers: dict[str, str],
        *,
        path: str,
        target_url: str,
    ) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
