"""Request body transformation: secret token injection."""

from typing import Any

TOKEN_FIELD = "contextAuthToken"


class PayloadInjector:
    """Merge the server-held secret into inbound request bodies."""

    def __init__(self, token: str, field: str = TOKEN_FIELD) -> None:
        self._token = token
        self._field = field

    def inject(self, body: Any) -> dict[str, Any]:
        """Shallow-copy the body, then set the token field.

        The token is written after the copy, so a caller-supplied field of the
        same name is always overwritten. The original body is left untouched.
        """
        payload = self._spread(body)
        payload[self._field] = self._token
        return payload

    @staticmethod
    def _spread(body: Any) -> dict[str, Any]:
        """Copy a parsed JSON value into a fresh top-level mapping."""
        if isinstance(body, dict):
            return dict(body)
        # Arrays and strings spread to index-keyed fields
        if isinstance(body, (list, str)):
            return {str(index): item for index, item in enumerate(body)}
        # null, numbers and booleans have no own fields
        return {}
