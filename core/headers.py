"""Header construction for upstream requests and CORS responses."""

ALLOW_ORIGIN = "Access-Control-Allow-Origin"


class HeaderBuilder:
    """Build headers for the upstream call and for caller-facing responses."""

    def build_upstream_headers(self) -> dict[str, str]:
        """Inbound headers are never passed through, only the content type."""
        return {"Content-Type": "application/json"}

    def build_preflight_headers(self) -> dict[str, str]:
        return {
            ALLOW_ORIGIN: "*",
            "Access-Control-Allow-Methods": "POST",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def build_cors_headers(self) -> dict[str, str]:
        """Let browser callers read the body of POST responses."""
        return {ALLOW_ORIGIN: "*"}
