"""Shared logging utilities."""

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from core.transform import TOKEN_FIELD

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def write_incoming_log(
    method: str,
    path: str,
    headers: dict[str, str],
    body: Any,
    *,
    log_root: Path | None = None,
) -> Path:
    """Write a single incoming request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "path": path,
        "headers": _redact_headers(headers),
        "body": _redact_body(body),
    }
    return _write_json((log_root or LOG_ROOT) / "incoming", payload)


def write_forward_log(
    body: dict[str, Any],
    headers: dict[str, str],
    *,
    path: str,
    target_url: str,
    log_root: Path | None = None,
) -> Path:
    """Write a single forwarded request log entry, with the token masked."""
    payload = {
        "timestamp": _utc_now(),
        "target": target_url,
        "path": path,
        "headers": _redact_headers(headers),
        "body": _redact_body(body),
    }
    return _write_json((log_root or LOG_ROOT) / "forwarded", payload)


def write_cli_log(
    level: str,
    message: str,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    CLI_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with CLI_LOG_FILE.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path | None = None) -> None:
    """Remove request logs left over from a previous run."""
    root = log_root or LOG_ROOT
    for folder in ("incoming", "forwarded"):
        shutil.rmtree(root / folder, ignore_errors=True)


def mask_secret(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers.items():
        if "key" in key.lower() or "authorization" in key.lower():
            redacted[key] = mask_secret(value)
        else:
            redacted[key] = value
    return redacted


def _redact_body(body: Any) -> Any:
    """Mask the token field of a top-level JSON object."""
    if not isinstance(body, dict) or TOKEN_FIELD not in body:
        return body
    redacted = dict(body)
    value = redacted[TOKEN_FIELD]
    redacted[TOKEN_FIELD] = mask_secret(value) if isinstance(value, str) else "***"
    return redacted


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
