"""Configuration models and loading."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "vibelive-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

TOKEN_ENV_VAR = "CONTEXT_AUTH_TOKEN"
VIBELIVE_API = "https://proto2.makedo.com:8883/v04/authorizeUser.jsp"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8787


class UpstreamSettings(BaseModel):
    url: str = VIBELIVE_API
    # None disables the timeout entirely
    timeout: float | None = None


class AuthSettings(BaseModel):
    context_auth_token: str = ""


class LimitSettings(BaseModel):
    max_body_size: int = 50 * 1024 * 1024  # 50MB
    keep_alive_timeout: int = 5


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed.

    The secret token from the environment takes precedence over the file.
    """
    config = _read_config_file(config_file)
    env_token = os.environ.get(TOKEN_ENV_VAR)
    if env_token:
        config.auth.context_auth_token = env_token
    return config


def _read_config_file(config_file: Path) -> Config:
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
