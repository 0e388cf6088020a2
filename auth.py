"""Secret token resolution - the contextAuthToken injected into every request."""

from rich.console import Console

from core.config import CONFIG_FILE, TOKEN_ENV_VAR, Config, load_config
from core.exceptions import ConfigurationError
from ui.log_utils import mask_secret

console = Console()


def require_token(config: Config) -> str:
    """Return the configured secret token.

    Raises:
        ConfigurationError: If neither the environment nor the config file sets it
    """
    token = config.auth.context_auth_token
    if not token:
        raise ConfigurationError(
            f"Context auth token not configured (set {TOKEN_ENV_VAR} or auth.context_auth_token)"
        )
    return token


def check_auth(config: Config) -> bool:
    """Check whether a secret token is available."""
    try:
        token = require_token(config)
    except ConfigurationError:
        console.print("[yellow]Context auth token not configured[/yellow]")
        console.print("\n[dim]Export it in the hosting environment:[/dim]")
        console.print(f"  export {TOKEN_ENV_VAR}=...")
        console.print(f"\n[dim]Or set auth.context_auth_token in:[/dim] {CONFIG_FILE}")
        return False
    console.print(f"[green]Token configured[/green] ({mask_secret(token)})")
    return True


def main():
    """CLI entry point for auth check."""
    check_auth(load_config())


if __name__ == "__main__":
    main()
