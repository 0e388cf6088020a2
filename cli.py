"""CLI entry point for vibelive-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from auth import check_auth
from core.config import CONFIG_FILE, load_config
from core.exceptions import ConfigurationError
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg in ("--check", "--auth"):
            check_auth(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    dashboard = Dashboard(config)
    try:
        app = create_app(config, dashboard)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        console.print(f"[dim]Edit {CONFIG_FILE} and set auth.context_auth_token[/dim]")
        sys.exit(1)

    # Clear previous logs and start dashboard
    clear_logs()

    import uvicorn

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port, upstream=config.upstream.url)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]VibeLive Proxy[/bold cyan]

Adds the server-held contextAuthToken to POST bodies and forwards them to VibeLive.

[bold]Usage:[/bold]
    vibelive-proxy              Start with live dashboard
    vibelive-proxy --check      Check token status
    vibelive-proxy --config     Show config location
    vibelive-proxy --help       Show this help

[bold]Secret token:[/bold]
    Read from the CONTEXT_AUTH_TOKEN environment variable,
    falling back to auth.context_auth_token in the config file.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
