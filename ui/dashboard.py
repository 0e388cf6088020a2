"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from core.transform import TOKEN_FIELD
from ui.log_utils import write_cli_log, write_forward_log

console = Console()


class ForwardInfo:
    """Info about a single forwarded request."""

    def __init__(self, path: str, fields: list[str], timestamp: datetime):
        self.path = path
        self.fields = fields[:4]  # Keep first 4 field names
        self.fields_count = len(fields)
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing forwarded requests and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[ForwardInfo] = []
        self._max_recent = 8
        self._request_count = {"forwarded": 0, "errors": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_forward(
        self,
        body: dict[str, Any],
        headers: dict[str, str],
        *,
        path: str,
        target_url: str,
    ) -> None:
        """Log a request about to be forwarded upstream."""
        with self._lock:
            self._request_count["forwarded"] += 1
            fields = [key for key in body if key != TOKEN_FIELD]
            self._recent.insert(0, ForwardInfo(path=path, fields=fields, timestamp=datetime.now()))
            self._recent = self._recent[: self._max_recent]

            write_forward_log(body, headers, path=path, target_url=target_url)
            write_cli_log("FORWARD", path, fields=len(fields))

            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._request_count["errors"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_recent_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("VibeLive Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._request_count['forwarded']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Errors: {self._request_count['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_recent_panel(self) -> Panel:
        """Build the recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Path", ratio=1)
            table.add_column("Fields", ratio=2)

            for info in self._recent:
                fields_str = ", ".join(info.fields)
                if info.fields_count > 4:
                    fields_str += f" (+{info.fields_count - 4})"

                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.path,
                    fields_str or "[dim]—[/dim]",
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Forwarded[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and upstream target."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(f"Upstream: {self.config.upstream.url}", style="dim")

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
