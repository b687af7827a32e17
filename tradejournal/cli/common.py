"""Helpers shared by CLI commands."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from tradejournal.config import AppConfig, load_config
from tradejournal.db.store import TradeStore
from tradejournal.formatting import format_currency

console = Console()


def get_config() -> AppConfig:
    """Load the application configuration."""
    return load_config()


def get_store(config: Optional[AppConfig] = None) -> TradeStore:
    """Get the trade store configured for this user."""
    config = config or get_config()
    return TradeStore(config.journal.db_path.expanduser())


def pnl_markup(amount: float) -> str:
    """Colour a P&L amount for rich output."""
    color = "green" if amount >= 0 else "red"
    return f"[{color}]{format_currency(amount)}[/{color}]"


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
