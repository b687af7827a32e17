"""Chat command for the trading journal CLI.

Talks to the rule-based trading assistant and applies the trade
changes it asks for to the journal.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.markdown import Markdown
from rich.panel import Panel

from tradejournal.cli.common import console, get_config, get_store, pnl_markup
from tradejournal.db.base import TradeNotFoundError

EXIT_COMMANDS = {"exit", "quit", ":q"}
RESET_COMMAND = "/reset"


def _print_reply(content: str) -> None:
    console.print(Panel(
        Markdown(content),
        title="[bold cyan]Trading Coach[/bold cyan]",
        border_style="cyan",
    ))


def _run_turn(session, store, message: str) -> None:
    """Send one message and apply the resulting actions."""
    from tradejournal.assistant import apply_action

    response = session.submit_turn_sync(message, store.list_trades())
    _print_reply(response.content)

    for action in response.actions:
        try:
            trade = apply_action(store, action)
        except (TradeNotFoundError, ValidationError, ValueError) as e:
            console.print(f"[red]✗ Could not apply {action.type}: {e}[/red]")
            continue

        if trade is None:
            console.print(f"[dim]Deleted trade {action.payload.get('id')}[/dim]")
        elif action.type == "add_trade":
            console.print(
                f"[green]✓[/green] Saved {trade.symbol} {pnl_markup(trade.pnl)} "
                f"[dim](ID {trade.id})[/dim]"
            )
        else:
            console.print(
                f"[green]✓[/green] Updated {trade.symbol} {pnl_markup(trade.pnl)} "
                f"[dim](ID {trade.id})[/dim]"
            )


@click.command()
@click.argument("message", required=False)
@click.option("--session", "session_id", default="cli", help="Conversation ID.")
def chat(message: Optional[str], session_id: str) -> None:
    """Chat with your trading coach (Hebrew or English).

    With MESSAGE, answers once and exits. Without it, starts an
    interactive conversation. Type /reset to start over and exit to quit.

    \b
    Examples:
      tradejournal chat "סיכום"
      tradejournal chat "add NQ 250 smt"
      tradejournal chat
    """
    from tradejournal.assistant import INITIAL_GREETING, ConversationSession

    config = get_config()
    store = get_store(config)
    session = ConversationSession(session_id, config.assistant)

    if message:
        _run_turn(session, store, message)
        return

    _print_reply(INITIAL_GREETING)
    while True:
        try:
            text = click.prompt(click.style("You", fg="green", bold=True), prompt_suffix=" > ")
        except (EOFError, click.Abort):
            console.print()
            break

        text = text.strip()
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break
        if text == RESET_COMMAND:
            session.reset()
            console.print("[dim]Conversation reset.[/dim]")
            _print_reply(INITIAL_GREETING)
            continue

        _run_turn(session, store, text)

    console.print("[dim]Bye![/dim]")
