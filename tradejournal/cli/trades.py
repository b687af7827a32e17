"""Journal commands for the trading journal CLI.

Handles logging, listing, editing and deleting trades, and withdrawals.
"""

from datetime import datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, get_store, pnl_markup
from tradejournal.db.base import TradeNotFoundError
from tradejournal.formatting import format_currency
from tradejournal.models import Trade, TradeUpdate

MAX_IMAGES = 5

SORT_KEYS = ["date", "pnl", "rr", "symbol"]


def signed_pnl(pnl: float, status: Optional[str]) -> float:
    """Apply the sign implied by the outcome; without one, keep the sign given."""
    if status == "win":
        return abs(pnl)
    if status == "loss":
        return -abs(pnl)
    return pnl


def build_trade(
    symbol: str,
    pnl: float,
    strategy: str,
    status: Optional[str] = None,
    trade_date: Optional[datetime] = None,
    rr: Optional[float] = None,
    notes: Optional[str] = None,
    images: tuple[str, ...] = (),
    followed_plan: bool = True,
) -> Trade:
    """Build a trade from form-style input.

    Raises:
        ValueError: If more than ``MAX_IMAGES`` images are attached.
    """
    if len(images) > MAX_IMAGES:
        raise ValueError(f"You can attach a maximum of {MAX_IMAGES} images.")

    final_pnl = signed_pnl(pnl, status)
    return Trade(
        symbol=symbol.upper(),
        status=status or ("win" if final_pnl >= 0 else "loss"),
        pnl=final_pnl,
        date=trade_date or datetime.now(),
        strategy=strategy,
        notes=notes,
        image_urls=list(images),
        rr=rr,
        followed_plan=followed_plan,
    )


def filter_trade_list(
    trades: list[Trade],
    search: str = "",
    outcome: str = "all",
    sort_by: str = "date",
) -> list[Trade]:
    """Search, filter by outcome and sort trades for the list view.

    Args:
        trades: Trades to show.
        search: Case-insensitive text matched against symbol, strategy and notes.
        outcome: ``all``, ``win`` or ``loss``.
        sort_by: ``date`` and ``pnl``/``rr`` sort descending, ``symbol`` ascending.

    Returns:
        Filtered, sorted trades.
    """
    term = search.lower()

    def matches(trade: Trade) -> bool:
        text_fields = (trade.symbol, trade.strategy or "", trade.notes or "")
        if term and not any(term in field.lower() for field in text_fields):
            return False
        return outcome == "all" or trade.status == outcome

    result = [t for t in trades if matches(t)]

    if sort_by == "pnl":
        result.sort(key=lambda t: t.pnl, reverse=True)
    elif sort_by == "rr":
        result.sort(key=lambda t: t.rr or 0, reverse=True)
    elif sort_by == "symbol":
        result.sort(key=lambda t: t.symbol)
    else:
        result.sort(key=lambda t: t.date, reverse=True)
    return result


def render_trade_table(trades: list[Trade], title: str = "Trades") -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Symbol")
    table.add_column("Status")
    table.add_column("P&L", justify="right")
    table.add_column("R:R", justify="right")
    table.add_column("Strategy")
    table.add_column("Plan", justify="center")
    table.add_column("Notes", max_width=30)

    for trade in trades:
        notes = trade.notes or "-"
        table.add_row(
            str(trade.id),
            trade.date.strftime("%Y-%m-%d"),
            trade.symbol,
            trade.status,
            pnl_markup(trade.pnl),
            f"{trade.rr:.2f}R" if trade.rr else "-",
            trade.strategy or "-",
            "✓" if trade.followed_plan else "✗",
            (notes[:27] + "...") if len(notes) > 30 else notes,
        )
    return table


@click.command()
@click.argument("symbol")
@click.argument("pnl", type=float)
@click.option("--strategy", "-s", required=True, help="Strategy tag (e.g. smt, ifvg).")
@click.option("--status", type=click.Choice(["win", "loss"]), default=None,
              help="Outcome. Forces the sign of PNL.")
@click.option("--date", "trade_date", type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M"]),
              default=None, help="Trade date (default: now).")
@click.option("--rr", type=click.FloatRange(min=0), default=None, help="Risk/reward ratio.")
@click.option("--notes", "-n", default=None, help="Trade notes.")
@click.option("--image", "images", multiple=True, help="Screenshot URL (repeatable, max 5).")
@click.option("--broke-plan", is_flag=True, help="Mark that the trading plan was not followed.")
def add(
    symbol: str,
    pnl: float,
    strategy: str,
    status: Optional[str],
    trade_date: Optional[datetime],
    rr: Optional[float],
    notes: Optional[str],
    images: tuple[str, ...],
    broke_plan: bool,
) -> None:
    """Log a new trade.

    \b
    Examples:
      tradejournal add NQ 250 -s smt
      tradejournal add ES 120 -s ifvg --status loss --rr 1.5
      tradejournal add BTC -80 -s amd --date 2025-03-03 --broke-plan
    """
    try:
        trade = build_trade(
            symbol, pnl, strategy, status, trade_date, rr, notes, images, not broke_plan
        )
        stored = get_store().create_trade(trade)
    except (ValueError, ValidationError) as e:
        fail(str(e), title="Invalid Trade")

    console.print(
        f"[green]✓[/green] Trade added: [bold]{stored.symbol}[/bold] "
        f"{pnl_markup(stored.pnl)} [dim](ID {stored.id})[/dim]"
    )


@click.command()
@click.option("--search", "-q", default="", help="Search symbol, strategy and notes.")
@click.option("--filter", "outcome", type=click.Choice(["all", "win", "loss"]), default="all",
              help="Show only wins or losses.")
@click.option("--sort", "sort_by", type=click.Choice(SORT_KEYS), default="date", help="Sort order.")
@click.option("--limit", type=int, default=None, help="Maximum number of trades to show.")
def trades(search: str, outcome: str, sort_by: str, limit: Optional[int]) -> None:
    """List journaled trades.

    \b
    Examples:
      tradejournal trades
      tradejournal trades -q smt --filter win
      tradejournal trades --sort pnl --limit 10
    """
    result = filter_trade_list(get_store().list_trades(), search, outcome, sort_by)
    if limit is not None:
        result = result[:limit]

    if not result:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trades[/bold]",
            border_style="dim",
        ))
        return

    console.print(render_trade_table(result))
    total = sum(t.pnl for t in result)
    console.print(f"\n[bold]Total P&L:[/bold] {pnl_markup(total)}")


@click.command()
@click.argument("trade_id", type=int)
@click.option("--symbol", default=None, help="New symbol.")
@click.option("--pnl", type=float, default=None, help="New P&L (status follows its sign).")
@click.option("--strategy", "-s", default=None, help="New strategy tag.")
@click.option("--date", "trade_date", type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M"]),
              default=None, help="New trade date.")
@click.option("--rr", type=click.FloatRange(min=0), default=None, help="New risk/reward ratio.")
@click.option("--notes", "-n", default=None, help="Replace the notes.")
@click.option("--followed-plan/--broke-plan", default=None, help="Whether the plan was followed.")
def edit(
    trade_id: int,
    symbol: Optional[str],
    pnl: Optional[float],
    strategy: Optional[str],
    trade_date: Optional[datetime],
    rr: Optional[float],
    notes: Optional[str],
    followed_plan: Optional[bool],
) -> None:
    """Edit an existing trade.

    \b
    Examples:
      tradejournal edit 12 --pnl -150
      tradejournal edit 12 -s "turtle soup" --rr 2
    """
    store = get_store()
    existing = store.get_trade(trade_id)
    if existing is None:
        fail(f"Trade {trade_id} not found")

    status = None
    if pnl is not None and not existing.is_withdrawal:
        status = "win" if pnl >= 0 else "loss"

    try:
        updates = TradeUpdate(
            symbol=symbol.upper() if symbol else None,
            pnl=pnl,
            status=status,
            strategy=strategy,
            date=trade_date,
            rr=rr,
            notes=notes,
            followed_plan=followed_plan,
        )
        updated = store.update_trade(trade_id, updates)
    except TradeNotFoundError as e:
        fail(str(e))
    except (ValueError, ValidationError) as e:
        fail(str(e), title="Invalid Trade")

    console.print(
        f"[green]✓[/green] Trade {trade_id} updated: [bold]{updated.symbol}[/bold] "
        f"{pnl_markup(updated.pnl)}"
    )


@click.command()
@click.argument("trade_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation.")
def delete(trade_id: int, yes: bool) -> None:
    """Delete a trade from the journal."""
    store = get_store()
    trade = store.get_trade(trade_id)
    if trade is None:
        fail(f"Trade {trade_id} not found")

    if not yes and not click.confirm(
        f"Delete {trade.symbol} trade from {trade.date:%Y-%m-%d} ({format_currency(trade.pnl)})?"
    ):
        console.print("[dim]Cancelled.[/dim]")
        return

    store.delete_trade(trade_id)
    console.print(f"[green]✓[/green] Removed {trade.symbol} trade from journal")


@click.command()
@click.argument("amount", type=float)
def withdraw(amount: float) -> None:
    """Record a withdrawal from the trading account.

    Resets progress toward the next payout.
    """
    try:
        get_store().add_withdrawal(amount)
    except ValueError as e:
        fail(str(e), title="Invalid Amount")

    console.print(Panel(
        f"{format_currency(amount)} has been withdrawn. Your payout progress has been reset.",
        title="[bold green]Withdrawal Recorded[/bold green]",
        border_style="green",
    ))
