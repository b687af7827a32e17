"""Statistics commands for the trading journal CLI.

Dashboard overview, monthly calendar, funded-account tracking and payout
progress.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, get_config, get_store, pnl_markup
from tradejournal.formatting import format_currency, format_day, format_percentage

PROGRESS_WIDTH = 30


def progress_bar(pct: float, color: str = "cyan") -> str:
    """Render a percentage as a text bar."""
    pct = max(0.0, min(pct, 100.0))
    filled = int(round(pct / 100 * PROGRESS_WIDTH))
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (PROGRESS_WIDTH - filled)}[/dim] {pct:.1f}%"


@click.command()
def dashboard() -> None:
    """Show performance overview and recent trades.

    Withdrawals are not counted in these statistics.
    """
    from tradejournal.analytics import calculate_stats, recent_trades

    trades = get_store().list_trades()
    stats = calculate_stats(trades)

    if stats.total_trades == 0:
        console.print(Panel(
            "[dim]No trades yet. Log one with[/dim] [cyan]tradejournal add[/cyan]",
            title="[bold]Dashboard[/bold]",
            border_style="dim",
        ))
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total P&L", pnl_markup(stats.total_pnl))
    table.add_row("This Week", pnl_markup(stats.weekly_pnl))
    table.add_row("This Month", pnl_markup(stats.monthly_pnl))
    table.add_row("Win Rate", format_percentage(stats.win_rate))
    table.add_row(
        "Trades",
        f"{stats.total_trades} ([green]{stats.winning_trades}W[/green] / "
        f"[red]{stats.losing_trades}L[/red])",
    )
    table.add_row("Avg Win", f"[green]{format_currency(stats.avg_win)}[/green]")
    table.add_row("Avg Loss", f"[red]{format_currency(stats.avg_loss)}[/red]")
    table.add_row("Best Trade", pnl_markup(stats.best_trade))
    table.add_row("Worst Trade", pnl_markup(stats.worst_trade))
    table.add_row("Avg R:R", f"{stats.avg_rr:.2f}R" if stats.avg_rr else "-")

    console.print(Panel(table, title="[bold cyan]Dashboard[/bold cyan]", border_style="cyan"))

    recent = Table(title="Recent Trades", show_header=True, header_style="bold cyan")
    recent.add_column("Date")
    recent.add_column("Symbol", style="bold")
    recent.add_column("Strategy")
    recent.add_column("P&L", justify="right")
    for trade in recent_trades(trades):
        recent.add_row(
            format_day(trade.date),
            trade.symbol,
            trade.strategy or "-",
            pnl_markup(trade.pnl),
        )
    console.print(recent)


@click.command()
@click.option("--month", "month_str", default=None, help="Month to show as YYYY-MM (default: current).")
@click.option("--day", "day_str", default=None, help="Show trades of one day (YYYY-MM-DD).")
def calendar(month_str: Optional[str], day_str: Optional[str]) -> None:
    """Show daily P&L for a month.

    \b
    Examples:
      tradejournal calendar
      tradejournal calendar --month 2025-03
      tradejournal calendar --day 2025-03-04
    """
    from tradejournal.analytics import group_by_day, month_grid
    from tradejournal.analytics.calendar_view import month_total

    trades = get_store().list_trades()
    days = group_by_day(trades)

    if day_str:
        try:
            day = datetime.strptime(day_str, "%Y-%m-%d").date()
        except ValueError:
            fail(f"Invalid day: {day_str}. Use YYYY-MM-DD.")
        _print_day(days.get(day), day)
        return

    try:
        anchor = datetime.strptime(month_str, "%Y-%m") if month_str else datetime.now()
    except ValueError:
        fail(f"Invalid month: {month_str}. Use YYYY-MM.")

    table = Table(
        title=f"{anchor:%B %Y}",
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for name in ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]:
        table.add_column(name, justify="center", min_width=9)

    for week in month_grid(anchor.year, anchor.month):
        cells = []
        for day in week:
            if day.month != anchor.month:
                cells.append("")
                continue
            summary = days.get(day)
            cell = f"[bold]{day.day}[/bold]"
            if summary is not None:
                cell += f"\n{pnl_markup(summary.pnl)}"
                if summary.count:
                    cell += f"\n[dim]{summary.count} trades[/dim]"
                if summary.has_withdrawal:
                    cell += "\n[yellow]withdrawal[/yellow]"
            cells.append(cell)
        table.add_row(*cells)

    console.print(table)
    total = month_total(days, anchor.year, anchor.month)
    console.print(f"\n[bold]Monthly P&L:[/bold] {pnl_markup(total)}")


def _print_day(summary, day: date) -> None:
    if summary is None:
        console.print(f"[dim]No trades on {format_day(day)}[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Strategy")
    table.add_column("R:R", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Notes", max_width=40)
    for trade in summary.trades:
        table.add_row(
            trade.symbol,
            trade.strategy or "-",
            f"{trade.rr:.2f}R" if trade.rr else "-",
            pnl_markup(trade.pnl),
            trade.notes or "-",
        )
    console.print(Panel(
        table,
        title=f"[bold]Trades for {format_day(day)}[/bold] {pnl_markup(summary.pnl)}",
        border_style="cyan",
    ))


@click.command()
@click.option("--size", type=click.Choice(["50K", "100K", "150K"], case_sensitive=False), default=None,
              help="Switch to a challenge preset and save it.")
def funded(size: Optional[str]) -> None:
    """Track a funded-account evaluation.

    Shows progress toward the profit target and the trailing drawdown
    against the challenge rules.
    """
    from tradejournal.analytics import calculate_progress, get_preset

    config = get_config()
    store = get_store(config)

    if size:
        rules = get_preset(size)
        store.save_funded_settings(rules)
        console.print(f"[green]✓[/green] Switched to the {rules.account_size} challenge")
    else:
        rules = store.get_funded_settings()
        if rules is None:
            try:
                rules = get_preset(config.funded.account_size)
            except ValueError as e:
                fail(str(e), title="Configuration Error")

    progress = calculate_progress(store.list_trades(), rules)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Account", rules.account_size)
    table.add_row("Starting Balance", format_currency(rules.starting_balance))
    table.add_row("Current Balance", format_currency(progress.current_balance))
    table.add_row("Total P&L", pnl_markup(progress.total_pnl))
    table.add_row("Peak Balance", format_currency(progress.historical_high))
    table.add_row("Trailing Drawdown", f"[red]{format_currency(progress.trailing_drawdown)}[/red]")

    lines = [
        f"[bold]Profit target[/bold] {format_currency(rules.profit_target)}",
        progress_bar(progress.profit_target_pct, "green"),
        "",
        f"[bold]Max drawdown[/bold] {format_currency(rules.max_drawdown)}",
        progress_bar(progress.drawdown_pct, "red"),
    ]
    if progress.is_violation:
        lines.append("\n[bold red]Drawdown limit violated![/bold red]")
    elif progress.target_reached:
        lines.append("\n[bold green]Profit target reached![/bold green]")

    console.print(Panel(table, title="[bold cyan]Funded Account[/bold cyan]", border_style="cyan"))
    console.print(Panel(
        "\n".join(lines),
        title="[bold]Challenge Progress[/bold]",
        border_style="red" if progress.is_violation else "green",
    ))


@click.command()
def payout() -> None:
    """Show progress toward the next payout.

    Counts profitable trading days since the last withdrawal.
    """
    from tradejournal.analytics import calculate_withdrawal_progress

    config = get_config()
    trades = get_store(config).list_trades()
    progress = calculate_withdrawal_progress(
        trades,
        target_days=config.withdrawal.target_days,
        profit_minimum=config.withdrawal.profit_minimum,
    )

    pct = progress.progress / progress.target_days * 100
    lines = [
        f"[bold]{progress.progress}/{progress.target_days}[/bold] days with at least "
        f"{format_currency(config.withdrawal.profit_minimum)} profit",
        progress_bar(pct, "green"),
    ]
    if progress.last_withdrawal:
        lines.append(f"\n[dim]Last withdrawal: {format_day(progress.last_withdrawal)}[/dim]")
    if progress.is_eligible:
        lines.append("\n[bold green]Eligible for a payout![/bold green]")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Payout Progress[/bold cyan]",
        border_style="green" if progress.is_eligible else "cyan",
    ))

    if progress.profitable_days:
        table = Table(title="Qualifying Days", show_header=True, header_style="bold cyan")
        table.add_column("Date")
        table.add_column("P&L", justify="right")
        for day, pnl in progress.profitable_days:
            table.add_row(format_day(day), pnl_markup(pnl))
        console.print(table)

    if progress.withdrawals:
        history = Table(title="Withdrawal History", show_header=True, header_style="bold cyan")
        history.add_column("Date")
        history.add_column("Amount", justify="right")
        for withdrawal in progress.withdrawals:
            history.add_row(format_day(withdrawal.date), format_currency(abs(withdrawal.pnl)))
        console.print(history)
