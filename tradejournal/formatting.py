"""Display formatting shared by the assistant and the CLI."""

from datetime import date


def format_currency(amount: float) -> str:
    """Format an amount as US dollars, e.g. ``-$1,250.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_ils(amount: float) -> str:
    """Format an amount as Israeli shekels, e.g. ``₪5,000.00``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}₪{abs(amount):,.2f}"


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"


def format_day(value: date) -> str:
    """Short day.month.year date, as shown in the Hebrew interface."""
    return f"{value.day}.{value.month}.{value.year}"
