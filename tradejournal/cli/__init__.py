"""CLI commands for the trading journal.

This package provides the command-line interface: trade logging, the chat
assistant, dashboards, funded-account and payout tracking, and goals.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
