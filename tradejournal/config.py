"""Configuration loading for the trading journal.

Settings live in a TOML file at ``~/.config/tradejournal/config.toml``.
The ``TRADEJOURNAL_CONFIG`` environment variable points to an alternative
file. A missing or unreadable file yields the defaults.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "tradejournal.db"


class JournalSettings(BaseModel):
    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite database path")


class AssistantSettings(BaseModel):
    reply_delay: float = Field(default=0.0, ge=0, description="Cosmetic delay before replying (seconds)")
    summary_includes_withdrawals: bool = Field(
        default=True, description="Count withdrawal records in chat summaries"
    )
    strategies: dict[str, list[str]] = Field(
        default_factory=dict, description="Extra strategy alias groups"
    )


class FundedSettings(BaseModel):
    account_size: str = Field(default="100K", description="Default challenge preset")


class WithdrawalSettings(BaseModel):
    target_days: int = Field(default=5, gt=0, description="Profitable days needed for a payout")
    profit_minimum: float = Field(default=100.0, ge=0, description="Daily profit that counts")


class AppConfig(BaseModel):
    """Top-level application configuration."""

    journal: JournalSettings = Field(default_factory=JournalSettings)
    assistant: AssistantSettings = Field(default_factory=AssistantSettings)
    funded: FundedSettings = Field(default_factory=FundedSettings)
    withdrawal: WithdrawalSettings = Field(default_factory=WithdrawalSettings)


def get_config_path() -> Path:
    """Get the configuration file path."""
    override = os.environ.get("TRADEJOURNAL_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a TOML file.

    Args:
        path: Optional path to the config file. Uses the default location
            if not specified.

    Returns:
        Parsed configuration, or defaults when the file is absent or invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return AppConfig()

    try:
        data = toml.load(config_path)
        return AppConfig.model_validate(data)
    except Exception as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return AppConfig()
