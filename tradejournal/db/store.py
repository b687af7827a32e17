"""SQLite data store for the trading journal."""

import json
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from tradejournal.db.base import BaseTradeStore, TradeNotFoundError
from tradejournal.formatting import format_currency
from tradejournal.models import ChallengeRules, Goal, Trade, TradeUpdate


DEFAULT_GOALS = [
    Goal(title="Monthly P&L Target", target=5000, unit="ILS", icon="DollarSign", is_default=True),
    Goal(title="Win Rate Goal", target=60, unit="%", icon="TrendingUp", is_default=True),
    Goal(title="Trades per Month", target=50, unit="trades", icon="Target", is_default=True),
]

TRADE_COLUMNS = (
    "id, symbol, status, pnl, date, strategy, notes, image_urls, rr, followed_plan"
)


class TradeStore(BaseTradeStore):
    """SQLite-based store for trades, goals and account settings."""

    REQUIRED_TABLES = [
        "trades",
        "goals",
        "personal_notes",
        "funded_account_settings",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    symbol TEXT NOT NULL,
                    status TEXT NOT NULL,
                    pnl REAL NOT NULL,
                    date TEXT NOT NULL,
                    strategy TEXT,
                    notes TEXT,
                    image_urls TEXT NOT NULL DEFAULT '[]',
                    rr REAL,
                    followed_plan INTEGER NOT NULL DEFAULT 1
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS goals (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    target REAL NOT NULL,
                    current REAL NOT NULL DEFAULT 0,
                    unit TEXT NOT NULL DEFAULT '',
                    icon TEXT NOT NULL DEFAULT 'Target',
                    is_default INTEGER NOT NULL DEFAULT 0
                )
            """)

            # Single-row tables
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS personal_notes (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    notes TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS funded_account_settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    account_size TEXT NOT NULL,
                    profit_target REAL NOT NULL,
                    max_drawdown REAL NOT NULL,
                    starting_balance REAL NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            symbol=row["symbol"],
            status=row["status"],
            pnl=row["pnl"],
            date=datetime.fromisoformat(row["date"]),
            strategy=row["strategy"],
            notes=row["notes"],
            image_urls=json.loads(row["image_urls"] or "[]"),
            rr=row["rr"],
            followed_plan=bool(row["followed_plan"]),
        )

    def list_trades(self) -> list[Trade]:
        """Get all trades, newest first."""
        return self.get_trades()

    def get_trades(self, trade_date: Optional[date] = None) -> list[Trade]:
        """Get trades from the database.

        Args:
            trade_date: Optional date filter. If None, returns all trades.

        Returns:
            List of trades, newest first.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if trade_date:
                cursor.execute(
                    f"""
                    SELECT {TRADE_COLUMNS}
                    FROM trades
                    WHERE date(date) = ?
                    ORDER BY date DESC, id DESC
                    """,
                    (trade_date.isoformat(),),
                )
            else:
                cursor.execute(
                    f"""
                    SELECT {TRADE_COLUMNS}
                    FROM trades
                    ORDER BY date DESC, id DESC
                    """
                )
            return [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        """Get a trade by ID.

        Args:
            trade_id: ID of the trade.

        Returns:
            The trade, or None if not found.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {TRADE_COLUMNS} FROM trades WHERE id = ?",
                (trade_id,),
            )
            row = cursor.fetchone()
            return self._row_to_trade(row) if row else None
        finally:
            conn.close()

    def create_trade(self, trade: Trade) -> Trade:
        """Log a trade to the database.

        Args:
            trade: Trade to log.

        Returns:
            The stored trade with its database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades
                (symbol, status, pnl, date, strategy, notes, image_urls, rr, followed_plan)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.symbol,
                    trade.status,
                    trade.pnl,
                    trade.date.isoformat(),
                    trade.strategy,
                    trade.notes,
                    json.dumps(trade.image_urls),
                    trade.rr,
                    1 if trade.followed_plan else 0,
                ),
            )
            conn.commit()
            return trade.model_copy(update={"id": cursor.lastrowid})
        finally:
            conn.close()

    def update_trade(self, trade_id: int, updates: TradeUpdate) -> Trade:
        """Apply a partial update to a trade.

        The merged record is validated as a whole, so an update that breaks
        the status/P&L sign rule is rejected.
        """
        existing = self.get_trade(trade_id)
        if existing is None:
            raise TradeNotFoundError(trade_id)

        changes = updates.model_dump(exclude_none=True)
        merged = Trade.model_validate({**existing.model_dump(), **changes})

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE trades
                SET symbol = ?, status = ?, pnl = ?, date = ?, strategy = ?,
                    notes = ?, image_urls = ?, rr = ?, followed_plan = ?
                WHERE id = ?
                """,
                (
                    merged.symbol,
                    merged.status,
                    merged.pnl,
                    merged.date.isoformat(),
                    merged.strategy,
                    merged.notes,
                    json.dumps(merged.image_urls),
                    merged.rr,
                    1 if merged.followed_plan else 0,
                    trade_id,
                ),
            )
            conn.commit()
            return merged
        finally:
            conn.close()

    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            if cursor.rowcount == 0:
                raise TradeNotFoundError(trade_id)
        finally:
            conn.close()

    def add_withdrawal(self, amount: float, when: Optional[datetime] = None) -> Trade:
        """Record a withdrawal from the trading account.

        Args:
            amount: Positive amount withdrawn.
            when: Withdrawal time. Defaults to now.

        Returns:
            The stored withdrawal record.

        Raises:
            ValueError: If amount is not a positive number.
        """
        if not amount > 0:
            raise ValueError("Withdrawal amount must be a positive number")

        return self.create_trade(
            Trade(
                symbol="WITHDRAWAL",
                status="withdrawal",
                pnl=-float(amount),
                date=when or datetime.now(),
                notes=f"Withdrew {format_currency(amount)}",
                followed_plan=True,
            )
        )

    # ==================== Goals ====================

    def get_goals(self) -> list[Goal]:
        """Get all goals, seeding the default goals on first use.

        Returns:
            List of goals.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) as count FROM goals")
            if cursor.fetchone()["count"] == 0:
                for goal in DEFAULT_GOALS:
                    self._insert_goal(cursor, goal)
                conn.commit()

            cursor.execute(
                """
                SELECT id, title, target, current, unit, icon, is_default
                FROM goals
                ORDER BY id
                """
            )
            return [
                Goal(
                    id=row["id"],
                    title=row["title"],
                    target=row["target"],
                    current=row["current"],
                    unit=row["unit"],
                    icon=row["icon"],
                    is_default=bool(row["is_default"]),
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    @staticmethod
    def _insert_goal(cursor: sqlite3.Cursor, goal: Goal) -> int:
        cursor.execute(
            """
            INSERT INTO goals (title, target, current, unit, icon, is_default)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                goal.title,
                goal.target,
                goal.current,
                goal.unit,
                goal.icon,
                1 if goal.is_default else 0,
            ),
        )
        return cursor.lastrowid or 0

    def save_goal(self, goal: Goal) -> Goal:
        """Insert a new goal, or update it when it has an ID.

        Returns:
            The saved goal with its ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if goal.id is None:
                goal_id = self._insert_goal(cursor, goal)
                conn.commit()
                return goal.model_copy(update={"id": goal_id})

            cursor.execute(
                """
                UPDATE goals
                SET title = ?, target = ?, current = ?, unit = ?, icon = ?
                WHERE id = ?
                """,
                (goal.title, goal.target, goal.current, goal.unit, goal.icon, goal.id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise LookupError(f"Goal {goal.id} not found")
            return goal
        finally:
            conn.close()

    def delete_goal(self, goal_id: int) -> bool:
        """Delete a goal. Default goals are kept.

        Returns:
            True if a goal was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM goals WHERE id = ? AND is_default = 0", (goal_id,)
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Personal Notes ====================

    def get_personal_notes(self) -> str:
        """Get the free-form personal notes, or an empty string."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT notes FROM personal_notes WHERE id = 1")
            row = cursor.fetchone()
            return row["notes"] if row else ""
        finally:
            conn.close()

    def save_personal_notes(self, notes: str) -> None:
        """Create or replace the personal notes."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO personal_notes (id, notes, updated_at)
                VALUES (1, ?, ?)
                """,
                (notes, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    # ==================== Funded Account ====================

    def get_funded_settings(self) -> Optional[ChallengeRules]:
        """Get the saved funded-account rules, if any."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT account_size, profit_target, max_drawdown, starting_balance
                FROM funded_account_settings WHERE id = 1
                """
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return ChallengeRules(
                account_size=row["account_size"],
                profit_target=row["profit_target"],
                max_drawdown=row["max_drawdown"],
                starting_balance=row["starting_balance"],
            )
        finally:
            conn.close()

    def save_funded_settings(self, rules: ChallengeRules) -> None:
        """Create or replace the funded-account rules."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO funded_account_settings
                (id, account_size, profit_target, max_drawdown, starting_balance)
                VALUES (1, ?, ?, ?, ?)
                """,
                (
                    rules.account_size,
                    rules.profit_target,
                    rules.max_drawdown,
                    rules.starting_balance,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
