"""Response handlers, one per intent.

Handlers only read the trade list. Mutations are returned as actions for
the caller to carry out against its store.
"""

from datetime import datetime
from typing import Any, Optional

from tradejournal.analytics.performance import (
    analyze_performance,
    strategy_breakdown,
    trading_trades,
)
from tradejournal.assistant.context import Action, ConversationContext, TurnResponse
from tradejournal.assistant.entities import extract_strategies, parse_numbers, split_date
from tradejournal.formatting import format_currency, format_day
from tradejournal.models import Trade

SEARCH_RESULT_LIMIT = 5
STALE_JOURNAL_DAYS = 2

# Keys copied from a pending trade into the add_trade payload
TRADE_FIELDS = ("symbol", "status", "pnl", "date", "strategy", "notes", "rr")


def _newest_first(trades: list[Trade]) -> list[Trade]:
    return sorted(trades, key=lambda t: t.date, reverse=True)


def _trade_line(trade: Trade) -> str:
    return f"- **{trade.symbol}** ({format_day(trade.date)}): {format_currency(trade.pnl)}"


# ==================== Add ====================

def handle_add_trade(
    entities: dict[str, Any],
    text: str,
    context: ConversationContext,
    now: datetime,
    extra_strategies: Optional[dict[str, list[str]]] = None,
) -> TurnResponse:
    """Merge the message into the pending trade and add it once complete.

    Args:
        entities: Entities extracted from this message.
        text: The raw message, appended to the trade notes.
        context: Conversation state; its pending trade is updated in place.
        now: Default trade time.
        extra_strategies: Configured strategy alias groups.

    Returns:
        A clarification listing the missing fields, or a confirmation with
        a single ``add_trade`` action.
    """
    trade = dict(context.pending_trade or {})
    trade.update({key: value for key, value in entities.items() if value is not None})

    if not trade.get("date"):
        trade["date"] = now
    notes = trade.get("notes")
    if not notes:
        trade["notes"] = text
    elif text not in notes:
        trade["notes"] = f"{notes}\n{text}"

    missing = []
    if not trade.get("symbol"):
        missing.append("symbol (סימבול)")
    if trade.get("pnl") is None:
        missing.append("PnL (רווח/הפסד)")
    if not trade.get("strategy"):
        found = extract_strategies(text, extra_strategies) or trade.get("strategies") or []
        if found:
            trade["strategy"] = found[0]
        else:
            missing.append("strategy (אסטרטגיה)")

    if missing:
        context.pending_trade = trade
        return TurnResponse(
            content=(
                "קיבלתי. חסר לי רק עוד כמה פרטים כדי להוסיף את העסקה: "
                f"{', '.join(missing)}. תוכל לספק אותם?"
            )
        )

    trade["status"] = "win" if trade["pnl"] >= 0 else "loss"
    payload = {key: trade[key] for key in TRADE_FIELDS if key in trade}
    payload["date"] = trade["date"].isoformat()

    context.pending_trade = None
    context.last_added_trade = payload

    status = "נצחון" if payload["status"] == "win" else "הפסד"
    return TurnResponse(
        content=(
            "מעולה, הוספתי עסקה חדשה:\n"
            f"- **סימבול:** {payload['symbol']}\n"
            f"- **סטטוס:** {status}\n"
            f"- **רווח/הפסד:** {format_currency(payload['pnl'])}\n"
            f"- **אסטרטגיה:** {payload['strategy']}"
        ),
        actions=[Action(type="add_trade", payload=payload)],
    )


# ==================== Read-only ====================

def filter_trades(trades: list[Trade], entities: dict[str, Any]) -> list[Trade]:
    """Filter trades by the entities of a search message.

    Filters compose with AND: symbol (case-insensitive), strategy
    (substring of any requested tag), P&L sign and calendar day.

    Returns:
        Matching trades, newest first.
    """
    filtered = list(trades)

    symbol = entities.get("symbol")
    if symbol:
        filtered = [t for t in filtered if t.symbol.lower() == symbol.lower()]

    strategies = entities.get("strategies")
    if strategies:
        filtered = [
            t for t in filtered
            if any(s in (t.strategy or "").lower() for s in strategies)
        ]

    # Only the sign of the requested amount is used
    pnl = entities.get("pnl")
    if pnl is not None:
        filtered = [t for t in filtered if (t.pnl > 0 if pnl >= 0 else t.pnl < 0)]

    day = entities.get("date")
    if day is not None:
        filtered = [t for t in filtered if t.date.date() == day.date()]

    return _newest_first(filtered)


def handle_search_trades(entities: dict[str, Any], trades: list[Trade]) -> TurnResponse:
    if not trades:
        return TurnResponse(content="אין עסקאות מתועדות כרגע.")

    filtered = filter_trades(trades, entities)
    if not filtered:
        return TurnResponse(content="לא מצאתי עסקאות שתואמות לחיפוש שלך.")

    shown = filtered[:SEARCH_RESULT_LIMIT]
    lines = "\n".join(_trade_line(t) for t in shown)
    return TurnResponse(
        content=f"מצאתי {len(filtered)} עסקאות. הנה ה-{len(shown)} האחרונות:\n{lines}"
    )


def handle_get_summary(trades: list[Trade], include_withdrawals: bool = True) -> TurnResponse:
    """Summarize count, win rate, total P&L and average R:R.

    Args:
        trades: Trade history.
        include_withdrawals: Count withdrawal records in the totals.
    """
    if not include_withdrawals:
        trades = trading_trades(trades)
    if not trades:
        return TurnResponse(content="אין מספיק נתונים לסיכום. נסה להוסיף כמה עסקאות קודם.")

    total = len(trades)
    winners = sum(1 for t in trades if t.pnl > 0)
    total_pnl = sum(t.pnl for t in trades)
    win_rate = winners / total * 100

    rrs = [t.rr for t in trades if t.rr is not None and t.rr > 0]
    avg_rr = sum(rrs) / len(rrs) if rrs else 0.0
    rr_text = f"{avg_rr:.2f}R" if avg_rr > 0 else "N/A"

    return TurnResponse(
        content=(
            "בטח, הנה סיכום הביצועים שלך:\n"
            f"- **סה\"כ עסקאות:** {total}\n"
            f"- **אחוז הצלחה:** {win_rate:.1f}%\n"
            f"- **רווח/הפסד כולל:** {format_currency(total_pnl)}\n"
            f"- **יחס סיכון/סיכוי ממוצע:** {rr_text}"
        )
    )


def handle_analysis(trades: list[Trade]) -> TurnResponse:
    analysis = analyze_performance(trades)
    if analysis is None:
        return TurnResponse(
            content="אני צריך לפחות 5 עסקאות כדי לבצע ניתוח משמעותי. המשך לתעד ואחזור עם תובנות בקרוב!"
        )

    strengths = analysis.strengths or [
        "לא זיהיתי חוזקות בולטות כרגע, אבל עם עוד נתונים נוכל למצוא אותן!"
    ]
    weaknesses = analysis.weaknesses or ["כל הכבוד! לא זיהיתי חולשות משמעותיות כרגע."]

    return TurnResponse(
        content=(
            "בסדר, ניתחתי את הביצועים שלך. הנה מה שמצאתי:\n"
            "### 👍 החוזקות שלך\n"
            + "\n".join(f"- {s}" for s in strengths)
            + "\n\n### 🧐 נקודות לשיפור\n"
            + "\n".join(f"- {w}" for w in weaknesses)
            + "\n\n### 🚀 המלצה\n"
            "המשך להתמקד באסטרטגיות שעובדות עבורך, ושקול להקטין את הסיכון "
            "באסטרטגיות המפסידות או ללמוד אותן מחדש.\n"
        )
    )


def handle_compare_strategies(entities: dict[str, Any], trades: list[Trade]) -> TurnResponse:
    stats = strategy_breakdown(trades)
    requested = entities.get("strategies")
    if requested:
        stats = [s for s in stats if any(r in s.strategy.lower() for r in requested)]

    if not stats:
        return TurnResponse(content="אין עדיין עסקאות עם אסטרטגיה מתועדת להשוואה.")

    lines = "\n".join(
        f"- **{s.strategy}:** {format_currency(s.pnl)} ב-{s.count} עסקאות "
        f"(אחוז הצלחה {s.win_rate:.1f}%)"
        for s in stats
    )
    return TurnResponse(content=f"הנה השוואת האסטרטגיות שלך, מהרווחית ביותר:\n{lines}")


# ==================== Update / Delete ====================

def _find_last_added(trades: list[Trade], context: ConversationContext) -> Optional[Trade]:
    last = context.last_added_trade
    if not last:
        return None
    added_at = datetime.fromisoformat(last["date"])
    return next(
        (t for t in trades if t.symbol == last["symbol"] and t.date == added_at),
        None,
    )


def select_target_trade(
    entities: dict[str, Any], trades: list[Trade], context: ConversationContext
) -> Trade:
    """Pick the trade a delete/update message refers to.

    Preference: most recent trade on the mentioned symbol, then the trade
    added earlier in this conversation, then the most recent trade.
    """
    ordered = _newest_first(trades)
    target = ordered[0]

    symbol = entities.get("symbol")
    if symbol:
        found = next((t for t in ordered if t.symbol.lower() == symbol.lower()), None)
        if found:
            target = found
    else:
        found = _find_last_added(ordered, context)
        if found:
            target = found
    return target


def handle_delete_trade(
    entities: dict[str, Any], trades: list[Trade], context: ConversationContext
) -> TurnResponse:
    if not trades:
        return TurnResponse(content="אין עסקאות למחוק.")

    target = select_target_trade(entities, trades, context)
    return TurnResponse(
        content=(
            f"מחקתי את העסקה על **{target.symbol}** מתאריך {format_day(target.date)} "
            f"עם P&L של **{format_currency(target.pnl)}**."
        ),
        actions=[Action(type="delete_trade", payload={"id": target.id})],
    )


def handle_update_trade(
    entities: dict[str, Any],
    text: str,
    trades: list[Trade],
    context: ConversationContext,
    now: Optional[datetime] = None,
) -> TurnResponse:
    """Change the P&L, R:R or strategy of a trade.

    A bare number is read as the new P&L unless the message is about R:R.
    A mentioned date narrows the choice of trade rather than moving it,
    and its digits are never taken as the new P&L.
    """
    if not trades:
        return TurnResponse(content="אין עסקאות לעדכן.")

    candidates = trades
    day = entities.get("date")
    if day is not None:
        candidates = [t for t in trades if t.date.date() == day.date()] or trades
    target = select_target_trade(entities, candidates, context)

    updates: dict[str, Any] = {}
    pnl = entities.get("pnl")
    if pnl is None and "rr" not in entities:
        if day is not None:
            _, text = split_date(text, now)
        numbers = parse_numbers(text)
        pnl = numbers[0] if numbers else None
    if pnl is not None and not target.is_withdrawal:
        updates["pnl"] = pnl
        updates["status"] = "win" if pnl >= 0 else "loss"
    if "rr" in entities:
        updates["rr"] = entities["rr"]
    if entities.get("strategies"):
        updates["strategy"] = entities["strategies"][0]

    if not updates:
        return TurnResponse(
            content=(
                f"מה תרצה לשנות בעסקה על **{target.symbol}** מתאריך {format_day(target.date)}? "
                "אפשר לעדכן רווח/הפסד, יחס סיכון/סיכוי או אסטרטגיה."
            )
        )

    changes = []
    if "pnl" in updates:
        changes.append(f"רווח/הפסד: {format_currency(updates['pnl'])}")
    if "rr" in updates:
        changes.append(f"R:R: {updates['rr']:.2f}")
    if "strategy" in updates:
        changes.append(f"אסטרטגיה: {updates['strategy']}")

    return TurnResponse(
        content=(
            f"עדכנתי את העסקה על **{target.symbol}** מתאריך {format_day(target.date)}: "
            f"{', '.join(changes)}."
        ),
        actions=[Action(type="update_trade", payload={"id": target.id, "updates": updates})],
    )


# ==================== Small talk ====================

def handle_greeting() -> TurnResponse:
    return TurnResponse(
        content="שלום! אני מאמן המסחר האישי שלך. מה נעשה היום - נתעד עסקה, ננתח ביצועים, או משהו אחר?"
    )


def handle_casual_greeting(trades: list[Trade]) -> TurnResponse:
    total_pnl = sum(t.pnl for t in trades)
    status = "בירוק" if total_pnl >= 0 else "באדום"
    return TurnResponse(
        content=(
            f"הכל מצוין! אנחנו עומדים על PnL כולל של {format_currency(total_pnl)}, "
            f"אז אפשר להגיד שהמצב {status}. מוכן להמשיך לכבוש את השוק?"
        )
    )


def handle_how_are_you() -> TurnResponse:
    return TurnResponse(
        content=(
            "אני בסך הכל שורות קוד, אבל אני מרגיש מצוין כשאני עוזר לך להצליח! "
            "הכל מוכן ומזומן לנתח את העסקאות שלך. מה על הפרק?"
        )
    )


def handle_what_now(trades: list[Trade], now: datetime) -> TurnResponse:
    if not trades:
        return TurnResponse(
            content="הצעד הראשון הוא להתחיל לתעד. בוא נוסיף את העסקה הראשונה שלך ונצא לדרך!"
        )

    last_trade = _newest_first(trades)[0]
    days_since = (now - last_trade.date).total_seconds() / 86400
    if days_since > STALE_JOURNAL_DAYS:
        return TurnResponse(
            content=(
                "עבר קצת זמן מאז העסקה האחרונה שתועדה. אולי כדאי שנעדכן את היומן? "
                "או שאולי נרצה לבדוק את הביצועים הכלליים?"
            )
        )
    return TurnResponse(
        content="אפשר לנתח את הביצועים שלך, להציב מטרות חדשות, או לתעד עסקה נוספת. מה הכיוון שלך?"
    )


def handle_unknown() -> TurnResponse:
    return TurnResponse(
        content=(
            "לא כל כך הבנתי את זה. אני יכול לעזור לך לתעד עסקאות, לנתח את החוזקות "
            "והחולשות שלך, להציג סיכומים ועוד. רק תגיד לי מה אתה צריך."
        )
    )
