"""Entity extraction from free-form chat messages.

Turns an utterance such as ``"lost 150 on NQ yesterday, smt setup"`` into a
sparse mapping of the trade fields it mentions. Only detected fields are
present in the result; ambiguity is resolved by taking the first match.
"""

import re
from datetime import datetime
from typing import Any, Optional

from dateparser.search import search_dates

from tradejournal.assistant.terms import (
    KNOWN_SYMBOLS,
    LOSS_TERMS,
    PNL_TERMS,
    RR_TERMS,
    contains_any,
    reserved_words,
    strategy_groups,
)

NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")
SYMBOL_PATTERN = re.compile(r"\b([A-Za-z]{2,6}(?:\d{1,2})?)\b")
NUMERIC_DATE_PATTERN = re.compile(r"\d{1,4}[/.\-]\d{1,2}")
WORD_PATTERN = re.compile(r"[^\W\d_]+")
CURRENCY_CHARS = "$₪€"

DATE_LANGUAGES = ["en", "he"]

# Words that make a fragment a date on their own
RELATIVE_DATE_WORDS = {
    "yesterday", "today", "ago", "last", "monday", "tuesday", "wednesday",
    "thursday", "friday", "saturday", "sunday",
    "אתמול", "שלשום", "היום", "לפני", "שעבר",
}

# Month names, which count only next to a day number
MONTH_WORDS = {
    "january", "february", "march", "april", "may", "june", "july", "august",
    "september", "october", "november", "december",
    "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept", "oct", "nov", "dec",
    "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני", "יולי", "אוגוסט",
    "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
}

# Upper-case words that show up in chat but are not tickers
COMMON_WORDS = {
    "THE", "AND", "FOR", "BUY", "SELL", "LONG", "SHORT", "WIN", "WON",
    "ON", "IN", "AT", "IT", "IS", "WAS", "MY", "ME", "OK", "TO", "OF",
    "USD", "ILS", "TP", "SL", "SHOW", "ALL", "TRADE", "TRADES",
}


def parse_numbers(text: str) -> list[float]:
    """Find every signed decimal number, ignoring thousands separators and currency signs."""
    cleaned = text.replace(",", "")
    for char in CURRENCY_CHARS:
        cleaned = cleaned.replace(char, "")
    return [float(match) for match in NUMBER_PATTERN.findall(cleaned)]


def extract_symbol(text: str) -> Optional[str]:
    """Extract a ticker symbol from an utterance.

    A token qualifies when it is a known instrument (any case) or is written
    in capitals, and is not one of the assistant's own keywords.

    Args:
        text: Raw utterance.

    Returns:
        Upper-cased symbol or None.
    """
    reserved = reserved_words()
    for match in SYMBOL_PATTERN.finditer(text):
        token = match.group(1)
        lowered = token.lower()
        if lowered in reserved or token.upper() in COMMON_WORDS:
            continue
        if lowered in KNOWN_SYMBOLS or token.isupper():
            return token.upper()
    return None


def extract_strategies(
    text: str, extra_strategies: Optional[dict[str, list[str]]] = None
) -> list[str]:
    """Get the canonical keys of every strategy group mentioned in the text."""
    lowered = text.lower()
    return [
        key
        for key, aliases in strategy_groups(extra_strategies).items()
        if contains_any(lowered, aliases)
    ]


def _looks_like_date(fragment: str) -> bool:
    lowered = fragment.lower()
    if NUMERIC_DATE_PATTERN.search(lowered):
        return True
    words = set(WORD_PATTERN.findall(lowered))
    if words & RELATIVE_DATE_WORDS:
        return True
    # A month name alone ("may") is an ordinary word; it needs a day number
    has_digit = any(char.isdigit() for char in lowered)
    return has_digit and any(
        word in MONTH_WORDS or word[1:] in MONTH_WORDS for word in words
    )


def split_date(text: str, now: Optional[datetime] = None) -> tuple[Optional[datetime], str]:
    """Find the first date expression and cut it out of the text.

    Relative expressions ("yesterday", "אתמול") resolve against ``now``.
    Bare numbers and lone words such as "may" or "second" are not dates.

    Args:
        text: Raw utterance.
        now: Reference time. Defaults to the current time.

    Returns:
        The resolved date-time (or None) and the text without the date
        fragment, so digits of the date are never read as amounts.
    """
    found = search_dates(
        text,
        languages=DATE_LANGUAGES,
        settings={
            "RELATIVE_BASE": now or datetime.now(),
            "PREFER_DATES_FROM": "past",
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
    )
    for fragment, value in found or []:
        if _looks_like_date(fragment):
            return value, text.replace(fragment, " ", 1)
    return None, text


def extract_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Resolve the first date expression in the text, or None."""
    return split_date(text, now)[0]


def extract_entities(
    text: str,
    now: Optional[datetime] = None,
    extra_strategies: Optional[dict[str, list[str]]] = None,
) -> dict[str, Any]:
    """Extract trade entities from an utterance.

    Args:
        text: Raw utterance.
        now: Reference time for relative dates.
        extra_strategies: Configured strategy alias groups.

    Returns:
        Sparse mapping with any of ``pnl``, ``rr``, ``symbol``,
        ``strategies`` and ``date``.
    """
    lowered = text.lower()
    entities: dict[str, Any] = {}

    date, rest = split_date(text, now)
    numbers = parse_numbers(rest)
    if numbers:
        first = numbers[0]
        if contains_any(lowered, PNL_TERMS):
            # Losses are stored negative however the user phrased them
            if contains_any(lowered, LOSS_TERMS) or first < 0:
                entities["pnl"] = -abs(first)
            else:
                entities["pnl"] = first
        if contains_any(lowered, RR_TERMS):
            entities["rr"] = abs(first)

    symbol = extract_symbol(text)
    if symbol:
        entities["symbol"] = symbol

    strategies = extract_strategies(text, extra_strategies)
    if strategies:
        entities["strategies"] = strategies

    if date is not None:
        entities["date"] = date

    return entities
