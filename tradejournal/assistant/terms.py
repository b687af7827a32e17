"""Bilingual (English/Hebrew) vocabularies used by the chat assistant.

All aliases are lower-case; matching is substring-based on the lower-cased
utterance.
"""

from typing import Optional

# Keyword groups that drive extraction and intent, never strategy tags
PNL_TERMS = [
    "pnl", "p&l", "profit", "loss", "lost",
    "רווח והפסד", "רווח", "הפסד", "ריווח", "הפסדתי", "הרווחתי",
]

LOSS_TERMS = ["loss", "lost", "הפסד", "הפסדתי"]

RR_TERMS = ["rr", "r:r", "risk/reward", "סיכון/סיכוי", "יחס סיכון"]

WINRATE_TERMS = ["winrate", "win rate", "אחוז הצלחה"]

ANALYSIS_TERMS = [
    "analyze", "analysis", "flaws", "weaknesses", "strengths", "good at",
    "bad at", "improve", "performance",
    "ניתוח", "נתח", "טעויות", "חולשות", "חוזקות", "טוב ב", "להשתפר", "ביצועים",
]

# Instruments the assistant recognises in lower-case text
KNOWN_SYMBOLS = ["nq", "es", "btc", "eth"]

# Canonical strategy key -> aliases
STRATEGY_TERMS: dict[str, list[str]] = {
    "smt": ["smt", "smart money technique"],
    "ifvg": ["ifvg", "inversion fair value gap"],
    "turtle soup": ["turtle soup", "צבי מרק"],
    "amd": ["amd", "accumulation manipulation distribution"],
    "breakout": ["breakout", "break out", "פריצה"],
}

# Intent keyword lists
ADD_TERMS = ["הוסף", "add", "log"]
UPDATE_TERMS = ["עדכן", "update", "שנה", "edit"]
DELETE_TERMS = ["מחק", "delete", "remove"]
SEARCH_TERMS = ["חפש", "מצא", "search", "find", "show me", "הצג"]
COMPARE_TERMS = ["השווה", "compare"]
SUMMARY_TERMS = ["סיכום", "summary"]
CASUAL_GREETINGS = ["מה קורה", "מה נשמע", "what's up", "how's it going", "מה חדש"]
HOW_ARE_YOU = ["מה שלומך", "how are you"]
WHAT_NOW = ["מה עכשיו", "what now", "מה הלאה"]
GREETINGS = ["היי", "שלום", "hey", "hello"]


def contains_any(text: str, terms: list[str]) -> bool:
    """Check whether any of the terms occurs in an already lower-cased text."""
    return any(term in text for term in terms)


def strategy_groups(extra: Optional[dict[str, list[str]]] = None) -> dict[str, list[str]]:
    """Get the strategy alias table, merged with configured groups.

    Args:
        extra: Additional ``{key: [aliases]}`` groups. Aliases for an
            existing key are appended to it.

    Returns:
        Ordered mapping of canonical strategy key to lower-case aliases.
    """
    groups = {key: list(aliases) for key, aliases in STRATEGY_TERMS.items()}
    for key, aliases in (extra or {}).items():
        key = key.lower()
        merged = groups.setdefault(key, [key])
        for alias in aliases:
            alias = alias.lower()
            if alias not in merged:
                merged.append(alias)
    return groups


def reserved_words() -> set[str]:
    """Single-word vocabulary terms that must never be read as a symbol."""
    words: set[str] = set()
    vocabularies = (
        PNL_TERMS, RR_TERMS, WINRATE_TERMS, ANALYSIS_TERMS, *STRATEGY_TERMS.values(),
        ADD_TERMS, UPDATE_TERMS, DELETE_TERMS, SEARCH_TERMS, COMPARE_TERMS,
        SUMMARY_TERMS, GREETINGS,
    )
    for terms in vocabularies:
        words.update(term for term in terms if term.isalpha())
    return words
