"""Keyword recognizer — free text to a canonical recurrence rule.

Phrases are tested in a fixed priority order and the first match wins,
regardless of where in the input the phrase appears.  No match is a
normal outcome and is reported as None.
"""

from __future__ import annotations

import re

# (phrases, rule) pairs, highest priority first.  The "every N hours"
# pattern sits between the weekday rows and the hourly row.
KEYWORD_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("every day", "daily", "each day"), "0 9 * * *"),
    (("every morning",), "0 8 * * *"),
    (("every evening", "every night"), "0 18 * * *"),
    (("weekly", "every week"), "0 9 * * 1"),
    (("every monday",), "0 9 * * 1"),
    (("every tuesday",), "0 9 * * 2"),
    (("every wednesday",), "0 9 * * 3"),
    (("every thursday",), "0 9 * * 4"),
    (("every friday",), "0 9 * * 5"),
    (("every saturday",), "0 9 * * 6"),
    (("every sunday",), "0 9 * * 0"),
)

FALLBACK_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("hourly", "every hour"), "0 * * * *"),
    (("monthly", "every month"), "0 9 1 * *"),
)

EVERY_N_HOURS = re.compile(r"every\s+(\d+)\s+hours?")
MAX_HOUR_STEP = 24


def _match_table(text: str, table: tuple[tuple[tuple[str, ...], str], ...]) -> str | None:
    for phrases, rule in table:
        if any(phrase in text for phrase in phrases):
            return rule
    return None


def _match_every_n_hours(text: str) -> str | None:
    match = EVERY_N_HOURS.search(text)
    if match is None:
        return None
    try:
        step = int(match.group(1))
    except ValueError:
        return None
    if not 1 <= step <= MAX_HOUR_STEP:
        return None
    return f"0 */{step} * * *"


def recognize(text: str) -> str | None:
    """Return the canonical rule for *text*, or None if no phrase matches.

    Examples:
        >>> recognize("  Every Friday ")
        '0 9 * * 5'
        >>> recognize("every 6 hours")
        '0 */6 * * *'
        >>> recognize("every 25 hours") is None
        True
    """
    normalized = text.strip().lower()
    return (
        _match_table(normalized, KEYWORD_RULES)
        or _match_every_n_hours(normalized)
        or _match_table(normalized, FALLBACK_RULES)
    )


def vocabulary() -> list[tuple[str, str]]:
    """List every fixed phrase with its rule, in priority order."""
    pairs = [(phrase, rule) for phrases, rule in KEYWORD_RULES for phrase in phrases]
    pairs.append(("every N hours", "0 */N * * *"))
    pairs.extend((phrase, rule) for phrases, rule in FALLBACK_RULES for phrase in phrases)
    return pairs
