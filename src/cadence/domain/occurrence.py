"""Bounded forward search for the next occurrence of a recurrence rule.

The search walks forward one minute at a time from just after the
reference instant and stops at the first minute whose calendar
components satisfy all five rule fields, or after one year of minutes.

Whole days whose date fields cannot match, and whole hours whose hour
field cannot match, are skipped in one step.  Skipped minutes still
count against the horizon, so the outcome is the same as testing every
minute individually.

INVARIANT: A returned occurrence is strictly later than the reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from cadence.domain.rules import RecurrenceRule, parse_rule

HORIZON_MINUTES = 525_600

_ONE_MINUTE = timedelta(minutes=1)


@dataclass
class OccurrenceSearch:
    """Outcome of one forward search.

    Attributes:
        rule: The parsed rule, or None if the text was malformed.
        found: The matching instant, or None.
        scanned: Minutes of the horizon consumed by the search.
    """

    rule: RecurrenceRule | None
    found: datetime | None = None
    scanned: int = 0


def _minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start) / _ONE_MINUTE)


def _next_midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0) + timedelta(days=1)


def _next_hour(moment: datetime) -> datetime:
    return moment.replace(minute=0) + timedelta(hours=1)


def search(
    rule: RecurrenceRule | str,
    after: datetime,
    *,
    horizon: int = HORIZON_MINUTES,
) -> OccurrenceSearch:
    """Search forward from *after* for the first instant matching *rule*.

    Args:
        rule: A compiled rule or its text form.
        after: Reference instant; naive or aware, the result keeps its tzinfo.
        horizon: Maximum number of candidate minutes to consider.
    """
    compiled = parse_rule(rule) if isinstance(rule, str) else rule
    outcome = OccurrenceSearch(rule=compiled)
    if compiled is None or not compiled.is_satisfiable:
        return outcome

    horizon = min(horizon, HORIZON_MINUTES)
    offset = 0
    try:
        candidate = after.replace(second=0, microsecond=0) + _ONE_MINUTE
        while offset < horizon:
            if not compiled.matches_date(candidate):
                jump = _next_midnight(candidate)
            elif not compiled.hour.matches(candidate.hour):
                jump = _next_hour(candidate)
            elif not compiled.minute.matches(candidate.minute):
                jump = candidate + _ONE_MINUTE
            else:
                outcome.found = candidate
                outcome.scanned = offset + 1
                return outcome
            offset += _minutes_between(candidate, jump)
            candidate = jump
    except OverflowError:
        # Walked past datetime.max before the horizon ran out.
        outcome.scanned = offset
        return outcome

    outcome.scanned = horizon
    return outcome


def next_occurrence(
    rule: RecurrenceRule | str,
    after: datetime,
    *,
    horizon: int = HORIZON_MINUTES,
) -> datetime | None:
    """Return the earliest instant strictly after *after* matching *rule*.

    Returns None both for a malformed rule and when nothing matches
    within the horizon.

    Examples:
        >>> next_occurrence("0 * * * *", datetime(2025, 3, 4, 10, 15))
        datetime.datetime(2025, 3, 4, 11, 0)
        >>> next_occurrence("not a rule", datetime(2025, 3, 4)) is None
        True
    """
    return search(rule, after, horizon=horizon).found


def upcoming_occurrences(
    rule: RecurrenceRule | str,
    after: datetime,
    count: int,
    *,
    horizon: int = HORIZON_MINUTES,
) -> list[datetime]:
    """Chain *count* next-occurrence queries starting from *after*.

    Stops early at the first query that finds nothing.
    """
    compiled = parse_rule(rule) if isinstance(rule, str) else rule
    found: list[datetime] = []
    if compiled is None:
        return found
    cursor = after
    for _ in range(count):
        nxt = search(compiled, cursor, horizon=horizon).found
        if nxt is None:
            break
        found.append(nxt)
        cursor = nxt
    return found
