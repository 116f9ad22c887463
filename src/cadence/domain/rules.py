"""Recurrence rules — five-field cron-like schedule expressions.

A rule is ``minute hour day-of-month month weekday``.  Each field is a
wildcard (``*``), a step (``*/N``, matches when ``value % N == 0``) or an
exact integer literal.  Weekdays are numbered 0-6 with Sunday = 0.

INVARIANT: A rule has exactly five fields.  Anything else is malformed
and never matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

FIELD_NAMES: tuple[str, ...] = ("minute", "hour", "day", "month", "weekday")

# Inclusive (low, high) bounds per field, in FIELD_NAMES order.
FIELD_BOUNDS: tuple[tuple[int, int], ...] = (
    (0, 59),
    (0, 23),
    (1, 31),
    (1, 12),
    (0, 6),
)

_INT_RE = re.compile(r"^-?[0-9]+$")


class FieldKind(StrEnum):
    """How a single rule field matches a calendar value."""

    ANY = "any"
    STEP = "step"
    EXACT = "exact"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class FieldMatcher:
    """Compiled form of one rule field."""

    kind: FieldKind
    value: int = 0
    text: str = "*"

    def matches(self, value: int) -> bool:
        kind = self.kind
        if kind is FieldKind.ANY:
            return True
        if kind is FieldKind.STEP:
            return value % self.value == 0
        if kind is FieldKind.EXACT:
            return value == self.value
        return False

    def can_match(self, low: int, high: int) -> bool:
        """Whether any value in ``[low, high]`` satisfies this field."""
        if self.kind is FieldKind.ANY:
            return True
        if self.kind is FieldKind.EXACT:
            return low <= self.value <= high
        if self.kind is FieldKind.STEP:
            return any(self.matches(v) for v in range(low, high + 1))
        return False


def compile_field(text: str) -> FieldMatcher:
    """Compile a single field.

    Unrecognized syntax compiles to an INVALID matcher rather than raising.

    Examples:
        >>> compile_field("*").kind
        <FieldKind.ANY: 'any'>
        >>> compile_field("*/15").value
        15
        >>> compile_field("*/0").kind
        <FieldKind.INVALID: 'invalid'>
    """
    if text == "*":
        return FieldMatcher(FieldKind.ANY, text=text)
    if text.startswith("*/"):
        step = _parse_int(text[2:])
        if step is None or step <= 0:
            return FieldMatcher(FieldKind.INVALID, text=text)
        return FieldMatcher(FieldKind.STEP, step, text=text)
    literal = _parse_int(text)
    if literal is None:
        return FieldMatcher(FieldKind.INVALID, text=text)
    return FieldMatcher(FieldKind.EXACT, literal, text=text)


def _parse_int(text: str) -> int | None:
    if _INT_RE.match(text) is None:
        return None
    try:
        return int(text)
    except ValueError:
        # Digit runs past the interpreter's int conversion limit.
        return None


def cron_weekday(moment: datetime) -> int:
    """Return the weekday of *moment* numbered 0-6 with Sunday = 0.

    ``isoweekday()`` counts Monday = 1 … Sunday = 7, so Sunday wraps to 0
    and every other day keeps its ISO number.
    """
    return moment.isoweekday() % 7


def calendar_fields(moment: datetime) -> tuple[int, int, int, int, int]:
    """Extract ``(minute, hour, day, month, weekday)`` in rule field order."""
    return (
        moment.minute,
        moment.hour,
        moment.day,
        moment.month,
        cron_weekday(moment),
    )


@dataclass(frozen=True, slots=True)
class RecurrenceRule:
    """An immutable, compiled five-field recurrence rule."""

    minute: FieldMatcher
    hour: FieldMatcher
    day: FieldMatcher
    month: FieldMatcher
    weekday: FieldMatcher

    @property
    def fields(self) -> tuple[FieldMatcher, ...]:
        return (self.minute, self.hour, self.day, self.month, self.weekday)

    @property
    def canonical(self) -> str:
        """Five fields joined by single spaces."""
        return " ".join(f.text for f in self.fields)

    @property
    def is_satisfiable(self) -> bool:
        """Whether every field can match some value of its domain."""
        return all(
            f.can_match(low, high) for f, (low, high) in zip(self.fields, FIELD_BOUNDS, strict=True)
        )

    def invalid_fields(self) -> list[str]:
        """Names of fields that can never match."""
        return [
            name
            for name, f, (low, high) in zip(FIELD_NAMES, self.fields, FIELD_BOUNDS, strict=True)
            if not f.can_match(low, high)
        ]

    def matches_date(self, moment: datetime) -> bool:
        """Day-level check: month, day-of-month and weekday."""
        return (
            self.month.matches(moment.month)
            and self.day.matches(moment.day)
            and self.weekday.matches(cron_weekday(moment))
        )

    def matches(self, moment: datetime) -> bool:
        """Whether all five fields match the calendar components of *moment*."""
        return (
            self.minute.matches(moment.minute)
            and self.hour.matches(moment.hour)
            and self.matches_date(moment)
        )

    def __str__(self) -> str:
        return self.canonical


def parse_rule(text: str) -> RecurrenceRule | None:
    """Parse a rule string, or return None when it does not have five fields."""
    parts = text.split()
    if len(parts) != len(FIELD_NAMES):
        return None
    return RecurrenceRule(*(compile_field(p) for p in parts))
