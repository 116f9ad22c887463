"""ScheduleService — recurrence recognition and next-occurrence queries.

The domain functions report both "no match" and "nothing found" as None.
This service turns those into ServiceResult failures and, unlike the
domain API, tells a malformed rule (``INVALID_RULE``) apart from a valid
rule with no occurrence inside the horizon (``NO_OCCURRENCE``).
"""

from __future__ import annotations

import logging
from datetime import datetime

from cadence.domain.occurrence import search, upcoming_occurrences
from cadence.domain.recognizer import recognize, vocabulary
from cadence.domain.rules import FIELD_NAMES, RecurrenceRule, parse_rule
from cadence.services.base import BaseService
from cadence.services.result import ServiceResult
from cadence.services.telemetry import annotate, trace_span, traced

logger = logging.getLogger(__name__)


class ScheduleService(BaseService):
    """Parses free text into rules and computes upcoming occurrences."""

    @property
    def _horizon(self) -> int:
        return self._settings.schedule.horizon_minutes

    def _compile(self, op: str, rule: str) -> RecurrenceRule | ServiceResult:
        """Parse *rule*, or return the INVALID_RULE failure describing why not."""
        compiled = parse_rule(rule)
        if compiled is None:
            return ServiceResult.failure(
                op,
                "INVALID_RULE",
                f"Expected {len(FIELD_NAMES)} fields, got {len(rule.split())}: {rule!r}",
                rule=rule,
            )
        bad = compiled.invalid_fields()
        if bad:
            return ServiceResult.failure(
                op,
                "INVALID_RULE",
                f"Rule {compiled.canonical!r} can never match: bad {', '.join(bad)}",
                rule=compiled.canonical,
                fields=bad,
            )
        return compiled

    def _no_occurrence(self, op: str, rule: RecurrenceRule, after: datetime) -> ServiceResult:
        return ServiceResult.failure(
            op,
            "NO_OCCURRENCE",
            f"No occurrence of {rule.canonical!r} within {self._horizon} minutes",
            rule=rule.canonical,
            after=after.isoformat(),
            horizon_minutes=self._horizon,
        )

    @traced
    def recognize(self, text: str) -> ServiceResult:
        """Map free text to its canonical rule."""
        op = "recognize"
        rule = recognize(text)
        if rule is None:
            logger.debug("No recurrence phrase in %r", text)
            return ServiceResult.failure(
                op,
                "NO_MATCH",
                f"No recurrence pattern recognized in {text.strip()!r}",
                text=text,
            )
        return ServiceResult(ok=True, op=op, data={"text": text, "rule": rule})

    @traced
    def next_occurrence(self, rule: str, after: datetime | None = None) -> ServiceResult:
        """Earliest instant strictly after *after* (default: now) matching *rule*."""
        op = "next_occurrence"
        compiled = self._compile(op, rule)
        if isinstance(compiled, ServiceResult):
            return compiled

        if after is None:
            after = self._now()
        outcome = search(compiled, after, horizon=self._horizon)
        annotate("scanned", outcome.scanned)
        if outcome.found is None:
            return self._no_occurrence(op, compiled, after)

        logger.debug("Next %s after %s: %s", compiled, after, outcome.found)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "rule": compiled.canonical,
                "after": after.isoformat(),
                "next": outcome.found.isoformat(),
            },
        )

    @traced
    def upcoming(
        self,
        rule: str,
        after: datetime | None = None,
        count: int | None = None,
    ) -> ServiceResult:
        """The next *count* occurrences, each strictly after the previous one."""
        op = "upcoming"
        compiled = self._compile(op, rule)
        if isinstance(compiled, ServiceResult):
            return compiled

        if after is None:
            after = self._now()
        wanted = count if count is not None else self._settings.schedule.upcoming_count
        if wanted < 1:
            return ServiceResult.failure(
                op, "INVALID_COUNT", f"Count must be at least 1, got {wanted}", count=wanted
            )

        with trace_span("upcoming_occurrences"):
            found = upcoming_occurrences(compiled, after, wanted, horizon=self._horizon)
            annotate("found", len(found))
        if not found:
            return self._no_occurrence(op, compiled, after)

        warnings: list[str] = []
        if len(found) < wanted:
            warnings.append(
                f"Only {len(found)} of {wanted} occurrences found before the horizon ran out"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "rule": compiled.canonical,
                "after": after.isoformat(),
                "count": len(found),
                "items": [{"index": i, "at": at.isoformat()} for i, at in enumerate(found, 1)],
            },
            warnings=warnings,
        )

    @traced
    def plan(self, text: str, after: datetime | None = None) -> ServiceResult:
        """Recognize *text* and compute its first run, as a standing order is created."""
        op = "plan"
        recognized = self.recognize(text)
        if not recognized.ok:
            return recognized.model_copy(update={"op": op, "meta": None})

        rule = recognized.data["rule"]
        nxt = self.next_occurrence(rule, after)
        if not nxt.ok:
            return nxt.model_copy(update={"op": op, "meta": None})

        return ServiceResult(
            ok=True,
            op=op,
            data={"text": text, "rule": rule, "next": nxt.data["next"]},
        )

    def vocabulary(self) -> ServiceResult:
        """The fixed phrase table in priority order."""
        items = [{"phrase": phrase, "rule": rule} for phrase, rule in vocabulary()]
        return ServiceResult(ok=True, op="vocabulary", data={"count": len(items), "items": items})
