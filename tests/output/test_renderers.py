"""Tests for Rich renderers and quiet mode."""

from cadence.output.renderers import render_quiet, render_result
from cadence.services.result import ServiceResult


def _upcoming(warnings: list[str] | None = None) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="upcoming",
        data={
            "rule": "0 9 * * *",
            "after": "2025-03-04T10:15:30",
            "count": 2,
            "items": [
                {"index": 1, "at": "2025-03-05T09:00:00"},
                {"index": 2, "at": "2025-03-06T09:00:00"},
            ],
        },
        warnings=warnings or [],
    )


class TestRenderResult:
    def test_occurrence(self) -> None:
        result = ServiceResult(
            ok=True,
            op="plan",
            data={"text": "every monday", "rule": "0 9 * * 1", "next": "2025-03-10T09:00:00"},
        )
        output = render_result(result)
        assert output.startswith("OK  plan")
        assert "text: every monday" in output
        assert "next: 2025-03-10T09:00:00" in output

    def test_upcoming_table(self) -> None:
        output = render_result(_upcoming())
        assert "2025-03-05T09:00:00" in output
        assert "2025-03-06T09:00:00" in output

    def test_upcoming_warnings(self) -> None:
        output = render_result(_upcoming(["Only 2 of 5 occurrences found"]))
        assert "warning: Only 2 of 5" in output

    def test_vocabulary_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="vocabulary",
            data={"count": 1, "items": [{"phrase": "daily", "rule": "0 9 * * *"}]},
        )
        output = render_result(result)
        assert "daily" in output
        assert "0 9 * * *" in output

    def test_error(self) -> None:
        result = ServiceResult.failure("plan", "NO_MATCH", "No recurrence [here]", text="x")
        output = render_result(result, verbose=True)
        assert "ERROR" in output
        assert "No recurrence [here]" in output
        assert "text: x" in output

    def test_verbose_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="next_occurrence",
            data={"rule": "0 * * * *", "next": "2025-03-04T11:00:00"},
            meta={
                "telemetry": {"name": "next", "duration_ms": 1.5, "annotations": {"scanned": 45}}
            },
        )
        output = render_result(result, verbose=True)
        assert "scanned=45" in output

    def test_verbose_meta_child_spans(self) -> None:
        span = {
            "name": "ScheduleService.plan",
            "duration_ms": 2.0,
            "children": [
                {"name": "ScheduleService.recognize", "duration_ms": 0.1},
                {
                    "name": "ScheduleService.next_occurrence",
                    "duration_ms": 1.5,
                    "annotations": {"scanned": 45},
                },
            ],
        }
        result = ServiceResult(
            ok=True,
            op="plan",
            data={"text": "hourly", "rule": "0 * * * *", "next": "2025-03-04T11:00:00"},
            meta={"telemetry": span},
        )
        output = render_result(result, verbose=True)
        assert "ScheduleService.recognize" in output
        assert "ScheduleService.next_occurrence  (scanned=45)" in output

    def test_unknown_op_uses_generic(self) -> None:
        output = render_result(ServiceResult(ok=True, op="other", data={"a": [1, 2]}))
        assert "a: [1,2]" in output


class TestRenderQuiet:
    def test_next(self) -> None:
        result = ServiceResult(
            ok=True, op="plan", data={"rule": "0 9 * * 1", "next": "2025-03-10T09:00:00"}
        )
        assert render_quiet(result) == "2025-03-10T09:00:00"

    def test_rule(self) -> None:
        result = ServiceResult(ok=True, op="recognize", data={"rule": "0 8 * * *"})
        assert render_quiet(result) == "0 8 * * *"

    def test_upcoming_one_per_line(self) -> None:
        assert render_quiet(_upcoming()).splitlines() == [
            "2025-03-05T09:00:00",
            "2025-03-06T09:00:00",
        ]

    def test_vocabulary(self) -> None:
        result = ServiceResult(
            ok=True, op="vocabulary", data={"items": [{"phrase": "daily", "rule": "0 9 * * *"}]}
        )
        assert render_quiet(result) == "daily\t0 9 * * *"

    def test_error(self) -> None:
        result = ServiceResult.failure("next_occurrence", "INVALID_RULE", "bad rule")
        assert render_quiet(result) == "ERROR: next_occurrence — bad rule"
