"""Tests for telemetry primitives: Span, @traced, trace_span, annotate."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from cadence.services.result import ServiceResult
from cadence.services.schedule import ScheduleService
from cadence.services.telemetry import (
    Span,
    _current_span,
    annotate,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_omits_empty_annotations(self) -> None:
        span = Span(name="root")
        span.end()
        assert "annotations" not in span.to_dict()

    def test_to_dict_with_annotations(self) -> None:
        span = Span(name="root")
        span.annotate("scanned", 42)
        assert span.to_dict()["annotations"] == {"scanned": 42}


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="x")

        assert op().meta is None

    def test_enabled_injects_telemetry(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            annotate("scanned", 7)
            return ServiceResult(ok=True, op="x", meta={"keep": 1})

        meta = op().meta
        assert meta is not None
        assert meta["keep"] == 1
        assert meta["telemetry"]["annotations"] == {"scanned": 7}
        assert meta["telemetry"]["name"].endswith("op")

    def test_span_reset_after_exception(self) -> None:
        enable_telemetry()

        @traced
        def boom() -> ServiceResult:
            raise RuntimeError("fail")

        with pytest.raises(RuntimeError):
            boom()
        assert get_current_span() is None

    def test_annotate_without_span_is_noop(self) -> None:
        annotate("scanned", 1)
        assert get_current_span() is None

    def test_service_reports_scanned_minutes(self, service: ScheduleService) -> None:
        enable_telemetry()
        result = service.next_occurrence("0 * * * *")
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"]["scanned"] == 45


class TestSpanTree:
    def test_to_dict_nests_children(self) -> None:
        root = Span(name="root")
        root.children.append(Span(name="child", parent=root))
        assert [c["name"] for c in root.to_dict()["children"]] == ["child"]

    def test_trace_span_disabled_yields_none(self) -> None:
        with trace_span("child") as span:
            assert span is None

    def test_trace_span_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("child") as span:
            assert span is None

    def test_trace_span_attaches_to_traced_call(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            with trace_span("inner"):
                annotate("step", 1)
            annotate("outer", True)
            return ServiceResult(ok=True, op="x")

        telemetry = op().meta["telemetry"]  # type: ignore[index]
        assert telemetry["annotations"] == {"outer": True}
        assert telemetry["children"][0]["name"] == "inner"
        assert telemetry["children"][0]["annotations"] == {"step": 1}

    def test_nested_traced_calls_form_a_tree(self) -> None:
        enable_telemetry()

        @traced
        def inner() -> ServiceResult:
            return ServiceResult(ok=True, op="inner")

        @traced
        def outer() -> ServiceResult:
            inner()
            return ServiceResult(ok=True, op="outer")

        telemetry = outer().meta["telemetry"]  # type: ignore[index]
        assert len(telemetry["children"]) == 1
        assert telemetry["children"][0]["name"].endswith("inner")
        assert get_current_span() is None

    def test_plan_keeps_scanned_minutes(self, service: ScheduleService) -> None:
        enable_telemetry()
        result = service.plan("hourly")
        assert result.ok
        assert result.meta is not None
        children = {c["name"]: c for c in result.meta["telemetry"]["children"]}
        assert set(children) == {"ScheduleService.recognize", "ScheduleService.next_occurrence"}
        assert children["ScheduleService.next_occurrence"]["annotations"]["scanned"] == 45

    def test_failed_plan_keeps_span_tree(self, service: ScheduleService) -> None:
        enable_telemetry()
        result = service.plan("whenever")
        assert not result.ok
        telemetry = result.meta["telemetry"]  # type: ignore[index]
        assert telemetry["name"] == "ScheduleService.plan"
        assert [c["name"] for c in telemetry["children"]] == ["ScheduleService.recognize"]

    def test_upcoming_records_chain_span(self, service: ScheduleService) -> None:
        enable_telemetry()
        result = service.upcoming("0 9 * * *", count=2)
        child = result.meta["telemetry"]["children"][0]  # type: ignore[index]
        assert child["name"] == "upcoming_occurrences"
        assert child["annotations"] == {"found": 2}
