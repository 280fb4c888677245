"""Tests for stage telemetry: Span, trace_span, @traced."""

from __future__ import annotations

import time

from reactparcel.services.result import ServiceResult
from reactparcel.services.telemetry import (
    Span,
    _current_span,
    enable_telemetry,
    trace_span,
    traced,
)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="materializing")
        child.annotate("files", 8)
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert "annotations" not in d
        assert d["children"][0]["name"] == "materializing"
        assert d["children"][0]["annotations"] == {"files": 8}


@traced
def _op(fail: bool = False) -> ServiceResult:
    with trace_span("validating") as span:
        if span is not None:
            span.annotate("checked", True)
    if fail:
        return ServiceResult.failure("create_app", "X", "boom")
    return ServiceResult(ok=True, op="create_app")


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        assert _op().meta is None
        assert _current_span.get() is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()
        result = _op()
        telemetry = result.meta["telemetry"]  # type: ignore[index]
        assert telemetry["name"].endswith("_op")
        assert telemetry["children"][0]["name"] == "validating"
        assert telemetry["children"][0]["annotations"] == {"checked": True}

    def test_failures_are_traced_too(self) -> None:
        enable_telemetry()
        result = _op(fail=True)
        assert result.ok is False
        assert "telemetry" in (result.meta or {})

    def test_trace_span_without_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None
