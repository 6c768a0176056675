"""Tests for the engine invocation tracer (TIPOUT_ENGINE_TRACE)."""

from datetime import date
from decimal import Decimal

import pytest

from tipout_engines.payroll import calculate_employee_role_summaries_daily
from tipout_engines.tracer import _canonicalize, compute_input_fingerprint, traced_engine


def _traces(records):
    return [r for r in records if r["message"] == "TIPOUT_ENGINE_TRACE"]


class TestTracedEngine:

    def test_emits_trace_record(self, captured_logs):
        @traced_engine("test_engine", "2.1", fingerprint_fields=("shifts",))
        def engine(shifts):
            return len(shifts)

        assert engine([1, 2]) == 2
        (trace,) = _traces(captured_logs())
        assert trace["trace_type"] == "TIPOUT_ENGINE_TRACE"
        assert trace["engine_name"] == "test_engine"
        assert trace["engine_version"] == "2.1"
        assert len(trace["input_fingerprint"]) == 16
        assert trace["duration_ms"] >= 0
        assert trace["result_size"] is None

    def test_no_fingerprint_fields(self, captured_logs):
        @traced_engine("bare", "1.0")
        def engine():
            return None

        engine()
        assert _traces(captured_logs())[0]["input_fingerprint"] == ""

    def test_result_size_for_sized_results(self, captured_logs):
        @traced_engine("rows", "1.0")
        def engine():
            return [object(), object(), object()]

        engine()
        assert _traces(captured_logs())[0]["result_size"] == 3

    def test_failed_call_writes_no_trace(self, captured_logs):
        @traced_engine("broken", "1.0")
        def engine():
            raise ArithmeticError("bad")

        with pytest.raises(ArithmeticError):
            engine()
        assert _traces(captured_logs()) == []

    def test_payroll_traces_nested_engines(self, make_shift, server_role, captured_logs):
        calculate_employee_role_summaries_daily(
            [make_shift("s1", "Alice", server_role, hours="8")]
        )
        names = {t["engine_name"] for t in _traces(captured_logs())}
        assert {
            "daily_settlement",
            "daily_tip_pool",
            "daily_distribution_pools",
            "employee_role_summaries_daily",
        } <= names

    def test_same_input_same_fingerprint(self, make_shift, server_role, captured_logs):
        shifts = [make_shift("s1", "Alice", server_role, hours="8")]
        calculate_employee_role_summaries_daily(shifts)
        calculate_employee_role_summaries_daily(shifts)
        fps = [
            t["input_fingerprint"] for t in _traces(captured_logs())
            if t["engine_name"] == "employee_role_summaries_daily"
        ]
        assert len(fps) == 2
        assert fps[0] == fps[1]


class TestFingerprint:

    def test_list_and_tuple_agree(self):
        a = compute_input_fingerprint(("x",), {"x": [1, 2]})
        b = compute_input_fingerprint(("x",), {"x": (1, 2)})
        assert a == b

    def test_missing_field_is_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(
            ("x",), {"x": None}
        )

    def test_dict_order_irrelevant(self):
        assert _canonicalize({"b": 1, "a": 2}) == _canonicalize({"a": 2, "b": 1})

    def test_canonical_forms(self, make_shift, server_role):
        assert _canonicalize(Decimal("1.50")) == "1.50"
        assert _canonicalize(date(2025, 3, 1)) == "2025-03-01"
        assert _canonicalize(True) == "true"
        assert _canonicalize(make_shift("s1", "Alice", server_role)) == "Shift#s1"
