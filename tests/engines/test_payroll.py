"""
Tests for the per-employee/role payroll aggregation.

Covers:
- Row figures for an unpooled and a pooled day
- Per-hour rates and payroll total computed before ROUND_HALF_UP rounding
- Multi-day aggregation with independent days
- Base pay rate taken from the last aggregated shift
- Row keying by (employee id, role name)
"""

from datetime import date
from decimal import Decimal

import pytest

from tipout_engines.payroll import (
    calculate_employee_role_summaries_daily,
    finalize_summary,
    partition_by_day,
)
from tipout_kernel.domain.records import Role, RoleConfig
from tipout_kernel.domain.summaries import EmployeeRoleSummary


@pytest.fixture
def unpooled_day(make_shift, server_role, bartender_role, host_role):
    return [
        make_shift("s1", "Alice", server_role, hours="8", cash_tips="50",
                   credit_tips="200", liquor_sales="400"),
        make_shift("b1", "Bob", bartender_role, hours="6", cash_tips="20",
                   credit_tips="80"),
        make_shift("h1", "Hank", host_role, hours="4"),
    ]


def _by_name(rows):
    return {row.employee_name: row for row in rows}


class TestUnpooledSummaries:

    def test_server_row(self, unpooled_day):
        alice = _by_name(calculate_employee_role_summaries_daily(unpooled_day))["Alice"]
        assert alice.employee_id == "emp-alice"
        assert alice.role_name == "Server"
        assert alice.total_hours == Decimal("8")
        assert alice.total_cash_tips == Decimal("50.00")
        assert alice.total_credit_tips == Decimal("200.00")
        assert alice.total_gross_credit_tips == Decimal("200.00")
        assert alice.total_bar_tipout == Decimal("-40.00")
        assert alice.total_host_tipout == Decimal("-17.50")
        assert alice.total_sa_tipout == Decimal("0.00")
        assert alice.total_payroll_tips == Decimal("142.50")
        assert alice.total_liquor_sales == Decimal("400")
        assert alice.base_pay_rate == Decimal("2.13")
        assert alice.tip_pool_group is None

    def test_server_rates_and_total(self, unpooled_day):
        alice = _by_name(calculate_employee_role_summaries_daily(unpooled_day))["Alice"]
        assert alice.cash_tips_per_hour == Decimal("6.25")
        assert alice.credit_tips_per_hour == Decimal("17.81")
        assert alice.total_tips_per_hour == Decimal("24.06")
        assert alice.payroll_total == Decimal("159.54")

    def test_receiver_rows(self, unpooled_day):
        rows = _by_name(calculate_employee_role_summaries_daily(unpooled_day))
        bob, hank = rows["Bob"], rows["Hank"]
        assert bob.total_bar_tipout == Decimal("40.00")
        assert bob.total_payroll_tips == Decimal("120.00")
        assert bob.credit_tips_per_hour == Decimal("20.00")
        assert bob.total_tips_per_hour == Decimal("23.33")
        assert bob.payroll_total == Decimal("150.00")
        assert hank.total_host_tipout == Decimal("17.50")
        assert hank.payroll_total == Decimal("65.50")

    def test_half_up_rounding(self, unpooled_day):
        """17.50 over 4 hours is 4.375, which rounds up."""
        hank = _by_name(calculate_employee_role_summaries_daily(unpooled_day))["Hank"]
        assert hank.credit_tips_per_hour == Decimal("4.38")
        assert hank.total_tips_per_hour == Decimal("4.38")

    def test_rows_in_first_settled_order(self, unpooled_day):
        rows = calculate_employee_role_summaries_daily(unpooled_day)
        assert [r.employee_name for r in rows] == ["Alice", "Bob", "Hank"]

    def test_money_places(self, unpooled_day):
        rows = calculate_employee_role_summaries_daily(unpooled_day, money_places=0)
        assert _by_name(rows)["Alice"].payroll_total == Decimal("160")


class TestPooledSummaries:

    def test_pooled_rows(self, make_shift, pooled_server_role, bartender_role, host_role):
        rows = _by_name(calculate_employee_role_summaries_daily([
            make_shift("p1", "Alice", pooled_server_role, hours="8",
                       cash_tips="60", credit_tips="180", liquor_sales="400"),
            make_shift("p2", "Carol", pooled_server_role, hours="7",
                       cash_tips="40", credit_tips="120", liquor_sales="300"),
            make_shift("b1", "Bob", bartender_role, hours="5"),
            make_shift("h1", "Hank", host_role, hours="4"),
        ]))
        alice, carol = rows["Alice"], rows["Carol"]

        assert alice.tip_pool_group == "server_pool"
        assert alice.total_cash_tips == Decimal("53.33")
        assert alice.total_credit_tips == Decimal("145.07")
        assert alice.total_gross_credit_tips == Decimal("180.00")
        assert alice.total_bar_tipout == Decimal("-40.00")
        assert alice.total_host_tipout == Decimal("-16.80")
        assert alice.total_payroll_tips == Decimal("105.07")
        assert alice.payroll_total == Decimal("145.07")
        assert carol.total_payroll_tips == Decimal("96.93")
        assert carol.payroll_total == Decimal("131.93")
        assert rows["Bob"].total_payroll_tips == Decimal("70.00")
        assert rows["Hank"].total_payroll_tips == Decimal("28.00")


class TestMultiDay:

    def test_days_settle_independently(self, make_shift, server_role, bartender_role):
        """A bartender on day 2 does not collect day 1's bar tipout."""
        rows = _by_name(calculate_employee_role_summaries_daily([
            make_shift("s1", "Alice", server_role, on=date(2025, 3, 1), hours="8",
                       credit_tips="100", liquor_sales="400"),
            make_shift("s2", "Alice", server_role, on=date(2025, 3, 2), hours="8",
                       credit_tips="100", liquor_sales="400"),
            make_shift("b2", "Bob", bartender_role, on=date(2025, 3, 2), hours="6"),
        ]))
        alice, bob = rows["Alice"], rows["Bob"]

        assert alice.total_hours == Decimal("16")
        assert alice.total_bar_tipout == Decimal("-40.00")
        assert bob.total_bar_tipout == Decimal("40.00")
        # Host tipout 7% of 100 is charged both days
        assert alice.total_host_tipout == Decimal("-14.00")
        assert alice.total_payroll_tips == Decimal("146.00")

    def test_same_employee_two_roles_two_rows(self, make_shift, server_role, bartender_role):
        rows = calculate_employee_role_summaries_daily([
            make_shift("s1", "Alice", server_role, on=date(2025, 3, 1), hours="5"),
            make_shift("b1", "Alice", bartender_role, on=date(2025, 3, 2), hours="3"),
        ])
        assert [(r.employee_id, r.role_name) for r in rows] == [
            ("emp-alice", "Server"),
            ("emp-alice", "Bartender"),
        ]

    def test_base_pay_rate_from_last_aggregated_shift(self, make_shift):
        role = Role(name="Server", configs=(
            RoleConfig(id="old", tipout_type="bar", effective_from=date(2024, 1, 1),
                       effective_to=date(2025, 3, 1), base_pay_rate="2.13"),
            RoleConfig(id="new", tipout_type="bar", effective_from=date(2025, 3, 2),
                       base_pay_rate="2.83"),
        ))
        day1 = make_shift("s1", "Alice", role, on=date(2025, 3, 1), hours="8")
        day2 = make_shift("s2", "Alice", role, on=date(2025, 3, 2), hours="8")

        forward = calculate_employee_role_summaries_daily([day1, day2])[0]
        assert forward.base_pay_rate == Decimal("2.83")
        assert forward.payroll_total == Decimal("45.28")

        backward = calculate_employee_role_summaries_daily([day2, day1])[0]
        assert backward.base_pay_rate == Decimal("2.13")
        assert backward.payroll_total == Decimal("34.08")

    def test_empty_input(self):
        assert calculate_employee_role_summaries_daily([]) == []

    def test_incomplete_shifts_produce_no_rows(self, make_shift, server_role):
        rows = calculate_employee_role_summaries_daily([
            make_shift("s1", None, server_role, hours="8"),
            make_shift("s2", "Ghost", None, hours="8"),
        ])
        assert rows == []


class TestPartitionByDay:

    def test_first_appearance_order(self, make_shift, server_role):
        shifts = [
            make_shift("a", "Alice", server_role, on=date(2025, 3, 2)),
            make_shift("b", "Bob", server_role, on=date(2025, 3, 1)),
            make_shift("c", "Carol", server_role, on=date(2025, 3, 2)),
        ]
        days = partition_by_day(shifts)
        assert list(days) == [date(2025, 3, 2), date(2025, 3, 1)]
        assert [s.id for s in days[date(2025, 3, 2)]] == ["a", "c"]


class TestFinalizeSummary:

    def test_total_uses_unrounded_tips(self):
        row = EmployeeRoleSummary(
            employee_id="e1",
            employee_name="Alice",
            role_name="Server",
            total_hours=Decimal("1"),
            total_payroll_tips=Decimal("10.004"),
            base_pay_rate=Decimal("0.001"),
        )
        final = finalize_summary(row)
        # 10.005 rounds up; rounded tips plus base would give 10.00
        assert final.total_payroll_tips == Decimal("10.00")
        assert final.payroll_total == Decimal("10.01")
        assert final.base_pay_rate == Decimal("0.001")
        assert final.total_hours == Decimal("1")

    def test_zero_hours(self):
        row = EmployeeRoleSummary(
            employee_id="e1", employee_name="Alice", role_name="Server",
            total_cash_tips=Decimal("5"), total_payroll_tips=Decimal("5"),
        )
        final = finalize_summary(row)
        assert final.cash_tips_per_hour == Decimal("0")
        assert final.credit_tips_per_hour == Decimal("0")
        assert final.total_tips_per_hour == Decimal("0")
