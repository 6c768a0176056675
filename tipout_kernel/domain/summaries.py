"""
Summaries -- output records built fresh by each report invocation.

Responsibility:
    ``EmployeeRoleSummary`` (one row per employee/role pair over a date
    range) and ``ReportSummary`` (range-wide totals). Both are frozen;
    engines build new instances with ``dataclasses.replace`` rather than
    mutating rows in place.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

_ZERO = Decimal("0")


@dataclass(frozen=True)
class EmployeeRoleSummary:
    """
    Payroll figures for one (employee, role) pair across a date range.

    Contract:
        Net tipout fields are signed: positive = received, negative = paid.
    Guarantees:
        - ``credit_tips_per_hour`` is based on ``total_payroll_tips``.
        - ``payroll_total`` == ``base_pay_rate * total_hours +
          total_payroll_tips``, computed before rounding.
    Non-goals:
        - ``base_pay_rate`` is the rate resolved for the *last* aggregated
          shift of the pair, not a time-weighted rate.
    """

    employee_id: str
    employee_name: str
    role_name: str
    total_hours: Decimal = _ZERO
    total_cash_tips: Decimal = _ZERO
    total_credit_tips: Decimal = _ZERO
    total_gross_credit_tips: Decimal = _ZERO
    total_bar_tipout: Decimal = _ZERO
    total_host_tipout: Decimal = _ZERO
    total_sa_tipout: Decimal = _ZERO
    cash_tips_per_hour: Decimal = _ZERO
    credit_tips_per_hour: Decimal = _ZERO
    total_tips_per_hour: Decimal = _ZERO
    base_pay_rate: Decimal = _ZERO
    total_payroll_tips: Decimal = _ZERO
    total_liquor_sales: Decimal = _ZERO
    payroll_total: Decimal = _ZERO
    tip_pool_group: str | None = None


@dataclass(frozen=True)
class ReportSummary:
    """Range-wide totals and totals paid into each tipout pool."""

    total_shifts: int = 0
    total_hours: Decimal = _ZERO
    total_cash_tips: Decimal = _ZERO
    total_credit_tips: Decimal = _ZERO
    total_liquor_sales: Decimal = _ZERO
    total_bar_tipout_paid: Decimal = _ZERO  # Paid *into* the bar pool
    total_host_tipout_paid: Decimal = _ZERO  # Paid *into* the host pool
    total_sa_tipout_paid: Decimal = _ZERO  # Paid *into* the sa pool
    # Legacy range-wide averages for two ad-hoc role classes
    bar_tips_per_hour: Decimal = _ZERO
    server_tips_per_hour: Decimal = _ZERO
    bar_cash_tips_per_hour: Decimal = _ZERO
    bar_credit_tips_per_hour: Decimal = _ZERO
    server_cash_tips_per_hour: Decimal = _ZERO
    server_credit_tips_per_hour: Decimal = _ZERO
