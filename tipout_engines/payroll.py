"""
Module: tipout_engines.payroll
Responsibility:
    Turn a date range of shifts into one payroll summary row per
    (employee, role): settle each calendar day independently, fold the
    settlements into running totals, then compute per-hour rates and the
    payroll total.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Days never interact; each is settled on its own shifts only.
    - Days are processed in order of first appearance in the input, and
      shifts within a day keep their input order. Aggregation order is
      observable: ``base_pay_rate`` on a row is the rate resolved for the
      last shift folded into it, and ``tip_pool_group`` comes from the first.
    - The fold never mutates a row or the keyed map; each step returns a
      new map with a replaced row.
    - Rounding (ROUND_HALF_UP) happens once, in the final pass, after the
      per-hour rates and payroll total are computed from unrounded totals.
      Hours, liquor sales and base pay rate are not rounded.

Failure modes:
    - None. Empty input yields an empty list.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from datetime import date
from functools import reduce

from tipout_engines.role_config import resolve_base_pay_rate
from tipout_engines.settlement import ShiftSettlement, settle_day
from tipout_engines.tracer import traced_engine
from tipout_kernel.domain.records import Shift
from tipout_kernel.domain.summaries import EmployeeRoleSummary
from tipout_kernel.domain.values import MONEY_PLACES, per_hour, round_money
from tipout_kernel.logging_config import get_logger

logger = get_logger("engines.payroll")

SummaryKey = tuple[str, str]


def partition_by_day(shifts: Iterable[Shift]) -> dict[date, list[Shift]]:
    """Group shifts by calendar day, keeping first-appearance day order."""
    days: dict[date, list[Shift]] = {}
    for shift in shifts:
        days.setdefault(shift.day, []).append(shift)
    return days


def settle_range(shifts: Sequence[Shift]) -> list[ShiftSettlement]:
    """Settle every day in ``shifts``; settlements in processing order."""
    settlements: list[ShiftSettlement] = []
    for day_shifts in partition_by_day(shifts).values():
        settlements.extend(settle_day(day_shifts))
    return settlements


def _empty_row(settlement: ShiftSettlement) -> EmployeeRoleSummary:
    shift = settlement.shift
    return EmployeeRoleSummary(
        employee_id=shift.employee.id,
        employee_name=shift.employee.name,
        role_name=shift.role.name,
        tip_pool_group=settlement.tip_pool_group,
    )


def _accumulate(
    rows: Mapping[SummaryKey, EmployeeRoleSummary],
    settlement: ShiftSettlement,
) -> dict[SummaryKey, EmployeeRoleSummary]:
    """One fold step: a new map with ``settlement`` added to its row."""
    shift = settlement.shift
    key = (shift.employee.id, shift.role.name)
    row = rows.get(key) or _empty_row(settlement)

    updated = replace(
        row,
        total_hours=row.total_hours + shift.hours,
        total_cash_tips=row.total_cash_tips + settlement.cash_tips,
        total_credit_tips=row.total_credit_tips + settlement.credit_tips,
        total_gross_credit_tips=row.total_gross_credit_tips + settlement.original_credit_tips,
        total_liquor_sales=row.total_liquor_sales + shift.liquor_sales,
        total_bar_tipout=row.total_bar_tipout + settlement.net_bar_tipout,
        total_host_tipout=row.total_host_tipout + settlement.net_host_tipout,
        total_sa_tipout=row.total_sa_tipout + settlement.net_sa_tipout,
        total_payroll_tips=row.total_payroll_tips + settlement.payroll_tips,
        base_pay_rate=resolve_base_pay_rate(shift),
    )
    return {**rows, key: updated}


def finalize_summary(
    row: EmployeeRoleSummary,
    money_places: int = MONEY_PLACES,
) -> EmployeeRoleSummary:
    """Per-hour rates, payroll total and money rounding for one row."""
    hours = row.total_hours
    payroll_total = row.base_pay_rate * hours + row.total_payroll_tips

    def money(amount):
        return round_money(amount, money_places)

    return replace(
        row,
        total_cash_tips=money(row.total_cash_tips),
        total_credit_tips=money(row.total_credit_tips),
        total_gross_credit_tips=money(row.total_gross_credit_tips),
        total_bar_tipout=money(row.total_bar_tipout),
        total_host_tipout=money(row.total_host_tipout),
        total_sa_tipout=money(row.total_sa_tipout),
        total_payroll_tips=money(row.total_payroll_tips),
        payroll_total=money(payroll_total),
        cash_tips_per_hour=money(per_hour(row.total_cash_tips, hours)),
        credit_tips_per_hour=money(per_hour(row.total_payroll_tips, hours)),
        total_tips_per_hour=money(
            per_hour(row.total_cash_tips + row.total_payroll_tips, hours)
        ),
    )


@traced_engine(
    "employee_role_summaries_daily", "1.0", fingerprint_fields=("shifts", "money_places"),
)
def calculate_employee_role_summaries_daily(
    shifts: Sequence[Shift],
    money_places: int = MONEY_PLACES,
) -> list[EmployeeRoleSummary]:
    """Payroll summary rows for every (employee, role) pair in ``shifts``.

    Args:
        shifts: Shifts over any date range, each carrying its employee and
            its role's full config history.
        money_places: Decimal places for the final money rounding.

    Returns:
        Rows in order of each pair's first settled shift. Empty for an
        empty input.
    """
    if not shifts:
        return []

    settlements = settle_range(shifts)
    rows: dict[SummaryKey, EmployeeRoleSummary] = reduce(_accumulate, settlements, {})
    summaries = [finalize_summary(row, money_places) for row in rows.values()]

    logger.info("employee_role_summaries_calculated", extra={
        "shift_count": len(shifts),
        "settled_count": len(settlements),
        "row_count": len(summaries),
    })
    return summaries
