"""
Module: tipout_engines.overall_summary
Responsibility:
    Range-wide rollup of a set of shifts: counts and totals, the amounts
    paid *into* each tipout pool, and legacy average per-hour rates for
    two ad-hoc role classes.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Orthogonal to the per-employee payroll path: no pooling and no
    distribution happen here.

Invariants enforced:
    - Presence flags are determined per calendar day, as in settlement.
    - Paid totals use each shift's original tips/sales and only count the
      types the role pays.
    - Role classes:
        * bar    = receives bar tipout
        * server = pays bar tipout and receives none of bar/host/SA
    - Class averages are taken over the whole range, not per day:
        bar payroll tips    = bar credit - bar host/SA paid + total bar paid
        server payroll tips = server credit - server host/SA paid - total bar paid
    - Per-hour figures are 0 when the class worked no hours.
    - The result is not rounded.

Failure modes:
    - None. Empty input yields an all-zero ReportSummary.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from tipout_engines.payroll import partition_by_day
from tipout_engines.role_config import role_pays_tipout_type, role_receives_tipout_type
from tipout_engines.tipout import (
    DailyRolePresence,
    TipoutAmounts,
    calculate_paid_tipouts,
    determine_daily_presence,
)
from tipout_engines.tracer import traced_engine
from tipout_kernel.domain.records import TRANSFER_TYPES, Shift, TipoutType
from tipout_kernel.domain.summaries import ReportSummary
from tipout_kernel.domain.values import ZERO, per_hour
from tipout_kernel.logging_config import get_logger

logger = get_logger("engines.overall_summary")


@dataclass(frozen=True)
class _ClassTotals:
    """Hours, tips and host/SA paid for one role class across the range."""

    hours: Decimal = ZERO
    cash_tips: Decimal = ZERO
    credit_tips: Decimal = ZERO
    host_sa_paid: Decimal = ZERO


def is_bar_class(shift: Shift) -> bool:
    return role_receives_tipout_type(shift, TipoutType.BAR)


def is_server_class(shift: Shift) -> bool:
    if not role_pays_tipout_type(shift, TipoutType.BAR):
        return False
    return not any(role_receives_tipout_type(shift, t) for t in TRANSFER_TYPES)


def _class_totals(entries: Iterable[tuple[Shift, TipoutAmounts]]) -> _ClassTotals:
    hours = cash = credit = host_sa = ZERO
    for shift, paid in entries:
        hours += shift.hours
        cash += shift.cash_tips
        credit += shift.credit_tips
        host_sa += paid.host_tipout + paid.sa_tipout
    return _ClassTotals(hours=hours, cash_tips=cash, credit_tips=credit, host_sa_paid=host_sa)


@traced_engine("overall_summary", "1.0", fingerprint_fields=("shifts",))
def calculate_overall_summary(shifts: Sequence[Shift]) -> ReportSummary:
    """Range-wide totals and pool-paid amounts for ``shifts``.

    Args:
        shifts: Shifts over any date range, original figures.

    Returns:
        A fresh ReportSummary; all zero for an empty input.
    """
    if not shifts:
        return ReportSummary()

    presence_by_day = {
        day: determine_daily_presence(day_shifts)
        for day, day_shifts in partition_by_day(shifts).items()
    }

    total_hours = total_cash = total_credit = total_liquor = ZERO
    bar_paid = host_paid = sa_paid = ZERO
    paid_by_shift: list[tuple[Shift, TipoutAmounts]] = []

    for shift in shifts:
        total_hours += shift.hours
        total_cash += shift.cash_tips
        total_credit += shift.credit_tips
        total_liquor += shift.liquor_sales

        presence = presence_by_day.get(shift.day, DailyRolePresence())
        paid = calculate_paid_tipouts(shift, presence)
        paid_by_shift.append((shift, paid))
        bar_paid += paid.bar_tipout
        host_paid += paid.host_tipout
        sa_paid += paid.sa_tipout

    bar = _class_totals(e for e in paid_by_shift if is_bar_class(e[0]))
    server = _class_totals(e for e in paid_by_shift if is_server_class(e[0]))

    bar_payroll_tips = bar.credit_tips - bar.host_sa_paid + bar_paid
    server_payroll_tips = server.credit_tips - server.host_sa_paid - bar_paid

    summary = ReportSummary(
        total_shifts=len(shifts),
        total_hours=total_hours,
        total_cash_tips=total_cash,
        total_credit_tips=total_credit,
        total_liquor_sales=total_liquor,
        total_bar_tipout_paid=bar_paid,
        total_host_tipout_paid=host_paid,
        total_sa_tipout_paid=sa_paid,
        bar_tips_per_hour=per_hour(bar.cash_tips + bar_payroll_tips, bar.hours),
        server_tips_per_hour=per_hour(server.cash_tips + server_payroll_tips, server.hours),
        bar_cash_tips_per_hour=per_hour(bar.cash_tips, bar.hours),
        bar_credit_tips_per_hour=per_hour(bar_payroll_tips, bar.hours),
        server_cash_tips_per_hour=per_hour(server.cash_tips, server.hours),
        server_credit_tips_per_hour=per_hour(server_payroll_tips, server.hours),
    )

    logger.info("overall_summary_calculated", extra={
        "shift_count": len(shifts),
        "day_count": len(presence_by_day),
        "total_bar_tipout_paid": str(bar_paid),
        "total_host_tipout_paid": str(host_paid),
        "total_sa_tipout_paid": str(sa_paid),
    })
    return summary
