"""
tipout_services.report_service -- Payroll report over a date range.

Responsibility:
    Answer a report request: keep the shifts that fall inside an
    inclusive date range, run the overall summary and the daily
    employee/role aggregation over them, and collect each role's
    headline tipout rates for display.

Architecture position:
    Services -- orchestration over engines + kernel. No I/O; the caller
    fetches shifts (joined with employee, role and full config history)
    and serializes the result (see ``tipout_services.serialization``).

Invariants enforced:
    - Only shifts whose day lies in [start_date, end_date] are processed.
    - An empty range yields ``summary=None`` and no rows, never an error.
    - Every log record emitted while the report runs carries its
      ``report_id``.

Failure modes:
    - InvalidDateRangeError if ``end_date`` precedes ``start_date``.

Audit relevance:
    ``report_started`` / ``report_completed`` records bracket each run
    with the range, shift count and row count; the engine traces emitted
    in between share the same report_id.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from uuid import uuid4

from tipout_engines import calculate_employee_role_summaries_daily, calculate_overall_summary
from tipout_kernel.domain.records import Role, Shift, TipoutType
from tipout_kernel.domain.summaries import EmployeeRoleSummary, ReportSummary
from tipout_kernel.domain.values import MONEY_PLACES, ZERO
from tipout_kernel.exceptions import InvalidDateRangeError
from tipout_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.report")


@dataclass(frozen=True)
class RoleConfigRates:
    """Percentage rate of the first bar/host/SA config of a role."""

    bar: Decimal = ZERO
    host: Decimal = ZERO
    sa: Decimal = ZERO


@dataclass(frozen=True)
class PayrollReport:
    """Everything one report request returns."""

    report_id: str
    start_date: date
    end_date: date
    summary: ReportSummary | None
    employee_summaries: tuple[EmployeeRoleSummary, ...] = ()
    role_config_rates: Mapping[str, RoleConfigRates] = field(
        default_factory=lambda: MappingProxyType({})
    )


def _first_rate(role: Role, tipout_type: TipoutType) -> Decimal:
    for config in role.configs:
        if config.is_type(tipout_type):
            return config.percentage_rate
    return ZERO


def collect_role_config_rates(shifts: Iterable[Shift]) -> dict[str, RoleConfigRates]:
    """Headline rates per role name, from the first shift seen for each role.

    The first config of each type in the role's history wins, whatever
    its effective dates.
    """
    rates: dict[str, RoleConfigRates] = {}
    for shift in shifts:
        role = shift.role
        if role is None or role.name in rates:
            continue
        rates[role.name] = RoleConfigRates(
            bar=_first_rate(role, TipoutType.BAR),
            host=_first_rate(role, TipoutType.HOST),
            sa=_first_rate(role, TipoutType.SA),
        )
    return rates


def filter_shifts_in_range(
    shifts: Iterable[Shift],
    start_date: date,
    end_date: date,
) -> list[Shift]:
    """Shifts whose day lies in [start_date, end_date], input order kept."""
    return [s for s in shifts if start_date <= s.day <= end_date]


def list_tip_pool_groups(roles: Iterable[Role]) -> list[str]:
    """Sorted distinct non-empty tip pool group names across ``roles``."""
    groups = {
        config.tip_pool_group
        for role in roles
        for config in role.configs
        if config.tip_pool_group
    }
    return sorted(groups)


def generate_report(
    shifts: Sequence[Shift],
    start_date: date,
    end_date: date,
    *,
    money_places: int = MONEY_PLACES,
    report_id: str | None = None,
) -> PayrollReport:
    """Build the payroll report for ``[start_date, end_date]``.

    Args:
        shifts: Candidate shifts; those outside the range are ignored.
        start_date: First day of the range (inclusive).
        end_date: Last day of the range (inclusive).
        money_places: Decimal places for the employee summary rounding.
        report_id: Identifier bound into the log context; generated when
            omitted.

    Raises:
        InvalidDateRangeError: if ``end_date`` precedes ``start_date``.
    """
    if end_date < start_date:
        raise InvalidDateRangeError(start_date, end_date)

    report_id = report_id or str(uuid4())
    with LogContext.bind(report_id=report_id):
        in_range = filter_shifts_in_range(shifts, start_date, end_date)
        logger.info("report_started", extra={
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "candidate_count": len(shifts),
            "shift_count": len(in_range),
        })

        if not in_range:
            logger.info("report_completed", extra={"shift_count": 0, "row_count": 0})
            return PayrollReport(
                report_id=report_id,
                start_date=start_date,
                end_date=end_date,
                summary=None,
            )

        summary = calculate_overall_summary(in_range)
        rows = calculate_employee_role_summaries_daily(in_range, money_places)
        rates = collect_role_config_rates(in_range)

        logger.info("report_completed", extra={
            "shift_count": len(in_range),
            "row_count": len(rows),
            "role_count": len(rates),
        })
        return PayrollReport(
            report_id=report_id,
            start_date=start_date,
            end_date=end_date,
            summary=summary,
            employee_summaries=tuple(rows),
            role_config_rates=MappingProxyType(rates),
        )
