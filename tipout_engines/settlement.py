"""
Module: tipout_engines.settlement
Responsibility:
    Settle every shift of one day: run the daily tip pool and distribution
    pools, then fold each shift's pooled (or original) tips, paid tipouts
    and received tipouts into one net payroll-tips figure.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Pooled shift:
        payroll_tips = pooled credit + received bar/host/SA - paid bar
      (host and SA were already netted out of the pool).
    - Unpooled shift:
        payroll_tips = original credit + received bar/host/SA
                       - paid bar - paid host - paid SA
    - Paid amounts always come from the shift's original figures.
    - net_x = received_x - paid_x for each type.
    - Shifts with no employee or no role produce no settlement.

Failure modes:
    - None.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from tipout_engines.distribution import (
    DailyDistributionPools,
    build_distribution_pools,
    received_share,
)
from tipout_engines.tip_pool import PoolAdjustedShift, pool_daily_tips
from tipout_engines.tipout import DailyRolePresence, calculate_paid_tipouts, determine_daily_presence
from tipout_engines.tracer import traced_engine
from tipout_kernel.domain.records import Shift, TipoutType
from tipout_kernel.logging_config import get_logger

logger = get_logger("engines.settlement")


@dataclass(frozen=True)
class ShiftSettlement:
    """
    Net result for one shift on its day.

    Contract:
        ``cash_tips`` / ``credit_tips`` are pooled shares for pooled shifts
        and original figures otherwise; ``original_*`` are always the
        figures recorded on the shift.
    """

    shift: Shift
    tip_pool_group: str | None
    cash_tips: Decimal
    credit_tips: Decimal
    paid_bar_tipout: Decimal
    paid_host_tipout: Decimal
    paid_sa_tipout: Decimal
    received_bar_tipout: Decimal
    received_host_tipout: Decimal
    received_sa_tipout: Decimal
    payroll_tips: Decimal

    @property
    def original_cash_tips(self) -> Decimal:
        return self.shift.cash_tips

    @property
    def original_credit_tips(self) -> Decimal:
        return self.shift.credit_tips

    @property
    def net_bar_tipout(self) -> Decimal:
        return self.received_bar_tipout - self.paid_bar_tipout

    @property
    def net_host_tipout(self) -> Decimal:
        return self.received_host_tipout - self.paid_host_tipout

    @property
    def net_sa_tipout(self) -> Decimal:
        return self.received_sa_tipout - self.paid_sa_tipout


def settle_shift(
    adjusted: PoolAdjustedShift,
    presence: DailyRolePresence,
    pools: DailyDistributionPools,
) -> ShiftSettlement:
    """Settle one shift against its day's pools."""
    shift = adjusted.shift

    received_bar = received_share(shift, TipoutType.BAR, pools)
    received_host = received_share(shift, TipoutType.HOST, pools)
    received_sa = received_share(shift, TipoutType.SA, pools)
    received_total = received_bar + received_host + received_sa

    paid = calculate_paid_tipouts(shift, presence)

    if adjusted.is_pooled:
        payroll_tips = adjusted.credit_tips + received_total - paid.bar_tipout
    else:
        payroll_tips = (
            shift.credit_tips
            + received_total
            - paid.bar_tipout
            - paid.host_tipout
            - paid.sa_tipout
        )

    logger.debug("shift_settled", extra={
        "shift_id": shift.id,
        "pooled": adjusted.is_pooled,
        "credit_tips": str(adjusted.credit_tips),
        "received_total": str(received_total),
        "paid_bar_tipout": str(paid.bar_tipout),
        "payroll_tips": str(payroll_tips),
    })

    return ShiftSettlement(
        shift=shift,
        tip_pool_group=adjusted.tip_pool_group,
        cash_tips=adjusted.cash_tips,
        credit_tips=adjusted.credit_tips,
        paid_bar_tipout=paid.bar_tipout,
        paid_host_tipout=paid.host_tipout,
        paid_sa_tipout=paid.sa_tipout,
        received_bar_tipout=received_bar,
        received_host_tipout=received_host,
        received_sa_tipout=received_sa,
        payroll_tips=payroll_tips,
    )


@traced_engine("daily_settlement", "1.0", fingerprint_fields=("shifts",))
def settle_day(shifts: Sequence[Shift]) -> tuple[ShiftSettlement, ...]:
    """Settle all shifts of one calendar day, in input order.

    Args:
        shifts: Every shift worked on the day, original figures.

    Returns:
        One ShiftSettlement per shift that has both an employee and a role.
    """
    if not shifts:
        return ()

    presence = determine_daily_presence(shifts)
    pooled = pool_daily_tips(shifts, presence)
    pools = build_distribution_pools(shifts, presence)

    settlements = tuple(
        settle_shift(adjusted, presence, pools)
        for adjusted in pooled.shifts
        if adjusted.shift.employee is not None and adjusted.shift.role is not None
    )

    logger.info("day_settled", extra={
        "day": shifts[0].day.isoformat(),
        "shift_count": len(shifts),
        "settled_count": len(settlements),
        "pool_count": len(pooled.pools),
        "has_host": presence.has_host,
        "has_sa": presence.has_sa,
        "has_bar": presence.has_bar,
    })
    return settlements
