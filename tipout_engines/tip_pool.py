"""
Module: tipout_engines.tip_pool
Responsibility:
    Combine the raw tips of same-day shifts that share a tip pool group,
    net the pool's host/SA obligations out of its credit tips, and hand
    each member an hours-proportional share of the net pool.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only shifts from one calendar day are pooled together.
    - Pool totals use each member's original tips and hours.
    - Net pool credit = credit - paid host - paid SA. Net pool cash = cash.
      Bar tipout is tracked but never deducted here; members pay it
      individually at settlement.
    - Member share = hours * (net pool / pool hours); a pool with zero
      hours zeroes every member's tips.
    - Shifts without a pool keep their original tips.

Failure modes:
    - None.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from tipout_engines.role_config import find_tip_pool_group
from tipout_engines.tipout import DailyRolePresence, calculate_paid_tipouts
from tipout_engines.tracer import traced_engine
from tipout_kernel.domain.records import Shift
from tipout_kernel.domain.values import ZERO, per_hour
from tipout_kernel.logging_config import get_logger

logger = get_logger("engines.tip_pool")


@dataclass(frozen=True)
class TipPool:
    """
    One day's pool for one tip pool group.

    Contract:
        Frozen dataclass of gross totals and the pool's tipout obligations.
    Guarantees:
        - ``net_credit_tips`` excludes host and SA tipouts, never bar.
    """

    group: str
    total_cash_tips: Decimal = ZERO
    total_credit_tips: Decimal = ZERO
    total_hours: Decimal = ZERO
    total_paid_bar_tipout: Decimal = ZERO
    total_paid_host_tipout: Decimal = ZERO
    total_paid_sa_tipout: Decimal = ZERO
    shift_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def net_cash_tips(self) -> Decimal:
        return self.total_cash_tips

    @property
    def net_credit_tips(self) -> Decimal:
        return self.total_credit_tips - self.total_paid_host_tipout - self.total_paid_sa_tipout

    @property
    def net_cash_rate(self) -> Decimal:
        return per_hour(self.net_cash_tips, self.total_hours)

    @property
    def net_credit_rate(self) -> Decimal:
        return per_hour(self.net_credit_tips, self.total_hours)


@dataclass(frozen=True)
class PoolAdjustedShift:
    """A shift with the tips it keeps after pooling.

    ``cash_tips`` / ``credit_tips`` are the pooled share for members and
    the original figures otherwise; ``shift`` keeps the originals.
    """

    shift: Shift
    tip_pool_group: str | None
    cash_tips: Decimal
    credit_tips: Decimal

    @property
    def is_pooled(self) -> bool:
        return self.tip_pool_group is not None


@dataclass(frozen=True)
class DailyTipPoolResult:
    """Pools formed on one day and every shift's post-pooling tips, in
    input order."""

    pools: tuple[TipPool, ...]
    shifts: tuple[PoolAdjustedShift, ...]

    def pool(self, group: str) -> TipPool | None:
        for pool in self.pools:
            if pool.group == group:
                return pool
        return None


def _add_member(pool: TipPool, shift: Shift, presence: DailyRolePresence) -> TipPool:
    paid = calculate_paid_tipouts(shift, presence)
    return TipPool(
        group=pool.group,
        total_cash_tips=pool.total_cash_tips + shift.cash_tips,
        total_credit_tips=pool.total_credit_tips + shift.credit_tips,
        total_hours=pool.total_hours + shift.hours,
        total_paid_bar_tipout=pool.total_paid_bar_tipout + paid.bar_tipout,
        total_paid_host_tipout=pool.total_paid_host_tipout + paid.host_tipout,
        total_paid_sa_tipout=pool.total_paid_sa_tipout + paid.sa_tipout,
        shift_ids=pool.shift_ids + (shift.id,),
    )


@traced_engine("daily_tip_pool", "1.0", fingerprint_fields=("shifts",))
def pool_daily_tips(
    shifts: Sequence[Shift],
    presence: DailyRolePresence,
) -> DailyTipPoolResult:
    """Pool one day's tips by tip pool group.

    Args:
        shifts: All shifts of a single calendar day, original figures.
        presence: The day's receiving-role presence flags.

    Returns:
        DailyTipPoolResult with one TipPool per group (first-seen order)
        and a PoolAdjustedShift per input shift.
    """
    groups = [find_tip_pool_group(shift) for shift in shifts]

    pools: dict[str, TipPool] = {}
    for shift, group in zip(shifts, groups):
        if group is None:
            continue
        pools[group] = _add_member(pools.get(group, TipPool(group=group)), shift, presence)

    adjusted: list[PoolAdjustedShift] = []
    for shift, group in zip(shifts, groups):
        if group is None:
            adjusted.append(PoolAdjustedShift(shift, None, shift.cash_tips, shift.credit_tips))
            continue
        pool = pools[group]
        if pool.total_hours > ZERO:
            cash = shift.hours * pool.net_cash_rate
            credit = shift.hours * pool.net_credit_rate
        else:
            cash = credit = ZERO
        adjusted.append(PoolAdjustedShift(shift, group, cash, credit))

    for pool in pools.values():
        logger.info("tip_pool_formed", extra={
            "group": pool.group,
            "member_count": len(pool.shift_ids),
            "total_hours": str(pool.total_hours),
            "net_cash_tips": str(pool.net_cash_tips),
            "net_credit_tips": str(pool.net_credit_tips),
            "paid_host_tipout": str(pool.total_paid_host_tipout),
            "paid_sa_tipout": str(pool.total_paid_sa_tipout),
        })

    return DailyTipPoolResult(pools=tuple(pools.values()), shifts=tuple(adjusted))
