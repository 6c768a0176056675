"""
Module: tipout_engines.distribution
Responsibility:
    Build a day's distribution pools: the total paid into each of the
    bar/host/SA pools by every shift that day, and the hours worked by
    each receiving distribution group. Also apportion a pool back out to
    one shift by its share of its group's hours.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Pool totals use every shift's original tips/sales, pooled or not.
    - A shift adds its hours to at most one group per tipout type; a role
      may sit in different groups for different types.
    - received = (shift hours / group hours) * pool total, only when the
      role receives the type, names a group, the group worked hours and
      the pool is positive. Otherwise zero.

Failure modes:
    - None.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from tipout_engines.role_config import get_role_distribution_group, role_receives_tipout_type
from tipout_engines.tipout import DailyRolePresence, TipoutAmounts, calculate_paid_tipouts
from tipout_engines.tracer import traced_engine
from tipout_kernel.domain.records import TRANSFER_TYPES, Shift, TipoutType
from tipout_kernel.domain.values import ZERO
from tipout_kernel.logging_config import get_logger

logger = get_logger("engines.distribution")


@dataclass(frozen=True)
class DailyDistributionPools:
    """
    One day's tipout pools and receiving-group hours.

    Contract:
        ``group_hours`` is read-only.
    """

    bar_pool: Decimal = ZERO
    host_pool: Decimal = ZERO
    sa_pool: Decimal = ZERO
    group_hours: Mapping[str, Decimal] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def pool_total(self, tipout_type: TipoutType | str) -> Decimal:
        return TipoutAmounts(self.bar_pool, self.host_pool, self.sa_pool).for_type(tipout_type)

    def hours_for(self, group: str | None) -> Decimal:
        if not group:
            return ZERO
        return self.group_hours.get(group, ZERO)


@traced_engine("daily_distribution_pools", "1.0", fingerprint_fields=("shifts",))
def build_distribution_pools(
    shifts: Sequence[Shift],
    presence: DailyRolePresence,
) -> DailyDistributionPools:
    """Sum the day's tipout pools and receiving-group hours.

    Args:
        shifts: All shifts of a single calendar day, original figures.
        presence: The day's receiving-role presence flags.
    """
    bar_pool = host_pool = sa_pool = ZERO
    group_hours: dict[str, Decimal] = {}

    for shift in shifts:
        paid = calculate_paid_tipouts(shift, presence)
        bar_pool += paid.bar_tipout
        host_pool += paid.host_tipout
        sa_pool += paid.sa_tipout

        for tipout_type in TRANSFER_TYPES:
            group = get_role_distribution_group(shift, tipout_type)
            if group:
                group_hours[group] = group_hours.get(group, ZERO) + shift.hours

    logger.info("distribution_pools_built", extra={
        "shift_count": len(shifts),
        "bar_pool": str(bar_pool),
        "host_pool": str(host_pool),
        "sa_pool": str(sa_pool),
        "group_count": len(group_hours),
    })

    return DailyDistributionPools(
        bar_pool=bar_pool,
        host_pool=host_pool,
        sa_pool=sa_pool,
        group_hours=MappingProxyType(group_hours),
    )


def received_share(
    shift: Shift,
    tipout_type: TipoutType | str,
    pools: DailyDistributionPools,
) -> Decimal:
    """The part of the day's ``tipout_type`` pool this shift receives."""
    if not role_receives_tipout_type(shift, tipout_type):
        return ZERO
    group = get_role_distribution_group(shift, tipout_type)
    group_hours = pools.hours_for(group)
    pool_total = pools.pool_total(tipout_type)
    if group and group_hours > ZERO and pool_total > ZERO:
        return (shift.hours / group_hours) * pool_total
    return ZERO
