"""
Module: tipout_engines.tipout
Responsibility:
    Compute the bar/host/SA tipouts a single shift's *original* tips and
    liquor sales generate, gated by which receiving roles worked that day.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - bar  = liquor_sales * rate / 100, only when a bar receiver worked.
    - host = (cash_tips + credit_tips) * rate / 100, charged whether or not
      a host worked (``HOST_PRESENCE_GATE_ENABLED`` is off).
    - sa   = (cash_tips + credit_tips) * rate / 100, only when an SA worked.
    - The rate comes from the version of each type in force on the shift's
      day; a version with ``pays_tipout=False`` contributes nothing.
    - Callers pass shifts carrying their original, pre-pooling figures.

Failure modes:
    - None. A shift with no role or no configs yields all-zero amounts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from tipout_engines.role_config import (
    find_active_config,
    role_pays_tipout_type,
    role_receives_tipout_type,
)
from tipout_kernel.domain.records import Shift, TipoutType
from tipout_kernel.domain.values import ZERO, percent_of
from tipout_kernel.logging_config import get_logger

logger = get_logger("engines.tipout")

# Host tipout is charged even on days with no host receiving it. The
# ``has_host`` flag is accepted and carried but does not gate the amount.
HOST_PRESENCE_GATE_ENABLED = False


@dataclass(frozen=True)
class DailyRolePresence:
    """Which receiving roles worked on a given day."""

    has_host: bool = False
    has_sa: bool = False
    has_bar: bool = False


@dataclass(frozen=True)
class TipoutAmounts:
    """Tipouts one shift generates, by type."""

    bar_tipout: Decimal = ZERO
    host_tipout: Decimal = ZERO
    sa_tipout: Decimal = ZERO

    def for_type(self, tipout_type: TipoutType | str) -> Decimal:
        value = tipout_type.value if isinstance(tipout_type, TipoutType) else tipout_type
        match value:
            case "bar":
                return self.bar_tipout
            case "host":
                return self.host_tipout
            case "sa":
                return self.sa_tipout
            case _:
                return ZERO


NO_TIPOUTS = TipoutAmounts()


def determine_daily_presence(shifts: Iterable[Shift]) -> DailyRolePresence:
    """Presence flags for a set of same-day shifts (any receiver counts)."""
    has_host = has_sa = has_bar = False
    for shift in shifts:
        has_host = has_host or role_receives_tipout_type(shift, TipoutType.HOST)
        has_sa = has_sa or role_receives_tipout_type(shift, TipoutType.SA)
        has_bar = has_bar or role_receives_tipout_type(shift, TipoutType.BAR)
    return DailyRolePresence(has_host=has_host, has_sa=has_sa, has_bar=has_bar)


def calculate_tipouts(
    shift: Shift,
    has_host: bool,
    has_sa: bool,
    has_bar: bool = False,
) -> TipoutAmounts:
    """Tipouts generated by ``shift``'s original tips and sales.

    Args:
        shift: The shift, carrying its original (pre-pooling) figures.
        has_host: Whether a host-receiving shift worked that day. Not used
            to gate the host amount while HOST_PRESENCE_GATE_ENABLED is off.
        has_sa: Whether an SA-receiving shift worked that day.
        has_bar: Whether a bar-receiving shift worked that day.

    Returns:
        TipoutAmounts; all-zero when the role has no configs.
    """
    configs = shift.configs
    if not configs:
        return NO_TIPOUTS

    total_tips = shift.total_tips
    bar_tipout = host_tipout = sa_tipout = ZERO

    bar_config = find_active_config(configs, TipoutType.BAR, shift.day)
    host_config = find_active_config(configs, TipoutType.HOST, shift.day)
    sa_config = find_active_config(configs, TipoutType.SA, shift.day)

    if has_bar and bar_config is not None and bar_config.pays():
        bar_tipout = percent_of(shift.liquor_sales, bar_config.percentage_rate)

    host_gate_open = has_host or not HOST_PRESENCE_GATE_ENABLED
    if host_gate_open and host_config is not None and host_config.pays():
        host_tipout = percent_of(total_tips, host_config.percentage_rate)

    if has_sa and sa_config is not None and sa_config.pays():
        sa_tipout = percent_of(total_tips, sa_config.percentage_rate)

    logger.debug("tipouts_calculated", extra={
        "shift_id": shift.id,
        "role": shift.role.name if shift.role else None,
        "has_host": has_host,
        "has_sa": has_sa,
        "has_bar": has_bar,
        "bar_tipout": str(bar_tipout),
        "host_tipout": str(host_tipout),
        "sa_tipout": str(sa_tipout),
    })

    return TipoutAmounts(
        bar_tipout=bar_tipout,
        host_tipout=host_tipout,
        sa_tipout=sa_tipout,
    )


def calculate_paid_tipouts(shift: Shift, presence: DailyRolePresence) -> TipoutAmounts:
    """Tipouts the shift actually pays: ``calculate_tipouts`` restricted to
    the types the role pays (structural query)."""
    amounts = calculate_tipouts(
        shift, presence.has_host, presence.has_sa, presence.has_bar
    )
    return TipoutAmounts(
        bar_tipout=amounts.bar_tipout if role_pays_tipout_type(shift, TipoutType.BAR) else ZERO,
        host_tipout=amounts.host_tipout if role_pays_tipout_type(shift, TipoutType.HOST) else ZERO,
        sa_tipout=amounts.sa_tipout if role_pays_tipout_type(shift, TipoutType.SA) else ZERO,
    )
