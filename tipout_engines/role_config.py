"""
Module: tipout_engines.role_config
Responsibility:
    Answer questions about a role's effective-dated config history:
    which version is in force on a day, whether the role pays or receives
    a tipout type, which distribution group it receives into, which tip
    pool it belongs to, and which base pay rate applies.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import tipout_kernel.domain.

Invariants enforced:
    - Two lookup strategies, deliberately kept apart:
        * date-scoped: ``find_active_config``, ``find_latest_active_config``,
          ``find_tip_pool_group`` and ``resolve_base_pay_rate`` only consider
          versions whose closed interval ``[effective_from, effective_to]``
          contains the day.
        * structural: ``role_pays_tipout_type``, ``role_receives_tipout_type``
          and ``get_role_distribution_group`` scan the *whole* history with
          no date filter. Capability is a property of the role, not of a day.
    - ``pays_tipout`` absent -> pays; ``receives_tipout`` absent -> does not
      receive.

Failure modes:
    - None. Missing roles or config histories resolve to None / False / 0.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from tipout_kernel.domain.records import RoleConfig, Shift, TipoutType
from tipout_kernel.domain.values import ZERO

# ---------------------------------------------------------------------------
# Date-scoped lookups
# ---------------------------------------------------------------------------


def find_active_config(
    configs: Iterable[RoleConfig] | None,
    tipout_type: TipoutType | str | None,
    on_date: date,
) -> RoleConfig | None:
    """Return the first config of ``tipout_type`` effective on ``on_date``.

    Configs are scanned in the order given; callers that want "latest
    applicable" semantics pass them sorted most-recent-first (see
    ``find_latest_active_config``). ``tipout_type=None`` matches any type.

    Returns:
        The matching RoleConfig, or None (callers treat None as rate 0 /
        type inactive).
    """
    if not configs:
        return None
    for config in configs:
        if tipout_type is not None and not config.is_type(tipout_type):
            continue
        if config.is_effective(on_date):
            return config
    return None


def find_latest_active_config(
    configs: Iterable[RoleConfig] | None,
    on_date: date,
    tipout_type: TipoutType | str | None = None,
) -> RoleConfig | None:
    """Most recent ``effective_from`` first, then ``find_active_config``."""
    if not configs:
        return None
    ordered = sorted(configs, key=lambda c: c.effective_from, reverse=True)
    return find_active_config(ordered, tipout_type, on_date)


def resolve_base_pay_rate(shift: Shift) -> Decimal:
    """Hourly base pay in force on the shift's day.

    Uses the latest-starting version of *any* tipout type effective on the
    day; a missing version or an unset rate resolves to 0.
    """
    config = find_latest_active_config(shift.configs, shift.day)
    if config is None or config.base_pay_rate is None:
        return ZERO
    return config.base_pay_rate


def find_tip_pool_group(shift: Shift) -> str | None:
    """Tip pool the shift's role belongs to on the shift's day.

    First effective config (any tipout type) that names a pool wins.
    """
    for config in shift.configs:
        if config.is_effective(shift.day) and config.tip_pool_group:
            return config.tip_pool_group
    return None


# ---------------------------------------------------------------------------
# Structural capability queries
# ---------------------------------------------------------------------------


def role_pays_tipout_type(shift: Shift, tipout_type: TipoutType | str) -> bool:
    """True iff some config of ``tipout_type`` on the role pays it."""
    return any(c.is_type(tipout_type) and c.pays() for c in shift.configs)


def role_receives_tipout_type(shift: Shift, tipout_type: TipoutType | str) -> bool:
    """True iff some config of ``tipout_type`` on the role receives it."""
    return any(c.is_type(tipout_type) and c.receives() for c in shift.configs)


def get_role_distribution_group(
    shift: Shift,
    tipout_type: TipoutType | str,
) -> str | None:
    """Distribution group of the first receiving config of ``tipout_type``."""
    for config in shift.configs:
        if config.is_type(tipout_type) and config.receives():
            return config.distribution_group or None
    return None
