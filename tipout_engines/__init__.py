"""
Module: tipout_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the tipout
    allocation engine.  This is the canonical import surface for higher
    layers (tipout_services, scripts).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import tipout_kernel (and sibling engine modules).
    MUST NOT import tipout_services, tipout_config or tipout_ingestion.

Invariants enforced:
    - Engines never read the clock; every date arrives on the shifts.
    - Decimal-only arithmetic; money is rounded once, in the payroll
      final pass.
    - Determinism: identical inputs in identical order always produce
      identical outputs.

Failure modes:
    - None in normal operation; incomplete records degrade to zero.

Audit relevance:
    Every engine entrypoint is traced via ``@traced_engine`` (see
    ``tipout_engines.tracer``), emitting TIPOUT_ENGINE_TRACE records with
    engine name, version, input fingerprint and duration.

Usage:
    from tipout_engines import (
        calculate_employee_role_summaries_daily,
        calculate_overall_summary,
    )
"""

from tipout_engines.distribution import (
    DailyDistributionPools,
    build_distribution_pools,
    received_share,
)
from tipout_engines.overall_summary import calculate_overall_summary
from tipout_engines.payroll import (
    calculate_employee_role_summaries_daily,
    finalize_summary,
    partition_by_day,
    settle_range,
)
from tipout_engines.role_config import (
    find_active_config,
    find_latest_active_config,
    find_tip_pool_group,
    get_role_distribution_group,
    resolve_base_pay_rate,
    role_pays_tipout_type,
    role_receives_tipout_type,
)
from tipout_engines.settlement import ShiftSettlement, settle_day, settle_shift
from tipout_engines.tip_pool import (
    DailyTipPoolResult,
    PoolAdjustedShift,
    TipPool,
    pool_daily_tips,
)
from tipout_engines.tipout import (
    HOST_PRESENCE_GATE_ENABLED,
    DailyRolePresence,
    TipoutAmounts,
    calculate_paid_tipouts,
    calculate_tipouts,
    determine_daily_presence,
)
from tipout_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Role config resolution
    "find_active_config",
    "find_latest_active_config",
    "find_tip_pool_group",
    "resolve_base_pay_rate",
    "role_pays_tipout_type",
    "role_receives_tipout_type",
    "get_role_distribution_group",
    # Per-shift tipouts
    "HOST_PRESENCE_GATE_ENABLED",
    "DailyRolePresence",
    "TipoutAmounts",
    "determine_daily_presence",
    "calculate_tipouts",
    "calculate_paid_tipouts",
    # Daily pooling and distribution
    "TipPool",
    "PoolAdjustedShift",
    "DailyTipPoolResult",
    "pool_daily_tips",
    "DailyDistributionPools",
    "build_distribution_pools",
    "received_share",
    # Settlement and aggregation
    "ShiftSettlement",
    "settle_shift",
    "settle_day",
    "partition_by_day",
    "settle_range",
    "finalize_summary",
    "calculate_employee_role_summaries_daily",
    "calculate_overall_summary",
    # Tracing
    "traced_engine",
    "compute_input_fingerprint",
]
