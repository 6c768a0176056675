"""
Pure domain layer.

This module contains the input records, output summaries and value
helpers with NO dependencies on:
- Database
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from tipout_kernel.domain.dtos import ValidationError, ValidationResult
from tipout_kernel.domain.records import (
    TRANSFER_TYPES,
    Employee,
    Role,
    RoleConfig,
    Shift,
    TipoutType,
    as_day,
    tipout_type_value,
)
from tipout_kernel.domain.summaries import EmployeeRoleSummary, ReportSummary
from tipout_kernel.domain.values import (
    ZERO,
    per_hour,
    percent_of,
    round_money,
    to_decimal,
)

__all__ = [
    "TRANSFER_TYPES",
    "ZERO",
    "Employee",
    "EmployeeRoleSummary",
    "ReportSummary",
    "Role",
    "RoleConfig",
    "Shift",
    "TipoutType",
    "ValidationError",
    "ValidationResult",
    "as_day",
    "tipout_type_value",
    "per_hour",
    "percent_of",
    "round_money",
    "to_decimal",
]
