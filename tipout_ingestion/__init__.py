"""
Ingestion: API-shaped shift records into kernel domain records.

- mapping: camelCase dict -> Employee / RoleConfig / Role / Shift (pure)
- json_adapter: JSON array / JSON Lines file reader and ``load_shifts``
"""

from tipout_ingestion.json_adapter import JsonSourceAdapter, load_shifts
from tipout_ingestion.mapping import (
    coerce_date,
    employee_from_dict,
    role_config_from_dict,
    role_from_dict,
    shift_from_dict,
)

__all__ = [
    "JsonSourceAdapter",
    "coerce_date",
    "employee_from_dict",
    "load_shifts",
    "role_config_from_dict",
    "role_from_dict",
    "shift_from_dict",
]
