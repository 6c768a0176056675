"""
tipout_services -- orchestration over the allocation engines.

- report_service: date-range payroll report (``generate_report``)
- serialization: report -> camelCase API JSON (``report_to_dict``)
- role_configs: effective-dated config versioning (supersede / end)
"""

from tipout_services.report_service import (
    PayrollReport,
    RoleConfigRates,
    collect_role_config_rates,
    filter_shifts_in_range,
    generate_report,
    list_tip_pool_groups,
)
from tipout_services.role_configs import current_configs, end_config, supersede_config
from tipout_services.serialization import report_to_dict

__all__ = [
    "PayrollReport",
    "RoleConfigRates",
    "collect_role_config_rates",
    "current_configs",
    "end_config",
    "filter_shifts_in_range",
    "generate_report",
    "list_tip_pool_groups",
    "report_to_dict",
    "supersede_config",
]
