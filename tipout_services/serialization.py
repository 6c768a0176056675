"""
Serialization of payroll reports to the reports API's JSON shape.

Field names are camelCase; money and hours are JSON numbers (Decimal ->
float), dates are ISO strings. The output is plain ``dict`` / ``list``
ready for ``json.dumps``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from tipout_kernel.domain.summaries import EmployeeRoleSummary, ReportSummary
from tipout_services.report_service import PayrollReport, RoleConfigRates


def _num(value: Decimal) -> float:
    return float(value)


def summary_to_dict(summary: ReportSummary) -> dict[str, Any]:
    return {
        "totalShifts": summary.total_shifts,
        "totalHours": _num(summary.total_hours),
        "totalCashTips": _num(summary.total_cash_tips),
        "totalCreditTips": _num(summary.total_credit_tips),
        "totalLiquorSales": _num(summary.total_liquor_sales),
        "totalBarTipoutPaid": _num(summary.total_bar_tipout_paid),
        "totalHostTipoutPaid": _num(summary.total_host_tipout_paid),
        "totalSaTipoutPaid": _num(summary.total_sa_tipout_paid),
        "barTipsPerHour": _num(summary.bar_tips_per_hour),
        "serverTipsPerHour": _num(summary.server_tips_per_hour),
        "barCashTipsPerHour": _num(summary.bar_cash_tips_per_hour),
        "barCreditTipsPerHour": _num(summary.bar_credit_tips_per_hour),
        "serverCashTipsPerHour": _num(summary.server_cash_tips_per_hour),
        "serverCreditTipsPerHour": _num(summary.server_credit_tips_per_hour),
    }


def employee_summary_to_dict(row: EmployeeRoleSummary) -> dict[str, Any]:
    return {
        "employeeId": row.employee_id,
        "employeeName": row.employee_name,
        "roleName": row.role_name,
        "totalHours": _num(row.total_hours),
        "totalCashTips": _num(row.total_cash_tips),
        "totalCreditTips": _num(row.total_credit_tips),
        "totalGrossCreditTips": _num(row.total_gross_credit_tips),
        "totalBarTipout": _num(row.total_bar_tipout),
        "totalHostTipout": _num(row.total_host_tipout),
        "totalSaTipout": _num(row.total_sa_tipout),
        "cashTipsPerHour": _num(row.cash_tips_per_hour),
        "creditTipsPerHour": _num(row.credit_tips_per_hour),
        "totalTipsPerHour": _num(row.total_tips_per_hour),
        "basePayRate": _num(row.base_pay_rate),
        "totalPayrollTips": _num(row.total_payroll_tips),
        "totalLiquorSales": _num(row.total_liquor_sales),
        "payrollTotal": _num(row.payroll_total),
        "tipPoolGroup": row.tip_pool_group,
    }


def role_config_rates_to_dict(rates: RoleConfigRates) -> dict[str, float]:
    # Key names follow the existing dashboard contract.
    return {
        "barTipout": _num(rates.bar),
        "hostTipout": _num(rates.host),
        "sa": _num(rates.sa),
    }


def report_to_dict(report: PayrollReport) -> dict[str, Any]:
    """The ``/api/reports`` response body for ``report``."""
    return {
        "reportId": report.report_id,
        "startDate": report.start_date.isoformat(),
        "endDate": report.end_date.isoformat(),
        "summary": summary_to_dict(report.summary) if report.summary is not None else None,
        "employeeSummaries": [employee_summary_to_dict(r) for r in report.employee_summaries],
        "roleConfigs": {
            name: role_config_rates_to_dict(rates)
            for name, rates in report.role_config_rates.items()
        },
    }
