"""
Record mapping: pure transformation from API-shaped dicts to kernel records.

Accepts the camelCase shapes the reports API hands out (one shift joined
with its employee, its role and the role's full config history), with
dates as ISO strings, ``date`` or ``datetime`` and numerics as strings or
numbers. ZERO I/O.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from tipout_kernel.domain.records import Employee, Role, RoleConfig, Shift
from tipout_kernel.domain.values import to_decimal
from tipout_kernel.exceptions import InvalidFieldValueError, MissingFieldError

# -----------------------------------------------------------------------------
# Field coercion (pure)
# -----------------------------------------------------------------------------


def _require(data: dict[str, Any], key: str, record_type: str) -> Any:
    value = data.get(key)
    if value is None:
        raise MissingFieldError(record_type, key)
    return value


def coerce_date(value: Any, field_name: str) -> date:
    """Calendar day of an ISO date/datetime string, ``date`` or ``datetime``.

    A datetime string keeps the day as written ("2025-03-01T23:30:00Z" is
    2025-03-01); no timezone conversion is applied.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) > 10:
                return datetime.fromisoformat(text).date()
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidFieldValueError(field_name, value, "ISO date") from exc
    raise InvalidFieldValueError(field_name, value, "ISO date")


def coerce_decimal(value: Any, field_name: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidFieldValueError(field_name, value, "number") from exc


def coerce_optional_bool(value: Any, field_name: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    raise InvalidFieldValueError(field_name, value, "boolean or null")


# -----------------------------------------------------------------------------
# Record mappers
# -----------------------------------------------------------------------------


def employee_from_dict(data: dict[str, Any]) -> Employee:
    return Employee(
        id=str(_require(data, "id", "Employee")),
        name=str(data.get("name") or ""),
    )


def role_config_from_dict(data: dict[str, Any]) -> RoleConfig:
    """Map one ``RoleConfig`` payload.

    ``paysTipout`` / ``receivesTipout`` stay None when absent so the
    record's per-field defaults apply.

    Raises:
        MissingFieldError: ``id``, ``tipoutType`` or ``effectiveFrom`` absent.
        InvalidFieldValueError: a date, number or flag cannot be read.
    """
    effective_to = data.get("effectiveTo")
    base_pay = data.get("basePayRate")
    return RoleConfig(
        id=str(_require(data, "id", "RoleConfig")),
        tipout_type=str(_require(data, "tipoutType", "RoleConfig")),
        percentage_rate=coerce_decimal(data.get("percentageRate"), "percentageRate"),
        effective_from=coerce_date(
            _require(data, "effectiveFrom", "RoleConfig"), "effectiveFrom"
        ),
        effective_to=coerce_date(effective_to, "effectiveTo") if effective_to else None,
        pays_tipout=coerce_optional_bool(data.get("paysTipout"), "paysTipout"),
        receives_tipout=coerce_optional_bool(data.get("receivesTipout"), "receivesTipout"),
        distribution_group=data.get("distributionGroup") or None,
        tip_pool_group=data.get("tipPoolGroup") or None,
        base_pay_rate=coerce_decimal(base_pay, "basePayRate") if base_pay is not None else None,
    )


def role_from_dict(data: dict[str, Any]) -> Role:
    configs = data.get("configs") or []
    if not isinstance(configs, list):
        raise InvalidFieldValueError("configs", configs, "list")
    role_id = data.get("id")
    return Role(
        name=str(_require(data, "name", "Role")),
        configs=tuple(role_config_from_dict(c) for c in configs),
        id=str(role_id) if role_id is not None else None,
    )


def shift_from_dict(data: dict[str, Any]) -> Shift:
    """Map one joined shift payload to a ``Shift``.

    ``employee`` and ``role`` may be null; the engines skip or zero such
    shifts rather than failing.

    Raises:
        MissingFieldError: ``id`` or ``date`` absent.
        InvalidFieldValueError: a date or number cannot be read.
    """
    employee = data.get("employee")
    role = data.get("role")
    return Shift(
        id=str(_require(data, "id", "Shift")),
        date=coerce_date(_require(data, "date", "Shift"), "date"),
        employee=employee_from_dict(employee) if employee else None,
        role=role_from_dict(role) if role else None,
        hours=coerce_decimal(data.get("hours"), "hours"),
        cash_tips=coerce_decimal(data.get("cashTips"), "cashTips"),
        credit_tips=coerce_decimal(data.get("creditTips"), "creditTips"),
        liquor_sales=coerce_decimal(data.get("liquorSales"), "liquorSales"),
    )
