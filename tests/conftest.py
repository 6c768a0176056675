"""
Pytest fixtures for the tipout engine test suite.

Provides:
- Session-wide structured logging setup and per-test LogContext cleanup
- ``captured_logs`` for asserting on emitted JSON log records
- A small restaurant role set (server, bartender, host, SA) as fixtures
- ``make_shift`` factory for building shifts against those roles
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from tipout_kernel.domain.records import Employee, Role, RoleConfig, Shift
from tipout_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture tipout_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculate_employee_role_summaries_daily(shifts)
            logs = captured_logs()
            assert any(r["message"] == "day_settled" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("tipout_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Role fixtures
# =============================================================================

DAY = date(2025, 3, 1)


@pytest.fixture
def server_role() -> Role:
    """Pays 10% of liquor sales to bar and 7% of tips to host; $2.13/h."""
    return Role(
        name="Server",
        configs=(
            RoleConfig(
                id="server-bar",
                tipout_type="bar",
                percentage_rate=Decimal("10"),
                effective_from=date(2024, 1, 1),
                pays_tipout=True,
                base_pay_rate=Decimal("2.13"),
            ),
            RoleConfig(
                id="server-host",
                tipout_type="host",
                percentage_rate=Decimal("7"),
                effective_from=date(2024, 1, 1),
                pays_tipout=True,
            ),
        ),
    )


@pytest.fixture
def pooled_server_role() -> Role:
    """Same rates as ``server_role`` but pooled in ``server_pool``."""
    return Role(
        name="Server",
        configs=(
            RoleConfig(
                id="server-bar",
                tipout_type="bar",
                percentage_rate=Decimal("10"),
                effective_from=date(2024, 1, 1),
                pays_tipout=True,
                tip_pool_group="server_pool",
                base_pay_rate=Decimal("5"),
            ),
            RoleConfig(
                id="server-host",
                tipout_type="host",
                percentage_rate=Decimal("7"),
                effective_from=date(2024, 1, 1),
                pays_tipout=True,
            ),
        ),
    )


@pytest.fixture
def bartender_role() -> Role:
    """Receives bar tipout into ``bar_team``; $5/h."""
    return Role(
        name="Bartender",
        configs=(
            RoleConfig(
                id="bartender-bar",
                tipout_type="bar",
                effective_from=date(2024, 1, 1),
                pays_tipout=False,
                receives_tipout=True,
                distribution_group="bar_team",
                base_pay_rate=Decimal("5"),
            ),
        ),
    )


@pytest.fixture
def host_role() -> Role:
    """Receives host tipout into ``host_team``; $12/h."""
    return Role(
        name="Host",
        configs=(
            RoleConfig(
                id="host-host",
                tipout_type="host",
                effective_from=date(2024, 1, 1),
                pays_tipout=False,
                receives_tipout=True,
                distribution_group="host_team",
                base_pay_rate=Decimal("12"),
            ),
        ),
    )


@pytest.fixture
def sa_role() -> Role:
    """Receives SA tipout into ``sa_team``; $9/h."""
    return Role(
        name="Server Assistant",
        configs=(
            RoleConfig(
                id="sa-sa",
                tipout_type="sa",
                effective_from=date(2024, 1, 1),
                pays_tipout=False,
                receives_tipout=True,
                distribution_group="sa_team",
                base_pay_rate=Decimal("9"),
            ),
        ),
    )


@pytest.fixture
def make_shift():
    """
    Factory for shifts on ``DAY`` (2025-03-01) unless a date is given.

    Usage::

        shift = make_shift("s1", "Alice", server_role, hours=8, credit_tips=300)
    """
    counter = {"n": 0}

    def _make(
        shift_id: str | None,
        employee_name: str | None,
        role: Role | None,
        *,
        on: date = DAY,
        hours="0",
        cash_tips="0",
        credit_tips="0",
        liquor_sales="0",
        employee_id: str | None = None,
    ) -> Shift:
        counter["n"] += 1
        employee = None
        if employee_name is not None:
            employee = Employee(id=employee_id or f"emp-{employee_name.lower()}", name=employee_name)
        return Shift(
            id=shift_id or f"shift-{counter['n']}",
            date=on,
            employee=employee,
            role=role,
            hours=hours,
            cash_tips=cash_tips,
            credit_tips=credit_tips,
            liquor_sales=liquor_sales,
        )

    return _make
