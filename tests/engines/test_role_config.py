"""
Tests for role config resolution.

Covers:
- Closed-interval effective dating (both ends inclusive)
- First-match vs latest-first lookup
- Base pay resolution across tipout types
- Tip pool membership
- Structural capability queries and their asymmetric defaults
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from tipout_engines.role_config import (
    find_active_config,
    find_latest_active_config,
    find_tip_pool_group,
    get_role_distribution_group,
    resolve_base_pay_rate,
    role_pays_tipout_type,
    role_receives_tipout_type,
)
from tipout_kernel.domain.records import Employee, Role, RoleConfig, Shift, TipoutType


def _shift(role, on=date(2025, 3, 1)):
    return Shift(
        id="s1",
        date=on,
        employee=Employee(id="e1", name="Alice"),
        role=role,
        hours="8",
    )


class TestFindActiveConfig:
    """Tests for the date-scoped point-in-time lookup."""

    def setup_method(self):
        self.old = RoleConfig(
            id="bar-2024",
            tipout_type="bar",
            percentage_rate="5",
            effective_from=date(2024, 1, 1),
            effective_to=date(2024, 12, 31),
        )
        self.new = RoleConfig(
            id="bar-2025",
            tipout_type="bar",
            percentage_rate="10",
            effective_from=date(2025, 1, 1),
        )
        self.host = RoleConfig(
            id="host-2024",
            tipout_type="host",
            percentage_rate="7",
            effective_from=date(2024, 1, 1),
        )
        self.configs = (self.old, self.new, self.host)

    def test_effective_to_is_inclusive(self):
        """A date equal to effective_to still resolves to that version."""
        found = find_active_config(self.configs, TipoutType.BAR, date(2024, 12, 31))
        assert found is self.old

    def test_day_after_effective_to_excluded(self):
        found = find_active_config((self.old,), "bar", date(2024, 12, 31) + timedelta(days=1))
        assert found is None

    def test_effective_from_is_inclusive(self):
        found = find_active_config(self.configs, "bar", date(2025, 1, 1))
        assert found is self.new

    def test_day_before_effective_from_excluded(self):
        found = find_active_config((self.new,), "bar", date(2024, 12, 31))
        assert found is None

    def test_open_ended_version_covers_far_future(self):
        found = find_active_config(self.configs, "bar", date(2099, 6, 1))
        assert found is self.new

    def test_filters_by_type(self):
        found = find_active_config(self.configs, "host", date(2025, 3, 1))
        assert found is self.host

    def test_none_type_matches_any(self):
        found = find_active_config(self.configs, None, date(2024, 6, 1))
        assert found is self.old

    def test_no_match_returns_none(self):
        assert find_active_config(self.configs, "sa", date(2025, 3, 1)) is None

    def test_empty_or_missing_configs(self):
        assert find_active_config((), "bar", date(2025, 3, 1)) is None
        assert find_active_config(None, "bar", date(2025, 3, 1)) is None

    def test_first_match_wins_in_given_order(self):
        """With overlapping versions, the unsorted lookup keeps input order."""
        overlapping = RoleConfig(
            id="bar-overlap", tipout_type="bar", percentage_rate="25",
            effective_from=date(2025, 2, 1),
        )
        found = find_active_config((self.new, overlapping), "bar", date(2025, 3, 1))
        assert found is self.new

    def test_latest_first_prefers_most_recent_start(self):
        overlapping = RoleConfig(
            id="bar-overlap", tipout_type="bar", percentage_rate="25",
            effective_from=date(2025, 2, 1),
        )
        found = find_latest_active_config((self.new, overlapping), date(2025, 3, 1))
        assert found is overlapping


class TestResolveBasePayRate:
    """Tests for the base pay resolved per shift day."""

    def test_uses_latest_effective_version_of_any_type(self):
        role = Role(
            name="Server",
            configs=(
                RoleConfig(id="bar", tipout_type="bar", effective_from=date(2024, 1, 1),
                           base_pay_rate="2.13"),
                RoleConfig(id="general", tipout_type="GENERAL", effective_from=date(2025, 1, 1),
                           base_pay_rate="2.83"),
            ),
        )
        assert resolve_base_pay_rate(_shift(role)) == Decimal("2.83")
        assert resolve_base_pay_rate(_shift(role, date(2024, 7, 1))) == Decimal("2.13")

    def test_unset_rate_resolves_to_zero(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", effective_from=date(2024, 1, 1)),
        ))
        assert resolve_base_pay_rate(_shift(role)) == Decimal("0")

    def test_no_effective_version_resolves_to_zero(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", effective_from=date(2026, 1, 1),
                       base_pay_rate="5"),
        ))
        assert resolve_base_pay_rate(_shift(role)) == Decimal("0")

    def test_missing_role_resolves_to_zero(self):
        assert resolve_base_pay_rate(_shift(None)) == Decimal("0")

    def test_datetime_shift_date_truncated(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", effective_from=date(2025, 3, 1),
                       effective_to=date(2025, 3, 1), base_pay_rate="4"),
        ))
        shift = _shift(role, datetime(2025, 3, 1, 23, 45))
        assert resolve_base_pay_rate(shift) == Decimal("4")


class TestFindTipPoolGroup:
    """Tests for tip pool membership."""

    def test_first_effective_config_with_group(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="host", tipout_type="host", effective_from=date(2024, 1, 1)),
            RoleConfig(id="bar", tipout_type="bar", effective_from=date(2024, 1, 1),
                       tip_pool_group="server_pool"),
        ))
        assert find_tip_pool_group(_shift(role)) == "server_pool"

    def test_expired_group_ignored(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", effective_from=date(2024, 1, 1),
                       effective_to=date(2024, 12, 31), tip_pool_group="server_pool"),
        ))
        assert find_tip_pool_group(_shift(role)) is None

    def test_empty_group_is_no_group(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", effective_from=date(2024, 1, 1),
                       tip_pool_group=""),
        ))
        assert find_tip_pool_group(_shift(role)) is None


class TestCapabilityQueries:
    """Tests for structural pay/receive queries."""

    def test_pays_defaults_to_true_when_absent(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", percentage_rate="10"),
        ))
        assert role_pays_tipout_type(_shift(role), "bar") is True

    def test_receives_defaults_to_false_when_absent(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", percentage_rate="10"),
        ))
        assert role_receives_tipout_type(_shift(role), "bar") is False

    def test_explicit_false_pays(self):
        role = Role(name="Bartender", configs=(
            RoleConfig(id="bar", tipout_type="bar", pays_tipout=False, receives_tipout=True),
        ))
        shift = _shift(role)
        assert role_pays_tipout_type(shift, "bar") is False
        assert role_receives_tipout_type(shift, "bar") is True

    def test_queries_ignore_effective_dates(self):
        """Capability comes from the whole history, expired versions included."""
        role = Role(name="Bartender", configs=(
            RoleConfig(id="bar-old", tipout_type="bar", receives_tipout=True,
                       effective_from=date(2020, 1, 1), effective_to=date(2020, 12, 31),
                       distribution_group="bar_team"),
        ))
        shift = _shift(role)
        assert role_receives_tipout_type(shift, TipoutType.BAR) is True
        assert get_role_distribution_group(shift, TipoutType.BAR) == "bar_team"

    def test_distribution_group_requires_receiving_config(self):
        role = Role(name="Server", configs=(
            RoleConfig(id="bar", tipout_type="bar", distribution_group="bar_team"),
        ))
        assert get_role_distribution_group(_shift(role), "bar") is None

    def test_role_can_sit_in_different_groups_per_type(self):
        role = Role(name="Support", configs=(
            RoleConfig(id="bar", tipout_type="bar", receives_tipout=True,
                       distribution_group="bar_team"),
            RoleConfig(id="sa", tipout_type="sa", receives_tipout=True,
                       distribution_group="sa_team"),
        ))
        shift = _shift(role)
        assert get_role_distribution_group(shift, "bar") == "bar_team"
        assert get_role_distribution_group(shift, "sa") == "sa_team"
        assert get_role_distribution_group(shift, "host") is None

    def test_missing_role(self):
        shift = _shift(None)
        assert role_pays_tipout_type(shift, "bar") is False
        assert role_receives_tipout_type(shift, "bar") is False
        assert get_role_distribution_group(shift, "bar") is None
