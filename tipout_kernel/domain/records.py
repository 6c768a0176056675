"""
Records -- immutable input records consumed by the allocation engines.

Responsibility:
    Define Employee, RoleConfig, Role and Shift as frozen dataclasses.
    These are read-only snapshots supplied by the persistence/API layer,
    already joined (a Shift carries its Employee and its Role, and the
    Role carries its *full* effective-dated config history).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Numerics are stored as ``Decimal`` (coerced in ``__post_init__``).
    - Dates are calendar days; ``datetime`` inputs are truncated.
    - ``pays_tipout`` / ``receives_tipout`` are tri-state (True, False,
      None = absent) with opposite defaults: an absent ``pays_tipout``
      means the role pays, an absent ``receives_tipout`` means it does not
      receive.
    - A config's effective interval is closed on both ends;
      ``effective_to=None`` is open-ended.

Failure modes:
    - ValueError from numeric coercion on non-numeric values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from tipout_kernel.domain.values import to_decimal


class TipoutType(str, Enum):
    """Tipout categories a role config can describe."""

    BAR = "bar"  # Percentage of liquor sales
    HOST = "host"  # Percentage of total tips
    SA = "sa"  # Percentage of total tips (server assistants)
    GENERAL = "general"  # Base pay only, no tipout


# The three types that move money between roles
TRANSFER_TYPES: tuple[TipoutType, ...] = (TipoutType.BAR, TipoutType.HOST, TipoutType.SA)


def as_day(value: date | datetime) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def tipout_type_value(tipout_type: TipoutType | str) -> str:
    """The plain string form of a tipout type, enum member or raw string."""
    if isinstance(tipout_type, TipoutType):
        return tipout_type.value
    return tipout_type


@dataclass(frozen=True)
class Employee:
    """Identity of the person who worked a shift."""

    id: str
    name: str


@dataclass(frozen=True)
class RoleConfig:
    """
    One effective-dated version of a role's rule for one tipout type.

    Contract:
        Frozen dataclass. ``tipout_type`` keeps its raw string when it is
        not a ``TipoutType`` member (legacy base-pay rows use arbitrary
        type names); lookups compare by string value.
    Guarantees:
        - ``percentage_rate`` and ``base_pay_rate`` are Decimal.
        - ``effective_from`` / ``effective_to`` are dates.
    Non-goals:
        - Does not check that versions of one type do not overlap; see
          ``tipout_config.validator`` and ``tipout_services.role_configs``.
    """

    id: str
    tipout_type: str
    percentage_rate: Decimal = Decimal("0")
    effective_from: date = date.min
    effective_to: date | None = None
    pays_tipout: bool | None = None
    receives_tipout: bool | None = None
    distribution_group: str | None = None
    tip_pool_group: str | None = None
    base_pay_rate: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tipout_type", tipout_type_value(self.tipout_type))
        object.__setattr__(self, "percentage_rate", to_decimal(self.percentage_rate))
        if self.base_pay_rate is not None:
            object.__setattr__(self, "base_pay_rate", to_decimal(self.base_pay_rate))
        object.__setattr__(self, "effective_from", as_day(self.effective_from))
        if self.effective_to is not None:
            object.__setattr__(self, "effective_to", as_day(self.effective_to))

    def is_type(self, tipout_type: TipoutType | str) -> bool:
        """True if this config describes ``tipout_type``."""
        return self.tipout_type == tipout_type_value(tipout_type)

    def pays(self) -> bool:
        """Resolved ``pays_tipout``: absent counts as paying."""
        return self.pays_tipout is not False

    def receives(self) -> bool:
        """Resolved ``receives_tipout``: absent counts as not receiving."""
        return bool(self.receives_tipout)

    def is_effective(self, on_date: date) -> bool:
        """Check if this version covers ``on_date`` (both ends inclusive)."""
        if on_date < self.effective_from:
            return False
        if self.effective_to is not None and on_date > self.effective_to:
            return False
        return True

    def overlaps(self, other: RoleConfig) -> bool:
        """True if both versions describe the same type and share a day."""
        if self.tipout_type != other.tipout_type:
            return False
        self_end = self.effective_to or date.max
        other_end = other.effective_to or date.max
        return self.effective_from <= other_end and other.effective_from <= self_end


@dataclass(frozen=True)
class Role:
    """A role, defined entirely by its ordered config history."""

    name: str
    configs: tuple[RoleConfig, ...] = field(default_factory=tuple)
    id: str | None = None

    def __post_init__(self) -> None:
        if self.configs is None:
            object.__setattr__(self, "configs", ())
        elif not isinstance(self.configs, tuple):
            object.__setattr__(self, "configs", tuple(self.configs))


@dataclass(frozen=True)
class Shift:
    """
    One worked shift.

    ``employee`` and ``role`` may be None for structurally incomplete
    input; every engine degrades to zero amounts for such shifts.
    """

    id: str
    date: date
    employee: Employee | None
    role: Role | None
    hours: Decimal = Decimal("0")
    cash_tips: Decimal = Decimal("0")
    credit_tips: Decimal = Decimal("0")
    liquor_sales: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        object.__setattr__(self, "hours", to_decimal(self.hours))
        object.__setattr__(self, "cash_tips", to_decimal(self.cash_tips))
        object.__setattr__(self, "credit_tips", to_decimal(self.credit_tips))
        object.__setattr__(self, "liquor_sales", to_decimal(self.liquor_sales))

    @property
    def day(self) -> date:
        """Calendar day this shift belongs to."""
        return as_day(self.date)

    @property
    def configs(self) -> tuple[RoleConfig, ...]:
        """The role's config history, or empty when the role is absent."""
        if self.role is None:
            return ()
        return self.role.configs

    @property
    def total_tips(self) -> Decimal:
        return self.cash_tips + self.credit_tips
