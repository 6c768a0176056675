"""
Typed Exception Hierarchy for the Tipout Kernel.

===============================================================================
WHERE EXCEPTIONS ARE RAISED
===============================================================================

The allocation engines never raise for structurally incomplete data: a
missing role, an empty config history, zero hours or zero tips all resolve
to a defined zero/None result. Exceptions exist only at the boundaries:

  - record mapping (malformed API payloads)
  - role catalog loading and validation
  - role-config versioning (closing/superseding effective-dated versions)
  - report requests (invalid date range)

Every exception carries a static ``code`` attribute (machine-readable,
API-safe) and its context as structured attributes.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    TipoutKernelError (base)
    |
    +-- RecordError
    |   +-- MissingFieldError
    |   +-- InvalidFieldValueError
    |
    +-- RoleConfigError
    |   +-- OverlappingConfigError
    |   +-- ConfigNotFoundError
    |   +-- InvertedEffectiveRangeError
    |
    +-- CatalogError
    |   +-- RoleCatalogValidationError
    |
    +-- ReportError
        +-- InvalidDateRangeError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                 | When Raised
----------------|----------------------|-------------------------------------------
Record          | MISSING_FIELD        | Required key absent from an input record
                | INVALID_FIELD_VALUE  | Number/date/bool cannot be parsed
----------------|----------------------|-------------------------------------------
Role config     | OVERLAPPING_CONFIG   | Two versions of one tipout type overlap
                | CONFIG_NOT_FOUND     | No open version to close
                | INVERTED_EFFECTIVE_RANGE | Closing date precedes the version start
----------------|----------------------|-------------------------------------------
Catalog         | ROLE_CATALOG_INVALID | Catalog failed validation
----------------|----------------------|-------------------------------------------
Report          | INVALID_DATE_RANGE   | end_date precedes start_date
===============================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Any


class TipoutKernelError(Exception):
    """
    Base exception for all tipout kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "TIPOUT_KERNEL_ERROR"


# Record-related exceptions


class RecordError(TipoutKernelError):
    """Base exception for malformed input records."""

    code: str = "RECORD_ERROR"


class MissingFieldError(RecordError):
    """A required key is absent from an input record."""

    code: str = "MISSING_FIELD"

    def __init__(self, record_type: str, field_name: str):
        self.record_type = record_type
        self.field_name = field_name
        super().__init__(f"{record_type} record is missing required field '{field_name}'")


class InvalidFieldValueError(RecordError):
    """A field value cannot be interpreted as the expected type."""

    code: str = "INVALID_FIELD_VALUE"

    def __init__(self, field_name: str, value: Any, expected: str):
        self.field_name = field_name
        self.value = repr(value)
        self.expected = expected
        super().__init__(
            f"Invalid value for '{field_name}': {value!r} (expected {expected})"
        )


# Role configuration exceptions


class RoleConfigError(TipoutKernelError):
    """Base exception for effective-dated role configuration errors."""

    code: str = "ROLE_CONFIG_ERROR"


class OverlappingConfigError(RoleConfigError):
    """
    Two versions of the same tipout type cover a common date.

    At most one version per (role, tipout type) may be effective on any day.
    """

    code: str = "OVERLAPPING_CONFIG"

    def __init__(
        self,
        tipout_type: str,
        first_config_id: str,
        second_config_id: str,
        role_name: str | None = None,
    ):
        self.tipout_type = tipout_type
        self.first_config_id = first_config_id
        self.second_config_id = second_config_id
        self.role_name = role_name
        where = f" on role {role_name}" if role_name else ""
        super().__init__(
            f"Overlapping '{tipout_type}' configs{where}: "
            f"{first_config_id} and {second_config_id}"
        )


class ConfigNotFoundError(RoleConfigError):
    """No open-ended configuration exists for the requested tipout type."""

    code: str = "CONFIG_NOT_FOUND"

    def __init__(self, tipout_type: str, on_date: date | None = None):
        self.tipout_type = tipout_type
        self.on_date = on_date.isoformat() if on_date else None
        super().__init__(f"No open '{tipout_type}' config to close")


class InvertedEffectiveRangeError(RoleConfigError):
    """A version would end before it starts."""

    code: str = "INVERTED_EFFECTIVE_RANGE"

    def __init__(self, config_id: str, effective_from: date, effective_to: date):
        self.config_id = config_id
        self.effective_from = effective_from.isoformat()
        self.effective_to = effective_to.isoformat()
        super().__init__(
            f"Config {config_id} would end on {self.effective_to}, "
            f"before it starts on {self.effective_from}"
        )


# Catalog exceptions


class CatalogError(TipoutKernelError):
    """Base exception for role catalog errors."""

    code: str = "CATALOG_ERROR"


class RoleCatalogValidationError(CatalogError):
    """The role catalog failed structural validation."""

    code: str = "ROLE_CATALOG_INVALID"

    def __init__(self, catalog_id: str, errors: list[str]):
        self.catalog_id = catalog_id
        self.errors = errors
        super().__init__(
            f"Role catalog {catalog_id} failed validation:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


# Report exceptions


class ReportError(TipoutKernelError):
    """Base exception for report request errors."""

    code: str = "REPORT_ERROR"


class InvalidDateRangeError(ReportError):
    """The requested end date precedes the start date."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date.isoformat()
        self.end_date = end_date.isoformat()
        super().__init__(
            f"Invalid report range: end {self.end_date} is before start {self.start_date}"
        )
