"""
Role Catalog Validator (``tipout_config.validator``).

Responsibility
--------------
Validates a ``RoleCatalog`` after loading, ensuring structural integrity
before any report is computed against it.

Architecture position
---------------------
**Config layer** -- load-time validation.  Called by
``tipout_config.get_active_catalog`` after loading.  Has no dependency on
engines or services.

Invariants enforced
-------------------
* Role name uniqueness -- summaries are keyed by role name.
* Percentage rates lie in [0, 100].
* Every version's ``effective_to`` is on or after its ``effective_from``.
* No overlapping versions -- for one role and tipout type, at most one
  version covers any given day.
* Base pay rates are non-negative.

Failure modes
-------------
* Validation errors are returned as data in a ``ValidationResult``; the
  catalog MUST NOT be used when ``is_valid`` is False.
"""

from __future__ import annotations

from itertools import combinations

from tipout_config.schema import RoleCatalog
from tipout_kernel.domain.dtos import ValidationError, ValidationResult
from tipout_kernel.domain.records import Role
from tipout_kernel.domain.values import HUNDRED, ZERO


def validate_role_catalog(catalog: RoleCatalog) -> ValidationResult:
    """
    Validate a role catalog.

    Postconditions:
        - Returns a ``ValidationResult`` listing every problem found, in
          role order; valid only when no problem was found.
    """
    errors: list[ValidationError] = []

    errors.extend(_validate_role_names(catalog))
    for role in catalog.roles:
        errors.extend(_validate_config_values(role))
        errors.extend(_validate_no_overlaps(role))

    return ValidationResult.from_errors(errors)


def _validate_role_names(catalog: RoleCatalog) -> list[ValidationError]:
    """Check that role names are unique."""
    errors: list[ValidationError] = []
    seen: set[str] = set()
    for role in catalog.roles:
        if role.name in seen:
            errors.append(ValidationError(
                code="DUPLICATE_ROLE",
                message=f"role '{role.name}' appears more than once",
                role=role.name,
            ))
        seen.add(role.name)
    return errors


def _validate_config_values(role: Role) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for config in role.configs:
        def problem(code: str, field: str, message: str) -> None:
            errors.append(ValidationError(
                code=code, message=message, role=role.name, config_id=config.id, field=field,
            ))

        if not ZERO <= config.percentage_rate <= HUNDRED:
            problem("RATE_OUT_OF_RANGE", "percentage_rate",
                    f"{config.percentage_rate} not in [0, 100]")
        if config.effective_to is not None and config.effective_to < config.effective_from:
            problem("INVERTED_EFFECTIVE_RANGE", "effective_to",
                    f"{config.effective_to} is before effective_from {config.effective_from}")
        if config.base_pay_rate is not None and config.base_pay_rate < ZERO:
            problem("NEGATIVE_BASE_PAY", "base_pay_rate",
                    f"{config.base_pay_rate} is negative")
    return errors


def _validate_no_overlaps(role: Role) -> list[ValidationError]:
    """Check that no two versions of one tipout type share a day."""
    errors: list[ValidationError] = []
    for first, second in combinations(role.configs, 2):
        if first.overlaps(second):
            errors.append(ValidationError(
                code="OVERLAPPING_CONFIG",
                message=f"{first.tipout_type} configs '{first.id}' and '{second.id}' overlap",
                role=role.name,
                config_id=second.id,
                details={"first": first.id, "second": second.id},
            ))
    return errors
