"""Validation findings for role catalogs, returned as data rather than raised."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """
    One problem found in a role catalog.

    ``role`` and ``config_id`` locate the problem; ``field`` names the
    offending attribute of that config. Either may be None for
    catalog-level problems such as duplicate role names.
    """

    code: str
    message: str
    role: str | None = None
    config_id: str | None = None
    field: str | None = None
    details: dict[str, Any] | None = None

    @property
    def location(self) -> str:
        parts = [p for p in (self.role, self.config_id, self.field) if p]
        return "/".join(parts) or "<catalog>"


@dataclass(frozen=True)
class ValidationResult:
    """Every problem found, in discovery order. Truthy only when there are none."""

    errors: tuple[ValidationError, ...] = ()

    @classmethod
    def from_errors(cls, errors: list[ValidationError]) -> ValidationResult:
        return cls(errors=tuple(errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]

    @property
    def messages(self) -> list[str]:
        return [f"{e.location}: {e.message}" for e in self.errors]

    def for_role(self, role: str) -> tuple[ValidationError, ...]:
        return tuple(e for e in self.errors if e.role == role)

    def __bool__(self) -> bool:
        return self.is_valid
