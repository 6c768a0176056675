"""
Role Catalog Loader (``tipout_config.loader``).

Responsibility
--------------
Loads a role catalog YAML file and parses it into typed
``tipout_config.schema`` / ``tipout_kernel.domain`` frozen dataclasses.
Runtime callers go through ``tipout_config.get_active_catalog()``, which
adds validation and tracing on top of this module.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on the kernel's
domain records only; never on engines or services.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields (``name``, ``id``,
  ``tipout_type``, ``catalog_id``).
* Every parsed object is a frozen dataclass.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  catalog identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Invalid date format  -> ``ValueError`` from ``date.fromisoformat``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from tipout_config.schema import EngineSettings, RoleCatalog
from tipout_kernel.domain.records import Role, RoleConfig
from tipout_kernel.domain.values import MONEY_PLACES, to_decimal


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Preconditions:
        - ``path`` must point to an existing, readable YAML file.
    Postconditions:
        - Returns a ``dict`` (possibly empty if the YAML is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """
    Parse a date from YAML (string or date object).

    Raises:
        ValueError: if ``value`` is not a valid date representation.
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def _optional_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true, false or absent, got {value!r}")
    return value


def parse_role_config(data: dict[str, Any]) -> RoleConfig:
    """
    Parse one effective-dated ``RoleConfig`` from a dict.

    Absent ``pays_tipout`` / ``receives_tipout`` stay None so the
    per-field default rules in ``RoleConfig`` apply.

    Raises:
        KeyError: if ``id`` or ``tipout_type`` is missing.
        ValueError: if a date or number cannot be parsed.
    """
    base_pay = data.get("base_pay_rate")
    return RoleConfig(
        id=str(data["id"]),
        tipout_type=str(data["tipout_type"]),
        percentage_rate=to_decimal(data.get("percentage_rate", 0)),
        effective_from=parse_date(data.get("effective_from", date.min)),
        effective_to=parse_date(data["effective_to"]) if data.get("effective_to") else None,
        pays_tipout=_optional_bool(data, "pays_tipout"),
        receives_tipout=_optional_bool(data, "receives_tipout"),
        distribution_group=data.get("distribution_group") or None,
        tip_pool_group=data.get("tip_pool_group") or None,
        base_pay_rate=to_decimal(base_pay) if base_pay is not None else None,
    )


def parse_role(data: dict[str, Any]) -> Role:
    """Parse a ``Role`` and its config history from a dict."""
    return Role(
        name=data["name"],
        id=str(data["id"]) if data.get("id") is not None else None,
        configs=tuple(parse_role_config(c) for c in data.get("configs", [])),
    )


def parse_settings(data: dict[str, Any] | None) -> EngineSettings:
    """Parse the optional ``settings`` block; absent keys take defaults."""
    data = data or {}
    return EngineSettings(
        log_level=str(data.get("log_level", "INFO")).upper(),
        money_places=int(data.get("money_places", MONEY_PLACES)),
    )


def parse_role_catalog(data: dict[str, Any]) -> RoleCatalog:
    """
    Parse a complete ``RoleCatalog`` from an already-loaded dict.

    Postconditions:
        - ``checksum`` is computed over ``data`` as given.
    Raises:
        KeyError: if ``catalog_id`` or a required role/config key is missing.
    """
    return RoleCatalog(
        catalog_id=data["catalog_id"],
        version=int(data.get("version", 1)),
        roles=tuple(parse_role(r) for r in data.get("roles", [])),
        settings=parse_settings(data.get("settings")),
        checksum=compute_checksum(data),
    )


def load_role_catalog(path: Path) -> RoleCatalog:
    """Load and parse a role catalog YAML file (no validation)."""
    return parse_role_catalog(load_yaml_file(Path(path)))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
