"""
tipout_config -- single public entrypoint for role configuration.

Responsibility:
    Provides the runtime way to obtain a role catalog through
    ``get_active_catalog()``: load the YAML, validate it, trace it and
    hand back frozen records.

Architecture position:
    Configuration -- YAML-driven role catalog, load-time validation.
    This package sits above ``tipout_kernel`` and below
    ``tipout_services``.  The kernel and the engines MUST NEVER import
    from ``tipout_config``.

Invariants enforced:
    - A catalog is only returned after it passes ``validate_role_catalog``.
    - Deterministic identity: the same YAML content always produces the
      same checksum.

Failure modes:
    - ``FileNotFoundError`` -- the catalog file does not exist.
    - ``yaml.YAMLError`` / ``KeyError`` / ``ValueError`` -- malformed catalog.
    - ``RoleCatalogValidationError`` -- structural validation failed.

Audit relevance:
    Every successful ``get_active_catalog()`` call emits a
    ``TIPOUT_CONFIG_TRACE`` log entry containing the catalog_id, version,
    checksum, role count and config count, tying each report back to the
    exact catalog it was computed against.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tipout_config.loader import compute_checksum, load_role_catalog
from tipout_config.schema import EngineSettings, RoleCatalog
from tipout_config.validator import validate_role_catalog
from tipout_kernel.exceptions import RoleCatalogValidationError

_logger = logging.getLogger("tipout_kernel.config")

# Bundled catalog
_DEFAULT_CATALOG_PATH = Path(__file__).parent / "sets" / "default" / "roles.yaml"


def get_active_catalog(path: Path | str | None = None) -> RoleCatalog:
    """Load, validate and trace a role catalog.

    Args:
        path: Catalog YAML file. Defaults to the bundled
            ``tipout_config/sets/default/roles.yaml``.

    Returns:
        RoleCatalog that passed validation.

    Raises:
        FileNotFoundError: If the catalog file does not exist.
        RoleCatalogValidationError: If validation reports any error.
    """
    catalog_path = Path(path) if path is not None else _DEFAULT_CATALOG_PATH
    catalog = load_role_catalog(catalog_path)

    validation = validate_role_catalog(catalog)
    if not validation.is_valid:
        raise RoleCatalogValidationError(catalog.catalog_id, validation.messages)

    _logger.info(
        "TIPOUT_CONFIG_TRACE",
        extra={
            "trace_type": "TIPOUT_CONFIG_TRACE",
            "catalog_id": catalog.catalog_id,
            "catalog_version": catalog.version,
            "checksum": catalog.checksum,
            "role_count": len(catalog.roles),
            "config_count": sum(len(r.configs) for r in catalog.roles),
            "source": str(catalog_path),
        },
    )
    return catalog


__all__ = [
    "EngineSettings",
    "RoleCatalog",
    "compute_checksum",
    "get_active_catalog",
    "load_role_catalog",
    "validate_role_catalog",
]
