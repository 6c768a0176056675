"""
RoleCatalog schema.

Defines the human-authored, reviewable source artifact for role
configuration. YAML files are parsed into these types by the loader and
checked by the validator before anything downstream sees them.

Key distinction:
  RoleCatalog = source artifact (human-authored, versioned, checksummed)
  Role        = kernel record the engines consume (built from a catalog)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tipout_kernel.domain.records import Role
from tipout_kernel.domain.values import MONEY_PLACES

# ---------------------------------------------------------------------------
# Engine settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineSettings:
    """Tunable knobs read from a catalog's ``settings`` block."""

    log_level: str = "INFO"
    money_places: int = MONEY_PLACES


# ---------------------------------------------------------------------------
# Role catalog (root artifact)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RoleCatalog:
    """
    A versioned set of roles and their effective-dated config histories.

    ``checksum`` is a SHA-256 over the raw YAML content and identifies
    the exact catalog a report was computed against.
    """

    catalog_id: str
    version: int
    roles: tuple[Role, ...] = ()
    settings: EngineSettings = field(default_factory=EngineSettings)
    checksum: str = ""

    def role(self, name: str) -> Role | None:
        for role in self.roles:
            if role.name == name:
                return role
        return None

    @property
    def role_names(self) -> tuple[str, ...]:
        return tuple(role.name for role in self.roles)
