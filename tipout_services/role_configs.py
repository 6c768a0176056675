"""
tipout_services.role_configs -- Effective-dated role config versioning.

Responsibility:
    Change a role's rule for one tipout type without rewriting history:
    close the open version and start a new one, or close the open version
    outright. Every operation returns a new config tuple; the input is
    never modified.

Architecture position:
    Services -- orchestration over kernel records. No persistence; the
    caller stores the returned history.

Invariants enforced:
    - Versions of one tipout type never overlap: a superseded version
      ends the day before its successor starts.
    - History is append-only; closed versions are only ever replaced by
      copies with an ``effective_to`` set.

Failure modes:
    - OverlappingConfigError when a new version would share a day with an
      existing one (e.g. it starts on or before the open version's start,
      or inside a closed version).
    - ConfigNotFoundError when ``end_config`` finds no open version.
    - InvertedEffectiveRangeError when ``end_config`` would end a version
      before it starts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, timedelta

from tipout_kernel.domain.records import RoleConfig, TipoutType, tipout_type_value
from tipout_kernel.exceptions import (
    ConfigNotFoundError,
    InvertedEffectiveRangeError,
    OverlappingConfigError,
)
from tipout_kernel.logging_config import get_logger

logger = get_logger("services.role_configs")


def current_configs(configs: Iterable[RoleConfig]) -> tuple[RoleConfig, ...]:
    """Open-ended versions, most recent ``effective_from`` first."""
    open_versions = [c for c in configs if c.effective_to is None]
    return tuple(sorted(open_versions, key=lambda c: c.effective_from, reverse=True))


def _check_no_overlap(configs: tuple[RoleConfig, ...], new_config: RoleConfig) -> None:
    for existing in configs:
        if existing.overlaps(new_config):
            raise OverlappingConfigError(
                new_config.tipout_type, existing.id, new_config.id
            )


def supersede_config(
    configs: Iterable[RoleConfig],
    new_config: RoleConfig,
) -> tuple[RoleConfig, ...]:
    """Start ``new_config``, closing the open version of its type.

    The open version (if any) gets ``effective_to`` = the day before
    ``new_config.effective_from``.

    Returns:
        The new history: existing versions in their original order, with
        the closed one replaced, followed by ``new_config``.

    Raises:
        OverlappingConfigError: if the result would contain two versions
            of one type covering the same day.
    """
    history = tuple(configs)
    close_on = new_config.effective_from - timedelta(days=1)

    updated: list[RoleConfig] = []
    closed_id: str | None = None
    for config in history:
        if config.is_type(new_config.tipout_type) and config.effective_to is None:
            if close_on < config.effective_from:
                raise OverlappingConfigError(
                    new_config.tipout_type, config.id, new_config.id
                )
            config = replace(config, effective_to=close_on)
            closed_id = config.id
        updated.append(config)

    result = tuple(updated)
    _check_no_overlap(result, new_config)

    logger.info("role_config_superseded", extra={
        "tipout_type": new_config.tipout_type,
        "new_config_id": new_config.id,
        "closed_config_id": closed_id,
        "effective_from": new_config.effective_from.isoformat(),
    })
    return result + (new_config,)


def end_config(
    configs: Iterable[RoleConfig],
    tipout_type: TipoutType | str,
    on: date,
) -> tuple[RoleConfig, ...]:
    """Close every open version of ``tipout_type`` with ``effective_to=on``.

    Raises:
        ConfigNotFoundError: if no open version of the type exists.
        InvertedEffectiveRangeError: if ``on`` is before an open version's
            start.
    """
    type_value = tipout_type_value(tipout_type)
    updated: list[RoleConfig] = []
    closed: list[str] = []
    for config in configs:
        if config.is_type(type_value) and config.effective_to is None:
            if on < config.effective_from:
                raise InvertedEffectiveRangeError(config.id, config.effective_from, on)
            config = replace(config, effective_to=on)
            closed.append(config.id)
        updated.append(config)

    if not closed:
        raise ConfigNotFoundError(type_value, on)

    logger.info("role_config_ended", extra={
        "tipout_type": type_value,
        "closed_config_ids": closed,
        "effective_to": on.isoformat(),
    })
    return tuple(updated)
