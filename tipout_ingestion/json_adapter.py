"""
Shift export reader for JSON array and JSON Lines files.

Options: ``format`` ("array" or "jsonl"; by default ``.jsonl`` and
``.ndjson`` files are read as lines, anything else as an array),
``json_path`` (dot path to a nested array such as "data.shifts", with
integer segments indexing lists) and ``encoding``. Rows are yielded with
their keys untouched because the camelCase field mapping relies on them.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from tipout_ingestion.mapping import shift_from_dict
from tipout_kernel.domain.records import Shift
from tipout_kernel.logging_config import get_logger

logger = get_logger("ingestion.json")

_LINE_SUFFIXES = frozenset({".jsonl", ".ndjson"})


def _descend(data: Any, json_path: str) -> Any:
    """Walk ``json_path`` into ``data``; None when a segment does not resolve."""
    for segment in filter(None, (s.strip() for s in json_path.split("."))):
        if isinstance(data, dict):
            data = data.get(segment)
        elif isinstance(data, list) and segment.isdigit() and int(segment) < len(data):
            data = data[int(segment)]
        else:
            return None
    return data


class JsonSourceAdapter:
    """Yield one dict per shift row from a JSON export."""

    def read(self, source_path: Path, options: dict[str, Any] | None = None) -> Iterator[dict[str, Any]]:
        options = options or {}
        source_path = Path(source_path)
        encoding = options.get("encoding", "utf-8")
        fmt = options.get("format") or (
            "jsonl" if source_path.suffix.lower() in _LINE_SUFFIXES else "array"
        )

        if fmt == "jsonl":
            with source_path.open(encoding=encoding) as f:
                yield from self._objects(
                    (json.loads(line) for line in f if line.strip()), source_path,
                )
            return

        with source_path.open(encoding=encoding) as f:
            data = json.load(f)
        json_path = options.get("json_path")
        rows = _descend(data, json_path) if json_path else data
        if not isinstance(rows, list):
            logger.warning("json_root_not_a_list", extra={
                "source": str(source_path),
                "json_path": json_path,
            })
            return
        yield from self._objects(rows, source_path)

    @staticmethod
    def _objects(items: Iterable[Any], source_path: Path) -> Iterator[dict[str, Any]]:
        skipped = 0
        for item in items:
            if isinstance(item, dict):
                yield item
            else:
                skipped += 1
        if skipped:
            logger.warning("non_object_rows_skipped", extra={
                "source": str(source_path),
                "skipped": skipped,
            })


def load_shifts(source_path: Path | str, options: dict[str, Any] | None = None) -> list[Shift]:
    """Read a shift export and map every row to a ``Shift``.

    Raises:
        MissingFieldError / InvalidFieldValueError: on the first malformed
            row.
        json.JSONDecodeError: if the file is not valid JSON.
    """
    shifts = [shift_from_dict(row) for row in JsonSourceAdapter().read(Path(source_path), options)]
    logger.info("shifts_loaded", extra={
        "source": str(source_path),
        "shift_count": len(shifts),
    })
    return shifts
