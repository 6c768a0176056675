"""
tipout_engines.tracer -- TIPOUT_ENGINE_TRACE records for engine calls.

Responsibility:
    ``@traced_engine`` wraps an engine entrypoint and, after each call,
    logs one TIPOUT_ENGINE_TRACE record: engine name and version, a
    fingerprint of the selected arguments, the size of the result and the
    wall time. A report's traces share its ``report_id`` through
    ``LogContext``, so a figure on a payslip can be traced back to the
    exact shifts that produced it.

Architecture position:
    Engines -- support code for the pure calculation layer. Reading the
    arguments and writing a log record are the only things it does.

Invariants enforced:
    - The fingerprint depends only on argument values: mappings are
      canonicalized with sorted keys, sequences in order, and records
      (anything with an ``id``) as ``Type#id``. The hash is SHA-256,
      truncated to 16 hex characters.
    - A fingerprint field the call does not bind is hashed as "null".

Failure modes:
    - Exceptions from the wrapped engine propagate; no trace is written
      for a failed call.
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import time
from collections.abc import Callable, Mapping, Sized
from datetime import date
from decimal import Decimal
from typing import Any

from tipout_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")

TRACE_TYPE = "TIPOUT_ENGINE_TRACE"


@functools.singledispatch
def _canonicalize(value: Any) -> str:
    record_id = getattr(value, "id", None)
    if record_id is not None:
        return f"{type(value).__name__}#{record_id}"
    return str(value)


@_canonicalize.register(type(None))
def _(value) -> str:
    return "null"


@_canonicalize.register(bool)
def _(value) -> str:
    return "true" if value else "false"


@_canonicalize.register(int)
@_canonicalize.register(Decimal)
@_canonicalize.register(str)
def _(value) -> str:
    return str(value)


@_canonicalize.register(date)
def _(value) -> str:
    return value.isoformat()


@_canonicalize.register(Mapping)
def _(value) -> str:
    items = sorted(value.items(), key=lambda kv: str(kv[0]))
    return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"


@_canonicalize.register(list)
@_canonicalize.register(tuple)
def _(value) -> str:
    return "[" + ",".join(_canonicalize(v) for v in value) + "]"


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """16-hex-char SHA-256 over ``name=value`` pairs of the chosen fields."""
    canonical = "|".join(
        f"{name}={_canonicalize(arguments.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorate an engine entrypoint so every call logs TIPOUT_ENGINE_TRACE.

    Args:
        engine_name: Identifier in the trace, e.g. "daily_tip_pool".
        engine_version: Version of the engine's rules, e.g. "1.0".
        fingerprint_fields: Parameter names hashed into
            ``input_fingerprint``; bound positionally or by keyword.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                bound = signature.bind_partial(*args, **kwargs)
                fingerprint = compute_input_fingerprint(fingerprint_fields, bound.arguments)

            started = time.monotonic()
            result = func(*args, **kwargs)
            elapsed_ms = round((time.monotonic() - started) * 1000, 2)

            _logger.info(TRACE_TYPE, extra={
                "trace_type": TRACE_TYPE,
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fingerprint,
                "result_size": len(result) if isinstance(result, Sized) else None,
                "duration_ms": elapsed_ms,
                "function": func.__qualname__,
            })
            return result

        return wrapper

    return decorator
