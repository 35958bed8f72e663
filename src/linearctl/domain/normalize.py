"""Argument normalization and shape checks for create/update payloads.

Normalization silently repairs ``estimate`` and ``priority``; it never
rejects a request.  Shape checks return a list of problems and leave it to
the caller (the service layer) to decide how to fail.

A key whose value is ``None`` counts as absent: optional tool arguments
arrive as ``None`` when the caller omitted them.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

PRIORITY_MIN = 0
PRIORITY_MAX = 4
DEFAULT_PRIORITY = 0

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any) -> int | None:
    """Parse the leading integer of *value*, or return None.

    Examples:
        >>> coerce_int("3")
        3
        >>> coerce_int(2.9)
        2
        >>> coerce_int("5 points")
        5
        >>> coerce_int("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def normalize_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *payload* with ``estimate`` and ``priority`` repaired.

    * ``estimate`` becomes an int, or is dropped when it cannot be parsed.
    * ``priority`` becomes an int in ``[0, 4]``; anything unparseable or out
      of range becomes ``0``.  An explicit ``0`` is kept.

    ``None`` values are dropped.  All other fields pass through unchanged.
    """
    normalized = {key: value for key, value in payload.items() if value is not None}

    if "estimate" in normalized:
        estimate = coerce_int(normalized["estimate"])
        if estimate is None:
            del normalized["estimate"]
        else:
            normalized["estimate"] = estimate

    if "priority" in normalized:
        priority = coerce_int(normalized["priority"])
        if priority is None or not PRIORITY_MIN <= priority <= PRIORITY_MAX:
            priority = DEFAULT_PRIORITY
        normalized["priority"] = priority

    return normalized


def missing_fields(args: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    """Names from *required* that are absent (or ``None``) in *args*."""
    return [name for name in required if args.get(name) is None]


def check_required(args: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    """Problems for missing required fields, as caller-facing messages."""
    missing = missing_fields(args, required)
    if not missing:
        return []
    return [f"Missing required parameters: {', '.join(missing)}"]


def check_list(args: Mapping[str, Any], name: str) -> list[str]:
    """Problems if ``args[name]`` is present but not a list."""
    value = args.get(name)
    if value is None or isinstance(value, list | tuple):
        return []
    return [f"{name} parameter must be an array"]
