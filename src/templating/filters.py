"""Value rendering and filters registered on the template environment."""

from __future__ import annotations

import json
from collections.abc import Callable
from enum import Enum
from typing import Any


def to_text(value: Any) -> str:
    """Render a value the way the build scripts expect it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _join(value: Any, separator: str = " ") -> str:
    if not value:
        return ""
    return separator.join(to_text(v) for v in value)


def _length(value: Any) -> int:
    if not value:
        return 0
    return len(value)


FILTERS: dict[str, Callable[..., Any]] = {
    "upper": lambda v: to_text(v).upper(),
    "lower": lambda v: to_text(v).lower(),
    "capitalize": lambda v: to_text(v).capitalize(),
    "length": _length,
    "join": _join,
    "quote": lambda v: json.dumps(to_text(v)),
}
