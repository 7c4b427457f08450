"""Template parameter set shared by the orchestrator's render calls."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from src.errors import ParameterConflictError


class TemplateParameters(Mapping[str, Any]):
    """Append-only parameter mapping.

    Phases add keys as information becomes available (the entry point is
    only known after source generation). A key, once set, keeps its value.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self.add(key, value)

    def add(self, key: str, value: Any) -> None:
        """Add a parameter. Re-adding an equal value is a no-op.

        Raises:
            ParameterConflictError: If ``key`` already holds a different value
        """
        if key in self._values:
            if self._values[key] is value or self._values[key] == value:
                return
            raise ParameterConflictError(key)
        self._values[key] = value

    def update(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            self.add(key, value)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
