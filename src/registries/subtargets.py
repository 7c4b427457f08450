"""Subtarget catalog.

Subtargets are declared through program metadata (``ADD_SUBTARGET`` for a
single descriptor, ``ADD_SUBTARGET_LIST`` for several). Declarations are
scanned in order and the last one matching the requested name wins, so a
later declaration overrides an earlier one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from src.errors import UnknownSubtargetError
from src.models.build import SubtargetDescriptor
from src.models.program import MetadataKind, ProgramModel

logger = logging.getLogger(__name__)


# Subtargets shipped with the Haxe runtime
STANDARD_SUBTARGETS: tuple[SubtargetDescriptor, ...] = (
    SubtargetDescriptor(
        name="js",
        aliases=frozenset({"javascript"}),
        command_switch="-js",
        interpreter="node",
    ),
    SubtargetDescriptor(
        name="neko",
        aliases=frozenset(),
        command_switch="-neko",
        interpreter="neko",
    ),
    SubtargetDescriptor(
        name="php",
        aliases=frozenset(),
        command_switch="-php",
        interpreter="php",
        interpreter_suffix="/index.php",
    ),
    SubtargetDescriptor(
        name="python",
        aliases=frozenset({"py"}),
        command_switch="-python",
        interpreter="python3",
    ),
    SubtargetDescriptor(
        name="hl",
        aliases=frozenset({"hashlink"}),
        command_switch="-hl",
        interpreter="hl",
    ),
)


def _to_descriptor(value: Any) -> SubtargetDescriptor:
    if isinstance(value, SubtargetDescriptor):
        return value
    return SubtargetDescriptor.model_validate(value)


def _flatten(values: Iterable[Any]) -> list[SubtargetDescriptor]:
    descriptors: list[SubtargetDescriptor] = []
    for value in values:
        if isinstance(value, (list, tuple)):
            descriptors.extend(_to_descriptor(v) for v in value)
        else:
            descriptors.append(_to_descriptor(value))
    return descriptors


class SubtargetCatalog:
    """Ordered collection of declared subtargets."""

    def __init__(self, descriptors: Iterable[SubtargetDescriptor]):
        self.descriptors: list[SubtargetDescriptor] = list(descriptors)

    @classmethod
    def from_program(
        cls,
        program: ProgramModel,
        standard: Iterable[SubtargetDescriptor] = (),
    ) -> SubtargetCatalog:
        """Collect subtargets declared anywhere in the program.

        Args:
            program: Program model to scan
            standard: Descriptors placed before the program's own declarations

        Returns:
            Catalog in declaration order
        """
        declared: list[SubtargetDescriptor] = list(standard)
        # Single and list declarations interleave in declaration order
        for clazz in program.classes:
            nodes = [clazz, *clazz.methods, *clazz.fields]
            for node in nodes:
                for kind, values in node.metadata.items():
                    if kind in (MetadataKind.ADD_SUBTARGET, MetadataKind.ADD_SUBTARGET_LIST):
                        declared.extend(_flatten(values))
        return cls(declared)

    @property
    def names(self) -> list[str]:
        return [d.name for d in self.descriptors]

    def resolve(self, requested: str) -> SubtargetDescriptor:
        """Find the descriptor for a subtarget name or alias.

        Raises:
            UnknownSubtargetError: If nothing matches
        """
        match: SubtargetDescriptor | None = None
        for descriptor in self.descriptors:
            if descriptor.matches(requested):
                match = descriptor
        if match is None:
            raise UnknownSubtargetError(requested, self.names)
        logger.debug(f"Subtarget '{requested}' resolved to '{match.name}'")
        return match
