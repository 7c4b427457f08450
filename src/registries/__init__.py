"""Registry modules for declarative mappings."""

from .subtargets import (
    STANDARD_SUBTARGETS,
    SubtargetCatalog,
)

__all__ = [
    "STANDARD_SUBTARGETS",
    "SubtargetCatalog",
]
