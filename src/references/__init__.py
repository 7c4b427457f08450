"""Resolution of symbolic program references used inside build templates."""

from .descriptor import KIND_TOKENS, ReferenceDescriptor, ReferenceKind
from .names import TargetNames
from .resolver import ReferenceResolver

__all__ = [
    "KIND_TOKENS",
    "ReferenceDescriptor",
    "ReferenceKind",
    "ReferenceResolver",
    "TargetNames",
]
