"""Data models for the build pipeline."""

from .build import (
    BuildTarget,
    CompilerFlag,
    LibraryReference,
    ProcessResult,
    ProgramInfo,
    SubtargetDescriptor,
)
from .program import ClassNode, FieldNode, MetadataKind, MethodNode, ProgramModel
from .settings import BuildSettings, Orientation

__all__ = [
    "BuildSettings",
    "BuildTarget",
    "ClassNode",
    "CompilerFlag",
    "FieldNode",
    "LibraryReference",
    "MetadataKind",
    "MethodNode",
    "Orientation",
    "ProcessResult",
    "ProgramInfo",
    "ProgramModel",
    "SubtargetDescriptor",
]
