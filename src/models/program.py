"""Program model consumed by the build pipeline.

The upstream front end populates these models; the build pipeline only reads
them. Declarative metadata (annotations in the compiled source) is attached
to every class, method and field as ``MetadataKind -> list[value]``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.errors import ResourceNotFoundError


class MetadataKind(str, Enum):
    """Metadata kinds the build pipeline understands."""

    ADD_LIBRARIES = "add_libraries"
    ADD_ASSETS = "add_assets"
    ADD_SUBTARGET = "add_subtarget"
    ADD_SUBTARGET_LIST = "add_subtarget_list"
    FILES_BEFORE_BUILD_TEMPLATE = "files_before_build_template"
    CUSTOM_BUILD_COMMAND_LINE = "custom_build_command_line"


Metadata = dict[MetadataKind, list[Any]]


class MethodNode(BaseModel):
    """A method with its erased signature (e.g. ``(I)V``)."""

    model_config = ConfigDict(frozen=True)

    name: str
    signature: str
    is_static: bool = False
    metadata: Metadata = Field(default_factory=dict)


class FieldNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type_descriptor: str = "Ljava/lang/Object;"
    is_static: bool = False
    metadata: Metadata = Field(default_factory=dict)


class ClassNode(BaseModel):
    """A class of the program, identified by its fully-qualified dotted name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Fully-qualified name (e.g. 'app.Main')")
    methods: list[MethodNode] = Field(default_factory=list)
    fields: list[FieldNode] = Field(default_factory=list)
    metadata: Metadata = Field(default_factory=dict)

    def methods_by_name(self, name: str) -> list[MethodNode]:
        """All overloads sharing ``name``, in declaration order."""
        return [m for m in self.methods if m.name == name]

    def find_method(self, name: str, signature: str) -> MethodNode | None:
        for method in self.methods:
            if method.name == name and method.signature == signature:
                return method
        return None

    def find_field(self, name: str) -> FieldNode | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


class ProgramModel(BaseModel):
    """Ordered set of classes plus the program's logical resource store."""

    model_config = ConfigDict(frozen=True)

    classes: list[ClassNode] = Field(default_factory=list)
    resources: dict[str, bytes] = Field(
        default_factory=dict, description="Logical resource path -> content"
    )
    resources_dir: Path | None = Field(
        default=None, description="Directory searched when a resource is not in memory"
    )

    def get_class(self, name: str) -> ClassNode | None:
        for clazz in self.classes:
            if clazz.name == name:
                return clazz
        return None

    def metadata(self, kind: MetadataKind) -> list[Any]:
        """Values of ``kind`` declared on classes, in class order."""
        values: list[Any] = []
        for clazz in self.classes:
            values.extend(clazz.metadata.get(kind, []))
        return values

    def all_metadata(self, kind: MetadataKind) -> list[Any]:
        """Values of ``kind`` declared on classes, methods and fields.

        Order: each class, then its methods, then its fields.
        """
        values: list[Any] = []
        for clazz in self.classes:
            values.extend(clazz.metadata.get(kind, []))
            for method in clazz.methods:
                values.extend(method.metadata.get(kind, []))
            for f in clazz.fields:
                values.extend(f.metadata.get(kind, []))
        return values

    def read_resource(self, path: str) -> bytes:
        """Read a resource by logical path.

        Raises:
            ResourceNotFoundError: If neither the in-memory store nor
                ``resources_dir`` holds the path
        """
        key = path.lstrip("/")
        if key in self.resources:
            return self.resources[key]
        if path in self.resources:
            return self.resources[path]
        if self.resources_dir is not None:
            candidate = self.resources_dir / key
            if candidate.is_file():
                return candidate.read_bytes()
        raise ResourceNotFoundError(path)

    def read_resource_text(self, path: str) -> str:
        return self.read_resource(path).decode("utf-8")
