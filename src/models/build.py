"""Value types shared by the build pipeline components."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from src import config


class SubtargetDescriptor(BaseModel):
    """A named build variant of the Haxe backend.

    Example: ``name="js", aliases={"javascript"}, command_switch="-js",
    interpreter="node"`` compiles with ``-js <output>`` and runs the artifact
    with ``node <output>``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Canonical subtarget name")
    aliases: frozenset[str] = Field(default_factory=frozenset)
    command_switch: str = Field(..., description="Compiler switch preceding the output path")
    interpreter: str = Field(..., description="Binary used to run the artifact")
    interpreter_suffix: str = Field(
        default="", description="Appended to the artifact path when running it"
    )

    def matches(self, requested: str) -> bool:
        return requested == self.name or requested in self.aliases


class LibraryReference(BaseModel):
    """A third-party library requirement."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    version: str | None = None

    @classmethod
    def parse(cls, text: str) -> LibraryReference:
        """Parse ``name``, ``name:version`` or ``name@version``."""
        text = text.strip()
        for separator in ("@", ":"):
            if separator in text:
                name, version = text.split(separator, 1)
                return cls(name=name.strip(), version=version.strip() or None)
        return cls(name=text)

    @property
    def canonical(self) -> str:
        """Deduplication key, ``name@version``."""
        return f"{self.name}@{self.version}" if self.version else self.name

    @property
    def haxe_spec(self) -> str:
        """Form accepted by ``-lib`` and ``haxelib path``."""
        return f"{self.name}:{self.version}" if self.version else self.name

    def __str__(self) -> str:
        return self.canonical


class ProgramInfo(BaseModel):
    """Produced by source generation, required before build-script rendering."""

    model_config = ConfigDict(frozen=True)

    entry_point_class: str
    entry_point_file: str


class BuildTarget(BaseModel):
    """Where a build writes its output and scratch files."""

    model_config = ConfigDict(frozen=True)

    subtarget: str = Field(..., description="Requested subtarget name or alias")
    output_file: Path
    target_dir: Path = Field(
        default_factory=lambda: config.BUILD_TARGET_DIR,
        description="Scratch root for sources and merged assets",
    )
    stage_assets: bool = Field(default=True, description="Stage assets into merged-assets")

    @property
    def src_folder(self) -> Path:
        return self.target_dir / "haxe-build" / "src"

    @property
    def assets_dir(self) -> Path | None:
        if not self.stage_assets:
            return None
        return self.target_dir / "merged-assets"


class ProcessResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    exit_code: int
    output: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class CompilerFlag(NamedTuple):
    """A flag rendered as two argument lines (e.g. ``-lib`` ``lime:7.0``)."""

    name: str
    value: str
