"""Interfaces to the collaborators the build pipeline consumes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.models.build import LibraryReference, ProcessResult, ProgramInfo
    from src.models.program import ProgramModel
    from src.models.settings import BuildSettings
    from src.references.names import TargetNames


class BackendGenerator(ABC):
    """Emits target source files for a program model."""

    @abstractmethod
    def generate(
        self,
        program: ProgramModel,
        settings: BuildSettings,
        src_folder: Path,
        names: TargetNames,
    ) -> ProgramInfo:
        """Write target sources under ``src_folder`` and describe the entry point."""
        ...


class PackageSource(ABC):
    """Source of third-party libraries (e.g. haxelib)."""

    @abstractmethod
    def install_if_not_exists(self, library: LibraryReference) -> bool:
        """Install ``library`` unless already present. Returns success."""
        ...


class ProcessRunner(ABC):
    """Runs external processes synchronously."""

    @abstractmethod
    def run(
        self,
        working_dir: Path,
        binary: str,
        args: Sequence[str],
        redirect: bool = False,
    ) -> ProcessResult:
        """Run ``binary args...`` from ``working_dir`` until it exits.

        Args:
            working_dir: Directory the process starts in
            binary: Executable name or path
            args: Arguments after the binary
            redirect: Stream the child's output to ours instead of capturing it
        """
        ...
