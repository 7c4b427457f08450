"""Library dependency manager.

Libraries are declared with ``ADD_LIBRARIES`` metadata on classes and in
``BuildSettings.libraries``. They are installed flat: each distinct ``name@version`` once, no transitive
resolution.
"""

from __future__ import annotations

import logging
from typing import Any

from src.build.interfaces import PackageSource
from src.errors import LibraryInstallError
from src.models.build import CompilerFlag, LibraryReference
from src.models.program import MetadataKind, ProgramModel
from src.models.settings import BuildSettings

logger = logging.getLogger(__name__)


def _to_library(value: Any) -> LibraryReference:
    if isinstance(value, LibraryReference):
        return value
    if isinstance(value, dict):
        return LibraryReference.model_validate(value)
    return LibraryReference.parse(str(value))


class LibraryManager:
    """Extracts and installs the libraries a program declares.

    The extracted list is cached per program for the manager's lifetime.
    """

    def __init__(self, package_source: PackageSource):
        self.package_source = package_source
        # id(program) -> (program, libraries)
        self._cache: dict[int, tuple[ProgramModel, list[LibraryReference]]] = {}
        self._installed: set[str] = set()

    def libraries(self, program: ProgramModel) -> list[LibraryReference]:
        """Declared libraries, deduplicated by canonical form, first seen first."""
        key = id(program)
        if key not in self._cache:
            seen: dict[str, LibraryReference] = {}
            for value in program.metadata(MetadataKind.ADD_LIBRARIES):
                values = value if isinstance(value, (list, tuple)) else [value]
                for item in values:
                    library = _to_library(item)
                    seen.setdefault(library.canonical, library)
            self._cache[key] = (program, list(seen.values()))
        return self._cache[key][1]

    def required(
        self, program: ProgramModel, settings: BuildSettings | None = None
    ) -> list[LibraryReference]:
        """Declared libraries followed by settings libraries, deduplicated."""
        if settings is None or not settings.libraries:
            return self.libraries(program)
        seen = {lib.canonical: lib for lib in self.libraries(program)}
        for text in settings.libraries:
            library = LibraryReference.parse(text)
            seen.setdefault(library.canonical, library)
        return list(seen.values())

    def install_required(
        self, program: ProgramModel, settings: BuildSettings | None = None
    ) -> list[LibraryReference]:
        """Install every required library not installed yet by this manager.

        Raises:
            LibraryInstallError: Naming the first library that failed
        """
        libraries = self.required(program, settings)
        logger.info(f"Referenced libraries: {[lib.canonical for lib in libraries]}")
        for library in libraries:
            if library.canonical in self._installed:
                continue
            logger.info(f"Trying to install library {library}")
            try:
                ok = self.package_source.install_if_not_exists(library)
            except Exception as e:
                logger.error(f"Error installing {library}: {e}", exc_info=True)
                raise LibraryInstallError(library.canonical, str(e)) from e
            if not ok:
                logger.error(f"Library {library} could not be installed")
                raise LibraryInstallError(library.canonical)
            self._installed.add(library.canonical)
        return libraries

    def compiler_flags(self, program: ProgramModel, settings: BuildSettings) -> list[CompilerFlag]:
        """``-lib`` flags for every required library, each once."""
        return [CompilerFlag("-lib", lib.haxe_spec) for lib in self.required(program, settings)]
