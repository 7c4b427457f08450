"""haxelib-backed package source."""

import logging
from pathlib import Path

from src import config
from src.build.interfaces import PackageSource, ProcessRunner
from src.models.build import LibraryReference
from src.runner.process import SubprocessRunner

logger = logging.getLogger(__name__)


class HaxelibPackageSource(PackageSource):
    """Installs libraries with the ``haxelib`` command line tool."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        haxelib: str | None = None,
        working_dir: Path | None = None,
    ):
        self.runner = runner or SubprocessRunner()
        self.haxelib = haxelib or config.HAXELIB_BINARY
        self.working_dir = working_dir or Path.cwd()

    def is_installed(self, library: LibraryReference) -> bool:
        """``haxelib path`` succeeds only for installed libraries."""
        result = self.runner.run(self.working_dir, self.haxelib, ["path", library.haxe_spec])
        return result.success

    def install_if_not_exists(self, library: LibraryReference) -> bool:
        if self.is_installed(library):
            logger.debug(f"Library already installed: {library}")
            return True

        args = ["install", library.name]
        if library.version:
            args.append(library.version)
        args.append("--always")

        logger.info(f"Installing library: {library}")
        result = self.runner.run(self.working_dir, self.haxelib, args)
        if not result.success:
            logger.error(f"haxelib install {library} failed: {result.output}")
            return False
        logger.info(f"✅ Library installed: {library}")
        return True
