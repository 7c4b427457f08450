"""Asset staging.

Copies files named by ``ADD_ASSETS`` metadata out of the program's resource
store, and every asset tree listed in ``BuildSettings.assets``, into one
staging directory consumed by the toolchain. Last write wins; a warning is
logged when two sources claim the same destination in one staging pass.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from src.errors import ResourceNotFoundError, UnsafePathError
from src.models.program import MetadataKind, ProgramModel
from src.models.settings import BuildSettings

logger = logging.getLogger(__name__)


def contained_path(root: Path, relative: str) -> Path:
    """``root / relative``, refusing paths that resolve outside ``root``."""
    destination = root / relative.lstrip("/")
    if not destination.resolve().is_relative_to(root.resolve()):
        raise UnsafePathError(relative, str(root))
    return destination


class AssetStager:
    """Stages assets into ``staging_dir``; does nothing when it is ``None``."""

    def __init__(self, staging_dir: Path | None):
        self.staging_dir = staging_dir
        self._claims: dict[Path, str] = {}

    def stage(self, program: ProgramModel, settings: BuildSettings) -> list[Path]:
        """Stage embedded program assets, then the settings' asset trees.

        Returns:
            Destination paths written, in write order
        """
        if self.staging_dir is None:
            logger.debug("No staging directory configured, skipping assets")
            return []
        self._claims = {}
        written = self.stage_embedded(program)
        written.extend(self.stage_trees(settings.assets))
        return written

    def stage_embedded(self, program: ProgramModel) -> list[Path]:
        if self.staging_dir is None:
            return []
        files: list[str] = []
        for value in program.metadata(MetadataKind.ADD_ASSETS):
            files.extend(value if isinstance(value, (list, tuple)) else [value])

        logger.info(f"Copying embedded resources to {self.staging_dir}")
        written = []
        for file in files:
            logger.debug(f"Copying resource {file}")
            destination = contained_path(self.staging_dir, file)
            self._claim(destination, f"resource:{file}")
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(program.read_resource(file))
            written.append(destination)
        return written

    def stage_trees(self, trees: Iterable[Path]) -> list[Path]:
        if self.staging_dir is None:
            return []
        written = []
        for tree in trees:
            tree = Path(tree)
            if not tree.exists():
                raise ResourceNotFoundError(str(tree))
            logger.info(f"Copying assets from {tree}")
            if tree.is_file():
                pairs = [(tree, self.staging_dir / tree.name)]
            else:
                pairs = [
                    (source, self.staging_dir / source.relative_to(tree))
                    for source in sorted(tree.rglob("*"))
                    if source.is_file()
                ]
            for source, destination in pairs:
                self._claim(destination, str(source))
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, destination)
                written.append(destination)
        return written

    def _claim(self, destination: Path, source: str) -> None:
        previous = self._claims.get(destination)
        if previous is not None and previous != source:
            logger.warning(f"Asset {destination} from {source} overwrites {previous}")
        self._claims[destination] = source
