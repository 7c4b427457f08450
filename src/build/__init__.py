"""Build pipeline: libraries, assets, command assembly and orchestration."""

from .assets import AssetStager
from .interfaces import BackendGenerator, PackageSource, ProcessRunner
from .libraries import LibraryManager
from .orchestrator import BuildOrchestrator, BuildState
from .parameters import TemplateParameters

__all__ = [
    "AssetStager",
    "BackendGenerator",
    "BuildOrchestrator",
    "BuildState",
    "LibraryManager",
    "PackageSource",
    "ProcessRunner",
    "TemplateParameters",
]
