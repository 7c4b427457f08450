"""Process and package runners for local builds."""

from .haxelib import HaxelibPackageSource
from .process import SubprocessRunner

__all__ = ["HaxelibPackageSource", "SubprocessRunner"]
