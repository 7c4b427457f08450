"""Build orchestrator.

Drives one build of a program model for one subtarget:

    CREATED -> SOURCE_GENERATED -> LIBRARIES_INSTALLED -> ASSETS_STAGED
            -> COMPILED -> RAN

1. build_source(): backend generator writes target sources, entry point
   becomes available to templates
2. compile(): install libraries, stage assets, render pre-build files,
   render the build command and run the toolchain from the source folder
3. run(): execute the artifact with the subtarget's interpreter
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Iterable
from enum import Enum
from typing import Any

from src import config
from src.build.assets import AssetStager, contained_path
from src.build.commands import (
    DEFAULT_BUILD_COMMAND_TEMPLATE,
    build_command_template,
    extra_defines,
    split_command,
)
from src.build.interfaces import BackendGenerator, PackageSource, ProcessRunner
from src.build.libraries import LibraryManager
from src.build.parameters import TemplateParameters
from src.errors import ArtifactMissingError, OutOfOrderOperationError, ToolchainError
from src.models.build import BuildTarget, ProcessResult, ProgramInfo, SubtargetDescriptor
from src.models.program import MetadataKind, ProgramModel
from src.models.settings import BuildSettings
from src.references.names import TargetNames
from src.references.resolver import ReferenceResolver
from src.registries.subtargets import SubtargetCatalog
from src.templating.engine import TemplateRenderer
from src.templating.tags import ProgramRefTag

logger = logging.getLogger(__name__)


class BuildState(str, Enum):
    CREATED = "created"
    SOURCE_GENERATED = "source_generated"
    LIBRARIES_INSTALLED = "libraries_installed"
    ASSETS_STAGED = "assets_staged"
    COMPILED = "compiled"
    RAN = "ran"


class BuildOrchestrator:
    """One build invocation for one subtarget.

    Instances are not shared between builds; each owns its parameters,
    staging directories, subtarget and library cache.
    """

    def __init__(
        self,
        program: ProgramModel,
        settings: BuildSettings,
        target: BuildTarget,
        generator: BackendGenerator,
        package_source: PackageSource,
        runner: ProcessRunner,
        standard_subtargets: Iterable[SubtargetDescriptor] = (),
        toolchain: str | None = None,
    ):
        """Resolve the subtarget and prepare template parameters.

        Args:
            program: Program model from the front end
            settings: Build settings
            target: Subtarget name, output file and scratch directory
            generator: Backend source generator
            package_source: Library installer
            runner: Process runner for the toolchain and the artifact
            standard_subtargets: Subtargets declared ahead of the program's own
            toolchain: Compiler binary (defaults to ``HAXE_BINARY``)

        Raises:
            UnknownSubtargetError: If ``target.subtarget`` is not declared
        """
        self.program = program
        self.settings = settings
        self.target = target
        self.generator = generator
        self.runner = runner
        self.toolchain = toolchain or config.HAXE_BINARY

        catalog = SubtargetCatalog.from_program(program, standard=standard_subtargets)
        self.subtarget = catalog.resolve(target.subtarget)

        self.output_file = target.output_file.absolute()
        self.src_folder = target.src_folder.absolute()
        self.assets_dir = target.assets_dir.absolute() if target.assets_dir else None

        self.names = TargetNames(program, minimize=settings.minimize_names)
        self.resolver = ReferenceResolver(program, self.names)
        self.renderer = TemplateRenderer(tags=[ProgramRefTag(self.resolver)])
        self.libraries = LibraryManager(package_source)
        self.assets = AssetStager(self.assets_dir)

        self.params = TemplateParameters(self._base_parameters())
        self.state = BuildState.CREATED
        self.info: ProgramInfo | None = None
        self.compile_result: ProcessResult | None = None
        self.last_command: list[str] = []

    def _base_parameters(self) -> dict[str, Any]:
        settings = self.settings
        return {
            "toolchain": self.toolchain,
            "srcFolder": str(self.src_folder),
            "outputFile": str(self.output_file),
            "tempAssetsDir": str(self.assets_dir) if self.assets_dir else "",
            "actualSubtarget": self.subtarget,
            "release": settings.release,
            "debug": not settings.release,
            "settings": settings,
            "title": settings.title,
            "name": settings.name,
            "package": settings.package,
            "version": settings.version,
            "company": settings.company,
            "initialWidth": settings.initial_width,
            "initialHeight": settings.initial_height,
            "orientation": settings.orientation.value,
            "embedResources": settings.embed_resources,
            "assets": [str(a) for a in settings.assets],
            "hasIcon": bool(settings.icon),
            "icon": settings.icon,
            "libraries": list(settings.libraries),
            "haxeExtraFlags": self.libraries.compiler_flags(self.program, settings),
            "haxeExtraDefines": extra_defines(settings),
            "defaultBuildCommand": self._default_build_command,
        }

    def _default_build_command(self) -> str:
        return self.render(DEFAULT_BUILD_COMMAND_TEMPLATE)

    def render(self, template: str) -> str:
        """Render a template against the current parameters."""
        return self.renderer.render(template, self.params)

    def build_source(self) -> ProgramInfo:
        """Generate target sources and publish the entry point to templates."""
        logger.info(f"Generating sources into {self.src_folder}")
        self.src_folder.mkdir(parents=True, exist_ok=True)
        info = self.generator.generate(self.program, self.settings, self.src_folder, self.names)
        self.params.add("entryPointFile", info.entry_point_file)
        self.params.add("entryPointClass", self.names.class_fq_name(info.entry_point_class))
        self.info = info
        self.state = BuildState.SOURCE_GENERATED
        return info

    def compile(self, check: bool = False) -> bool:
        """Install libraries, stage assets and run the toolchain.

        Args:
            check: Raise ``ToolchainError`` instead of returning False

        Returns:
            True if the toolchain exited successfully

        Raises:
            OutOfOrderOperationError: If ``build_source`` has not run
            LibraryInstallError: If a declared library cannot be installed
        """
        if self.info is None:
            raise OutOfOrderOperationError("Must call build_source() before compile()")

        self._delete_output()
        logger.info(f"Build source path: {self.src_folder}")

        self.libraries.install_required(self.program, self.settings)
        self.state = BuildState.LIBRARIES_INSTALLED

        logger.info("Copying assets...")
        self.assets.stage(self.program, self.settings)
        self.state = BuildState.ASSETS_STAGED

        self._render_files_before_build()

        cmd = split_command(self.render(build_command_template(self.program)))
        self.last_command = cmd
        if not cmd:
            raise ToolchainError(-1, "Build command rendered empty", cmd)

        logger.info(f"Compiling: {' '.join(cmd)}")
        result = self.runner.run(self.src_folder, cmd[0], cmd[1:], redirect=True)
        self.compile_result = result
        if not result.success:
            logger.error(f"Compilation failed with exit code {result.exit_code}")
            if check:
                raise ToolchainError(result.exit_code, result.output, cmd)
            return False

        self.state = BuildState.COMPILED
        return True

    def run(self, redirect: bool = True, check: bool = False) -> ProcessResult:
        """Run the compiled artifact with the subtarget's interpreter.

        Returns a failing ``ProcessResult`` (exit code -1) without spawning
        anything when the artifact does not exist.

        Raises:
            OutOfOrderOperationError: If no compile has succeeded
            ArtifactMissingError: If ``check`` is set and the artifact is missing
        """
        if self.state not in (BuildState.COMPILED, BuildState.RAN):
            raise OutOfOrderOperationError("Must call compile() successfully before run()")

        if not self.output_file.exists():
            error = ArtifactMissingError(str(self.output_file))
            logger.error(str(error))
            if check:
                raise error
            return ProcessResult(exit_code=-1, output=str(error))

        if self.output_file.is_file():
            logger.info(f"run: {self.output_file} ({self.output_file.stat().st_size} bytes)")
        arguments = [f"{self.output_file}{self.subtarget.interpreter_suffix}"]
        logger.info(f"Running: {self.subtarget.interpreter} {' '.join(arguments)}")

        start = time.perf_counter()
        result = self.runner.run(
            self.output_file.parent, self.subtarget.interpreter, arguments, redirect=redirect
        )
        logger.info(f"Running... {time.perf_counter() - start:.3f}s (exit code {result.exit_code})")
        self.state = BuildState.RAN
        return result

    def _delete_output(self) -> None:
        if self.output_file.is_dir():
            shutil.rmtree(self.output_file)
        elif self.output_file.exists():
            self.output_file.unlink()

    def _render_files_before_build(self) -> None:
        files: list[str] = []
        for value in self.program.metadata(MetadataKind.FILES_BEFORE_BUILD_TEMPLATE):
            files.extend(value if isinstance(value, (list, tuple)) else [value])
        for file in files:
            logger.debug(f"Rendering {file} into source folder")
            destination = contained_path(self.src_folder, file)
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(self.render(self.program.read_resource_text(file)))
