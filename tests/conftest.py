"""Shared test fixtures, fakes and helpers."""

from collections.abc import Sequence
from pathlib import Path

import pytest

from src.build.interfaces import BackendGenerator, PackageSource, ProcessRunner
from src.models import (
    BuildSettings,
    BuildTarget,
    ClassNode,
    FieldNode,
    LibraryReference,
    MetadataKind,
    MethodNode,
    ProcessResult,
    ProgramInfo,
    ProgramModel,
    SubtargetDescriptor,
)
from src.references import ReferenceResolver, TargetNames


def make_subtarget(
    name: str,
    aliases: Sequence[str] = (),
    command_switch: str | None = None,
    interpreter: str = "node",
    interpreter_suffix: str = "",
) -> SubtargetDescriptor:
    """Build a SubtargetDescriptor with sensible defaults."""
    return SubtargetDescriptor(
        name=name,
        aliases=frozenset(aliases),
        command_switch=command_switch or f"-{name}",
        interpreter=interpreter,
        interpreter_suffix=interpreter_suffix,
    )


def make_program(
    classes: list[ClassNode] | None = None,
    resources: dict[str, bytes] | None = None,
) -> ProgramModel:
    """Program with a runtime class declaring the js subtarget, plus ``classes``."""
    runtime = ClassNode(
        name="haxe.Runtime",
        metadata={MetadataKind.ADD_SUBTARGET: [make_subtarget("js", ["javascript"])]},
    )
    return ProgramModel(classes=[runtime, *(classes or [])], resources=resources or {})


def main_class(**metadata) -> ClassNode:
    """``app.Main`` with a constructor, overloaded and unique methods, and fields."""
    return ClassNode(
        name="app.Main",
        methods=[
            MethodNode(name="<init>", signature="()V"),
            MethodNode(name="<clinit>", signature="()V", is_static=True),
            MethodNode(name="main", signature="([Ljava/lang/String;)V", is_static=True),
            MethodNode(name="add", signature="(II)I"),
            MethodNode(name="add", signature="(JJ)J"),
        ],
        fields=[
            FieldNode(name="counter", type_descriptor="I", is_static=True),
            FieldNode(name="label", type_descriptor="Ljava/lang/String;"),
        ],
        metadata={MetadataKind(k): v for k, v in metadata.items()},
    )


class FakeGenerator(BackendGenerator):
    """Writes a single Main.hx and reports app.Main as the entry point."""

    def __init__(self):
        self.calls = 0

    def generate(self, program, settings, src_folder: Path, names) -> ProgramInfo:
        self.calls += 1
        (src_folder / "Main.hx").write_text("class Main {}\n")
        return ProgramInfo(entry_point_class="app.Main", entry_point_file="Main.hx")


class FakePackageSource(PackageSource):
    """Records install requests; libraries named in ``failing`` fail."""

    def __init__(self, failing: set[str] | None = None):
        self.installed: list[LibraryReference] = []
        self.failing = failing or set()

    def install_if_not_exists(self, library: LibraryReference) -> bool:
        if library.name in self.failing:
            return False
        self.installed.append(library)
        return True


class FakeRunner(ProcessRunner):
    """Records process invocations and returns a canned result.

    ``create_output`` makes every call write that file, standing in for a
    toolchain producing its artifact.
    """

    def __init__(self, exit_code: int = 0, output: str = "", create_output: Path | None = None):
        self.calls: list[tuple[Path, str, list[str], bool]] = []
        self.exit_code = exit_code
        self.output = output
        self.create_output = create_output

    def run(self, working_dir, binary, args, redirect=False) -> ProcessResult:
        self.calls.append((working_dir, binary, list(args), redirect))
        if self.create_output is not None:
            self.create_output.parent.mkdir(parents=True, exist_ok=True)
            self.create_output.write_text("artifact")
        return ProcessResult(exit_code=self.exit_code, output=self.output)


@pytest.fixture
def program() -> ProgramModel:
    return make_program([main_class()])


@pytest.fixture
def resolver(program) -> ReferenceResolver:
    return ReferenceResolver(program, TargetNames(program))


@pytest.fixture
def settings() -> BuildSettings:
    return BuildSettings(title="Demo", name="demo")


@pytest.fixture
def target(tmp_path) -> BuildTarget:
    return BuildTarget(
        subtarget="js",
        output_file=tmp_path / "out" / "program.js",
        target_dir=tmp_path / "target",
    )
