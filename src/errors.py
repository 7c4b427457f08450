"""Error taxonomy for the build pipeline.

Resolution and configuration errors abort the current phase and carry enough
context (descriptor text, owner name, library) to fix the program metadata.
"""

from __future__ import annotations


class BuildError(Exception):
    """Base class for every failure raised by the build pipeline."""


class UnknownSubtargetError(BuildError):
    """Requested subtarget matches no declared name or alias."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        listed = ", ".join(available) if available else "none declared"
        super().__init__(f"Unknown subtarget '{name}' (available: {listed})")


class ReferenceResolutionError(BuildError):
    """A program reference inside a template could not be resolved."""

    def __init__(self, message: str, descriptor: str, owner: str | None = None):
        self.descriptor = descriptor
        self.owner = owner
        super().__init__(f"{message} [descriptor: {descriptor}]")


class UnknownClassError(ReferenceResolutionError):
    def __init__(self, descriptor: str, owner: str):
        super().__init__(f"Unknown class '{owner}'", descriptor, owner)


class UnknownMemberError(ReferenceResolutionError):
    def __init__(self, descriptor: str, owner: str, member: str, signature: str | None = None):
        self.member = member
        self.signature = signature
        target = f"{member}{signature}" if signature else member
        super().__init__(f"Unknown member '{target}' in class '{owner}'", descriptor, owner)


class AmbiguousMemberError(ReferenceResolutionError):
    """Several overloads share a name and no signature was given."""

    def __init__(self, descriptor: str, owner: str, member: str, signatures: list[str]):
        self.member = member
        self.signatures = signatures
        super().__init__(
            f"Several signatures for '{member}' in class '{owner}' "
            f"({', '.join(signatures)}), please specify signature",
            descriptor,
            owner,
        )


class MalformedDescriptorError(ReferenceResolutionError):
    def __init__(self, descriptor: str, reason: str):
        self.reason = reason
        super().__init__(f"Malformed descriptor: {reason}", descriptor)


class TemplateSyntaxError(BuildError):
    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class ParameterConflictError(BuildError):
    """A finalized template parameter was assigned a different value."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Template parameter '{key}' is already set")


class ResourceNotFoundError(BuildError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Resource not found: {path}")


class UnsafePathError(BuildError):
    """A metadata path points outside the directory it is staged into."""

    def __init__(self, path: str, root: str):
        self.path = path
        self.root = root
        super().__init__(f"Path {path} escapes {root}")


class LibraryInstallError(BuildError):
    def __init__(self, library: str, detail: str | None = None):
        self.library = library
        message = f"Failed to install library {library}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class OutOfOrderOperationError(BuildError):
    """Orchestrator operation called before the phase it depends on."""


class ArtifactMissingError(BuildError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"file {path} doesn't exist")


class ToolchainError(BuildError):
    """External compiler exited with a nonzero status."""

    def __init__(self, exit_code: int, output: str, command: list[str] | None = None):
        self.exit_code = exit_code
        self.output = output
        self.command = command or []
        super().__init__(f"Toolchain failed with exit code {exit_code}")
