"""Build command assembly.

The build command is a template whose rendered output holds one argument
per line. Blank lines are dropped and every line is trimmed.
"""

from __future__ import annotations

from src.models.program import MetadataKind, ProgramModel
from src.models.settings import BuildSettings

DEFAULT_BUILD_COMMAND_TEMPLATE = """
{{ toolchain }}
-cp
{{ srcFolder }}
-main
{{ entryPointFile }}
{% if debug %}
    -debug
{% end %}
{{ actualSubtarget.command_switch }}
{{ outputFile }}
{% for flag in haxeExtraFlags %}
    {{ flag.name }}
    {{ flag.value }}
{% end %}
{% for define in haxeExtraDefines %}
    -D
    {{ define }}
{% end %}
"""

DEFAULT_BUILD_COMMAND_CALL = "{{ defaultBuildCommand() }}"


def extra_defines(settings: BuildSettings) -> list[str]:
    """Compiler defines (``-D``) derived from the settings."""
    defines = ["analyzer" if settings.analyzer_enabled else "no-analyzer"]
    if settings.embed_resources:
        defines.append("embed_resources")
    return defines


def build_command_template(program: ProgramModel) -> str:
    """Custom command lines from metadata, or the default command call."""
    lines = program.all_metadata(MetadataKind.CUSTOM_BUILD_COMMAND_LINE)
    if not lines:
        return DEFAULT_BUILD_COMMAND_CALL
    flattened: list[str] = []
    for value in lines:
        flattened.extend(value if isinstance(value, (list, tuple)) else [value])
    return "\n".join(str(line) for line in flattened)


def split_command(rendered: str) -> list[str]:
    """Rendered build script -> argument vector."""
    return [line.strip() for line in rendered.splitlines() if line.strip()]
