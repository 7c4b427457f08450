"""Template rendering for build scripts."""

from .engine import TemplateRenderer
from .filters import FILTERS, to_text
from .tags import ProgramRefTag, TagHandler

__all__ = [
    "FILTERS",
    "ProgramRefTag",
    "TagHandler",
    "TemplateRenderer",
    "to_text",
]
