"""Custom block tags for the template renderer.

A tag handler is identified by a literal prefix token and a set of aliases.
``{% <prefix><content> %}`` and ``{% <alias> <content> %}`` both dispatch to
the handler; alias matching is case-sensitive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from src.references.descriptor import ReferenceDescriptor
from src.references.resolver import ReferenceResolver


class TagHandler(ABC):
    """Base class for custom tags registered with ``TemplateRenderer``."""

    def __init__(self, prefix: str, aliases: Iterable[str] = ()):
        self.prefix = prefix
        self.aliases = frozenset(aliases)

    def match(self, content: str) -> tuple[str, str] | None:
        """Split tag text into ``(name, content)`` if this handler owns it."""
        if content.startswith(self.prefix):
            return self.prefix, content[len(self.prefix):].strip()
        parts = content.split(None, 1)
        if parts and parts[0] in self.aliases:
            return parts[0], parts[1].strip() if len(parts) > 1 else ""
        return None

    @abstractmethod
    def render(self, name: str, content: str) -> str:
        """Text written in place of the tag.

        Args:
            name: The prefix or the alias the tag was written with
            content: Remaining tag text
        """
        ...


class ProgramRefTag(TagHandler):
    """``{% :programref:KIND:owner... %}`` or ``{% KIND owner... %}``."""

    PREFIX = ":programref:"
    ALIASES = ("SINIT", "CONSTRUCTOR", "SMETHOD", "METHOD", "SFIELD", "FIELD", "CLASS")

    def __init__(self, resolver: ReferenceResolver):
        super().__init__(self.PREFIX, self.ALIASES)
        self.resolver = resolver

    def render(self, name: str, content: str) -> str:
        if name == self.prefix:
            descriptor = ReferenceDescriptor.parse(content)
        else:
            descriptor = ReferenceDescriptor.from_parts(name, content, f"{name}:{content}")
        return self.resolver.resolve(descriptor)
