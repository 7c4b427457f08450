"""Text template renderer built on Jinja.

Build scripts are written in Minitemplate style. Jinja reads them after a
rewrite pass that handles the forms it has no syntax for:

    {% end %}                                closes the innermost if/for
    {% <prefix><content> %} / {% <alias> <content> %}   custom tags

Custom tag content is handed to Jinja as a string literal, so JVM
signatures like ``(Ljava/lang/String;)V`` never reach its lexer.

Rendering is a pure function of template text, parameters and the tag
registry fixed at construction; it performs no I/O.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import jinja2
from jinja2 import ChainableUndefined, Environment, nodes
from jinja2.ext import Extension

from src.errors import TemplateSyntaxError
from src.templating.filters import FILTERS, to_text

if TYPE_CHECKING:
    from src.templating.tags import TagHandler

_BLOCK_TAG = re.compile(r"\{%(.*?)%\}", re.DOTALL)
_FOR = re.compile(r"^for\s+(.+?)\s+in\s+(.+)$", re.DOTALL)

_OPENERS = ("if", "for")
_KEYWORDS = {"if", "elif", "else", "endif", "for", "endfor", "end"}


class CustomTagExtension(Extension):
    """Dispatches ``{% customtag index, name, content %}`` to a TagHandler."""

    tags = {"customtag"}

    def __init__(self, environment: Environment):
        super().__init__(environment)
        environment.extend(tag_handlers=())

    def parse(self, parser):
        lineno = next(parser.stream).lineno
        args = [parser.parse_expression()]
        while parser.stream.skip_if("comma"):
            args.append(parser.parse_expression())
        return nodes.Output([self.call_method("_dispatch", args)], lineno=lineno)

    def _dispatch(self, index: int, name: str, content: str) -> str:
        return self.environment.tag_handlers[index].render(name, content)


def _iterate(value: Any, line: int) -> Iterable[Any]:
    if isinstance(value, jinja2.Undefined) or value is None:
        return ()
    try:
        iter(value)
    except TypeError:
        raise TemplateSyntaxError(
            f"Cannot loop over {type(value).__name__} value", line
        ) from None
    return value


class TemplateRenderer:
    """Renders templates with a fixed registry of custom tags."""

    def __init__(self, tags: Sequence[TagHandler] = ()):
        self.tags: tuple[TagHandler, ...] = tuple(tags)
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            undefined=ChainableUndefined,
            finalize=to_text,
            extensions=[CustomTagExtension],
        )
        self.env.filters.update(FILTERS)
        self.env.globals["_iterate"] = _iterate
        self.env.tag_handlers = self.tags

    def translate(self, template: str) -> str:
        """Rewrite Minitemplate-only forms into Jinja syntax.

        Raises:
            TemplateSyntaxError: On an ``end`` with no open block
        """
        stack: list[str] = []

        def replace(match: re.Match) -> str:
            content = match.group(1).strip()
            keyword = content.split(None, 1)[0] if content else ""
            line = template.count("\n", 0, match.start()) + 1
            newlines = "\n" * match.group(1).count("\n")

            if keyword in _OPENERS:
                stack.append(keyword)
                loop = _FOR.match(content) if keyword == "for" else None
                if loop is not None:
                    return (
                        f"{{% for {loop.group(1)} in _iterate({loop.group(2)}, {line})"
                        f"{newlines} %}}"
                    )
                return match.group(0)
            if keyword in ("endif", "endfor"):
                if stack:
                    stack.pop()
                return match.group(0)
            if keyword == "end":
                if not stack or content != "end":
                    raise TemplateSyntaxError(f"Unexpected '{content}'", line)
                return f"{{% end{stack.pop()}{newlines} %}}"
            if keyword in _KEYWORDS:
                return match.group(0)

            for index, handler in enumerate(self.tags):
                found = handler.match(content)
                if found is not None:
                    name, payload = found
                    return (
                        f"{{% customtag {index}, {json.dumps(name)}, {json.dumps(payload)}"
                        f"{newlines} %}}"
                    )
            return match.group(0)

        return _BLOCK_TAG.sub(replace, template)

    def compile(self, template: str) -> jinja2.Template:
        source = self.translate(template)
        try:
            return self.env.from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(e.message or str(e), e.lineno) from e

    def render(self, template: str, params: Mapping[str, Any]) -> str:
        """Render ``template`` against ``params``.

        Raises:
            TemplateSyntaxError: If the template is malformed
            ReferenceResolutionError: If a program reference tag fails
        """
        return self.compile(template).render(dict(params))
