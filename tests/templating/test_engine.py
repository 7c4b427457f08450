"""Tests for TemplateRenderer."""

import pytest

from src.errors import BuildError, TemplateSyntaxError
from src.models import CompilerFlag
from src.templating import TemplateRenderer


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def test_literal_text_round_trips(renderer):
    """Text without tags renders unchanged."""
    text = "haxe\n  -cp src\n{ not a tag }\n% 100 %\n"

    assert renderer.render(text, {}) == text


class TestInterpolation:
    def test_simple_variable(self, renderer):
        """A parameter is substituted in place."""
        assert renderer.render("Hello {{ name }}!", {"name": "World"}) == "Hello World!"

    def test_nested_path_through_mapping_attribute_and_index(self, renderer):
        """Paths walk dict keys, attributes and list indexes."""
        params = {"flags": [CompilerFlag("-lib", "lime")], "cfg": {"out": "bin"}}

        assert renderer.render("{{ flags.0.value }}/{{ cfg.out }}", params) == "lime/bin"

    def test_undefined_renders_empty(self, renderer):
        """Unknown names render as empty text."""
        assert renderer.render("[{{ missing.deep }}]", {}) == "[]"

    def test_none_renders_empty(self, renderer):
        """None renders as empty text."""
        assert renderer.render("[{{ value }}]", {"value": None}) == "[]"

    def test_booleans_render_lowercase(self, renderer):
        """Booleans render the way Haxe spells them."""
        assert renderer.render("{{ a }} {{ b }}", {"a": True, "b": False}) == "true false"

    def test_callable_parameter(self, renderer):
        """A trailing () calls the parameter."""
        assert renderer.render("{{ make() }}", {"make": lambda: "made"}) == "made"

    def test_filters(self, renderer):
        """Registered filters transform values."""
        params = {"name": "demo", "items": ["a", "b"]}

        assert renderer.render("{{ name|upper }}", params) == "DEMO"
        assert renderer.render("{{ items|length }}", params) == "2"
        assert renderer.render("{{ items|join }}", params) == "a b"
        assert renderer.render('{{ items|join(",") }}', params) == "a,b"
        assert renderer.render("{{ name|quote }}", params) == '"demo"'

    def test_bracket_lookup_uses_expression(self, renderer):
        """Subscripts evaluate their key expression."""
        params = {"table": {"js": "node"}, "key": "js"}

        assert renderer.render("{{ table[key] }}", params) == "node"


class TestConditionals:
    def test_if_true_and_false(self, renderer):
        """``end`` closes an if block."""
        template = "{% if debug %}-debug{% end %}"

        assert renderer.render(template, {"debug": True}) == "-debug"
        assert renderer.render(template, {"debug": False}) == ""

    def test_elif_and_else(self, renderer):
        """The first true branch wins; else catches the rest."""
        template = "{% if a %}A{% elif b %}B{% else %}C{% endif %}"

        assert renderer.render(template, {"a": True}) == "A"
        assert renderer.render(template, {"b": True}) == "B"
        assert renderer.render(template, {}) == "C"

    def test_truthy_values_and_operators(self, renderer):
        """not, and, == combine as expected; undefined is falsy."""
        template = '{% if items and not release %}x{% end %}{% if target == "js" %}y{% end %}'

        assert renderer.render(template, {"items": [1], "release": False, "target": "js"}) == "xy"
        assert renderer.render(template, {"items": [], "target": "php"}) == ""


class TestLoops:
    def test_for_binds_loop_variable(self, renderer):
        """The loop variable is bound for each item."""
        template = "{% for d in defines %}-D {{ d }};{% end %}"

        assert renderer.render(template, {"defines": ["a", "b"]}) == "-D a;-D b;"

    def test_loop_variable_shadows_and_restores(self, renderer):
        """An outer parameter of the same name is visible again after the loop."""
        template = "{{ x }}{% for x in xs %}{{ x }}{% endfor %}{{ x }}"

        assert renderer.render(template, {"x": "o", "xs": ["1", "2"]}) == "o12o"

    def test_for_else_on_empty(self, renderer):
        """The else body renders when there is nothing to iterate."""
        template = "{% for x in xs %}{{ x }}{% else %}none{% end %}"

        assert renderer.render(template, {"xs": []}) == "none"
        assert renderer.render(template, {}) == "none"

    def test_loop_metadata(self, renderer):
        """loop.last is available inside the body."""
        template = "{% for x in xs %}{{ x }}{% if not loop.last %},{% end %}{% end %}"

        assert renderer.render(template, {"xs": ["a", "b", "c"]}) == "a,b,c"

    def test_nested_blocks(self, renderer):
        """``end`` closes the innermost open block."""
        template = "{% for f in flags %}{% if f.value %}{{ f.name }}={{ f.value }} {% end %}{% end %}"
        flags = [CompilerFlag("-lib", "lime"), CompilerFlag("-x", "")]

        assert renderer.render(template, {"flags": flags}) == "-lib=lime "

    def test_looping_over_scalar_raises_with_line(self, renderer):
        """A non-iterable loop source is a template error, not a TypeError."""
        with pytest.raises(TemplateSyntaxError, match="line 2") as exc_info:
            renderer.render("head\n{% for x in n %}{{ x }}{% end %}", {"n": 3})

        assert isinstance(exc_info.value, BuildError)
        assert exc_info.value.line == 2


class TestSyntaxErrors:
    @pytest.mark.parametrize(
        "template",
        [
            "{% if a %}never closed",
            "{% for x in xs %}never closed",
            "stray {% end %}",
            "{% else %}",
            "{% unknown tag %}",
            "{% for x of xs %}{% end %}",
            "{{ a == }}",
            "{{ a|nosuchfilter }}",
            "{% if a %}{% endfor %}",
        ],
    )
    def test_malformed_templates_raise(self, renderer, template):
        """Malformed templates raise TemplateSyntaxError."""
        with pytest.raises(TemplateSyntaxError):
            renderer.render(template, {"a": True, "xs": []})

    def test_error_reports_line(self, renderer):
        """Errors carry the template line number."""
        with pytest.raises(TemplateSyntaxError, match="line 3"):
            renderer.render("one\ntwo\n{% bogus %}", {})

    def test_stray_end_reports_line(self, renderer):
        """An end with no open block is reported where it appears."""
        with pytest.raises(TemplateSyntaxError, match="line 2"):
            renderer.render("{% if a %}{% end %}\n{% end %}", {"a": True})
