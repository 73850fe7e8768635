"""
Tests for TemplateEngine

Tests filter installation into Jinja2, rendering through registered filter
names, error propagation, and template validation.
"""

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from sitefilters.core.config import TemplateConfig
from sitefilters.core.exceptions import ErrorCode, TemplateRenderError
from sitefilters.core.registry import FilterRegistry, register_filters
from sitefilters.core.templates import TemplateEngine


class TestTemplateEngine:
    """Test the TemplateEngine class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = FilterRegistry()
        register_filters(self.registry)
        self.engine = TemplateEngine(self.registry)

    def test_filters_installed(self):
        assert self.engine.env.filters["TitleCase"]("hello world") == "Hello World"
        assert self.engine.list_filters() == ["TitleCase", "Titlecase"]

    def test_render_with_filter(self):
        result = self.engine.render("{{ title|TitleCase }}", {'title': "the quick brown fox"})
        assert result == "The Quick Brown Fox"

    def test_render_with_alternate_name(self):
        result = self.engine.render("{{ title | Titlecase }}", {'title': "HELLO WORLD"})
        assert result == "Hello World"

    def test_render_scenarios(self):
        """End-to-end scenarios through a rendered template."""
        scenarios = [
            ("the quick brown fox", "The Quick Brown Fox"),
            ("", ""),
            ("mc'DONALD farm-house", "Mc'donald Farm-house"),
            ("  multiple   spaces ", "Multiple Spaces"),
        ]
        for title, expected in scenarios:
            assert self.engine.render("{{ title|TitleCase }}", {'title': title}) == expected

    def test_filter_on_literal(self):
        assert self.engine.render("{{ 'a tale of two cities'|TitleCase }}") == "A Tale Of Two Cities"

    def test_filter_used_many_times(self):
        template = (
            "<h1>{{ page.title|TitleCase }}</h1>\n"
            "{% for tag in page.tags %}[{{ tag|TitleCase }}]{% endfor %}"
        )
        page = {'title': "my first post", 'tags': ["python", "JINJA templates", "  "]}

        result = self.engine.render(template, {'page': page})

        assert result == "<h1>My First Post</h1>\n[Python][Jinja Templates][]"

    def test_filter_not_used(self):
        assert self.engine.render("plain text") == "plain text"

    def test_no_html_escaping(self):
        result = self.engine.render("{{ t|TitleCase }}", {'t': "<b>bold & brave</b>"})
        assert result == "<b>bold & Brave</b>"

    def test_filter_chained_with_builtin(self):
        result = self.engine.render("{{ t|trim|TitleCase|replace(' ', '-') }}", {'t': " hello world "})
        assert result == "Hello-World"

    def test_undefined_variable_raises(self):
        with pytest.raises(UndefinedError):
            self.engine.render("{{ missing|TitleCase }}", {})

    def test_unknown_filter_raises(self):
        with pytest.raises(TemplateSyntaxError):
            self.engine.render("{{ title|titlecase }}", {'title': "x"})

    def test_invalid_syntax_raises(self):
        with pytest.raises(TemplateSyntaxError):
            self.engine.render("{{ title|TitleCase }", {'title': "x"})

    def test_install_filters_picks_up_new_registrations(self):
        self.registry.register("shout", str.upper, source="tests")
        assert "shout" not in self.engine.env.filters

        count = self.engine.install_filters()

        assert count == 3
        assert self.engine.render("{{ 'hi'|shout }}") == "HI"

    def test_apply_filter(self):
        assert self.engine.apply_filter("TitleCase", "hello-world") == "Hello-world"

    def test_apply_builtin_jinja_filter(self):
        assert self.engine.apply_filter("upper", "abc") == "ABC"

    def test_apply_unknown_filter(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            self.engine.apply_filter("Nope", "x")
        assert exc_info.value.error_code == ErrorCode.FILTER_NOT_FOUND

    def test_validate_template_valid(self):
        assert self.engine.validate_template("{{ a|TitleCase }} {{ b|Titlecase }}") == []

    def test_validate_template_unknown_filter(self):
        errors = self.engine.validate_template("{{ a|Missing }}")
        assert len(errors) == 1
        assert "Unknown filter" in errors[0]

    def test_validate_template_syntax_error(self):
        errors = self.engine.validate_template("{{ a|TitleCase }")
        assert len(errors) == 1
        assert "syntax" in errors[0].lower()


class TestTemplateEngineConfig:
    """Test configuration-driven behavior."""

    def test_lenient_undefined(self, populated_registry):
        engine = TemplateEngine(populated_registry, TemplateConfig(strict_undefined=False))
        assert engine.render("[{{ missing }}]") == "[]"

    def test_render_file(self, populated_registry, tmp_path):
        (tmp_path / "post.txt").write_text("Title: {{ title|TitleCase }}", encoding="utf-8")
        engine = TemplateEngine(populated_registry, TemplateConfig(search_paths=[tmp_path]))

        assert engine.render_file("post.txt", {'title': "hello world"}) == "Title: Hello World"

    def test_render_file_matches_string_rendering(self, populated_registry, tmp_path):
        source = "{{ title|TitleCase }}"
        (tmp_path / "post.html").write_text(source, encoding="utf-8")
        engine = TemplateEngine(populated_registry, TemplateConfig(search_paths=[tmp_path]))
        variables = {'title': "mc'DONALD <b>farm-house</b> & co"}

        expected = "Mc'donald <b>farm-house</b> & Co"
        assert engine.render(source, variables) == expected
        assert engine.render_file("post.html", variables) == expected

    def test_render_file_missing(self, populated_registry, tmp_path):
        engine = TemplateEngine(populated_registry, TemplateConfig(search_paths=[tmp_path]))

        with pytest.raises(TemplateRenderError) as exc_info:
            engine.render_file("nope.txt")
        assert exc_info.value.error_code == ErrorCode.TEMPLATE_NOT_FOUND

    def test_render_file_without_search_paths(self, engine):
        with pytest.raises(TemplateRenderError) as exc_info:
            engine.render_file("post.txt")
        assert exc_info.value.error_code == ErrorCode.TEMPLATE_NOT_FOUND

    def test_engines_do_not_share_filters(self):
        empty = TemplateEngine(FilterRegistry())
        populated = FilterRegistry()
        register_filters(populated)
        TemplateEngine(populated)

        assert "TitleCase" not in empty.env.filters
