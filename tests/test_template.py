"""Tests for index template rendering."""

from __future__ import annotations

from docsui.template import (
    DIR_PLACEHOLDER,
    SCHEMA_PLACEHOLDER,
    IndexTemplate,
    missing_placeholders,
    render,
)

TEMPLATE = "<a href='SERVANT_SWAGGER_UI_SCHEMA'>at SERVANT_SWAGGER_UI_DIR</a>"


class TestRender:
    def test_substitutes_both_tokens(self):
        assert render(TEMPLATE, "docs", "/docs.json") == "<a href='/docs.json'>at docs</a>"

    def test_replaces_every_occurrence(self):
        template = f"{SCHEMA_PLACEHOLDER} {DIR_PLACEHOLDER} {SCHEMA_PLACEHOLDER} {DIR_PLACEHOLDER}"
        assert render(template, "d", "/s") == "/s d /s d"

    def test_no_tokens_left(self):
        for dir_, schema in [("docs", "/docs.json"), ("ui/swagger", "/api/openapi.json"), ("", "")]:
            out = render(TEMPLATE, dir_, schema)
            assert SCHEMA_PLACEHOLDER not in out
            assert DIR_PLACEHOLDER not in out

    def test_deterministic(self):
        first = render(TEMPLATE, "docs", "/docs.json")
        assert all(render(TEMPLATE, "docs", "/docs.json") == first for _ in range(5))

    def test_substituted_text_is_not_rescanned(self):
        out = render(TEMPLATE, "docs", f"/{DIR_PLACEHOLDER}.json")
        assert out == f"<a href='/{DIR_PLACEHOLDER}.json'>at docs</a>"

    def test_values_are_not_escaped(self):
        assert render(DIR_PLACEHOLDER, "a&b", "") == "a&b"

    def test_template_without_tokens_is_unchanged(self):
        assert render("<p>static</p>", "docs", "/docs.json") == "<p>static</p>"


class TestMissingPlaceholders:
    def test_complete_template(self):
        assert missing_placeholders(TEMPLATE) == []

    def test_missing_dir(self):
        assert missing_placeholders(SCHEMA_PLACEHOLDER) == [DIR_PLACEHOLDER]

    def test_missing_both(self):
        assert missing_placeholders("") == [SCHEMA_PLACEHOLDER, DIR_PLACEHOLDER]


class TestIndexTemplate:
    def test_render(self):
        tmpl = IndexTemplate(TEMPLATE)
        assert tmpl.render("docs", "/docs.json") == "<a href='/docs.json'>at docs</a>"

    def test_missing_placeholders(self):
        assert IndexTemplate("SERVANT_SWAGGER_UI_DIR").missing_placeholders() == [SCHEMA_PLACEHOLDER]
