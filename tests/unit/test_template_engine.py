"""Unit tests for placeholder extraction and substitution."""

import pytest

from pmx.template_engine import extract_placeholders, render_value, substitute


class TestExtractPlaceholders:
    def test_extracts_in_order(self):
        assert extract_placeholders("Connect to <{{HOST}}> on <{{PORT}}>") == ["HOST", "PORT"]

    def test_deduplicates_by_first_occurrence(self):
        content = "<{{B}}> then <{{A}}> then <{{B}}> and <{{A}}>"

        assert extract_placeholders(content) == ["B", "A"]

    @pytest.mark.parametrize(
        "content",
        ["<{URL}>", "{{URL}}", "<URL>", "<{{1URL}}>", "<{{ URL }}>", "<{{URL-2}}>", ""],
    )
    def test_malformed_forms_do_not_match(self, content):
        assert extract_placeholders(content) == []

    def test_identifier_characters(self):
        content = "<{{_private}}> <{{snake_case_2}}> <{{CamelCase}}>"

        assert extract_placeholders(content) == ["_private", "snake_case_2", "CamelCase"]

    def test_multiline_content(self):
        content = "# Title\n\nUse <{{LANG}}>.\n\n- step <{{STEP}}>\n"

        assert extract_placeholders(content) == ["LANG", "STEP"]


class TestSubstitute:
    def test_replaces_bound_placeholders(self):
        result = substitute("Connect to <{{HOST}}> on <{{PORT}}>", {"HOST": "db", "PORT": "5432"})

        assert result == "Connect to db on 5432"

    def test_replaces_every_occurrence(self):
        assert substitute("<{{X}}>-<{{X}}>", {"X": "a"}) == "a-a"

    def test_unbound_placeholders_left_verbatim(self):
        assert substitute("<{{A}}> and <{{B}}>", {"A": "1"}) == "1 and <{{B}}>"

    @pytest.mark.parametrize("bindings", [None, {}])
    def test_empty_bindings_return_content_unchanged(self, bindings):
        assert substitute("Use <{{X}}>", bindings) == "Use <{{X}}>"

    def test_single_pass(self):
        result = substitute("<{{A}}> <{{B}}>", {"A": "<{{B}}>", "B": "b"})

        assert result == "<{{B}}> b"

    def test_idempotent_once_bound_placeholders_are_replaced(self):
        bindings = {"HOST": "db", "PORT": 5432}
        once = substitute("<{{HOST}}>:<{{PORT}}> <{{OTHER}}>", bindings)

        assert substitute(once, bindings) == once

    def test_malformed_forms_untouched(self):
        content = "<{X}> {{X}} <X>"

        assert substitute(content, {"X": "value"}) == content

    def test_replacement_with_backslashes_is_literal(self):
        assert substitute("path: <{{P}}>", {"P": r"C:\new\1"}) == r"path: C:\new\1"


class TestRenderValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("text", "text"),
            ('"quoted"', '"quoted"'),
            (42, "42"),
            (1.5, "1.5"),
            (True, "true"),
            (None, "null"),
            ([1, 2], "[1,2]"),
            ({"k": "\u00e9"}, '{"k":"\u00e9"}'),
        ],
    )
    def test_render_value(self, value, expected):
        assert render_value(value) == expected
