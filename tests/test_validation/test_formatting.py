"""Tests for the formatting rules."""

import pytest

from stylecheck.model.diagnostic import RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.parser import parse_stylesheet
from stylecheck.validation.formatting import (
    check_brace_spacing,
    check_closing_brace_alignment,
    check_colon_spacing,
    check_comma_spacing,
    check_file_end,
    check_hex_colors,
    check_indentation,
    check_quote_style,
    check_selector_per_line,
    check_tabs,
    check_trailing_whitespace,
    check_zero_units,
)


def _run(rule, source: str, **options):
    sheet, _ = parse_stylesheet(source, file_id="test.scss")
    return rule(sheet, CheckOptions(**options))


def _decl(value: str, prop: str = "margin") -> str:
    return f".A {{\n  {prop}: {value};\n}}\n"


# ---------------------------------------------------------------------------
# Whitespace and indentation
# ---------------------------------------------------------------------------


class TestTabs:
    def test_tab_indent(self):
        diagnostics = _run(check_tabs, ".A {\n\ttop: 0;\n}\n")
        assert [d.rule for d in diagnostics] == [RuleId.TAB_CHARACTER_USED]
        assert (diagnostics[0].line, diagnostics[0].column) == (2, 1)

    def test_spaces_only(self):
        assert _run(check_tabs, ".A {\n  top: 0;\n}\n") == []


class TestIndentation:
    def test_nested_blocks(self):
        source = ".A {\n  top: 0;\n\n  .A-b {\n    top: 0;\n  }\n}\n"
        assert _run(check_indentation, source) == []

    def test_wrong_declaration_indent(self):
        diagnostics = _run(check_indentation, ".A {\n   top: 0;\n}\n")
        assert [d.rule for d in diagnostics] == [RuleId.INDENTATION_MISMATCH]
        assert diagnostics[0].line == 2
        assert "Expected indentation of 2 spaces, found 3" in diagnostics[0].message

    def test_closing_brace_indent(self):
        diagnostics = _run(check_indentation, ".A {\n  top: 0;\n  }\n")
        assert [d.line for d in diagnostics] == [3]

    def test_value_continuation_lines_are_free(self):
        source = ".A {\n  font-family:\n      Arial,\n      sans-serif;\n}\n"
        assert _run(check_indentation, source) == []

    def test_at_rule_block_indents_its_body(self):
        source = "@media print {\n  .A {\n    top: 0;\n  }\n}\n"
        assert _run(check_indentation, source) == []

    def test_tab_indented_lines_left_to_tab_rule(self):
        assert _run(check_indentation, ".A {\n\ttop: 0;\n}\n") == []


class TestTrailingWhitespace:
    def test_trailing_spaces(self):
        diagnostics = _run(check_trailing_whitespace, ".A { top: 0; }  \n")
        assert [(d.line, d.column) for d in diagnostics] == [(1, 15)]

    def test_crlf_is_not_trailing_whitespace(self):
        assert _run(check_trailing_whitespace, ".A { top: 0; }\r\n") == []


class TestFileEnd:
    def test_single_newline(self):
        assert _run(check_file_end, ".A { top: 0; }\n") == []

    def test_one_trailing_blank_line_allowed(self):
        assert _run(check_file_end, ".A { top: 0; }\n\n") == []

    def test_missing_newline(self):
        diagnostics = _run(check_file_end, ".A { top: 0; }")
        assert [d.rule for d in diagnostics] == [RuleId.FILE_END_WHITESPACE]
        assert (diagnostics[0].line, diagnostics[0].column) == (1, 15)

    def test_too_many_blank_lines(self):
        diagnostics = _run(check_file_end, ".A { top: 0; }\n\n\n")
        assert len(diagnostics) == 1
        assert diagnostics[0].line == 3

    @pytest.mark.parametrize("source", ["", "\n", "   "])
    def test_empty_file(self, source):
        assert _run(check_file_end, source) == []


# ---------------------------------------------------------------------------
# Braces and selectors
# ---------------------------------------------------------------------------


class TestBraceSpacing:
    @pytest.mark.parametrize(
        "source, message",
        [
            (".A{ top: 0; }", "Missing space"),
            (".A   { top: 0; }", "exactly one space"),
            (".A\n{ top: 0; }", "same line"),
        ],
    )
    def test_violations(self, source, message):
        diagnostics = _run(check_brace_spacing, source)
        assert [d.rule for d in diagnostics] == [RuleId.BRACE_SPACING]
        assert message in diagnostics[0].message

    def test_one_space(self):
        assert _run(check_brace_spacing, ".A { top: 0; }") == []


class TestClosingBraceAlignment:
    def test_misaligned(self):
        diagnostics = _run(check_closing_brace_alignment, ".A {\n  top: 0;\n  }\n")
        assert [d.rule for d in diagnostics] == [RuleId.CLOSING_BRACE_ALIGNMENT]
        assert (diagnostics[0].line, diagnostics[0].column) == (3, 3)

    def test_nested_aligned(self):
        source = ".A {\n  .A-b {\n    top: 0;\n  }\n}\n"
        assert _run(check_closing_brace_alignment, source) == []

    def test_single_line_block_skipped(self):
        assert _run(check_closing_brace_alignment, ".A { top: 0; }\n") == []


class TestSelectorPerLine:
    def test_shared_line(self):
        diagnostics = _run(check_selector_per_line, ".A, .B { top: 0; }\n")
        assert [d.rule for d in diagnostics] == [RuleId.SELECTOR_NOT_ON_OWN_LINE]
        assert diagnostics[0].column == 5

    def test_one_per_line(self):
        assert _run(check_selector_per_line, ".A,\n.B { top: 0; }\n") == []


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestColonSpacing:
    @pytest.mark.parametrize("declaration", ["top:0", "top : 0", "top:  0"])
    def test_violations(self, declaration):
        diagnostics = _run(check_colon_spacing, f".A {{ {declaration}; }}")
        assert diagnostics
        assert all(d.rule is RuleId.COLON_SPACING for d in diagnostics)

    def test_space_before_and_missing_after(self):
        assert len(_run(check_colon_spacing, ".A { top :0; }")) == 2

    def test_correct(self):
        assert _run(check_colon_spacing, ".A { top: 0; }") == []

    def test_pseudo_class_selector_is_not_a_declaration(self):
        assert _run(check_colon_spacing, ".A {\n  &:hover { top: 0; }\n}\n") == []


class TestHexColors:
    @pytest.mark.parametrize(
        "value, preferred",
        [("#FFF", "#fff"), ("#aabbcc", "#abc"), ("#AABBCC", "#abc"), ("#11223344", "#1234")],
    )
    def test_violations(self, value, preferred):
        diagnostics = _run(check_hex_colors, _decl(value, "color"))
        assert [d.rule for d in diagnostics] == [RuleId.HEX_CASE_OR_LENGTH]
        assert diagnostics[0].fix == preferred

    @pytest.mark.parametrize("value", ["#fff", "#abcdef", "#aabbc1", "#12345", "#zzz"])
    def test_accepted(self, value):
        assert _run(check_hex_colors, _decl(value, "color")) == []

    def test_id_selectors_not_checked(self):
        assert _run(check_hex_colors, "#MAIN { top: 0; }\n") == []

    def test_mixin_arguments_checked(self):
        diagnostics = _run(check_hex_colors, ".Foo {\n  @include bar(#FFFFFF);\n}\n")
        assert [d.rule for d in diagnostics] == [RuleId.HEX_CASE_OR_LENGTH]
        assert diagnostics[0].line == 2
        assert diagnostics[0].fix == "#fff"


class TestQuoteStyle:
    def test_single_quotes(self):
        diagnostics = _run(check_quote_style, _decl("'x'", "content"))
        assert [d.rule for d in diagnostics] == [RuleId.QUOTE_STYLE]
        assert diagnostics[0].fix == '"x"'

    def test_double_quotes(self):
        assert _run(check_quote_style, _decl('"x"', "content")) == []


class TestZeroUnits:
    @pytest.mark.parametrize("value", ["0px", "0.0em", "0 0 0rem", "minmax(0px, 1fr)"])
    def test_violations(self, value):
        diagnostics = _run(check_zero_units, _decl(value))
        assert [d.rule for d in diagnostics] == [RuleId.UNIT_ON_ZERO_VALUE]

    @pytest.mark.parametrize(
        "value",
        [
            "0",
            "10px",
            "0%",
            "0s",
            "calc(0px + 1em)",
            "clamp(0rem, 1vw, 2rem)",
            "-webkit-calc(0px + 1em)",
            "max(0px, 1vw)",
        ],
    )
    def test_accepted(self, value):
        assert _run(check_zero_units, _decl(value)) == []

    def test_custom_properties_skipped(self):
        assert _run(check_zero_units, _decl("0px", "--gap")) == []

    def test_mixin_arguments_checked(self):
        diagnostics = _run(check_zero_units, ".Foo {\n  @include gap(0px);\n}\n")
        assert [d.rule for d in diagnostics] == [RuleId.UNIT_ON_ZERO_VALUE]
        assert (diagnostics[0].line, diagnostics[0].column) == (2, 16)


class TestCommaSpacing:
    def test_missing_spaces(self):
        diagnostics = _run(check_comma_spacing, _decl("rgba(0,0,0,0.5)", "color"))
        assert len(diagnostics) == 3
        assert all(d.rule is RuleId.COMMA_SPACING for d in diagnostics)

    def test_space_before(self):
        diagnostics = _run(check_comma_spacing, _decl("rgba(0 , 0, 0, 0.5)", "color"))
        assert len(diagnostics) == 1
        assert "before" in diagnostics[0].message

    def test_line_break_after_comma(self):
        source = ".A {\n  font-family: Arial,\n    sans-serif;\n}\n"
        assert _run(check_comma_spacing, source) == []

    def test_correct(self):
        assert _run(check_comma_spacing, _decl("rgba(0, 0, 0, 0.5)", "color")) == []

    def test_mixin_arguments_checked(self):
        diagnostics = _run(check_comma_spacing, ".Foo {\n  @include bar(1px,2px);\n}\n")
        assert [d.rule for d in diagnostics] == [RuleId.COMMA_SPACING]
        assert diagnostics[0].line == 2

    def test_media_query_list(self):
        assert _run(check_comma_spacing, "@media screen, print {\n  .A { top: 0; }\n}\n") == []
