"""Tests for nesting, ruleset separation, comment shape and line length."""

from stylecheck.model.diagnostic import RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.parser import parse_stylesheet
from stylecheck.validation.structure import (
    check_comment_shape,
    check_line_length,
    check_nesting_depth,
    check_ruleset_separation,
)


def _run(rule, source: str, **options):
    sheet, _ = parse_stylesheet(source, file_id="test.scss")
    return rule(sheet, CheckOptions(**options))


FOUR_LEVELS = (
    ".A {\n"
    "  .A-b {\n"
    "    .A-c {\n"
    "      .A-d {\n"
    "        color: red;\n"
    "      }\n"
    "    }\n"
    "  }\n"
    "}\n"
)


# ---------------------------------------------------------------------------
# Nesting depth
# ---------------------------------------------------------------------------


class TestNestingDepth:
    def test_fourth_level_reported_once(self):
        diagnostics = _run(check_nesting_depth, FOUR_LEVELS)
        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.rule is RuleId.EXCESSIVE_NESTING
        assert "depth 4" in diag.message
        assert "maximum 3" in diag.message
        assert (diag.line, diag.column) == (4, 7)
        assert diag.fix

    def test_three_levels_allowed(self):
        source = ".A {\n  .A-b {\n    .A-c { top: 0; }\n  }\n}\n"
        assert _run(check_nesting_depth, source) == []

    def test_configured_limit(self):
        assert _run(check_nesting_depth, FOUR_LEVELS, max_nesting_depth=4) == []
        assert len(_run(check_nesting_depth, FOUR_LEVELS, max_nesting_depth=2)) == 2

    def test_at_rule_blocks_add_no_level(self):
        source = (
            ".A {\n"
            "  @media print {\n"
            "    .A-b {\n"
            "      .A-c { top: 0; }\n"
            "    }\n"
            "  }\n"
            "}\n"
        )
        assert _run(check_nesting_depth, source) == []


# ---------------------------------------------------------------------------
# Ruleset separation
# ---------------------------------------------------------------------------


class TestRulesetSeparation:
    def test_exactly_one_blank_line(self):
        assert _run(check_ruleset_separation, ".A { top: 0; }\n\n.B { top: 0; }\n") == []

    def test_no_blank_line(self):
        diagnostics = _run(check_ruleset_separation, ".A { top: 0; }\n.B { top: 0; }\n")
        assert [d.rule for d in diagnostics] == [RuleId.RULESET_SEPARATOR_VIOLATION]
        assert diagnostics[0].line == 2
        assert "found 0" in diagnostics[0].message

    def test_two_blank_lines(self):
        diagnostics = _run(check_ruleset_separation, ".A { top: 0; }\n\n\n.B { top: 0; }\n")
        assert len(diagnostics) == 1
        assert "found 2" in diagnostics[0].message

    def test_attached_comment_belongs_to_following_ruleset(self):
        source = ".A { top: 0; }\n\n/** B */\n.B { top: 0; }\n"
        assert _run(check_ruleset_separation, source) == []

    def test_nested_siblings(self):
        source = ".A {\n  .A-b { top: 0; }\n  .A-c { top: 0; }\n}\n"
        diagnostics = _run(check_ruleset_separation, source)
        assert len(diagnostics) == 1
        assert diagnostics[0].line == 3

    def test_statements_without_blocks_ignored(self):
        source = '@import "base";\n.A { top: 0; }\n'
        assert _run(check_ruleset_separation, source) == []

    def test_blocks_compared_across_statement_without_block(self):
        diagnostics = _run(check_ruleset_separation, ".Foo {}\n@include bar;\n.Baz {}\n")
        assert [d.rule for d in diagnostics] == [RuleId.RULESET_SEPARATOR_VIOLATION]
        assert diagnostics[0].line == 3
        assert "found 0" in diagnostics[0].message

    def test_blank_line_above_block_after_statement(self):
        source = ".Foo {}\n\n@include bar;\n\n.Baz {}\n"
        assert _run(check_ruleset_separation, source) == []

    def test_nested_declarations_between_blocks(self):
        source = (
            ".A {\n"
            "  .A-b { top: 0; }\n"
            "\n"
            "  top: 0;\n"
            "\n"
            "  .A-c { top: 0; }\n"
            "}\n"
        )
        assert _run(check_ruleset_separation, source) == []

    def test_else_follows_if_directly(self):
        source = (
            ".A {\n"
            "  @if $dark {\n"
            "    color: black;\n"
            "  } @else {\n"
            "    color: white;\n"
            "  }\n"
            "}\n"
        )
        assert _run(check_ruleset_separation, source) == []


# ---------------------------------------------------------------------------
# Comment shape
# ---------------------------------------------------------------------------


class TestCommentShape:
    def test_well_formed_block(self):
        source = "/**\n * Modal\n *\n * Longer description.\n */\n.Modal { top: 0; }\n"
        assert _run(check_comment_shape, source) == []

    def test_closing_marker_misaligned(self):
        source = "/**\n * Modal\n    */\n.Modal { top: 0; }\n"
        diagnostics = _run(check_comment_shape, source)
        assert [d.rule for d in diagnostics] == [RuleId.COMMENT_ALIGNMENT_VIOLATION]
        assert "not aligned" in diagnostics[0].message

    def test_text_on_opening_line(self):
        source = "/** Modal\n */\n.Modal { top: 0; }\n"
        assert len(_run(check_comment_shape, source)) == 1

    def test_missing_description(self):
        source = "/*\n*/\n.Modal { top: 0; }\n"
        diagnostics = _run(check_comment_shape, source)
        assert len(diagnostics) == 1
        assert "description" in diagnostics[0].message

    def test_single_line_and_line_comments_ignored(self):
        source = "/* one line */\n// line comment\n.Modal { top: 0; }\n"
        assert _run(check_comment_shape, source) == []

    def test_indented_block_inside_ruleset(self):
        source = ".A {\n  /**\n   * Part\n   */\n  .A-b { top: 0; }\n}\n"
        assert _run(check_comment_shape, source) == []


# ---------------------------------------------------------------------------
# Line length
# ---------------------------------------------------------------------------


class TestLineLength:
    def test_long_line(self):
        long_value = "x" * 80
        source = f'.A {{\n  content: "{long_value}";\n}}\n'
        diagnostics = _run(check_line_length, source)
        assert [d.rule for d in diagnostics] == [RuleId.LINE_TOO_LONG]
        assert (diagnostics[0].line, diagnostics[0].column) == (2, 81)

    def test_exactly_at_limit(self):
        assert _run(check_line_length, "a" * 80 + "\n") == []

    def test_configured_limit(self):
        assert _run(check_line_length, "a" * 90 + "\n", max_line_length=100) == []
