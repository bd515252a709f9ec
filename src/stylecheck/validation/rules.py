"""Rule registry: every rule function and the rule identifiers it can emit."""

from __future__ import annotations

from stylecheck.model.diagnostic import RuleId
from stylecheck.validation.common import RuleFunc
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
from stylecheck.validation.naming import check_naming_pattern
from stylecheck.validation.ordering import (
    check_alphabetical_order,
    check_group_order,
    check_group_separation,
)
from stylecheck.validation.structure import (
    check_comment_shape,
    check_line_length,
    check_nesting_depth,
    check_ruleset_separation,
)

RULE_OUTPUTS: dict[RuleFunc, frozenset[RuleId]] = {
    # naming
    check_naming_pattern: frozenset({RuleId.UNKNOWN_NAMING_PATTERN}),
    # ordering
    check_group_order: frozenset({RuleId.DECLARATION_GROUP_OUT_OF_ORDER}),
    check_alphabetical_order: frozenset({RuleId.DECLARATION_NOT_ALPHABETICAL}),
    check_group_separation: frozenset({
        RuleId.MISSING_GROUP_SEPARATOR,
        RuleId.UNEXPECTED_BLANK_LINE_WITHIN_GROUP,
    }),
    # structure
    check_nesting_depth: frozenset({RuleId.EXCESSIVE_NESTING}),
    check_ruleset_separation: frozenset({RuleId.RULESET_SEPARATOR_VIOLATION}),
    check_comment_shape: frozenset({RuleId.COMMENT_ALIGNMENT_VIOLATION}),
    check_line_length: frozenset({RuleId.LINE_TOO_LONG}),
    # formatting
    check_tabs: frozenset({RuleId.TAB_CHARACTER_USED}),
    check_indentation: frozenset({RuleId.INDENTATION_MISMATCH}),
    check_brace_spacing: frozenset({RuleId.BRACE_SPACING}),
    check_closing_brace_alignment: frozenset({RuleId.CLOSING_BRACE_ALIGNMENT}),
    check_selector_per_line: frozenset({RuleId.SELECTOR_NOT_ON_OWN_LINE}),
    check_colon_spacing: frozenset({RuleId.COLON_SPACING}),
    check_hex_colors: frozenset({RuleId.HEX_CASE_OR_LENGTH}),
    check_quote_style: frozenset({RuleId.QUOTE_STYLE}),
    check_zero_units: frozenset({RuleId.UNIT_ON_ZERO_VALUE}),
    check_comma_spacing: frozenset({RuleId.COMMA_SPACING}),
    check_trailing_whitespace: frozenset({RuleId.TRAILING_WHITESPACE}),
    check_file_end: frozenset({RuleId.FILE_END_WHITESPACE}),
}

ALL_RULES: list[RuleFunc] = list(RULE_OUTPUTS)
