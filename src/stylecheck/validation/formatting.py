"""Formatting rules over the raw token stream and source lines.

Each check is an independent read-only pass; none of them depends on
another's result.
"""

from __future__ import annotations

import re

from stylecheck.model.diagnostic import Diagnostic, RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.model.tokens import Token, TokenKind
from stylecheck.model.tree import Ruleset, Stylesheet
from stylecheck.validation.common import all_declarations, diagnostic
from stylecheck.validation.ordering import strip_vendor_prefix

LENGTH_UNITS = frozenset({
    "px", "em", "rem", "ex", "ch", "vw", "vh", "vmin", "vmax",
    "cm", "mm", "q", "in", "pt", "pc",
})

# Math functions whose zero operands must keep their units.
_MATH_FUNCTIONS = frozenset({"calc", "clamp", "min", "max"})

_NUMBER_RE = re.compile(r"^[+-]?(?P<number>\d*\.?\d+)(?P<unit>[A-Za-z]+)$")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _token_at(sheet: Stylesheet, index: int) -> Token | None:
    if 0 <= index < len(sheet.tokens):
        return sheet.tokens[index]
    return None


def _value_spans(
    sheet: Stylesheet, custom_properties: bool = True
) -> list[tuple[int, int]]:
    """Token ranges holding values: declaration values and at-rule preludes."""
    spans = [
        (declaration.value_start, declaration.value_end)
        for declaration in all_declarations(sheet)
        if custom_properties or not declaration.property.startswith("--")
    ]
    spans.extend((node.prelude_start, node.prelude_end) for node in sheet.at_rules())
    return spans


def check_tabs(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Tabs are never used for whitespace."""
    diagnostics: list[Diagnostic] = []
    for token in sheet.tokens:
        if token.kind is TokenKind.WHITESPACE and "\t" in token.lexeme:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.TAB_CHARACTER_USED,
                    "Tab character used; indent with spaces.",
                    token.line,
                    token.column + token.lexeme.index("\t"),
                    fix=f"Replace tabs with {options.indent_width} spaces per level.",
                )
            )
    return diagnostics


def _statement_starts(sheet: Stylesheet) -> set[tuple[int, int]]:
    """Positions of tokens that begin a selector, declaration, at-rule or comment."""
    starts: set[tuple[int, int]] = set()
    for node in sheet.nodes:
        starts.add((node.line, node.column))
        if isinstance(node, Ruleset):
            starts.update((s.line, s.column) for s in node.selectors)
    for declaration in all_declarations(sheet):
        starts.add((declaration.line, declaration.column))
    for comment in sheet.comments:
        starts.add((comment.line, comment.column))
    return starts


def check_indentation(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Statement lines are indented by ``indent_width`` spaces per open block.

    Lines that continue a declaration value are not checked.
    """
    starts = _statement_starts(sheet)
    diagnostics: list[Diagnostic] = []
    depth = 0
    at_line_start = True
    indent = ""
    for token in sheet.tokens:
        kind = token.kind
        if kind is TokenKind.NEWLINE:
            at_line_start = True
            indent = ""
            continue
        if at_line_start:
            if kind is TokenKind.WHITESPACE:
                indent = token.lexeme
                continue
            at_line_start = False
            checked = kind in (TokenKind.RBRACE, TokenKind.LBRACE) or (
                (token.line, token.column) in starts
            )
            if checked and "\t" not in indent:
                level = depth - 1 if kind is TokenKind.RBRACE else depth
                expected = options.indent_width * max(level, 0)
                if indent != " " * expected:
                    diagnostics.append(
                        diagnostic(
                            sheet,
                            RuleId.INDENTATION_MISMATCH,
                            f"Expected indentation of {expected} spaces, "
                            f"found {len(indent)}.",
                            token.line,
                            1,
                            fix=f"Indent with {expected} spaces.",
                        )
                    )
        if kind is TokenKind.LBRACE:
            depth += 1
        elif kind is TokenKind.RBRACE:
            depth = max(depth - 1, 0)
    return diagnostics


def check_brace_spacing(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Exactly one space precedes every opening brace, on the same line."""
    diagnostics: list[Diagnostic] = []
    for index, token in enumerate(sheet.tokens):
        if token.kind is not TokenKind.LBRACE or index == 0:
            continue
        prev = sheet.tokens[index - 1]
        message = None
        if prev.kind is TokenKind.NEWLINE:
            message = "Opening brace must be on the same line as its selector."
        elif prev.kind is TokenKind.WHITESPACE:
            before = _token_at(sheet, index - 2)
            if before is None or before.kind is TokenKind.NEWLINE:
                message = "Opening brace must be on the same line as its selector."
            elif prev.lexeme != " ":
                message = "Expected exactly one space before '{'."
        else:
            message = "Missing space before '{'."
        if message is not None:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.BRACE_SPACING,
                    message,
                    token.line,
                    token.column,
                    fix="Write 'selector {' with a single space.",
                )
            )
    return diagnostics


def check_closing_brace_alignment(
    sheet: Stylesheet, options: CheckOptions
) -> list[Diagnostic]:
    """A multi-line block closes at the column its selector line starts."""
    diagnostics: list[Diagnostic] = []
    for node in sheet.nodes:
        close, open_ = node.close_brace, node.open_brace
        if close is None or open_ is None or close.line == open_.line:
            continue
        line = sheet.lines[node.line - 1]
        expected = len(line) - len(line.lstrip()) + 1
        if close.column != expected:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.CLOSING_BRACE_ALIGNMENT,
                    f"Closing brace at column {close.column} should be at column "
                    f"{expected}, under the start of line {node.line}.",
                    close.line,
                    close.column,
                    fix="Put '}' on its own line, aligned with the selector.",
                )
            )
    return diagnostics


def check_selector_per_line(
    sheet: Stylesheet, options: CheckOptions
) -> list[Diagnostic]:
    """Each selector of a selector list sits on its own line."""
    diagnostics: list[Diagnostic] = []
    for ruleset in sheet.rulesets():
        for prev, cur in zip(ruleset.selectors, ruleset.selectors[1:]):
            if cur.line == prev.line:
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.SELECTOR_NOT_ON_OWN_LINE,
                        f"Selector '{cur.text}' shares a line with '{prev.text}'.",
                        cur.line,
                        cur.column,
                        fix="Break the line after the comma.",
                    )
                )
    return diagnostics


def check_colon_spacing(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """``property: value`` -- no space before the colon, one space after."""
    diagnostics: list[Diagnostic] = []
    for declaration in all_declarations(sheet):
        colon = sheet.tokens[declaration.colon_index]
        before = _token_at(sheet, declaration.colon_index - 1)
        after = _token_at(sheet, declaration.colon_index + 1)
        if before is not None and before.kind is TokenKind.WHITESPACE:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.COLON_SPACING,
                    f"Unexpected space before ':' in '{declaration.property}'.",
                    colon.line,
                    colon.column,
                    fix=f"Write '{declaration.property}: {declaration.value}'.",
                )
            )
        if not declaration.value:
            continue
        if after is None or after.kind is not TokenKind.WHITESPACE or after.lexeme != " ":
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.COLON_SPACING,
                    f"Expected exactly one space after ':' in '{declaration.property}'.",
                    colon.line,
                    colon.column,
                    fix=f"Write '{declaration.property}: {declaration.value}'.",
                )
            )
    return diagnostics


def _preferred_hex(digits: str) -> str:
    lowered = digits.lower()
    if len(lowered) in (6, 8) and all(
        lowered[i] == lowered[i + 1] for i in range(0, len(lowered), 2)
    ):
        return lowered[::2]
    return lowered


def check_hex_colors(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Hex colors are lowercase and shortened when every channel is doubled."""
    diagnostics: list[Diagnostic] = []
    for start, end in _value_spans(sheet):
        for token in sheet.tokens[start:end]:
            if token.kind is not TokenKind.HASH:
                continue
            digits = token.lexeme[1:]
            if len(digits) not in (3, 4, 6, 8) or not set(digits) <= _HEX_DIGITS:
                continue
            preferred = _preferred_hex(digits)
            if preferred != digits:
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.HEX_CASE_OR_LENGTH,
                        f"Hex color '{token.lexeme}' should be written '#{preferred}'.",
                        token.line,
                        token.column,
                        fix=f"#{preferred}",
                    )
                )
    return diagnostics


def check_quote_style(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """String literals use double quotes."""
    diagnostics: list[Diagnostic] = []
    for token in sheet.tokens:
        if token.kind is TokenKind.STRING and token.lexeme.startswith("'"):
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.QUOTE_STYLE,
                    f"String {token.lexeme} should use double quotes.",
                    token.line,
                    token.column,
                    fix='"' + token.lexeme[1:-1].replace('"', '\\"') + '"',
                )
            )
    return diagnostics


def check_zero_units(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Zero lengths omit their unit, except inside math functions."""
    diagnostics: list[Diagnostic] = []
    for start, end in _value_spans(sheet, custom_properties=False):
        functions: list[str] = []
        for index in range(start, end):
            token = sheet.tokens[index]
            if token.kind is TokenKind.LPAREN:
                prev = _token_at(sheet, index - 1)
                name = prev.lexeme.lower() if prev and prev.kind is TokenKind.IDENT else ""
                functions.append(name)
            elif token.kind is TokenKind.RPAREN and functions:
                functions.pop()
            elif token.kind is TokenKind.NUMBER:
                if any(strip_vendor_prefix(f) in _MATH_FUNCTIONS for f in functions):
                    continue
                match = _NUMBER_RE.match(token.lexeme)
                if match is None or match.group("unit").lower() not in LENGTH_UNITS:
                    continue
                if float(match.group("number")) == 0:
                    diagnostics.append(
                        diagnostic(
                            sheet,
                            RuleId.UNIT_ON_ZERO_VALUE,
                            f"Zero length '{token.lexeme}' should be written '0'.",
                            token.line,
                            token.column,
                            fix="0",
                        )
                    )
    return diagnostics


def check_comma_spacing(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Commas in values take no space before and one space (or a line break) after."""
    diagnostics: list[Diagnostic] = []
    for start, end in _value_spans(sheet):
        for index in range(start, end):
            token = sheet.tokens[index]
            if token.kind is not TokenKind.COMMA:
                continue
            before = sheet.tokens[index - 1]
            if before.kind is TokenKind.WHITESPACE:
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.COMMA_SPACING,
                        "Unexpected space before ','.",
                        token.line,
                        token.column,
                        fix="Remove the space before the comma.",
                    )
                )
            if index + 1 >= end:
                continue
            after = sheet.tokens[index + 1]
            if after.kind is TokenKind.NEWLINE:
                continue
            if after.kind is not TokenKind.WHITESPACE or after.lexeme != " ":
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.COMMA_SPACING,
                        "Expected exactly one space after ','.",
                        token.line,
                        token.column,
                        fix="Write ', ' between items.",
                    )
                )
    return diagnostics


def check_trailing_whitespace(
    sheet: Stylesheet, options: CheckOptions
) -> list[Diagnostic]:
    """No line ends in spaces or tabs."""
    diagnostics: list[Diagnostic] = []
    for number, line in enumerate(sheet.lines, start=1):
        stripped = line.rstrip(" \t\f")
        if stripped != line:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.TRAILING_WHITESPACE,
                    "Trailing whitespace.",
                    number,
                    len(stripped) + 1,
                    fix="Remove the whitespace at the end of the line.",
                )
            )
    return diagnostics


def check_file_end(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """The file ends with one newline, followed by at most one blank line."""
    text = sheet.text
    if not text.strip():
        return []
    if not text.endswith("\n"):
        last = len(sheet.lines)
        return [
            diagnostic(
                sheet,
                RuleId.FILE_END_WHITESPACE,
                "File must end with a newline.",
                last,
                len(sheet.lines[-1]) + 1,
                fix="Add a newline at the end of the file.",
            )
        ]
    content = text.rstrip()
    newlines = text[len(content) :].count("\n")
    if newlines > 2:
        last_content_line = content.count("\n") + 1
        return [
            diagnostic(
                sheet,
                RuleId.FILE_END_WHITESPACE,
                f"File ends with {newlines - 1} blank lines (at most one allowed).",
                last_content_line + 2,
                1,
                fix="Remove the extra blank lines at the end of the file.",
            )
        ]
    return []
