"""Structural rules: nesting depth, ruleset separation, comment shape, line length."""

from __future__ import annotations

from stylecheck.model.diagnostic import Diagnostic, RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.model.tree import AtRule, Comment, Node, Ruleset, Stylesheet
from stylecheck.validation.common import diagnostic

# Characters allowed on a comment's opening and closing marker lines.
_MARKER_CHARS = frozenset("*=-#~_/ ")


def check_nesting_depth(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Rulesets deeper than the configured level are reported.

    Depth is recorded by the parser as it descends, so this is a single scan
    over the node arena.
    """
    diagnostics: list[Diagnostic] = []
    for ruleset in sheet.rulesets():
        if ruleset.level > options.max_nesting_depth:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.EXCESSIVE_NESTING,
                    f"Ruleset is nested at depth {ruleset.level} "
                    f"(maximum {options.max_nesting_depth}).",
                    ruleset.line,
                    ruleset.column,
                    fix="Flatten it into a combinator selector, e.g. "
                    "'.Parent-child > .Other' instead of nesting blocks.",
                )
            )
    return diagnostics


def _is_block(node: Node) -> bool:
    return isinstance(node, Ruleset) or (isinstance(node, AtRule) and node.has_block)


def _continues_previous(node: Node) -> bool:
    """``@else`` blocks follow their ``@if`` directly."""
    return isinstance(node, AtRule) and node.name.startswith("else")


def _blank_lines_above(sheet: Stylesheet, line: int, floor: int) -> int:
    """Blank lines directly above *line*, not looking at or above *floor*."""
    blanks = 0
    line -= 1
    while line > floor and sheet.is_blank_line(line):
        blanks += 1
        line -= 1
    return blanks


def check_ruleset_separation(
    sheet: Stylesheet, options: CheckOptions
) -> list[Diagnostic]:
    """Each block is separated from the previous sibling block by one blank line.

    Block-less statements between the two (``@include x;``, declarations) do
    not exempt the pair; the blank lines counted are those directly above the
    later block.
    """
    diagnostics: list[Diagnostic] = []
    for siblings in sheet.sibling_groups():
        prev: Node | None = None
        for cur in siblings:
            if not _is_block(cur):
                continue
            if prev is None or _continues_previous(cur):
                prev = cur
                continue
            blanks = _blank_lines_above(sheet, cur.start_line, prev.end_line)
            prev = cur
            if blanks == 1:
                continue
            column = cur.comment.column if cur.comment is not None else cur.column
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.RULESET_SEPARATOR_VIOLATION,
                    f"Expected exactly one blank line before this ruleset, found {blanks}.",
                    cur.start_line,
                    column,
                    fix="Separate sibling rulesets with a single blank line.",
                )
            )
    return diagnostics


def _is_marker(text: str) -> bool:
    return all(char in _MARKER_CHARS for char in text)


def _comment_shape_problem(comment: Comment) -> str | None:
    lines = [line.rstrip("\r") for line in comment.text.split("\n")]
    opening = lines[0].strip()
    if not _is_marker(opening[2:]):
        return "Multi-line comment must open with a marker-only line ('/*' or '/**')."

    closing = lines[-1]
    closing_text = closing.strip()
    if not closing_text.endswith("*/") or not _is_marker(closing_text[:-2]):
        return "Multi-line comment must close with a marker-only line ('*/')."

    if len(lines) < 3 or not lines[1].strip().lstrip("*").strip():
        return "Multi-line comment must start with a short description line."

    indent = len(closing) - len(closing.lstrip())
    closing_column = indent + 1
    aligned = closing_column == comment.column or (
        closing_text.startswith("*") and closing_column == comment.column + 1
    )
    if not aligned:
        return (
            f"Closing marker at column {closing_column} is not aligned with the "
            f"opening marker at column {comment.column}."
        )
    return None


def check_comment_shape(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Multi-line block comments follow the marker/description/marker shape."""
    diagnostics: list[Diagnostic] = []
    for comment in sheet.comments:
        if not comment.is_block or "\n" not in comment.text:
            continue
        problem = _comment_shape_problem(comment)
        if problem is not None:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.COMMENT_ALIGNMENT_VIOLATION,
                    problem,
                    comment.line,
                    comment.column,
                    fix="Use '/**', a description line, then '*/' under the opening.",
                )
            )
    return diagnostics


def check_line_length(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """No line may exceed the configured width."""
    limit = options.max_line_length
    diagnostics: list[Diagnostic] = []
    for number, line in enumerate(sheet.lines, start=1):
        if len(line) > limit:
            diagnostics.append(
                diagnostic(
                    sheet,
                    RuleId.LINE_TOO_LONG,
                    f"Line is {len(line)} characters long (maximum {limit}).",
                    number,
                    limit + 1,
                )
            )
    return diagnostics
