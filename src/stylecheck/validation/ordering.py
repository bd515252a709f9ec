"""Declaration order rules: group order, alphabetical order, group separators.

Properties fall into five ordered groups. Within a ruleset the groups must
appear in order, names within a group must be alphabetical, and groups are
separated by a blank line while declarations inside one group are not.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType

from stylecheck.model.diagnostic import Diagnostic, RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.model.tree import Declaration, Stylesheet
from stylecheck.validation.common import diagnostic


class DeclarationGroup(IntEnum):
    LAYOUT = 0
    BOX = 1
    BACKGROUND = 2
    TYPOGRAPHICAL = 3
    OTHER = 4

    @property
    def label(self) -> str:
        return self.name.title()


_G = DeclarationGroup

PROPERTY_GROUPS = MappingProxyType({
    # Layout
    "display": _G.LAYOUT,
    "position": _G.LAYOUT,
    "top": _G.LAYOUT,
    "right": _G.LAYOUT,
    "bottom": _G.LAYOUT,
    "left": _G.LAYOUT,
    "inset": _G.LAYOUT,
    "z-index": _G.LAYOUT,
    "float": _G.LAYOUT,
    "clear": _G.LAYOUT,
    "visibility": _G.LAYOUT,
    "order": _G.LAYOUT,
    "align-content": _G.LAYOUT,
    "align-items": _G.LAYOUT,
    "align-self": _G.LAYOUT,
    "justify-content": _G.LAYOUT,
    "justify-items": _G.LAYOUT,
    "justify-self": _G.LAYOUT,
    "place-content": _G.LAYOUT,
    "place-items": _G.LAYOUT,
    "place-self": _G.LAYOUT,
    "gap": _G.LAYOUT,
    "row-gap": _G.LAYOUT,
    "column-gap": _G.LAYOUT,
    "columns": _G.LAYOUT,
    "column-count": _G.LAYOUT,
    "column-width": _G.LAYOUT,
    # Box
    "width": _G.BOX,
    "min-width": _G.BOX,
    "max-width": _G.BOX,
    "height": _G.BOX,
    "min-height": _G.BOX,
    "max-height": _G.BOX,
    "box-sizing": _G.BOX,
    "outline": _G.BOX,
    "outline-offset": _G.BOX,
    "aspect-ratio": _G.BOX,
    # Background
    "box-shadow": _G.BACKGROUND,
    "opacity": _G.BACKGROUND,
    # Typographical
    "color": _G.TYPOGRAPHICAL,
    "line-height": _G.TYPOGRAPHICAL,
    "letter-spacing": _G.TYPOGRAPHICAL,
    "word-spacing": _G.TYPOGRAPHICAL,
    "white-space": _G.TYPOGRAPHICAL,
    "word-break": _G.TYPOGRAPHICAL,
    "word-wrap": _G.TYPOGRAPHICAL,
    "overflow-wrap": _G.TYPOGRAPHICAL,
    "vertical-align": _G.TYPOGRAPHICAL,
    "hyphens": _G.TYPOGRAPHICAL,
    "direction": _G.TYPOGRAPHICAL,
})

# Families matched on ``name == prefix`` or ``name.startswith(prefix + "-")``.
PROPERTY_FAMILIES: tuple[tuple[str, DeclarationGroup], ...] = (
    ("flex", _G.LAYOUT),
    ("grid", _G.LAYOUT),
    ("margin", _G.BOX),
    ("padding", _G.BOX),
    ("border", _G.BOX),
    ("overflow", _G.BOX),
    ("background", _G.BACKGROUND),
    ("font", _G.TYPOGRAPHICAL),
    ("text", _G.TYPOGRAPHICAL),
)


def strip_vendor_prefix(name: str) -> str:
    """``-webkit-box-sizing`` -> ``box-sizing``; other names are returned as-is."""
    if name.startswith("-") and not name.startswith("--"):
        parts = name.split("-", 2)
        if len(parts) == 3 and parts[2]:
            return parts[2]
    return name


def property_group(name: str) -> DeclarationGroup:
    """Group for a property name; anything unrecognized is ``OTHER``."""
    key = strip_vendor_prefix(name.lower())
    group = PROPERTY_GROUPS.get(key)
    if group is not None:
        return group
    for prefix, family_group in PROPERTY_FAMILIES:
        if key == prefix or key.startswith(prefix + "-"):
            return family_group
    return DeclarationGroup.OTHER


def _sort_key(declaration: Declaration) -> str:
    return strip_vendor_prefix(declaration.name)


def _ordered_declarations(sheet: Stylesheet) -> list[list[Declaration]]:
    return [
        [d for d in ruleset.declarations if not d.is_variable]
        for ruleset in sheet.rulesets()
        if not ruleset.in_at_rule
    ]


def check_group_order(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Group ordinals must never decrease inside a ruleset."""
    diagnostics: list[Diagnostic] = []
    for declarations in _ordered_declarations(sheet):
        for prev, cur in zip(declarations, declarations[1:]):
            prev_group, cur_group = property_group(prev.name), property_group(cur.name)
            if cur_group < prev_group:
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.DECLARATION_GROUP_OUT_OF_ORDER,
                        f"'{prev.property}' ({prev_group.label}) appears before "
                        f"'{cur.property}' ({cur_group.label}); "
                        f"{cur_group.label} declarations come first.",
                        cur.line,
                        cur.column,
                        fix=f"Move '{cur.property}' above '{prev.property}'.",
                    )
                )
    return diagnostics


def check_alphabetical_order(
    sheet: Stylesheet, options: CheckOptions
) -> list[Diagnostic]:
    """Within a run of same-group declarations, names must not decrease."""
    diagnostics: list[Diagnostic] = []
    for declarations in _ordered_declarations(sheet):
        for prev, cur in zip(declarations, declarations[1:]):
            if property_group(prev.name) != property_group(cur.name):
                continue
            if _sort_key(cur) < _sort_key(prev):
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.DECLARATION_NOT_ALPHABETICAL,
                        f"'{cur.property}' should come before '{prev.property}' "
                        "(alphabetical order within a group).",
                        cur.line,
                        cur.column,
                        fix=f"Move '{cur.property}' above '{prev.property}'.",
                    )
                )
    return diagnostics


def check_group_separation(
    sheet: Stylesheet, options: CheckOptions
) -> list[Diagnostic]:
    """A blank line between groups, never inside one.

    Only adjacent declarations are judged: a pair with a nested block, an
    at-rule, a variable or a comment between them is skipped.
    """
    diagnostics: list[Diagnostic] = []
    for declarations in _ordered_declarations(sheet):
        for prev, cur in zip(declarations, declarations[1:]):
            if sheet.has_content_between(prev.end_line, cur.line):
                continue
            same_group = property_group(prev.name) == property_group(cur.name)
            blank = sheet.blank_lines_between(prev.end_line, cur.line)
            if not same_group and blank == 0:
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.MISSING_GROUP_SEPARATOR,
                        f"Missing blank line between the "
                        f"{property_group(prev.name).label} group ('{prev.property}') "
                        f"and the {property_group(cur.name).label} group "
                        f"('{cur.property}').",
                        cur.line,
                        cur.column,
                        fix=f"Insert a blank line before '{cur.property}'.",
                    )
                )
            elif same_group and blank > 0:
                diagnostics.append(
                    diagnostic(
                        sheet,
                        RuleId.UNEXPECTED_BLANK_LINE_WITHIN_GROUP,
                        f"Blank line inside the {property_group(cur.name).label} group "
                        f"between '{prev.property}' and '{cur.property}'.",
                        cur.line,
                        cur.column,
                        fix=f"Remove the blank line before '{cur.property}'.",
                    )
                )
    return diagnostics
