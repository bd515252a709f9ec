"""Naming rule: every class selector must fit the class-name taxonomy."""

from __future__ import annotations

from stylecheck.model.diagnostic import Diagnostic, RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.model.tree import Ruleset, Selector, Stylesheet
from stylecheck.naming import ClassToken, classify
from stylecheck.validation.common import diagnostic

_PATTERNS = "Component, SubComponent, Modifier, State, Helper or HelperModifier"


def _trailing_class(sheet: Stylesheet, ruleset: Ruleset) -> str | None:
    """The class a ``&`` in a child of *ruleset* stands for, if unambiguous."""
    suffixes: list[str] = []
    current: Ruleset | None = ruleset
    while current is not None:
        if len(current.selectors) != 1:
            return None
        selector = current.selectors[0]
        if not selector.compounds:
            return None
        last = selector.compounds[-1]
        if last.classes:
            return last.classes[-1] + "".join(reversed(suffixes))
        if len(selector.compounds) != 1 or not last.parent_suffix:
            return None
        # ``&-suffix`` only: keep walking up to the class it extends.
        suffixes.append(last.parent_suffix)
        current = sheet.parent_of(current)
    return None


def resolved_class_names(
    sheet: Stylesheet, ruleset: Ruleset, selector: Selector
) -> list[str]:
    """Class names in *selector*, with ``&-suffix`` glued onto the parent class."""
    names = list(selector.class_names)
    if selector.starts_with_parent_reference:
        suffix = selector.compounds[0].parent_suffix
        parent = sheet.parent_of(ruleset)
        if suffix and parent is not None:
            base = _trailing_class(sheet, parent)
            if base is not None:
                names.insert(0, base + suffix)
    return names


def class_tokens(sheet: Stylesheet) -> list[tuple[Ruleset, Selector, ClassToken]]:
    """Classify every class selector outside at-rule blocks."""
    found: list[tuple[Ruleset, Selector, ClassToken]] = []
    for ruleset in sheet.rulesets():
        if ruleset.in_at_rule:
            continue
        for selector in ruleset.selectors:
            for name in resolved_class_names(sheet, ruleset, selector):
                found.append((ruleset, selector, classify(name)))
    return found


def _column_of(selector: Selector, name: str) -> int:
    offset = selector.text.find("." + name)
    return selector.column + offset if offset >= 0 else selector.column


def check_naming_pattern(sheet: Stylesheet, options: CheckOptions) -> list[Diagnostic]:
    """Unclassified class names are reported unless the file or class is exempt."""
    if options.vendor_exempt:
        return []
    diagnostics: list[Diagnostic] = []
    for _ruleset, selector, token in class_tokens(sheet):
        if token.is_classified or token.raw in options.naming_allowlist:
            continue
        diagnostics.append(
            diagnostic(
                sheet,
                RuleId.UNKNOWN_NAMING_PATTERN,
                f"Class '.{token.raw}' does not match any naming pattern "
                f"({_PATTERNS}).",
                selector.line,
                _column_of(selector, token.raw),
                fix="Rename it, e.g. 'ComponentName', 'ComponentName-part', "
                "'ComponentName--modifier', 'is-state' or 'subject-helper'.",
            )
        )
    return diagnostics
