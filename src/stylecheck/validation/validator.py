"""Stylesheet validator: runs the rule functions over a parsed stylesheet."""

from __future__ import annotations

from stylecheck.model.diagnostic import Diagnostic
from stylecheck.model.options import CheckOptions
from stylecheck.model.tree import Stylesheet
from stylecheck.validation.common import RuleFunc
from stylecheck.validation.rules import ALL_RULES, RULE_OUTPUTS


def validate(
    sheet: Stylesheet,
    options: CheckOptions | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run every enabled rule against *sheet*.

    Rules run independently; a rule whose identifiers are all disabled is
    skipped. Returns the diagnostics in rule order, unfiltered by severity.
    """
    options = options or CheckOptions()
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        emits = RULE_OUTPUTS.get(rule)
        if emits is not None and not any(options.is_enabled(r) for r in emits):
            continue
        diagnostics.extend(rule(sheet, options))
    return [d for d in diagnostics if options.is_enabled(d.rule)]
