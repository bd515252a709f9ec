"""Shared helpers for rule functions."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Callable

from stylecheck.model.diagnostic import DEFAULT_SEVERITY, Diagnostic, RuleId
from stylecheck.model.options import CheckOptions
from stylecheck.model.tree import Declaration, Stylesheet

RuleFunc = Callable[[Stylesheet, CheckOptions], list[Diagnostic]]


def diagnostic(
    sheet: Stylesheet,
    rule: RuleId,
    message: str,
    line: int,
    column: int,
    fix: str | None = None,
) -> Diagnostic:
    """Build a diagnostic for *sheet*; severity is settled later by the engine."""
    return Diagnostic(
        rule=rule,
        severity=DEFAULT_SEVERITY,
        message=message,
        file_id=sheet.file_id,
        line=line,
        column=column,
        fix=fix,
    )


def all_declarations(sheet: Stylesheet) -> Iterator[Declaration]:
    """Every declaration in the file, wherever it sits."""
    yield from sheet.declarations
    for node in sheet.nodes:
        yield from node.declarations
