"""CLI command: stylecheck rules -- list every rule identifier."""

from __future__ import annotations

import click

from stylecheck.model.diagnostic import DEFAULT_SEVERITY, RuleId


@click.command()
def rules() -> None:
    """List rule identifiers with their category and default severity."""
    width = max(len(rule.value) for rule in RuleId)
    for rule in sorted(RuleId, key=lambda r: (r.category.value, r.value)):
        click.echo(
            f"{rule.value:<{width}}  {rule.category.value:<12}  {DEFAULT_SEVERITY.value}"
        )
