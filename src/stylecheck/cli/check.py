"""CLI command: stylecheck check -- check CSS/SCSS files against the house style."""

from __future__ import annotations

import fnmatch
import json
import logging
import sys
from pathlib import Path

import click

from stylecheck.engine import check_many
from stylecheck.model.options import CheckOptions, OptionsError

SOURCE_SUFFIXES = (".css", ".scss")


def expand_paths(paths: tuple[str, ...]) -> list[Path]:
    """Files are taken as given; directories are searched for stylesheets."""
    found: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in SOURCE_SUFFIXES)
            )
        else:
            found.append(path)
    # Drop repeats while keeping order.
    return list(dict.fromkeys(found))


def _build_options(
    config: str | None,
    max_nesting_depth: int | None,
    max_line_length: int | None,
    allow_class: tuple[str, ...],
    disable: tuple[str, ...],
) -> CheckOptions:
    data: dict[str, object] = {}
    if config:
        loaded = json.loads(Path(config).read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise OptionsError(f"{config}: top level must be an object")
        data.update(loaded)
    if max_nesting_depth is not None:
        data["maxNestingDepth"] = max_nesting_depth
    if max_line_length is not None:
        data["maxLineLength"] = max_line_length
    if allow_class:
        data["namingAllowlist"] = [*data.get("namingAllowlist", []), *allow_class]  # type: ignore[misc]
    if disable:
        data["disabledRules"] = [*data.get("disabledRules", []), *disable]  # type: ignore[misc]
    return CheckOptions.from_mapping(data)


def _is_vendor(path: Path, patterns: tuple[str, ...]) -> bool:
    text = path.as_posix()
    return any(fnmatch.fnmatch(text, pattern) for pattern in patterns)


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option("--config", type=click.Path(exists=True, dir_okay=False), help="JSON options file")
@click.option("--max-nesting-depth", type=int, default=None, help="Deepest allowed ruleset level")
@click.option("--max-line-length", type=int, default=None, help="Longest allowed line")
@click.option(
    "--vendor-exempt",
    "vendor_patterns",
    multiple=True,
    help="Glob of third-party files to skip naming checks for (repeatable)",
)
@click.option("--allow-class", multiple=True, help="Class name exempt from naming checks")
@click.option("--disable", multiple=True, help="Rule identifier to turn off (repeatable)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--jobs", type=int, default=None, help="Worker threads (default: automatic)")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def check(
    paths: tuple[str, ...],
    config: str | None,
    max_nesting_depth: int | None,
    max_line_length: int | None,
    vendor_patterns: tuple[str, ...],
    allow_class: tuple[str, ...],
    disable: tuple[str, ...],
    output_format: str,
    jobs: int | None,
    verbose: bool,
) -> None:
    """Check stylesheets and report every style violation.

    Exits with code 0 when nothing at ERROR severity was found and every
    file could be read, or code 1 otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        options = _build_options(config, max_nesting_depth, max_line_length, allow_class, disable)
    except (OptionsError, json.JSONDecodeError) as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(2)

    inputs = []
    unreadable: dict[str, str] = {}
    for path in expand_paths(paths):
        file_id = path.as_posix()
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            unreadable[file_id] = str(exc)
            continue
        file_options = options
        if _is_vendor(path, vendor_patterns):
            file_options = options.replace(vendor_exempt=True)
        inputs.append((file_id, source, file_options))

    report = check_many(inputs, max_workers=jobs)
    for file_id, reason in unreadable.items():
        report.record_failure(file_id, reason)

    for file_id, reason in sorted(report.failed.items()):
        click.echo(f"Cannot check {file_id}: {reason}", err=True)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for diag in report.diagnostics:
            click.echo(str(diag))
        if report.diagnostics:
            click.echo()
        click.echo(f"Summary: {report.summary()}")

    sys.exit(report.exit_code)

