"""Engine entry points: check one source text, or a batch of them in parallel."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from stylecheck.engine.aggregator import DiagnosticReport, aggregate
from stylecheck.lexer import tokenize
from stylecheck.model.diagnostic import Diagnostic
from stylecheck.model.options import CheckOptions
from stylecheck.parser import parse
from stylecheck.validation import validate

logger = logging.getLogger(__name__)

# (file id, source text, options or None for defaults)
SourceInput = tuple[str, str, "CheckOptions | None"]


def _apply_severity(diag: Diagnostic, options: CheckOptions) -> Diagnostic:
    severity = options.severity_for(diag.rule)
    if severity is diag.severity:
        return diag
    return dataclasses.replace(diag, severity=severity)


def check(
    file_id: str, source_text: str, options: CheckOptions | None = None
) -> list[Diagnostic]:
    """Lex, parse and run every enabled rule over one source text.

    Never raises for bad input: syntax problems come back as diagnostics
    next to everything else found in the same file.
    """
    options = options or CheckOptions()
    tokens = tokenize(source_text)
    sheet, parse_diagnostics = parse(tokens, file_id=file_id)

    diagnostics = [d for d in parse_diagnostics if options.is_enabled(d.rule)]
    diagnostics.extend(validate(sheet, options))
    result = aggregate(_apply_severity(d, options) for d in diagnostics)
    logger.debug(
        "%s: %d token(s), %d node(s), %d diagnostic(s)",
        file_id,
        len(tokens),
        len(sheet.nodes),
        len(result),
    )
    return result


def check_many(
    inputs: Iterable[SourceInput], max_workers: int | None = None
) -> DiagnosticReport:
    """Check several inputs on a thread pool and merge the results.

    A file whose check raises is logged and listed in ``report.failed``; the
    rest of the batch still runs.
    """
    items = list(inputs)
    report = DiagnosticReport()
    if not items:
        return report

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(check, file_id, text, options): file_id
            for file_id, text, options in items
        }
        for future in as_completed(futures):
            file_id = futures[future]
            try:
                diagnostics = future.result()
            except Exception as exc:
                logger.exception("Checking %s failed", file_id)
                report.record_failure(file_id, str(exc))
                continue
            report.add(file_id, diagnostics)

    logger.info("Checked %d file(s): %s", len(items), report.summary())
    return report
