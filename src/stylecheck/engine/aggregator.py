"""Diagnostic aggregator: merges, de-duplicates and ranks findings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from stylecheck.model.diagnostic import Diagnostic, Severity


def aggregate(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Drop exact duplicates and sort by file, line, column and rule."""
    unique: dict[tuple[str, int, int, str, str], Diagnostic] = {}
    for diag in diagnostics:
        unique.setdefault(diag.sort_key, diag)
    return [unique[key] for key in sorted(unique)]


@dataclass
class DiagnosticReport:
    """Findings for a whole run.

    Workers each build their own list; lists are merged here only after the
    worker has finished, so no locking is involved. Merged findings are
    de-duplicated and sorted once, the first time they are read after an add.
    """

    files: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    _collected: list[Diagnostic] = field(default_factory=list, init=False, repr=False)
    _merged: list[Diagnostic] | None = field(default=None, init=False, repr=False)

    def add(self, file_id: str, diagnostics: Iterable[Diagnostic]) -> None:
        self.files.append(file_id)
        self._collected.extend(diagnostics)
        self._merged = None

    @property
    def diagnostics(self) -> list[Diagnostic]:
        if self._merged is None:
            self._merged = aggregate(self._collected)
        return self._merged

    def record_failure(self, file_id: str, reason: str) -> None:
        self.failed[file_id] = reason

    def count(self, severity: Severity) -> int:
        return sum(1 for d in self.diagnostics if d.severity is severity)

    @property
    def error_count(self) -> int:
        return self.count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self.count(Severity.INFO)

    def at_or_above(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity.rank >= severity.rank]

    @property
    def passed(self) -> bool:
        """No diagnostic at or above ERROR and no file failed to check."""
        return not self.at_or_above(Severity.ERROR) and not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def by_file(self) -> dict[str, list[Diagnostic]]:
        grouped: dict[str, list[Diagnostic]] = {file_id: [] for file_id in sorted(self.files)}
        for diag in self.diagnostics:
            grouped.setdefault(diag.file_id, []).append(diag)
        return grouped

    def summary(self) -> str:
        return (
            f"{len(self.files)} file(s) checked: {self.error_count} error(s), "
            f"{self.warning_count} warning(s), {self.info_count} info"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "files": sorted(self.files),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "failed": dict(self.failed),
            "summary": {
                "errors": self.error_count,
                "warnings": self.warning_count,
                "info": self.info_count,
                "passed": self.passed,
            },
        }
