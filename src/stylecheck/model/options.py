"""Run-wide configuration bundle handed to the engine."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from stylecheck.model.diagnostic import DEFAULT_SEVERITY, RuleId, Severity

ALL_RULE_IDS: frozenset[RuleId] = frozenset(RuleId)

# camelCase keys used by external configuration files.
_KEY_ALIASES = {
    "maxNestingDepth": "max_nesting_depth",
    "maxLineLength": "max_line_length",
    "indentWidth": "indent_width",
    "vendorExempt": "vendor_exempt",
    "enabledRules": "enabled_rules",
    "disabledRules": "disabled_rules",
    "namingAllowlist": "naming_allowlist",
    "severityOverrides": "severity_overrides",
}


class OptionsError(ValueError):
    """Raised when a configuration value is invalid."""


@dataclass(frozen=True)
class CheckOptions:
    """Thresholds and switches for a single run. Read-only once built."""

    max_nesting_depth: int = 3
    max_line_length: int = 80
    indent_width: int = 2
    vendor_exempt: bool = False
    enabled_rules: frozenset[RuleId] = ALL_RULE_IDS
    naming_allowlist: frozenset[str] = frozenset()
    severity_overrides: Mapping[RuleId, Severity] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if self.indent_width != 2:
            raise OptionsError(
                f"indent_width is fixed at 2 spaces, got {self.indent_width}"
            )
        if self.max_nesting_depth < 1:
            raise OptionsError("max_nesting_depth must be at least 1")
        if self.max_line_length < 1:
            raise OptionsError("max_line_length must be at least 1")
        # Normalize containers so callers may pass lists/dicts.
        object.__setattr__(self, "enabled_rules", frozenset(self.enabled_rules))
        object.__setattr__(self, "naming_allowlist", frozenset(self.naming_allowlist))
        object.__setattr__(
            self, "severity_overrides", MappingProxyType(dict(self.severity_overrides))
        )

    def is_enabled(self, rule: RuleId) -> bool:
        return rule in self.enabled_rules

    def severity_for(self, rule: RuleId) -> Severity:
        return self.severity_overrides.get(rule, DEFAULT_SEVERITY)

    def replace(self, **changes: object) -> CheckOptions:
        """Return a copy with *changes* applied (e.g. a per-file vendor flag)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> CheckOptions:
        """Build options from a plain mapping, e.g. a decoded config file.

        Accepts both ``maxNestingDepth`` and ``max_nesting_depth`` style keys.
        ``disabledRules`` is subtracted from ``enabledRules``.
        """
        kwargs: dict[str, object] = {}
        disabled: Iterable[str] = ()
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name == "disabled_rules":
                disabled = _as_names(value, key)
            elif name == "enabled_rules":
                kwargs[name] = frozenset(_parse_rule(n) for n in _as_names(value, key))
            elif name == "naming_allowlist":
                kwargs[name] = frozenset(_as_names(value, key))
            elif name == "severity_overrides":
                if not isinstance(value, Mapping):
                    raise OptionsError(f"{key} must be a mapping")
                kwargs[name] = {
                    _parse_rule(str(r)): _parse_severity(str(s)) for r, s in value.items()
                }
            elif name in ("max_nesting_depth", "max_line_length", "indent_width"):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise OptionsError(f"{key} must be an integer, got {value!r}")
                kwargs[name] = value
            elif name == "vendor_exempt":
                if not isinstance(value, bool):
                    raise OptionsError(f"{key} must be a boolean, got {value!r}")
                kwargs[name] = value
            else:
                raise OptionsError(f"Unknown option: {key!r}")
        if disabled:
            enabled = kwargs.get("enabled_rules", ALL_RULE_IDS)
            kwargs["enabled_rules"] = frozenset(enabled) - {  # type: ignore[arg-type]
                _parse_rule(n) for n in disabled
            }
        return cls(**kwargs)  # type: ignore[arg-type]


def _as_names(value: object, key: str) -> list[str]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise OptionsError(f"{key} must be a list of names")
    return [str(v) for v in value]


def _parse_rule(name: str) -> RuleId:
    try:
        return RuleId.parse(name)
    except ValueError as exc:
        raise OptionsError(str(exc)) from exc


def _parse_severity(name: str) -> Severity:
    try:
        return Severity(name.upper())
    except ValueError:
        raise OptionsError(f"Unknown severity: {name!r}") from None
