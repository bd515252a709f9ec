"""Diagnostic model: structured findings about a stylesheet."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


class RuleCategory(Enum):
    SYNTAX = "syntax"
    NAMING = "naming"
    ORDERING = "ordering"
    STRUCTURE = "structure"
    FORMATTING = "formatting"


class RuleId(str, Enum):
    """Closed taxonomy of rules the engine can report."""

    # syntax
    UNTERMINATED_STRING = "UnterminatedString"
    UNTERMINATED_COMMENT = "UnterminatedComment"
    UNBALANCED_BRACES = "UnbalancedBraces"
    EMPTY_SELECTOR = "EmptySelector"

    # naming
    UNKNOWN_NAMING_PATTERN = "UnknownNamingPattern"

    # ordering
    DECLARATION_GROUP_OUT_OF_ORDER = "DeclarationGroupOutOfOrder"
    DECLARATION_NOT_ALPHABETICAL = "DeclarationNotAlphabetical"
    MISSING_GROUP_SEPARATOR = "MissingGroupSeparator"
    UNEXPECTED_BLANK_LINE_WITHIN_GROUP = "UnexpectedBlankLineWithinGroup"

    # structure
    EXCESSIVE_NESTING = "ExcessiveNesting"
    RULESET_SEPARATOR_VIOLATION = "RulesetSeparatorViolation"
    COMMENT_ALIGNMENT_VIOLATION = "CommentAlignmentViolation"
    LINE_TOO_LONG = "LineTooLong"

    # formatting
    TAB_CHARACTER_USED = "TabCharacterUsed"
    INDENTATION_MISMATCH = "IndentationMismatch"
    BRACE_SPACING = "BraceSpacing"
    CLOSING_BRACE_ALIGNMENT = "ClosingBraceAlignment"
    SELECTOR_NOT_ON_OWN_LINE = "SelectorNotOnOwnLine"
    COLON_SPACING = "ColonSpacing"
    HEX_CASE_OR_LENGTH = "HexCaseOrLength"
    QUOTE_STYLE = "QuoteStyle"
    UNIT_ON_ZERO_VALUE = "UnitOnZeroValue"
    COMMA_SPACING = "CommaSpacing"
    TRAILING_WHITESPACE = "TrailingWhitespace"
    FILE_END_WHITESPACE = "FileEndWhitespace"

    @property
    def category(self) -> RuleCategory:
        return RULE_CATEGORIES[self]

    @classmethod
    def parse(cls, name: str) -> RuleId:
        """Look up a rule by its identifier (``"BraceSpacing"``) or enum name."""
        try:
            return cls(name)
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown rule identifier: {name!r}") from None


RULE_CATEGORIES: dict[RuleId, RuleCategory] = {
    RuleId.UNTERMINATED_STRING: RuleCategory.SYNTAX,
    RuleId.UNTERMINATED_COMMENT: RuleCategory.SYNTAX,
    RuleId.UNBALANCED_BRACES: RuleCategory.SYNTAX,
    RuleId.EMPTY_SELECTOR: RuleCategory.SYNTAX,
    RuleId.UNKNOWN_NAMING_PATTERN: RuleCategory.NAMING,
    RuleId.DECLARATION_GROUP_OUT_OF_ORDER: RuleCategory.ORDERING,
    RuleId.DECLARATION_NOT_ALPHABETICAL: RuleCategory.ORDERING,
    RuleId.MISSING_GROUP_SEPARATOR: RuleCategory.ORDERING,
    RuleId.UNEXPECTED_BLANK_LINE_WITHIN_GROUP: RuleCategory.ORDERING,
    RuleId.EXCESSIVE_NESTING: RuleCategory.STRUCTURE,
    RuleId.RULESET_SEPARATOR_VIOLATION: RuleCategory.STRUCTURE,
    RuleId.COMMENT_ALIGNMENT_VIOLATION: RuleCategory.STRUCTURE,
    RuleId.LINE_TOO_LONG: RuleCategory.STRUCTURE,
    RuleId.TAB_CHARACTER_USED: RuleCategory.FORMATTING,
    RuleId.INDENTATION_MISMATCH: RuleCategory.FORMATTING,
    RuleId.BRACE_SPACING: RuleCategory.FORMATTING,
    RuleId.CLOSING_BRACE_ALIGNMENT: RuleCategory.FORMATTING,
    RuleId.SELECTOR_NOT_ON_OWN_LINE: RuleCategory.FORMATTING,
    RuleId.COLON_SPACING: RuleCategory.FORMATTING,
    RuleId.HEX_CASE_OR_LENGTH: RuleCategory.FORMATTING,
    RuleId.QUOTE_STYLE: RuleCategory.FORMATTING,
    RuleId.UNIT_ON_ZERO_VALUE: RuleCategory.FORMATTING,
    RuleId.COMMA_SPACING: RuleCategory.FORMATTING,
    RuleId.TRAILING_WHITESPACE: RuleCategory.FORMATTING,
    RuleId.FILE_END_WHITESPACE: RuleCategory.FORMATTING,
}

DEFAULT_SEVERITY = Severity.ERROR


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a stylesheet.

    Attributes:
        rule: Identifier for the rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        file_id: The input the finding belongs to.
        line: 1-based line of the offending source.
        column: 1-based column of the offending source.
        fix: Suggested remediation, advisory only.
    """

    rule: RuleId
    severity: Severity
    message: str
    file_id: str = "<input>"
    line: int = 1
    column: int = 1
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def sort_key(self) -> tuple[str, int, int, str, str]:
        return (self.file_id, self.line, self.column, self.rule.value, self.message)

    def to_dict(self) -> dict[str, object]:
        return {
            "fileId": self.file_id,
            "line": self.line,
            "column": self.column,
            "ruleId": self.rule.value,
            "severity": self.severity.value,
            "message": self.message,
            "fix": self.fix,
        }

    def __str__(self) -> str:
        return (
            f"{self.file_id}:{self.line}:{self.column}: "
            f"{self.severity.value} [{self.rule.value}] {self.message}"
        )
