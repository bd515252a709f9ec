"""stylecheck model layer -- public type re-exports."""

from stylecheck.model.diagnostic import (
    DEFAULT_SEVERITY,
    Diagnostic,
    RuleCategory,
    RuleId,
    Severity,
)
from stylecheck.model.options import ALL_RULE_IDS, CheckOptions, OptionsError
from stylecheck.model.tokens import Token, TokenKind
from stylecheck.model.tree import (
    AtRule,
    AttributeSelector,
    Comment,
    CompoundSelector,
    Declaration,
    FunctionCall,
    Node,
    Ruleset,
    Selector,
    Stylesheet,
)

__all__ = [
    # tokens
    "Token",
    "TokenKind",
    # tree
    "AttributeSelector",
    "CompoundSelector",
    "Selector",
    "FunctionCall",
    "Declaration",
    "Comment",
    "Ruleset",
    "AtRule",
    "Node",
    "Stylesheet",
    # diagnostic
    "Severity",
    "RuleCategory",
    "RuleId",
    "Diagnostic",
    "DEFAULT_SEVERITY",
    # options
    "CheckOptions",
    "OptionsError",
    "ALL_RULE_IDS",
]
