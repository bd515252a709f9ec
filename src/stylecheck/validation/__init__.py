from stylecheck.validation.naming import class_tokens
from stylecheck.validation.ordering import DeclarationGroup, property_group
from stylecheck.validation.rules import ALL_RULES, RULE_OUTPUTS
from stylecheck.validation.validator import validate

__all__ = [
    "validate",
    "ALL_RULES",
    "RULE_OUTPUTS",
    "DeclarationGroup",
    "property_group",
    "class_tokens",
]
