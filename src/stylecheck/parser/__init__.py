from stylecheck.parser.errors import SelectorSyntaxError
from stylecheck.parser.parser import parse, parse_stylesheet
from stylecheck.parser.selectors import build_selector, parse_selector_structure

__all__ = [
    "parse",
    "parse_stylesheet",
    "build_selector",
    "parse_selector_structure",
    "SelectorSyntaxError",
]
