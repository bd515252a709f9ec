"""Lark-driven parsing of individual selectors into compound selectors."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from stylecheck.model.tree import AttributeSelector, CompoundSelector, Selector
from stylecheck.parser.errors import SelectorSyntaxError

__all__ = ["build_selector", "parse_selector_structure"]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

_COMBINATORS = {
    "CHILD": ">",
    "NEXT_SIBLING": "+",
    "SUBSEQUENT_SIBLING": "~",
    "DESCENDANT": " ",
}

_ATTRIBUTE_RE = re.compile(
    r"""
    ^\[\s*
    (?P<name>[^\s~|^$*=\]]+)                      # attribute name
    \s*
    (?:
        (?P<op>[~|^$*]?=)\s*                        # match operator
        (?P<value>"[^"]*"|'[^']*'|[^\s\]]+)         # quoted or bare value
        \s*(?P<flag>[iIsS])?\s*                    # case flag
    )?
    \]$
    """,
    re.VERBOSE,
)

# Used when the grammar rejects a selector; still finds its class names.
_LOOSE_CLASS_RE = re.compile(r"\.(-?[A-Za-z_][A-Za-z0-9_-]*)")


def _attribute(raw: str) -> AttributeSelector:
    match = _ATTRIBUTE_RE.match(raw)
    if match is None:
        return AttributeSelector(name=raw[1:-1].strip())
    value = match.group("value") or ""
    quote = ""
    if value[:1] in ("'", '"'):
        quote = value[0]
        value = value[1:-1]
    return AttributeSelector(
        name=match.group("name"),
        operator=match.group("op") or "",
        value=value,
        quote=quote,
        flag=match.group("flag") or "",
    )


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Turn the selector parse tree into ``CompoundSelector`` objects."""

    def combinator(self, items: list[Token]) -> str:
        return _COMBINATORS[items[0].type]

    def compound(self, items: list[Token]) -> CompoundSelector:
        element = ""
        classes: list[str] = []
        ids: list[str] = []
        attributes: list[AttributeSelector] = []
        pseudo_classes: list[str] = []
        pseudo_elements: list[str] = []
        for item in items:
            value = str(item)
            if item.type == "CLASS":
                classes.append(value[1:])
            elif item.type == "ID":
                ids.append(value[1:])
            elif item.type == "ATTRIBUTE":
                attributes.append(_attribute(value))
            elif item.type == "PSEUDO_CLASS":
                pseudo_classes.append(value[1:])
            elif item.type == "PSEUDO_ELEMENT":
                pseudo_elements.append(value[2:])
            else:
                element = value
        return CompoundSelector(
            element=element,
            classes=tuple(classes),
            ids=tuple(ids),
            attributes=tuple(attributes),
            pseudo_classes=tuple(pseudo_classes),
            pseudo_elements=tuple(pseudo_elements),
        )

    def start(
        self, items: list[object]
    ) -> tuple[tuple[CompoundSelector, ...], tuple[str, ...]]:
        compounds = tuple(i for i in items if isinstance(i, CompoundSelector))
        combinators = tuple(i for i in items if isinstance(i, str))
        return compounds, combinators


@lru_cache(maxsize=1)
def _selector_parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
        transformer=SelectorTransformer(),
    )


def normalize_selector_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return " ".join(text.split())


def parse_selector_structure(
    text: str,
) -> tuple[tuple[CompoundSelector, ...], tuple[str, ...]]:
    """Parse normalized selector *text* into compounds and combinators.

    Raises :class:`SelectorSyntaxError` when the grammar rejects the text.
    """
    try:
        return _selector_parser().parse(text)  # type: ignore[return-value]
    except UnexpectedInput as exc:
        raise SelectorSyntaxError(str(exc), column=exc.column) from exc
    except LarkError as exc:
        raise SelectorSyntaxError(str(exc)) from exc


def build_selector(raw: str, line: int, column: int) -> Selector:
    """Build a :class:`Selector`, falling back to a loose class scan on bad syntax."""
    text = normalize_selector_text(raw)
    try:
        compounds, combinators = parse_selector_structure(text)
    except SelectorSyntaxError as exc:
        logger.debug("Selector %r at %d:%d not parsed: %s", text, line, column, exc)
        classes = tuple(_LOOSE_CLASS_RE.findall(text))
        compounds = (CompoundSelector(classes=classes),)
        combinators = ()
    return Selector(
        text=text,
        line=line,
        column=column,
        compounds=compounds,
        combinators=combinators,
    )
