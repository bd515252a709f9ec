"""Stylesheet tree model: selectors, declarations, rulesets and at-rules.

Rulesets and at-rules live in a single arena (``Stylesheet.nodes``) and refer
to each other by index; the parent relation is a lookup, never an owning
reference.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import cached_property
from typing import Union

from stylecheck.model.tokens import Token, TokenKind


@dataclass(frozen=True)
class AttributeSelector:
    """``[name op "value" flag]``; ``quote`` is the quote character used, if any."""

    name: str
    operator: str = ""
    value: str = ""
    quote: str = ""
    flag: str = ""


@dataclass(frozen=True)
class CompoundSelector:
    """A run of simple selectors with no combinator between them.

    ``element`` holds the type selector, ``*``, a parent reference (``&`` or
    ``&-suffix``) or a placeholder (``%name``).
    """

    element: str = ""
    classes: tuple[str, ...] = ()
    ids: tuple[str, ...] = ()
    attributes: tuple[AttributeSelector, ...] = ()
    pseudo_classes: tuple[str, ...] = ()
    pseudo_elements: tuple[str, ...] = ()

    @property
    def is_parent_reference(self) -> bool:
        return self.element.startswith("&")

    @property
    def parent_suffix(self) -> str:
        """Text glued onto the parent selector, e.g. ``-cell`` for ``&-cell``."""
        return self.element[1:] if self.is_parent_reference else ""


@dataclass(frozen=True)
class Selector:
    """One entry of a selector list."""

    text: str
    line: int
    column: int
    compounds: tuple[CompoundSelector, ...] = ()
    combinators: tuple[str, ...] = ()

    @property
    def class_names(self) -> tuple[str, ...]:
        return tuple(name for compound in self.compounds for name in compound.classes)

    @property
    def starts_with_parent_reference(self) -> bool:
        return bool(self.compounds) and self.compounds[0].is_parent_reference


@dataclass(frozen=True)
class FunctionCall:
    """A function call found in a declaration value, with its split arguments."""

    name: str
    arguments: tuple[str, ...]


@dataclass(frozen=True)
class Declaration:
    """A ``property: value`` pair.

    ``colon_index`` and ``value_start``/``value_end`` index into the owning
    stylesheet's token stream.
    """

    property: str
    value: str
    line: int
    column: int
    end_line: int
    colon_index: int
    value_start: int
    value_end: int
    functions: tuple[FunctionCall, ...] = ()
    important: bool = False

    @property
    def name(self) -> str:
        return self.property.lower()

    @property
    def is_variable(self) -> bool:
        """Preprocessor variables and custom properties are opaque to ordering."""
        return self.property.startswith("$") or self.property.startswith("--")


@dataclass(frozen=True)
class Comment:
    """A statement-level comment; ``attached`` when it documents the next node."""

    token: Token
    attached: bool = False

    @property
    def is_doc(self) -> bool:
        return self.token.kind is TokenKind.DOC_COMMENT

    @property
    def is_block(self) -> bool:
        return self.token.lexeme.startswith("/*")

    @property
    def text(self) -> str:
        return self.token.lexeme

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    @property
    def end_line(self) -> int:
        return self.token.end_line


@dataclass
class Ruleset:
    """A selector list with its declarations and nested nodes.

    Built once by the parser and not mutated afterwards.
    """

    index: int
    selectors: tuple[Selector, ...]
    prelude: str
    line: int
    column: int
    depth: int
    open_brace: Token
    parent: int | None = None
    at_rule: int | None = None
    close_brace: Token | None = None
    end_line: int = 0
    declarations: list[Declaration] = field(default_factory=list)
    children: list[int] = field(default_factory=list)
    comment: Comment | None = None

    @property
    def in_at_rule(self) -> bool:
        return self.at_rule is not None

    @property
    def level(self) -> int:
        """1-based nesting level as shown to users (top level is 1)."""
        return self.depth + 1

    @property
    def start_line(self) -> int:
        """First line of the node including its attached comment."""
        return self.comment.line if self.comment is not None else self.line


@dataclass
class AtRule:
    """``@name prelude;`` or ``@name prelude { ... }``.

    ``prelude_start``/``prelude_end`` index the prelude's tokens in the owning
    stylesheet's token stream.
    """

    index: int
    name: str
    prelude: str
    line: int
    column: int
    depth: int
    parent: int | None = None
    at_rule: int | None = None
    open_brace: Token | None = None
    close_brace: Token | None = None
    end_line: int = 0
    declarations: list[Declaration] = field(default_factory=list)
    children: list[int] = field(default_factory=list)
    comment: Comment | None = None
    prelude_start: int = 0
    prelude_end: int = 0

    @property
    def has_block(self) -> bool:
        return self.open_brace is not None

    @property
    def start_line(self) -> int:
        return self.comment.line if self.comment is not None else self.line


Node = Union[Ruleset, AtRule]


@dataclass
class Stylesheet:
    """Everything parsed out of one input: the node arena plus the raw tokens."""

    file_id: str
    tokens: tuple[Token, ...]
    nodes: list[Node] = field(default_factory=list)
    top_level: list[int] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    @cached_property
    def text(self) -> str:
        return "".join(token.lexeme for token in self.tokens)

    @cached_property
    def lines(self) -> list[str]:
        """Source lines without their line terminators."""
        return [line.rstrip("\r") for line in self.text.split("\n")]

    def node(self, index: int) -> Node:
        return self.nodes[index]

    def parent_of(self, node: Node) -> Ruleset | None:
        """The enclosing ruleset, or ``None`` at top level."""
        if node.parent is None:
            return None
        parent = self.nodes[node.parent]
        return parent if isinstance(parent, Ruleset) else None

    def rulesets(self) -> Iterator[Ruleset]:
        for node in self.nodes:
            if isinstance(node, Ruleset):
                yield node

    def at_rules(self) -> Iterator[AtRule]:
        for node in self.nodes:
            if isinstance(node, AtRule):
                yield node

    def sibling_groups(self) -> Iterator[list[Node]]:
        """Yield each list of same-level siblings, top level first."""
        yield [self.nodes[i] for i in self.top_level]
        for node in self.nodes:
            if node.children:
                yield [self.nodes[i] for i in node.children]

    def is_blank_line(self, line: int) -> bool:
        """True when 1-based *line* exists and holds only whitespace."""
        if line < 1 or line > len(self.lines):
            return False
        return not self.lines[line - 1].strip()

    def blank_lines_between(self, first: int, last: int) -> int:
        """Count blank lines strictly between lines *first* and *last*."""
        return sum(1 for line in range(first + 1, last) if self.is_blank_line(line))

    def has_content_between(self, first: int, last: int) -> bool:
        """True when any line strictly between *first* and *last* is not blank."""
        return any(
            not self.is_blank_line(line)
            for line in range(first + 1, last)
            if 1 <= line <= len(self.lines)
        )
