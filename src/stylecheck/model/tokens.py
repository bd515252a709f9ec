"""Token model produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Lexical category of a token."""

    IDENT = "IDENT"
    NUMBER = "NUMBER"
    HASH = "HASH"
    URL = "URL"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COLON = "COLON"
    SEMICOLON = "SEMICOLON"
    COMMA = "COMMA"
    STRING = "STRING"
    COMMENT = "COMMENT"
    DOC_COMMENT = "DOC_COMMENT"
    AT_KEYWORD = "AT_KEYWORD"
    COMBINATOR = "COMBINATOR"
    DELIM = "DELIM"
    WHITESPACE = "WHITESPACE"
    NEWLINE = "NEWLINE"
    ERROR = "ERROR"


# Kinds that carry no meaning for the parser.
TRIVIA = frozenset({
    TokenKind.WHITESPACE,
    TokenKind.NEWLINE,
    TokenKind.COMMENT,
    TokenKind.DOC_COMMENT,
})


@dataclass(frozen=True)
class Token:
    """A single lexeme with its source position.

    ``offset`` is a character offset into the source text; ``line`` and
    ``column`` are 1-based.
    """

    kind: TokenKind
    lexeme: str
    offset: int
    line: int
    column: int

    @property
    def is_trivia(self) -> bool:
        return self.kind in TRIVIA

    @property
    def is_comment(self) -> bool:
        return self.kind is TokenKind.COMMENT or self.kind is TokenKind.DOC_COMMENT

    @property
    def end_line(self) -> int:
        """Line on which the last character of the lexeme sits."""
        if self.kind is TokenKind.NEWLINE:
            return self.line
        return self.line + self.lexeme.count("\n")

    def __str__(self) -> str:
        return f"{self.kind.value}({self.lexeme!r}) at {self.line}:{self.column}"
