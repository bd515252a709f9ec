"""Hand-written lexer for CSS and its block-nesting preprocessor dialect.

The lexer is total: every character of the input ends up in exactly one
token, so joining the lexemes reproduces the source. Problems such as an
unterminated string or comment become ``ERROR`` tokens instead of exceptions.
"""

from __future__ import annotations

from stylecheck.model.tokens import Token, TokenKind

__all__ = ["tokenize"]

SINGLE_CHAR_TOKENS = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    ">": TokenKind.COMBINATOR,
    "+": TokenKind.COMBINATOR,
    "~": TokenKind.COMBINATOR,
    "&": TokenKind.COMBINATOR,
}

_INLINE_SPACE = " \t\f\r"


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens carrying 1-based line/column positions."""
    tokens: list[Token] = []
    index = 0
    line = 1
    line_start = 0
    length = len(text)

    while index < length:
        char = text[index]
        start = index

        if char == "\n" or text.startswith("\r\n", index):
            index += 1 if char == "\n" else 2
            kind = TokenKind.NEWLINE
        elif char in _INLINE_SPACE:
            index = _read_while(text, index, lambda c: c in _INLINE_SPACE)
            # A lone "\r" before "\n" belongs to the newline token.
            if text.startswith("\r\n", index - 1):
                index -= 1
            kind = TokenKind.WHITESPACE
        elif text.startswith("/*", index):
            index, kind = _read_block_comment(text, index)
        elif text.startswith("//", index):
            index = _read_while(text, index, lambda c: c not in "\r\n")
            kind = TokenKind.COMMENT
        elif char in "\"'":
            index, kind = _read_string(text, index)
        elif char == "@" and _is_ident_start(text, index + 1):
            index = _read_identifier(text, index + 1)
            kind = TokenKind.AT_KEYWORD
        elif char == "#" and text.startswith("#{", index):
            index = _read_interpolation(text, index)
            kind = TokenKind.HASH
        elif char == "#" and index + 1 < length and _is_name_char(text[index + 1]):
            index = _read_while(text, index + 1, _is_name_char)
            kind = TokenKind.HASH
        elif _is_number_start(text, index):
            index = _read_number(text, index)
            kind = TokenKind.NUMBER
        elif _is_ident_start(text, index):
            index = _read_identifier(text, index)
            if text[start:index].lower() == "url" and text.startswith("(", index):
                url_end = _read_url(text, index)
                if url_end is not None:
                    index = url_end
                    kind = TokenKind.URL
                else:
                    kind = TokenKind.IDENT
            else:
                kind = TokenKind.IDENT
        elif char in SINGLE_CHAR_TOKENS:
            index += 1
            kind = SINGLE_CHAR_TOKENS[char]
        else:
            index += 1
            kind = TokenKind.DELIM

        lexeme = text[start:index]
        tokens.append(Token(kind, lexeme, start, line, start - line_start + 1))

        newlines = lexeme.count("\n")
        if newlines:
            line += newlines
            line_start = start + lexeme.rindex("\n") + 1

    return tokens


def _read_while(text: str, index: int, predicate) -> int:  # type: ignore[no-untyped-def]
    while index < len(text) and predicate(text[index]):
        index += 1
    return index


def _read_block_comment(text: str, index: int) -> tuple[int, TokenKind]:
    end = text.find("*/", index + 2)
    if end == -1:
        return len(text), TokenKind.ERROR
    # "/**/" is an empty plain comment, not a doc comment.
    is_doc = text.startswith("/**", index) and end > index + 2
    return end + 2, TokenKind.DOC_COMMENT if is_doc else TokenKind.COMMENT


def _read_string(text: str, index: int) -> tuple[int, TokenKind]:
    quote = text[index]
    index += 1
    while index < len(text):
        char = text[index]
        if char == quote:
            return index + 1, TokenKind.STRING
        if char == "\\" and index + 1 < len(text):
            index += 2
            continue
        if char in "\r\n":
            return index, TokenKind.ERROR
        index += 1
    return index, TokenKind.ERROR


def _read_interpolation(text: str, index: int) -> int:
    end = text.find("}", index + 2)
    line_end = text.find("\n", index + 2)
    if end == -1 or (line_end != -1 and line_end < end):
        # Not a real interpolation; keep just the "#".
        return index + 1
    return end + 1


def _read_url(text: str, index: int) -> int | None:
    """Read an unquoted ``url(...)`` argument; ``None`` leaves it to normal lexing."""
    first = _read_while(text, index + 1, lambda c: c in " \t")
    if first < len(text) and text[first] in "\"'":
        return None
    end = text.find(")", index)
    line_end = text.find("\n", index)
    if end == -1 or (line_end != -1 and line_end < end):
        return None
    return end + 1


def _read_number(text: str, index: int) -> int:
    if text[index] in "+-":
        index += 1
    index = _read_while(text, index, str.isdigit)
    if index + 1 < len(text) and text[index] == "." and text[index + 1].isdigit():
        index = _read_while(text, index + 1, str.isdigit)
    if index < len(text) and text[index] == "%":
        return index + 1
    if _is_ident_start(text, index):
        index = _read_identifier(text, index)
    return index


def _read_identifier(text: str, index: int) -> int:
    while index < len(text):
        char = text[index]
        if char == "\\" and index + 1 < len(text) and text[index + 1] not in "\r\n":
            index += 2
        elif _is_name_char(char):
            index += 1
        else:
            break
    return index


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char in "-_" or ord(char) >= 0x80


def _is_ident_start(text: str, index: int) -> bool:
    if index >= len(text):
        return False
    char = text[index]
    if char.isalpha() or char == "_" or ord(char) >= 0x80:
        return True
    if char == "\\":
        return index + 1 < len(text) and text[index + 1] not in "\r\n"
    if char == "-" and index + 1 < len(text):
        nxt = text[index + 1]
        return nxt.isalpha() or nxt in "-_" or ord(nxt) >= 0x80
    return False


def _is_number_start(text: str, index: int) -> bool:
    char = text[index]
    if char.isdigit():
        return True
    nxt = text[index + 1] if index + 1 < len(text) else ""
    if char == ".":
        return nxt.isdigit()
    if char in "+-":
        if nxt.isdigit():
            return True
        return nxt == "." and index + 2 < len(text) and text[index + 2].isdigit()
    return False
