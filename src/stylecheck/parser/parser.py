"""Parser from tokens to a :class:`Stylesheet` tree.

The parser never raises on malformed input. Unclosed blocks are closed at end
of input, stray braces are skipped, and every problem it recovers from is
returned as a diagnostic alongside the best-effort tree.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from stylecheck.lexer import tokenize
from stylecheck.model.diagnostic import DEFAULT_SEVERITY, Diagnostic, RuleId
from stylecheck.model.tokens import Token, TokenKind
from stylecheck.model.tree import (
    AtRule,
    Comment,
    Declaration,
    FunctionCall,
    Node,
    Ruleset,
    Selector,
    Stylesheet,
)
from stylecheck.parser.selectors import build_selector, normalize_selector_text

__all__ = ["parse", "parse_stylesheet"]

logger = logging.getLogger(__name__)

_OPENERS = {TokenKind.LPAREN: TokenKind.RPAREN, TokenKind.LBRACKET: TokenKind.RBRACKET}
_CLOSERS = frozenset(_OPENERS.values())
_TERMINATORS = frozenset({TokenKind.SEMICOLON, TokenKind.LBRACE, TokenKind.RBRACE})


@dataclass
class _Frame:
    """An open block: where its statements go and what they inherit."""

    owner: Node | None
    depth: int
    parent: int | None
    at_rule: int | None
    open_brace: Token | None = None
    # Comment seen but not yet attached, and line breaks after it.
    pending: Token | None = None
    newlines_after_pending: int = 0


class _StyleParser:
    """Single-use parser over one token stream."""

    def __init__(self, tokens: Sequence[Token], file_id: str) -> None:
        self.tokens = list(tokens)
        self.pos = 0
        self.sheet = Stylesheet(file_id=file_id, tokens=tuple(self.tokens))
        self.diagnostics: list[Diagnostic] = []

    # ---- helpers ----

    def _diag(
        self, rule: RuleId, message: str, token: Token, fix: str | None = None
    ) -> None:
        self.diagnostics.append(
            Diagnostic(
                rule=rule,
                severity=DEFAULT_SEVERITY,
                message=message,
                file_id=self.sheet.file_id,
                line=token.line,
                column=token.column,
                fix=fix,
            )
        )

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _significant(self, start: int, end: int) -> list[int]:
        return [i for i in range(start, end) if not self.tokens[i].is_trivia]

    def _text(self, start: int, end: int) -> str:
        return "".join(
            " " if t.is_comment else t.lexeme for t in self.tokens[start:end]
        )

    def _find_terminator(self, start: int) -> int:
        """Index of the first ``;``, ``{`` or ``}`` outside parens/brackets."""
        stack: list[TokenKind] = []
        index = start
        while index < len(self.tokens):
            kind = self.tokens[index].kind
            if kind in _OPENERS:
                stack.append(_OPENERS[kind])
            elif kind in _CLOSERS:
                if stack and stack[-1] is kind:
                    stack.pop()
            elif not stack and kind in _TERMINATORS:
                return index
            index += 1
        return index

    def _last_line(self) -> int:
        return self.tokens[-1].end_line if self.tokens else 1

    # ---- entry point ----

    def parse(self) -> tuple[Stylesheet, list[Diagnostic]]:
        for token in self.tokens:
            if token.kind is TokenKind.ERROR:
                self._report_lexical_error(token)
        open_frames = self._parse_blocks()
        unclosed = [f.open_brace for f in open_frames if f.open_brace is not None]
        if unclosed:
            innermost = unclosed[-1]
            count = len(unclosed)
            self._diag(
                RuleId.UNBALANCED_BRACES,
                f"Unclosed '{{' at end of input ({count} block(s) closed implicitly).",
                innermost,
                fix="Add the missing '}'.",
            )
        return self.sheet, self.diagnostics

    def _report_lexical_error(self, token: Token) -> None:
        if token.lexeme.startswith("/*"):
            self._diag(
                RuleId.UNTERMINATED_COMMENT,
                "Comment is never closed.",
                token,
                fix="Close the comment with '*/'.",
            )
        else:
            quote = token.lexeme[:1]
            self._diag(
                RuleId.UNTERMINATED_STRING,
                f"String starting with {quote} is not closed on the same line.",
                token,
                fix=f"Close the string with {quote}.",
            )

    # ---- blocks ----

    def _flush(self, frame: _Frame, attached: bool) -> Comment | None:
        if frame.pending is None:
            return None
        comment = Comment(token=frame.pending, attached=attached)
        self.sheet.comments.append(comment)
        frame.pending = None
        return comment

    def _parse_blocks(self) -> list[_Frame]:
        """Parse every statement, nested blocks included, on an explicit stack.

        Opening a block pushes a frame and its ``}`` pops it, so nesting depth
        is bounded by memory rather than the interpreter's recursion limit.
        Returns the frames still open at end of input, top level first.
        """
        stack = [_Frame(owner=None, depth=0, parent=None, at_rule=None)]
        while not self._at_end():
            frame = stack[-1]
            token = self.tokens[self.pos]
            kind = token.kind

            if token.is_comment:
                self._flush(frame, attached=False)
                frame.pending = token
                frame.newlines_after_pending = 0
                self.pos += 1
                continue
            if kind is TokenKind.NEWLINE:
                frame.newlines_after_pending += 1
                self.pos += 1
                continue
            if kind is TokenKind.WHITESPACE or kind is TokenKind.SEMICOLON:
                self.pos += 1
                continue

            if kind is TokenKind.RBRACE:
                self._flush(frame, attached=False)
                self.pos += 1
                if frame.owner is None:
                    self._diag(
                        RuleId.UNBALANCED_BRACES,
                        "Unexpected '}' with no matching '{'.",
                        token,
                        fix="Remove the extra '}'.",
                    )
                    continue
                stack.pop()
                frame.owner.close_brace = token
                frame.owner.end_line = token.line
                continue

            # Comments directly above a statement, with no blank line between,
            # document it.
            attach = frame.pending is not None and frame.newlines_after_pending <= 1
            child: _Frame | None = None
            if kind is TokenKind.AT_KEYWORD:
                comment = self._flush(frame, attached=attach)
                child = self._parse_at_rule(frame, comment if attach else None)
            else:
                terminator = self._find_terminator(self.pos)
                at_brace = (
                    terminator < len(self.tokens)
                    and self.tokens[terminator].kind is TokenKind.LBRACE
                )
                if at_brace:
                    comment = self._flush(frame, attached=attach)
                    child = self._parse_ruleset(
                        terminator, frame, comment if attach else None
                    )
                else:
                    self._flush(frame, attached=False)
                    declaration = self._parse_declaration(self.pos, terminator)
                    if declaration is not None:
                        self._container_declarations(frame.owner).append(declaration)
                    self.pos = terminator
                    if not self._at_end() and self.tokens[self.pos].kind is TokenKind.SEMICOLON:
                        self.pos += 1
            if child is not None:
                stack.append(child)

        for frame in reversed(stack):
            self._flush(frame, attached=False)
            if frame.owner is not None:
                frame.owner.end_line = self._last_line()
        return stack

    def _container_declarations(self, owner: Node | None) -> list[Declaration]:
        return self.sheet.declarations if owner is None else owner.declarations

    def _add_node(self, node: Node, owner: Node | None) -> None:
        self.sheet.nodes.append(node)
        if owner is None:
            self.sheet.top_level.append(node.index)
        else:
            owner.children.append(node.index)

    # ---- rulesets ----

    def _parse_ruleset(
        self, brace_index: int, frame: _Frame, comment: Comment | None
    ) -> _Frame:
        open_brace = self.tokens[brace_index]
        selectors = self._split_selectors(self.pos, brace_index, open_brace)
        if selectors:
            line, column = selectors[0].line, selectors[0].column
        else:
            line, column = open_brace.line, open_brace.column
        ruleset = Ruleset(
            index=len(self.sheet.nodes),
            selectors=tuple(selectors),
            prelude=normalize_selector_text(self._text(self.pos, brace_index)),
            line=line,
            column=column,
            depth=frame.depth,
            open_brace=open_brace,
            parent=frame.parent,
            at_rule=frame.at_rule,
            comment=comment,
        )
        self._add_node(ruleset, frame.owner)
        self.pos = brace_index + 1
        return _Frame(
            owner=ruleset,
            depth=frame.depth + 1,
            parent=ruleset.index,
            at_rule=frame.at_rule,
            open_brace=open_brace,
        )

    def _split_selectors(self, start: int, end: int, open_brace: Token) -> list[Selector]:
        """Split a prelude on top-level commas and build each selector."""
        parts: list[tuple[int, int]] = []
        depth = 0
        part_start = start
        for index in range(start, end):
            kind = self.tokens[index].kind
            if kind in _OPENERS:
                depth += 1
            elif kind in _CLOSERS:
                depth = max(depth - 1, 0)
            elif kind is TokenKind.COMMA and depth == 0:
                parts.append((part_start, index))
                part_start = index + 1
        parts.append((part_start, end))

        selectors: list[Selector] = []
        empty = 0
        for part_start, part_end in parts:
            significant = self._significant(part_start, part_end)
            if not significant:
                empty += 1
                continue
            first = self.tokens[significant[0]]
            raw = self._text(significant[0], significant[-1] + 1)
            selectors.append(build_selector(raw, first.line, first.column))

        if not selectors:
            self._diag(
                RuleId.EMPTY_SELECTOR,
                "Ruleset has no selector before '{'.",
                open_brace,
                fix="Add a selector or remove the block.",
            )
        elif empty:
            self._diag(
                RuleId.EMPTY_SELECTOR,
                f"Selector list contains {empty} empty entr{'y' if empty == 1 else 'ies'}.",
                open_brace,
                fix="Remove the stray comma.",
            )
        return selectors

    # ---- at-rules ----

    def _parse_at_rule(self, frame: _Frame, comment: Comment | None) -> _Frame | None:
        """Parse one at-rule; returns the frame for its block, if it has one."""
        keyword = self.tokens[self.pos]
        terminator = self._find_terminator(self.pos + 1)
        significant = self._significant(self.pos + 1, terminator)
        if significant:
            prelude_start, prelude_end = significant[0], significant[-1] + 1
        else:
            prelude_start = prelude_end = terminator
        node = AtRule(
            index=len(self.sheet.nodes),
            name=keyword.lexeme[1:].lower(),
            prelude=normalize_selector_text(self._text(self.pos + 1, terminator)),
            line=keyword.line,
            column=keyword.column,
            depth=frame.depth,
            parent=frame.parent,
            at_rule=frame.at_rule,
            comment=comment,
            prelude_start=prelude_start,
            prelude_end=prelude_end,
        )
        self._add_node(node, frame.owner)

        if terminator >= len(self.tokens):
            self.pos = terminator
            node.end_line = self._last_line()
            return None
        end_token = self.tokens[terminator]
        if end_token.kind is TokenKind.LBRACE:
            node.open_brace = end_token
            self.pos = terminator + 1
            # At-rule blocks do not add a nesting level of their own.
            return _Frame(
                owner=node,
                depth=frame.depth,
                parent=frame.parent,
                at_rule=node.index,
                open_brace=end_token,
            )
        if end_token.kind is TokenKind.SEMICOLON:
            self.pos = terminator + 1
        else:
            self.pos = terminator
        node.end_line = end_token.line
        return None

    # ---- declarations ----

    def _parse_declaration(self, start: int, end: int) -> Declaration | None:
        significant = self._significant(start, end)
        if not significant:
            return None
        colon = next(
            (i for i in significant if self.tokens[i].kind is TokenKind.COLON), None
        )
        if colon is None:
            logger.debug(
                "Skipping statement without ':' at %d:%d",
                self.tokens[significant[0]].line,
                self.tokens[significant[0]].column,
            )
            return None
        name = self._text(significant[0], colon).strip()
        if not name:
            return None

        value_indices = [i for i in significant if i > colon]
        if value_indices:
            value_start, value_end = value_indices[0], value_indices[-1] + 1
        else:
            value_start = value_end = colon + 1
        value = self._text(value_start, value_end).strip()
        first = self.tokens[significant[0]]
        last = self.tokens[significant[-1]]
        return Declaration(
            property=name,
            value=value,
            line=first.line,
            column=first.column,
            end_line=last.end_line,
            colon_index=colon,
            value_start=value_start,
            value_end=value_end,
            functions=self._function_calls(value_start, value_end),
            important=value.lower().replace(" ", "").endswith("!important"),
        )

    def _function_calls(self, start: int, end: int) -> tuple[FunctionCall, ...]:
        """Collect ``name(arg, arg)`` calls in a value, innermost calls included."""
        calls: list[FunctionCall] = []
        # Each frame: (name, index after "(", argument start indices)
        stack: list[tuple[str, int, list[int]]] = []
        for index in range(start, end):
            token = self.tokens[index]
            if token.kind is TokenKind.LPAREN:
                previous = self.tokens[index - 1] if index > start else None
                name = previous.lexeme if previous is not None and previous.kind is TokenKind.IDENT else ""
                stack.append((name, index + 1, [index + 1]))
            elif token.kind is TokenKind.COMMA and stack:
                stack[-1][2].append(index + 1)
            elif token.kind is TokenKind.RPAREN and stack:
                name, _, arg_starts = stack.pop()
                bounds = arg_starts + [index + 1]
                arguments = tuple(
                    self._text(a, b - 1).strip() for a, b in zip(bounds, bounds[1:])
                )
                if name:
                    calls.append(FunctionCall(name=name, arguments=arguments))
        return tuple(calls)


def parse(
    tokens: Sequence[Token], file_id: str = "<input>"
) -> tuple[Stylesheet, list[Diagnostic]]:
    """Parse a token stream into a stylesheet plus recovery diagnostics."""
    return _StyleParser(tokens, file_id).parse()


def parse_stylesheet(
    source: str, file_id: str = "<input>"
) -> tuple[Stylesheet, list[Diagnostic]]:
    """Tokenize and parse *source* in one step."""
    return parse(tokenize(source), file_id=file_id)
