"""Turns caelis source text into tokens."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from caelis.ast import Span


class TokenKind(enum.Enum):
    LET = "let"
    IN = "in"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    ARROW = "->"
    PIPE_INTO = "|>"
    PIPE_FROM = "<|"
    DOLLAR_SIGN = "$"
    AMPERSAND = "&"
    PIPE = "|"
    EQUAL = "="
    COLON = ":"
    SEMICOLON = ";"
    PERIOD = "."
    COMMA = ","
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    NAME = "name"
    FLOAT = "float"
    INT = "int"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    span: Span
    kind: TokenKind

    @property
    def text(self) -> str:
        return str(self.span)


class LexError(Exception):
    """Raised when no token can start at a position of the input."""

    def __init__(self, span: Span, found: str) -> None:
        self.span = span
        self.found = found
        self.reason = f"found {found!r} expected something else"
        super().__init__(self.reason)


# Tried in this order; keywords match as plain prefixes, before identifiers.
_FIXED = (
    TokenKind.LET,
    TokenKind.IN,
    TokenKind.IF,
    TokenKind.THEN,
    TokenKind.ELSE,
    TokenKind.ARROW,
    TokenKind.PIPE_INTO,
    TokenKind.PIPE_FROM,
    TokenKind.DOLLAR_SIGN,
    TokenKind.AMPERSAND,
    TokenKind.PIPE,
    TokenKind.EQUAL,
    TokenKind.COLON,
    TokenKind.SEMICOLON,
    TokenKind.PERIOD,
    TokenKind.COMMA,
    TokenKind.OPEN_PAREN,
    TokenKind.CLOSE_PAREN,
)

_TRIVIA = re.compile(r"(?:\s+|#[^\n]*)*")
_IDENT = re.compile(r"[^\W\d]\w*")
# An optional fraction makes every number lex as a float.
_NUMBER = re.compile(r"(?:0|[1-9][0-9]*)(?:\.[0-9]+)?")


def _match_token(text: str, pos: int) -> tuple[TokenKind, int] | None:
    for kind in _FIXED:
        if text.startswith(kind.value, pos):
            return kind, pos + len(kind.value)
    for kind, pattern in ((TokenKind.NAME, _IDENT), (TokenKind.FLOAT, _NUMBER)):
        match = pattern.match(text, pos)
        if match:
            return kind, match.end()
    return None


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, skipping whitespace and ``#`` comments.

    Raises LexError at the first character where no token starts.
    """
    tokens: list[Token] = []
    pos = _TRIVIA.match(text, 0).end()
    while pos < len(text):
        matched = _match_token(text, pos)
        if matched is None:
            raise LexError(Span(text, pos, pos + 1), text[pos])
        kind, end = matched
        tokens.append(Token(Span(text, pos, end), kind))
        pos = _TRIVIA.match(text, end).end()
    return tokens