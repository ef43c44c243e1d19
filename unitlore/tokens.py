"""Lexer for unit definition files."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Kinds of token; values are their display names."""

    EOF = "Eof"
    NEWLINE = "Newline"
    DOC = "Doc"
    IDENT = "Ident"
    NUMBER = "Number"
    LPAR = "LPar"
    RPAR = "RPar"
    BANG = "Bang"
    SLASH = "Slash"
    PIPE = "Pipe"
    CARET = "Caret"
    PLUS = "Plus"
    DASH = "Dash"
    ASTERISK = "Asterisk"
    QUESTION = "Question"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    ERROR = "Error"


_DEBUG_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _debug_str(text: str) -> str:
    escaped = "".join(
        _DEBUG_ESCAPES.get(c, c if c.isprintable() else f"\\u{{{ord(c):x}}}") for c in text
    )
    return f'"{escaped}"'


def _debug_opt(text: str | None) -> str:
    return "None" if text is None else f"Some({_debug_str(text)})"


@dataclass(frozen=True)
class Token:
    """A token.

    ``text`` holds the payload of DOC, IDENT and ERROR tokens and the integer
    part of NUMBER tokens, whose fraction and exponent digits are in
    ``frac`` and ``exp``.
    """

    kind: TokenKind
    text: str | None = None
    frac: str | None = None
    exp: str | None = None

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return f"Number({_debug_str(self.text or '')}, {_debug_opt(self.frac)}, {_debug_opt(self.exp)})"
        if self.kind in (TokenKind.DOC, TokenKind.IDENT, TokenKind.ERROR):
            return f"{self.kind.value}({_debug_str(self.text or '')})"
        return self.kind.value


EOF = Token(TokenKind.EOF)

_SINGLE = {
    "!": TokenKind.BANG,
    "(": TokenKind.LPAR,
    ")": TokenKind.RPAR,
    "/": TokenKind.SLASH,
    "|": TokenKind.PIPE,
    "^": TokenKind.CARET,
    "-": TokenKind.DASH,
    "+": TokenKind.PLUS,
    "*": TokenKind.ASTERISK,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
}
_NOT_IDENT = frozenset(" \t\n\r()/|^+*\\#")
_DIGITS_RE = re.compile(r"[0-9]*")


class _Lexer:
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _peek(self) -> str | None:
        return self._text[self._pos] if self._pos < len(self._text) else None

    def _take(self) -> str | None:
        c = self._peek()
        if c is not None:
            self._pos += 1
        return c

    def _digits(self) -> str:
        match = _DIGITS_RE.match(self._text, self._pos)
        self._pos = match.end()
        return match.group()

    def _rest_of_line(self) -> str:
        end = self._text.find("\n", self._pos)
        if end < 0:
            line, self._pos = self._text[self._pos:], len(self._text)
        else:
            line, self._pos = self._text[self._pos:end], end + 1
        return line

    def next_token(self) -> Token:
        while True:
            c = self._take()
            if c is None:
                return EOF
            if c in " \t":
                continue
            if c == "\\":
                following = self._take()
                if following == "\n":
                    continue
                if following == "\r":
                    if self._take() == "\n":
                        continue
                    return Token(TokenKind.ERROR, "Expected LF or CRLF line endings")
                if following is None:
                    return Token(TokenKind.ERROR, "Unexpected EOF")
                return Token(TokenKind.ERROR, f"Invalid escape: \\{following}")
            return self._token_from(c)

    def _token_from(self, c: str) -> Token:
        if c == "\r":
            if self._peek() == "\n":
                self._pos += 1
            return Token(TokenKind.NEWLINE)
        if c == "\n":
            return Token(TokenKind.NEWLINE)
        if c in _SINGLE:
            return Token(_SINGLE[c])
        if c == "?":
            if self._peek() == "?":
                self._pos += 1
                return Token(TokenKind.DOC, self._rest_of_line())
            return Token(TokenKind.QUESTION)
        if c == "#":
            self._rest_of_line()
            return Token(TokenKind.NEWLINE)
        if c == "." or "0" <= c <= "9":
            return self._number(c)
        if c == '"':
            return self._quoted()
        if c not in _NOT_IDENT:
            return self._ident(c)
        return Token(TokenKind.ERROR, f"Unknown character: '{c}'")

    def _number(self, first: str) -> Token:
        integer = "0" if first == "." else first + self._digits()
        frac = None
        if first == "." or self._peek() == ".":
            if first != ".":
                self._pos += 1
            frac = self._digits() or None
        exp = None
        following = self._peek()
        if following is not None and following.lower() == "e":
            self._pos += 1
            sign = ""
            if self._peek() == "-":
                sign = "-"
                self._pos += 1
            elif self._peek() == "+":
                self._pos += 1
            exp = (sign + self._digits()) or None
        return Token(TokenKind.NUMBER, integer, frac, exp)

    def _quoted(self) -> Token:
        chars = []
        while (c := self._take()) is not None:
            if c == "\\":
                escaped = self._take()
                if escaped is not None:
                    chars.append(escaped)
            elif c == '"':
                break
            else:
                chars.append(c)
        return Token(TokenKind.IDENT, "".join(chars))

    def _ident(self, first: str) -> Token:
        start = self._pos - 1
        while (c := self._peek()) is not None and c not in _NOT_IDENT:
            self._pos += 1
        return Token(TokenKind.IDENT, self._text[start:self._pos])


def tokenize(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text``, ending with a single EOF token."""
    lexer = _Lexer(text)
    while True:
        token = lexer.next_token()
        yield token
        if token.kind is TokenKind.EOF:
            return