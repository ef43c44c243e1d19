"""Parser for definition files in the GNU units style."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from fractions import Fraction

from unitlore.defs import (
    BinOp,
    BinOpExpr,
    CanonicalizationDef,
    CategoryDef,
    ConstExpr,
    DefEntry,
    DimensionDef,
    ErrorExpr,
    Expr,
    MulExpr,
    OfExpr,
    PrefixDef,
    Property,
    QuantityDef,
    SPrefixDef,
    SubstanceDef,
    UnaryOp,
    UnaryOpExpr,
    UnitDef,
    UnitExpr,
)
from unitlore.numeric import Numeric
from unitlore.tokens import EOF, Token, TokenKind, tokenize

_log = logging.getLogger(__name__)

K = TokenKind
_MUL_STOP = frozenset({K.SLASH, K.PLUS, K.DASH, K.RPAR, K.NEWLINE, K.EOF})


class TokenStream:
    """A token source with one token of lookahead that yields EOF forever once exhausted."""

    def __init__(self, source: str | Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokenize(source) if isinstance(source, str) else source)
        self._peeked: Token | None = None

    def peek(self) -> Token:
        if self._peeked is None:
            self._peeked = next(self._tokens, EOF)
        return self._peeked

    def __iter__(self) -> TokenStream:
        return self

    def __next__(self) -> Token:
        token = self.peek()
        self._peeked = None
        return token


def _number_from_parts(integer: str, frac: str | None, exp: str | None) -> Numeric:
    frac = frac or ""
    value = Fraction(int(integer + frac), 10 ** len(frac))
    if exp is not None:
        try:
            power = int(exp)
        except ValueError:
            raise ValueError(f"Malformed exponent: {exp}") from None
        value *= Fraction(10) ** power
    return Numeric(value)


def parse_term(stream: TokenStream) -> Expr:
    """Parse a single term: a name, number, signed term or parenthesised expression."""
    token = next(stream)
    kind = token.kind
    if kind is K.IDENT:
        following = stream.peek()
        if following.kind is K.IDENT and following.text == "of":
            next(stream)
            return OfExpr(token.text, _parse_mul(stream))
        return UnitExpr(token.text)
    if kind is K.NUMBER:
        try:
            return ConstExpr(_number_from_parts(token.text, token.frac, token.exp))
        except ValueError as exc:
            return ErrorExpr(str(exc))
    if kind is K.PLUS:
        return UnaryOpExpr(UnaryOp.POSITIVE, parse_term(stream))
    if kind is K.DASH:
        return UnaryOpExpr(UnaryOp.NEGATIVE, parse_term(stream))
    if kind is K.SLASH:
        return BinOpExpr(BinOp.FRAC, ConstExpr(Numeric.one()), parse_term(stream))
    if kind is K.LPAR:
        inner = parse_expr(stream)
        closing = next(stream)
        if closing.kind is K.RPAR:
            return inner
        return ErrorExpr(f"Expected ), got {closing}")
    return ErrorExpr(f"Expected term, got {token}")


def _parse_pow(stream: TokenStream) -> Expr:
    left = parse_term(stream)
    kind = stream.peek().kind
    if kind is K.CARET:
        next(stream)
        return BinOpExpr(BinOp.POW, left, _parse_pow(stream))
    if kind is K.PIPE:
        next(stream)
        return BinOpExpr(BinOp.FRAC, left, _parse_pow(stream))
    return left


def _parse_mul(stream: TokenStream) -> Expr:
    terms = [_parse_pow(stream)]
    while (kind := stream.peek().kind) not in _MUL_STOP:
        if kind is K.ASTERISK:
            next(stream)
        else:
            terms.append(_parse_pow(stream))
    return terms[0] if len(terms) == 1 else MulExpr(tuple(terms))


def _parse_div(stream: TokenStream) -> Expr:
    left = _parse_mul(stream)
    while stream.peek().kind is K.SLASH:
        next(stream)
        left = BinOpExpr(BinOp.FRAC, left, _parse_mul(stream))
    return left


def parse_expr(stream: TokenStream) -> Expr:
    """Parse a full expression with addition and subtraction."""
    left = _parse_div(stream)
    kind = stream.peek().kind
    if kind is K.PLUS:
        next(stream)
        return BinOpExpr(BinOp.ADD, left, parse_expr(stream))
    if kind is K.DASH:
        next(stream)
        return BinOpExpr(BinOp.SUB, left, parse_expr(stream))
    return left


def _join_doc(old: str | None, line: str) -> str:
    if old is None:
        return line.strip()
    return f"{old.strip()} {line.strip()}"


class _Parser:
    def __init__(self, stream: TokenStream) -> None:
        self.stream = stream
        self.entries: list[DefEntry] = []
        self.line = 1
        self.doc: str | None = None
        self.category: str | None = None
        self.symbols: dict[str, str] = {}

    def run(self) -> list[DefEntry]:
        while True:
            token = next(self.stream)
            kind = token.kind
            if kind is K.NEWLINE:
                self.line += 1
            elif kind is K.EOF:
                break
            elif kind is K.BANG:
                self._directive()
            elif kind is K.DOC:
                self.doc = _join_doc(self.doc, token.text)
            elif kind is K.IDENT:
                self._definition(token.text)
            else:
                _log.warning("Expected definition on line %d, got %s", self.line, token)
        return [self._with_symbol(entry) for entry in self.entries]

    def _with_symbol(self, entry: DefEntry) -> DefEntry:
        if isinstance(entry.definition, SubstanceDef):
            symbol = self.symbols.get(entry.name)
            return dataclasses.replace(
                entry, definition=dataclasses.replace(entry.definition, symbol=symbol)
            )
        return entry

    def _add(self, name: str, definition) -> None:
        doc, self.doc = self.doc, None
        self.entries.append(DefEntry(name, definition, doc, self.category))

    def _directive(self) -> None:
        token = next(self.stream)
        word = token.text if token.kind is K.IDENT else None
        if word == "category":
            short, display = next(self.stream), next(self.stream)
            if short.kind is K.IDENT and display.kind is K.IDENT:
                self.entries.append(DefEntry(short.text, CategoryDef(display.text)))
                self.category = short.text
            else:
                _log.warning("Malformed category directive")
        elif word == "endcategory":
            if self.category is None:
                _log.warning("Stray endcategory directive")
            self.category = None
        elif word == "symbol":
            subst, sym = next(self.stream), next(self.stream)
            if subst.kind is K.IDENT and sym.kind is K.IDENT:
                self.symbols[subst.text] = sym.text
            else:
                _log.warning("Malformed symbol directive")
        else:
            while self.stream.peek().kind not in (K.NEWLINE, K.EOF):
                next(self.stream)

    def _definition(self, name: str) -> None:
        stream = self.stream
        if name.endswith("-"):
            expr = parse_expr(stream)
            name = name[:-1]
            if name.endswith("-"):
                self._add(name[:-1], PrefixDef(expr))
            else:
                self._add(name, SPrefixDef(expr))
            return
        kind = stream.peek().kind
        if kind is K.BANG:
            next(stream)
            self._add(name, DimensionDef())
            following = stream.peek()
            if following.kind is K.IDENT:
                next(stream)
                self._add(following.text, CanonicalizationDef(of=name))
        elif kind is K.QUESTION:
            next(stream)
            self._add(name, QuantityDef(parse_expr(stream)))
        elif kind is K.LEFT_BRACE:
            next(stream)
            self._add(name, SubstanceDef(properties=self._substance()))
        else:
            self._add(name, UnitDef(parse_expr(stream)))

    def _substance(self) -> tuple[Property, ...]:
        stream = self.stream
        props: list[Property] = []
        prop_doc: str | None = None
        while True:
            token = next(stream)
            if token.kind is K.NEWLINE:
                self.line += 1
                continue
            if token.kind is K.DOC:
                prop_doc = _join_doc(prop_doc, token.text)
                continue
            if token.kind in (K.EOF, K.RIGHT_BRACE):
                break
            if token.kind is not K.IDENT:
                _log.warning("Expected property, got %s", token)
                break
            name = token.text

            token = next(stream)
            if token.kind is K.IDENT and token.text == "const":
                token = next(stream)
                if token.kind is not K.IDENT:
                    _log.warning("Expected property input name, got %s", token)
                    break
                props.append(
                    Property(
                        name=name,
                        input=ConstExpr(Numeric.one()),
                        input_name=token.text,
                        output=_parse_div(stream),
                        output_name=name,
                        doc=prop_doc,
                    )
                )
                prop_doc = None
                continue
            if token.kind is not K.IDENT:
                _log.warning("Expected property input name, got %s", token)
                break
            output_name = token.text
            output = _parse_mul(stream)

            token = next(stream)
            if token.kind is not K.SLASH:
                _log.warning("Expected /, got %s", token)
                break
            token = next(stream)
            if token.kind is not K.IDENT:
                _log.warning("Expected property input name, got %s", token)
                break
            props.append(
                Property(
                    name=name,
                    input=_parse_mul(stream),
                    input_name=token.text,
                    output=output,
                    output_name=output_name,
                    doc=prop_doc,
                )
            )
            prop_doc = None
        return tuple(props)


def parse(stream: TokenStream) -> list[DefEntry]:
    """Read every definition from ``stream``; problems are logged as warnings."""
    return _Parser(stream).run()


def parse_str(text: str) -> list[DefEntry]:
    """Read every definition from ``text``."""
    return parse(TokenStream(text))


def token_list(text: str) -> list[Token]:
    """All tokens of ``text`` without the final EOF."""
    return [token for token in tokenize(text) if token.kind is not TokenKind.EOF]