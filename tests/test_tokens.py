import pytest

from unitlore.tokens import Token, TokenKind, tokenize

K = TokenKind
EOF = Token(K.EOF)


def toks(text):
    return list(tokenize(text))


def test_empty_input_is_single_eof():
    assert toks("") == [EOF]


def test_bad_line_ending_escape():
    assert toks("\\\r") == [Token(K.ERROR, "Expected LF or CRLF line endings"), EOF]


def test_crlf_continuation_is_skipped():
    assert toks("\\\r\n1") == [Token(K.NUMBER, "1"), EOF]


def test_lf_continuation_is_skipped():
    assert toks("a\\\nb") == [Token(K.IDENT, "a"), Token(K.IDENT, "b"), EOF]


def test_invalid_escape():
    assert toks("\\a")[0] == Token(K.ERROR, "Invalid escape: \\a")


def test_escape_at_eof():
    assert toks("\\")[0] == Token(K.ERROR, "Unexpected EOF")


def test_error_display_escapes_backslash():
    assert str(Token(K.ERROR, "Invalid escape: \\a")) == 'Error("Invalid escape: \\\\a")'
    assert str(Token(K.ERROR, "Unexpected EOF")) == 'Error("Unexpected EOF")'


def test_simple_display():
    assert str(EOF) == "Eof"
    assert str(Token(K.LPAR)) == "LPar"


def test_number_display():
    assert str(Token(K.NUMBER, "1", "5", None)) == 'Number("1", Some("5"), None)'


def test_leading_dot_number():
    assert toks(".123") == [Token(K.NUMBER, "0", "123", None), EOF]


def test_escaped_quotes():
    assert toks('"ab\\""') == [Token(K.IDENT, 'ab"'), EOF]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.5e-3", Token(K.NUMBER, "1", "5", "-3")),
        ("7E+2", Token(K.NUMBER, "7", None, "2")),
        ("3.", Token(K.NUMBER, "3", None, None)),
        ("2e", Token(K.NUMBER, "2", None, None)),
        ("42", Token(K.NUMBER, "42", None, None)),
    ],
)
def test_number_parts(text, expected):
    assert toks(text) == [expected, EOF]


def test_doc_line_swallows_newline():
    assert toks("??  a doc\nx") == [Token(K.DOC, "  a doc"), Token(K.IDENT, "x"), EOF]


def test_single_question_mark():
    assert toks("?x") == [Token(K.QUESTION), Token(K.IDENT, "x"), EOF]


def test_comment_becomes_newline():
    assert toks("# hi\nfoo") == [Token(K.NEWLINE), Token(K.IDENT, "foo"), EOF]


def test_line_endings():
    assert [t.kind for t in toks("a\r\nb\rc")] == [
        K.IDENT, K.NEWLINE, K.IDENT, K.NEWLINE, K.IDENT, K.EOF,
    ]


def test_punctuation():
    assert [t.kind for t in toks("()/|^+*-!{}")] == [
        K.LPAR, K.RPAR, K.SLASH, K.PIPE, K.CARET, K.PLUS,
        K.ASTERISK, K.DASH, K.BANG, K.LEFT_BRACE, K.RIGHT_BRACE, K.EOF,
    ]


def test_identifiers_absorb_punctuation_after_start():
    assert toks("kilo- water {") == [
        Token(K.IDENT, "kilo-"),
        Token(K.IDENT, "water"),
        Token(K.LEFT_BRACE),
        EOF,
    ]


def test_identifier_stops_at_operator():
    assert toks("cm^3") == [Token(K.IDENT, "cm"), Token(K.CARET), Token(K.NUMBER, "3"), EOF]