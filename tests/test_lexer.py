import pytest

from bcc.errors import ErrorKind, LexError
from bcc.lexer import tokenize
from bcc.tokens import EOF, IDENT, INT, DOUBLE, STRING, Span


def types(source):
    return [t.type for t in tokenize(source)]


def test_empty_source_is_just_eof():
    tokens = tokenize('')
    assert len(tokens) == 1
    assert tokens[0].type == EOF
    assert tokens[0].span == Span(0, 1)


def test_eof_span_sits_past_the_end():
    tokens = tokenize('x = 1')
    assert tokens[-1].type == EOF
    assert tokens[-1].span == Span.single(5)


def test_operators_and_two_char_forms():
    assert types('!= == <= >= ! = < >') == ['!=', '==', '<=', '>=', '!', '=', '<', '>', EOF]
    assert types('( ) { } [ ] , . - + ; / *') == [
        '(', ')', '{', '}', '[', ']', ',', '.', '-', '+', ';', '/', '*', EOF,
    ]


def test_keywords_and_identifiers():
    tokens = tokenize('if else while for print and or not in true false nil iffy _ _x2')
    assert [t.type for t in tokens[:12]] == [
        'if', 'else', 'while', 'for', 'print', 'and', 'or', 'not', 'in', 'true', 'false', 'nil',
    ]
    assert [(t.type, t.value) for t in tokens[12:15]] == [(IDENT, 'iffy'), (IDENT, '_'), (IDENT, '_x2')]


def test_unicode_identifiers():
    tokens = tokenize('größe = 3')
    assert tokens[0].type == IDENT
    assert tokens[0].value == 'größe'


def test_numbers():
    tokens = tokenize('42 3.14 7.')
    assert [(t.type, t.value) for t in tokens] == [
        (INT, '42'), (DOUBLE, '3.14'), (INT, '7'), ('.', '.'), (EOF, ''),
    ]


def test_number_spans_re_render_the_source():
    source = 'x = 123 + 4567 * 0'
    for token in tokenize(source):
        if token.type == INT:
            assert token.span.text(source) == token.value
            assert int(token.span.text(source)) == int(token.value)


def test_largest_int_literal_is_accepted():
    tokens = tokenize('9223372036854775807')
    assert tokens[0].type == INT


def test_int_literal_out_of_range():
    with pytest.raises(LexError) as exc:
        tokenize('x = 9223372036854775808')
    assert exc.value.name == 'InvalidNumber'
    assert exc.value.kind is ErrorKind.LEX
    assert exc.value.span == Span(4, 23)


def test_string_value_is_raw_text_between_quotes():
    tokens = tokenize(r'"a\"b\n"')
    assert tokens[0].type == STRING
    assert tokens[0].value == r'a\"b\n'
    assert tokens[0].span == Span(0, 8)


def test_strings_may_span_lines():
    tokens = tokenize('"one\ntwo"')
    assert tokens[0].value == 'one\ntwo'


def test_unterminated_string():
    with pytest.raises(LexError) as exc:
        tokenize('print "abc')
    assert exc.value.name == 'UnterminatedString'
    assert exc.value.span == Span(6, 10)


def test_comments_are_skipped():
    assert types('x // the rest is ignored ( "\ny') == [IDENT, IDENT, EOF]


def test_unexpected_character():
    with pytest.raises(LexError) as exc:
        tokenize('a = 1 @ 2')
    assert exc.value.name == 'UnexpectedCharacter'
    assert exc.value.span == Span(6, 7)
    assert '@' in exc.value.message


def test_minus_is_never_part_of_a_number():
    assert types('-5') == ['-', INT, EOF]
