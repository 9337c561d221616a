"""Tests for the scanner"""

import pytest

import lox
from loxtest import params, kinds


@params(
    "source expected",
    punct=("( ) { } [ ] , . ; :", "LEFT_PAREN RIGHT_PAREN LEFT_BRACE RIGHT_BRACE "
           "LEFT_BRACKET RIGHT_BRACKET COMMA DOT SEMICOLON COLON"),
    ops=("- + / * ! != = == < <= > >=", "MINUS PLUS SLASH STAR BANG BANG_EQUAL "
         "EQUAL EQUAL_EQUAL LESS LESS_EQUAL GREATER GREATER_EQUAL"),
    logic=("&& || and or", "AND_AND OR_OR AND OR"),
    squash=("a<=b==c", "IDENTIFIER LESS_EQUAL IDENTIFIER EQUAL_EQUAL IDENTIFIER"),
    keywords=("class fun var if else while for return print nil true false this super",
              "CLASS FUN VAR IF ELSE WHILE FOR RETURN PRINT NIL TRUE FALSE THIS SUPER"),
    identifiers=("classy _x orchid", "IDENTIFIER IDENTIFIER IDENTIFIER"),
    comments=("a // line\nb /* block\nspanning */ c", "IDENTIFIER IDENTIFIER IDENTIFIER"),
)
def test_token_kinds(key, source, expected):
    assert kinds(source) == expected.split()


@params(
    "source value",
    integer=("123", 123.0),
    decimal=("1.5", 1.5),
    exponent=("1e3", 1000.0),
    negexp=("2.5E-3", 0.0025),
    hex=("0xFF", 255.0),
)
def test_number_literals(key, source, value):
    tokens, diagnostics = lox.scan(source)
    assert not diagnostics
    assert tokens[0].type is lox.TokenType.NUMBER
    assert tokens[0].literal == value
    assert tokens[0].lexeme == source


def test_trailing_dot_is_not_part_of_number():
    assert kinds("1.") == ["NUMBER", "DOT"]
    assert kinds("1.foo") == ["NUMBER", "DOT", "IDENTIFIER"]


@params(
    "source value",
    plain=('"hello"', "hello"),
    single=("'hello'", "hello"),
    newline=(r'"a\nb"', "a\nb"),
    tab=(r'"a\tb"', "a\tb"),
    quotes=(r'"say \"hi\""', 'say "hi"'),
    squote=(r"'it\'s'", "it's"),
    backslash=(r'"a\\b"', "a\\b"),
    nul=(r'"\0"', "\0"),
    hex=(r'"\x41"', "A"),
    unicode=(r'"\u00e9"', "\u00e9"),
    unknown=(r'"\q"', "q"),
)
def test_string_literals(key, source, value):
    tokens, diagnostics = lox.scan(source)
    assert not diagnostics, diagnostics.messages
    assert tokens[0].type is lox.TokenType.STRING
    assert tokens[0].literal == value


def test_eof_token():
    tokens, _ = lox.scan("")
    assert len(tokens) == 1
    assert tokens[0].type is lox.TokenType.EOF

    tokens, _ = lox.scan("a\nb")
    assert tokens[-1].type is lox.TokenType.EOF
    assert tokens[-1].line == 2


def test_line_and_column():
    tokens, _ = lox.scan("var a = 1;\n  print a;")
    print_token = tokens[5]
    assert print_token.type is lox.TokenType.PRINT
    assert print_token.line == 2
    assert print_token.column == 3

    # Lines inside block comments and strings are counted
    tokens, _ = lox.scan("/* one\ntwo */ x")
    assert tokens[0].line == 2


def test_unexpected_character_continues():
    tokens, diagnostics = lox.scan("a @ b # c")
    assert [t.lexeme for t in tokens[:-1]] == ["a", "b", "c"]
    assert diagnostics.messages == [
        "[line 1] Error: Unexpected character '@'.",
        "[line 1] Error: Unexpected character '#'.",
    ]
    assert diagnostics.had_error


def test_unterminated_string():
    tokens, diagnostics = lox.scan('print "open\nprint 1;')
    assert diagnostics.messages == ["[line 1] Error: Unterminated string."]
    # Scanning resumes on the next line
    assert [t.type.name for t in tokens] == [
        "PRINT", "PRINT", "NUMBER", "SEMICOLON", "EOF"
    ]


def test_unterminated_comment():
    tokens, diagnostics = lox.scan("a /* never closed\n b")
    assert diagnostics.messages == ["[line 1] Error: Unterminated comment."]
    assert [t.type.name for t in tokens] == ["IDENTIFIER", "EOF"]


def test_invalid_escape():
    _, diagnostics = lox.scan(r'"\xZZ"')
    assert diagnostics.messages == ["[line 1] Error: Invalid escape sequence."]


def test_round_trip_lexemes():
    source = 'class A < B, C { init(x) { this.x = x >= 0x10 && "s" != nil; } }'
    tokens, diagnostics = lox.scan(source)
    assert not diagnostics
    rebuilt = "".join(t.lexeme for t in tokens)
    assert rebuilt == "".join(source.split())


def test_lazy_tokens():
    scanner = lox.Scanner("a b c")
    tokens = scanner.tokens()
    first = next(tokens)
    assert first.lexeme == "a"
    assert [t.lexeme for t in tokens] == ["b", "c", ""]


def test_token_is_immutable():
    token = lox.Token(lox.TokenType.IDENTIFIER, "a")
    with pytest.raises(AttributeError):
        token.lexeme = "b"
    assert token.lexeme == "a"
