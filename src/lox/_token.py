"""Token types and the token produced by the scanner."""

__all__ = ["TokenType", "Token", "KEYWORDS"]

import enum


class TokenType(enum.Enum):
    """Lexeme classes.

    Member names match the terminal names in the lark token grammar so
    scanned terminals map directly onto this enum.
    """

    # Single character punctuation
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    COLON = ":"
    SLASH = "/"
    STAR = "*"

    # One or two character operators
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="
    AND_AND = "&&"
    OR_OR = "||"

    # Literals
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"

    # Keywords
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "eof"


KEYWORDS = {
    word: TokenType[word.upper()]
    for word in (
        "and", "class", "else", "false", "fun", "for", "if", "nil",
        "or", "print", "return", "super", "this", "true", "var", "while",
    )
}


class Token:
    """A lexeme produced by the scanner.

    Tokens are immutable once created.

    Args:
        type: (TokenType) Lexeme class
        lexeme: (str) Raw source text of the token
        literal: (float | str | None) Decoded literal for numbers and strings
        line: (int) Source line, 1-indexed
        column: (int) Source column, 1-indexed

    Attributes:
        type: (TokenType) Lexeme class
        lexeme: (str) Raw source text
        literal: (float | str | None) Decoded literal value
        line: (int) Source line
        column: (int) Source column
    """

    __slots__ = ("type", "lexeme", "literal", "line", "column")

    def __init__(self, type, lexeme, literal=None, line=1, column=1):
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "column", column)

    def __setattr__(self, name, value):
        raise AttributeError(f"Token is immutable, cannot set {name}")

    def __repr__(self):
        return f"Token<{self.type.name} {self.lexeme!r} {self.literal!r} line={self.line}>"

    def __str__(self):
        return f"{self.type.name} {self.lexeme} {self.literal}"
