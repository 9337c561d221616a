"""Scanner that turns Lox source text into tokens.

Lexeme recognition is done by a lark lexer built from the `lark/tokens.lark`
grammar. This module converts the lark terminals into `Token` objects, decodes
number and string literals, classifies keywords, and keeps scanning after bad
input so that a single pass reports every lexical problem.
"""

__all__ = ["Scanner", "scan"]

import bisect
import re

import lark

import lox


_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|.)", re.DOTALL)


class Scanner:
    """Convert source text into a token sequence.

    The scan never aborts. Unexpected characters, unterminated strings and
    unterminated comments are recorded in `diagnostics` and scanning resumes
    after them. The sequence always ends with an EOF token.

    Args:
        source: (str) Source text
        diagnostics: (Diagnostics | None) Where to record lexical errors

    Attributes:
        source: (str) Source text
        diagnostics: (Diagnostics) Lexical errors found so far
    """

    def __init__(self, source, diagnostics=None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else lox.Diagnostics()
        self._line_starts = [0]
        self._line_starts.extend(m.end() for m in re.finditer("\n", source))

    def scan_tokens(self):
        """Scan the whole source.

        Returns:
            (list[Token]) Tokens ending with an EOF token
        """
        return list(self.tokens())

    def tokens(self):
        """Lazily generate tokens from the source.

        Yields:
            (Token) Each scanned token, the last one being EOF
        """
        lexer = _lark_parser("tokens")
        offset = 0
        while True:
            try:
                for terminal in lexer.lex(self.source[offset:]):
                    token = self._convert(terminal, offset + terminal.start_pos)
                    if token is not None:
                        yield token
                break
            except lark.UnexpectedCharacters as exc:
                pos = offset + exc.pos_in_stream
                line, column = self._position(pos)
                self.diagnostics.error(
                    "scan", line, f"Unexpected character '{self.source[pos]}'.", column
                )
                offset = pos + 1

        line, column = self._position(len(self.source))
        yield lox.Token(lox.TokenType.EOF, "", None, line, column)

    def _position(self, pos):
        """Line and column (both 1-indexed) for a character offset."""
        line = bisect.bisect_right(self._line_starts, pos)
        return line, pos - self._line_starts[line - 1] + 1

    def _convert(self, terminal, pos):
        """Build a Token from a lark terminal, or None when it is dropped."""
        line, column = self._position(pos)
        lexeme = str(terminal)

        match terminal.type:
            case "IDENTIFIER":
                kind = lox.KEYWORDS.get(lexeme, lox.TokenType.IDENTIFIER)
                return lox.Token(kind, lexeme, None, line, column)
            case "NUMBER":
                return lox.Token(lox.TokenType.NUMBER, lexeme, float(lexeme), line, column)
            case "HEX_NUMBER":
                value = float(int(lexeme[2:], 16))
                return lox.Token(lox.TokenType.NUMBER, lexeme, value, line, column)
            case "STRING":
                value = self._decode(lexeme[1:-1], line, column)
                return lox.Token(lox.TokenType.STRING, lexeme, value, line, column)
            case "UNCLOSED_STRING":
                self.diagnostics.error("scan", line, "Unterminated string.", column)
                return None
            case "UNCLOSED_COMMENT":
                self.diagnostics.error("scan", line, "Unterminated comment.", column)
                return None
            case name:
                return lox.Token(lox.TokenType[name], lexeme, None, line, column)

    def _decode(self, body, line, column):
        """Decode escape sequences in the body of a string literal."""

        def replace(match):
            code = match.group(1)
            if len(code) > 1:
                return chr(int(code[1:], 16))
            if code in ("x", "u"):
                self.diagnostics.error("scan", line, "Invalid escape sequence.", column)
                return ""
            return _ESCAPES.get(code, code)

        return _ESCAPE_RE.sub(replace, body)


def scan(source, diagnostics=None):
    """Scan source text into tokens.

    Args:
        source: (str) Source text
        diagnostics: (Diagnostics | None) Where to record lexical errors

    Returns:
        (tuple[list[Token], Diagnostics]) Tokens and the lexical diagnostics
    """
    scanner = Scanner(source, diagnostics)
    return scanner.scan_tokens(), scanner.diagnostics


_parsers = {}


def _lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(path, rel_to=__file__, parser="lalr", lexer="basic")
    _parsers[name] = parser
    return parser
