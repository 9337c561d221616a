"""Error classes, diagnostics and exit status codes"""

__all__ = [
    "LoxError",
    "ParseError",
    "LoxRuntimeError",
    "Diagnostic",
    "Diagnostics",
    "EXIT_OK",
    "EXIT_USAGE",
    "EXIT_DATAERR",
    "EXIT_NOINPUT",
    "EXIT_SOFTWARE",
]

import lox


# Status codes follow the BSD sysexits convention
EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATAERR = 65
EXIT_NOINPUT = 66
EXIT_SOFTWARE = 70


class LoxError(Exception):
    """Base class for errors raised by the Lox implementation."""


class ParseError(LoxError):
    """Unwind signal used inside the parser after a syntax error.

    The diagnostic has already been recorded when this is raised. The parser
    catches it at the declaration level and synchronizes.
    """


class LoxRuntimeError(LoxError):
    """Error raised while evaluating a program.

    Args:
        token: (Token) Token nearest to the failure, used for the line
        message: (str) Human readable description

    Attributes:
        token: (Token) Offending token
        message: (str) Human readable description
    """

    def __init__(self, token, message):
        self.token = token
        self.message = message
        super().__init__(message)


class Diagnostic:
    """A single reported problem.

    Attributes:
        stage: (str) One of "scan", "parse", "resolve" or "runtime"
        line: (int) Source line
        message: (str) Description of the problem
        where: (str) Location suffix like " at 'x'" or " at end"
        column: (int | None) Source column when known
    """

    __slots__ = ("stage", "line", "message", "where", "column")

    def __init__(self, stage, line, message, where="", column=None):
        self.stage = stage
        self.line = line
        self.message = message
        self.where = where
        self.column = column

    def __repr__(self):
        return f"Diagnostic<{self.stage} line={self.line} {self.message!r}>"

    @property
    def is_runtime(self):
        """(bool) True for errors raised during evaluation."""
        return self.stage == "runtime"

    def format(self):
        """Render the diagnostic the way it is shown to users.

        Returns:
            (str) Formatted message
        """
        if self.is_runtime:
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


class Diagnostics:
    """Ordered collection of diagnostics produced by a pass.

    Each pass of the pipeline returns one of these instead of flipping global
    error flags. When a stream is given, each diagnostic is also written to it
    as soon as it is reported.

    Args:
        stream: (TextIO | None) Optional stream to echo reports to
    """

    def __init__(self, stream=None):
        self.items = []
        self.stream = stream

    def __repr__(self):
        return f"Diagnostics<{len(self.items)}>"

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __bool__(self):
        return bool(self.items)

    @property
    def had_error(self):
        """(bool) True when a scan, parse or resolve error was reported."""
        return any(not d.is_runtime for d in self.items)

    @property
    def had_runtime_error(self):
        """(bool) True when a runtime error was reported."""
        return any(d.is_runtime for d in self.items)

    @property
    def messages(self):
        """(list[str]) Formatted text of every diagnostic."""
        return [d.format() for d in self.items]

    def add(self, diagnostic):
        """Record a diagnostic and echo it when a stream is attached."""
        self.items.append(diagnostic)
        if self.stream is not None:
            print(diagnostic.format(), file=self.stream)
        return diagnostic

    def error(self, stage, line, message, column=None):
        """Report an error that has no token, like an unexpected character."""
        return self.add(Diagnostic(stage, line, message, column=column))

    def token_error(self, stage, token, message):
        """Report an error located at a token."""
        if token.type is lox.TokenType.EOF:
            where = " at end"
        else:
            where = f" at '{token.lexeme}'"
        return self.add(
            Diagnostic(stage, token.line, message, where, column=token.column)
        )

    def runtime_error(self, error):
        """Report a LoxRuntimeError."""
        return self.add(
            Diagnostic("runtime", error.token.line, error.message, column=error.token.column)
        )
