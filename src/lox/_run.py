"""Run source text through the whole pipeline"""

__all__ = ["Session", "RunResult"]

import sys

import lox


class RunResult:
    """Outcome of running one piece of source.

    Args:
        diagnostics: (Diagnostics) Everything reported during the run
        value: (str | None) Text of the value of a bare REPL expression

    Attributes:
        diagnostics: (Diagnostics) Everything reported during the run
        value: (str | None) Text of an evaluated bare expression
    """

    __slots__ = ("diagnostics", "value")

    def __init__(self, diagnostics, value=None):
        self.diagnostics = diagnostics
        self.value = value

    def __repr__(self):
        return f"RunResult<exit={self.exit_code} {self.value!r}>"

    @property
    def exit_code(self):
        """(int) Process status for this outcome.

        65 after a scan, parse or resolve error, 70 after a runtime error,
        0 otherwise.
        """
        if self.diagnostics.had_error:
            return lox.EXIT_DATAERR
        if self.diagnostics.had_runtime_error:
            return lox.EXIT_SOFTWARE
        return lox.EXIT_OK


class Session:
    """An interpreter with its globals kept between runs.

    Each run scans, parses, resolves and interprets. A later pass is skipped
    when an earlier one reported an error.

    Args:
        out: (TextIO | None) Stream for program output, default stdout
        err: (TextIO | None) Stream diagnostics are echoed to, default stderr
    """

    def __init__(self, out=None, err=None):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.interpreter = lox.Interpreter(self.out)

    def run(self, source):
        """Run a program.

        Args:
            source: (str) Program text

        Returns:
            (RunResult) Diagnostics and exit code
        """
        diagnostics = lox.Diagnostics(self.err)

        statements, _ = lox.parse(source, diagnostics)
        if diagnostics.had_error:
            return RunResult(diagnostics)

        resolution = lox.resolve(statements, diagnostics)
        if diagnostics.had_error:
            return RunResult(diagnostics)

        self.interpreter.resolve(resolution)
        self.interpreter.interpret(statements, diagnostics)
        return RunResult(diagnostics)

    def run_line(self, line):
        """Run one line of REPL input.

        A line not ending in `;` is first tried as a bare expression. When
        that parses, its value is evaluated and returned as text. Otherwise
        the attempt is thrown away, including its diagnostics, and the line
        runs as statements.

        Args:
            line: (str) Input line

        Returns:
            (RunResult) Diagnostics, exit code and the expression value text
        """
        if not line.rstrip().endswith(";"):
            expr = lox.parse_expr(line)
            if expr is not None:
                return self._evaluate(expr)
        return self.run(line)

    def _evaluate(self, expr):
        diagnostics = lox.Diagnostics(self.err)

        resolution = lox.Resolver(diagnostics).resolve_expression(expr)
        if diagnostics.had_error:
            return RunResult(diagnostics)

        self.interpreter.resolve(resolution)
        try:
            value = self.interpreter.evaluate(expr)
        except lox.LoxRuntimeError as err:
            diagnostics.runtime_error(err)
            return RunResult(diagnostics)
        return RunResult(diagnostics, lox.stringify(value))
