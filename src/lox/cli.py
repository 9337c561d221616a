"""Command-line interface for the Lox language.

Usage:
    lox                         # Start the interactive REPL
    lox <file.lox>              # Run a script
    lox -e "print 1 + 2;"       # Run source given on the command line
    lox <file.lox> --tokens     # Show scanned tokens
    lox <file.lox> --ast        # Show parsed syntax tree
    lox <file.lox> --rpn        # Show expressions in reverse Polish notation

Exit status is 0 on success, 64 for a bad invocation, 65 for a scan, parse
or resolve error, 66 when the script cannot be read and 70 for a runtime
error.
"""

import argparse
import pathlib
import sys

import lox
import lox.repl


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with the usage status code on errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(lox.EXIT_USAGE)


def dump_tokens(source):
    """Print each scanned token with its position.

    Returns:
        (int) Exit status
    """
    tokens, diagnostics = lox.scan(source, lox.Diagnostics(sys.stderr))
    for token in tokens:
        print(f"{token.line}:{token.column} {token}")
    return lox.EXIT_DATAERR if diagnostics else lox.EXIT_OK


def dump_tree(source, printer):
    """Print each parsed statement with the given printer.

    Args:
        source: (str) Program text
        printer: (AstPrinter | RpnPrinter) Rendering to use

    Returns:
        (int) Exit status
    """
    statements, diagnostics = lox.parse(source, lox.Diagnostics(sys.stderr))
    for statement in statements:
        print(printer.print(statement))
    return lox.EXIT_DATAERR if diagnostics.had_error else lox.EXIT_OK


def main(argv=None):
    parser = ArgumentParser(
        prog="lox",
        description="Lox language command-line interface")
    parser.add_argument("script", nargs="?",
        help="Lox script to run, starts the REPL when omitted")
    parser.add_argument("-e", "--eval", metavar="SOURCE",
        help="Run the given source text instead of a script")
    parser.add_argument("--tokens", action="store_true",
        help="Show scanned tokens instead of running")
    parser.add_argument("--ast", action="store_true",
        help="Show the parsed syntax tree instead of running")
    parser.add_argument("--rpn", action="store_true",
        help="Show expressions in reverse Polish notation instead of running")

    args = parser.parse_args(argv)

    if args.eval is not None and args.script is not None:
        parser.error("a script cannot be combined with --eval")
    if sum([args.tokens, args.ast, args.rpn]) > 1:
        parser.error("--tokens, --ast and --rpn cannot be combined")

    if args.eval is not None:
        source = args.eval
    elif args.script is not None:
        try:
            source = pathlib.Path(args.script).read_text(encoding="utf-8")
        except OSError as err:
            print(f"Could not read '{args.script}': {err.strerror}", file=sys.stderr)
            return lox.EXIT_NOINPUT
    else:
        if args.tokens or args.ast or args.rpn:
            parser.error("--tokens, --ast and --rpn need a script or --eval")
        lox.repl.repl()
        return lox.EXIT_OK

    if args.tokens:
        return dump_tokens(source)
    if args.ast:
        return dump_tree(source, lox.AstPrinter())
    if args.rpn:
        return dump_tree(source, lox.RpnPrinter())

    return lox.Session().run(source).exit_code


if __name__ == "__main__":
    sys.exit(main())
