"""Interactive REPL for the Lox language.

Each line is run in one long lived session, so variables, functions and
classes defined on earlier lines stay available. A line that is a bare
expression has its value printed.
"""

import sys
import traceback

import lox


def repl(session=None):
    """Run the interactive REPL until end of input.

    Args:
        session: (Session | None) Session to run lines in, a new one by default
    """
    if session is None:
        session = lox.Session()

    print(f"Lox REPL v{lox.__version__}")
    print("Type statements or expressions. Ctrl-D or 'exit' to quit.\n")

    while True:
        try:
            try:
                line = input("> ")
            except EOFError:
                print()
                break

            if line.strip() in ("exit", "quit"):
                break
            if not line.strip():
                continue

            result = session.run_line(line)
            if result.value is not None:
                print(result.value, file=session.out)

        except KeyboardInterrupt:
            print("\nKeyboardInterrupt")
            print("Type 'exit' to quit.")
            continue
        except Exception as e:
            print(f"Internal error: {e}", file=sys.stderr)
            traceback.print_exc()


def main():
    """Main entry point for REPL."""
    try:
        repl()
    except KeyboardInterrupt:
        print()
        sys.exit(0)


if __name__ == "__main__":
    main()
