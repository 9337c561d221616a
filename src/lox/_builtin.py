"""Builtin globals installed before any user code runs"""

__all__ = ["OBJECT_CLASS", "install_builtins"]

import time

import lox


# Class of every object literal
OBJECT_CLASS = lox.LoxClass("Object")

_CONSOLE_CLASS = lox.LoxClass("Console")


def _log(interpreter, arguments):
    """Print the arguments space separated, newline terminated."""
    text = " ".join(lox.stringify(argument) for argument in arguments)
    print(text, file=interpreter.out)
    return None


def _clock(interpreter, arguments):
    return time.time()


def install_builtins(globals):
    """Define the builtin names in a global frame.

    Args:
        globals: (Environment) Frame to populate
    """
    log = lox.NativeFunction("log", _log)
    globals.define("log", log)
    globals.define("clock", lox.NativeFunction("clock", _clock, 0))

    console = lox.LoxInstance(_CONSOLE_CLASS)
    console.fields["log"] = log
    globals.define("console", console)
