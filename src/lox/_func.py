"""Callable values: user functions, lambdas and natives"""

import lox


__all__ = ["LoxCallable", "LoxFunction", "NativeFunction"]


class LoxCallable:
    """Base for anything that can be called from Lox code.

    Subclasses implement `arity` and `call`. An arity of None means the
    callable accepts any number of arguments.
    """

    __slots__ = ()

    def arity(self):
        raise NotImplementedError(f"{type(self).__name__} has no arity")

    def call(self, interpreter, arguments):
        """Invoke the callable.

        Args:
            interpreter: (Interpreter) The calling interpreter
            arguments: (list) Evaluated argument values, already arity checked

        Returns:
            (object) Result value
        """
        raise NotImplementedError(f"{type(self).__name__} is not callable")


class LoxFunction(LoxCallable):
    """Function declared in Lox source, named or anonymous.

    Args:
        declaration: (Function | Lambda) Syntax node with params and body
        closure: (Environment) Frame active where the function was defined
        is_initializer: (bool) Function is a class `init` method

    Attributes:
        name: (str) Declared name, or "lambda" for anonymous functions
    """

    __slots__ = ("declaration", "closure", "is_initializer", "name")

    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer
        if isinstance(declaration, lox.ast.Function):
            self.name = declaration.name.lexeme
        else:
            self.name = "lambda"

    def __repr__(self):
        return f"LoxFunction<{self.name}>"

    def __str__(self):
        return f"<fn {self.name}>"

    def arity(self):
        return len(self.declaration.params)

    def bind(self, instance):
        """Create a method bound to an instance.

        The bound copy closes over a new frame that defines `this`.

        Args:
            instance: (LoxInstance) Receiver

        Returns:
            (LoxFunction) Bound method
        """
        env = lox.Environment(self.closure)
        env.define("this", instance)
        return LoxFunction(self.declaration, env, self.is_initializer)

    def call(self, interpreter, arguments):
        env = lox.Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            env.define(param.lexeme, argument)

        result = interpreter.execute_block(self.declaration.body, env)

        # Initializers always produce their instance
        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if result is not None:
            return result.value
        return None


class NativeFunction(LoxCallable):
    """Function implemented in Python.

    Args:
        name: (str) Name shown when the function is printed
        func: (Callable) Called as `func(interpreter, arguments)`
        arity: (int | None) Required argument count, None for variadic
    """

    __slots__ = ("name", "func", "_arity")

    def __init__(self, name, func, arity=None):
        self.name = name
        self.func = func
        self._arity = arity

    def __repr__(self):
        return f"NativeFunction<{self.name}>"

    def __str__(self):
        return f"<native fn {self.name}>"

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.func(interpreter, arguments)
