"""Lexical scope frames."""

__all__ = ["Environment"]

import lox


class Environment:
    """A scope frame mapping names to values, chained to its enclosing frame.

    A frame is created for the globals, for each block, for each call and for
    each bound method. The enclosing link is set at construction and never
    changes, so frames form a tree rooted at the globals. Closures simply
    hold a reference to the frame they were defined in.

    Args:
        enclosing: (Environment | None) Parent frame, None for the globals

    Attributes:
        values: (dict[str, object]) Bindings of this frame
        enclosing: (Environment | None) Parent frame
    """

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def __repr__(self):
        return f"Environment<{', '.join(self.values)}>"

    def define(self, name, value):
        """Bind a name in this frame, replacing any previous binding."""
        self.values[name] = value

    def get(self, name):
        """Look a name up through the whole chain.

        Args:
            name: (Token) Identifier token

        Returns:
            (object) Bound value

        Raises:
            LoxRuntimeError: The name is not bound anywhere in the chain
        """
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise lox.LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name, value):
        """Rebind an existing name found through the chain.

        Raises:
            LoxRuntimeError: The name is not bound anywhere in the chain
        """
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise lox.LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def ancestor(self, distance):
        """Frame exactly `distance` enclosing links above this one."""
        env = self
        for _ in range(distance):
            env = env.enclosing
        return env

    def get_at(self, distance, name):
        """Read a name from the frame at a resolved distance.

        Args:
            distance: (int) Number of enclosing links to walk
            name: (str) Identifier text
        """
        return self.ancestor(distance).values[name]

    def assign_at(self, distance, name, value):
        """Rebind a name in the frame at a resolved distance."""
        self.ancestor(distance).values[name] = value
