"""Classes and their instances"""

import lox


__all__ = ["LoxClass", "LoxInstance"]


class LoxClass(lox.LoxCallable):
    """A class value.

    Method lookup searches the class's own methods, then each superclass in
    declared order, depth first. The first match wins. There is no
    linearization beyond that, so a method reachable through two paths is
    found through whichever declared superclass comes first.

    Calling a class creates an instance and runs `init` on it when one is
    found.

    Args:
        name: (str) Class name
        superclasses: (Sequence[LoxClass]) Superclasses in declared order
        methods: (dict[str, LoxFunction]) Methods defined by this class

    Attributes:
        name: (str) Class name
        superclasses: (tuple[LoxClass]) Superclasses in declared order
        methods: (dict[str, LoxFunction]) Own methods
    """

    __slots__ = ("name", "superclasses", "methods")

    def __init__(self, name, superclasses=(), methods=None):
        self.name = name
        self.superclasses = tuple(superclasses)
        self.methods = methods if methods is not None else {}

    def __repr__(self):
        return f"LoxClass<{self.name}>"

    def __str__(self):
        return self.name

    def find_method(self, name):
        """Find a method through the method resolution order.

        Args:
            name: (str) Method name

        Returns:
            (LoxFunction | None) Unbound method, or None when not found
        """
        method = self.methods.get(name)
        if method is not None:
            return method
        return self.find_method_in_superclasses(name)

    def find_method_in_superclasses(self, name):
        """Find a method while skipping this class's own table.

        This is the lookup used by `super.name`.
        """
        for superclass in self.superclasses:
            method = superclass.find_method(name)
            if method is not None:
                return method
        return None

    def arity(self):
        initializer = self.find_method("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance


class LoxInstance:
    """An instance of a class with its own mutable fields.

    Args:
        klass: (LoxClass) Class of the instance

    Attributes:
        klass: (LoxClass) Class of the instance
        fields: (dict[str, object]) Fields, created by assignment
    """

    __slots__ = ("klass", "fields")

    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def __repr__(self):
        return f"LoxInstance<{self.klass.name}>"

    def __str__(self):
        return f"{self.klass.name} instance"

    def get(self, name):
        """Read a property.

        Fields shadow methods. Methods are bound to this instance each time
        they are read.

        Args:
            name: (Token) Property name token

        Raises:
            LoxRuntimeError: No field or method has the name
        """
        return self.get_key(name, name.lexeme)

    def get_key(self, token, key):
        """Read a property by its text, reporting errors at `token`."""
        if key in self.fields:
            return self.fields[key]

        method = self.klass.find_method(key)
        if method is not None:
            return method.bind(self)

        raise lox.LoxRuntimeError(token, f"Undefined property '{key}'.")

    def set(self, name, value):
        """Write a field on this instance, never on the class."""
        self.fields[name.lexeme] = value

    def set_key(self, key, value):
        self.fields[key] = value
