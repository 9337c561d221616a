"""Array values"""

import lox


__all__ = ["LoxArray", "index_position"]


class LoxArray:
    """Ordered mutable sequence created by an array literal.

    Elements are read and written with `a[i]`. Writing at exactly `length`
    appends. Arrays expose a `length` property and the `push` and `pop`
    methods.

    Args:
        elements: (Iterable) Initial elements

    Attributes:
        elements: (list) Current elements
    """

    __slots__ = ("elements",)

    def __init__(self, elements=()):
        self.elements = list(elements)

    def __repr__(self):
        return f"LoxArray<{len(self.elements)}>"

    def __str__(self):
        return "[" + ", ".join(lox.stringify(e) for e in self.elements) + "]"

    def get(self, name):
        """Read a property of the array.

        Args:
            name: (Token) Property name token

        Raises:
            LoxRuntimeError: Unknown property
        """
        match name.lexeme:
            case "length":
                return float(len(self.elements))
            case "push":
                return lox.NativeFunction("push", self._push, 1)
            case "pop":
                return lox.NativeFunction("pop", self._pop, 0)
        raise lox.LoxRuntimeError(name, f"Undefined property '{name.lexeme}'.")

    def get_index(self, token, index):
        """Read the element at an index.

        Raises:
            LoxRuntimeError: Index is not an integral number in range
        """
        position = index_position(token, index)
        if position >= len(self.elements):
            raise lox.LoxRuntimeError(token, "Array index out of range.")
        return self.elements[position]

    def set_index(self, token, index, value):
        """Write the element at an index, appending when it equals the length."""
        position = index_position(token, index)
        if position == len(self.elements):
            self.elements.append(value)
        elif position > len(self.elements):
            raise lox.LoxRuntimeError(token, "Array index out of range.")
        else:
            self.elements[position] = value

    def _push(self, interpreter, arguments):
        self.elements.append(arguments[0])
        return float(len(self.elements))

    def _pop(self, interpreter, arguments):
        if not self.elements:
            return None
        return self.elements.pop()


def index_position(token, index):
    """Validate an index value and convert it to a non negative int.

    Raises:
        LoxRuntimeError: Index is not an integral number or is negative
    """
    if not lox.is_number(index) or not index.is_integer():
        raise lox.LoxRuntimeError(token, "Index must be an integer.")
    if index < 0:
        raise lox.LoxRuntimeError(token, "Array index out of range.")
    return int(index)
