"""Abstract syntax tree nodes.

The node set is closed: `Expr` and `Stmt` subclasses defined here are the
only kinds the resolver, interpreter and printers dispatch on, each with an
exhaustive `match` over these classes.

Nodes are frozen once built by the parser and are shared read-only between
passes. Equality is identity, which lets the resolver key its side table
of scope distances by node.
"""

__all__ = [
    "Expr",
    "Literal",
    "Grouping",
    "Unary",
    "Binary",
    "Logical",
    "Variable",
    "Assign",
    "Call",
    "Get",
    "Set",
    "Index",
    "IndexSet",
    "This",
    "Super",
    "Lambda",
    "ArrayLiteral",
    "ObjectLiteral",
    "Stmt",
    "Expression",
    "Print",
    "Declarator",
    "Var",
    "Block",
    "If",
    "While",
    "Function",
    "Return",
    "Class",
]

from dataclasses import dataclass
from typing import Optional


_node = dataclass(frozen=True, eq=False, slots=True)


class Expr:
    """Base class for expression nodes."""

    __slots__ = ()


class Stmt:
    """Base class for statement nodes."""

    __slots__ = ()


# ---------------------------------------------------------------------------
# Expressions


@_node
class Literal(Expr):
    """Constant nil, boolean, number or string."""

    value: object


@_node
class Grouping(Expr):
    """Parenthesized expression."""

    expression: Expr


@_node
class Unary(Expr):
    """Prefix operator, `!` or `-`."""

    operator: "lox.Token"
    right: Expr


@_node
class Binary(Expr):
    """Arithmetic, comparison and equality operators."""

    left: Expr
    operator: "lox.Token"
    right: Expr


@_node
class Logical(Expr):
    """Short circuiting `and`/`or` (and their `&&`/`||` spellings)."""

    left: Expr
    operator: "lox.Token"
    right: Expr


@_node
class Variable(Expr):
    """Read of a named variable."""

    name: "lox.Token"


@_node
class Assign(Expr):
    """Assignment to an existing variable."""

    name: "lox.Token"
    value: Expr


@_node
class Call(Expr):
    """Call of a callee with arguments.

    Attributes:
        callee: (Expr) Expression producing the callable
        paren: (Token) Closing parenthesis, used to locate errors
        arguments: (tuple[Expr]) Argument expressions
    """

    callee: Expr
    paren: "lox.Token"
    arguments: tuple


@_node
class Get(Expr):
    """Property read, `target.name`."""

    target: Expr
    name: "lox.Token"


@_node
class Set(Expr):
    """Property write, `target.name = value`."""

    target: Expr
    name: "lox.Token"
    value: Expr


@_node
class Index(Expr):
    """Computed element read, `target[index]`."""

    target: Expr
    bracket: "lox.Token"
    index: Expr


@_node
class IndexSet(Expr):
    """Computed element write, `target[index] = value`."""

    target: Expr
    bracket: "lox.Token"
    index: Expr
    value: Expr


@_node
class This(Expr):
    """The `this` keyword inside a method."""

    keyword: "lox.Token"


@_node
class Super(Expr):
    """Superclass method access, `super.method`."""

    keyword: "lox.Token"
    method: "lox.Token"


@_node
class Lambda(Expr):
    """Anonymous function literal, `fun (a, b) { ... }`."""

    keyword: "lox.Token"
    params: tuple
    body: tuple


@_node
class ArrayLiteral(Expr):
    """Array literal, `[a, b, c]`."""

    bracket: "lox.Token"
    elements: tuple


@_node
class ObjectLiteral(Expr):
    """Object literal, `{key: value, ...}`.

    Attributes:
        brace: (Token) Opening brace
        entries: (tuple[tuple[Token, Expr]]) Key token and value pairs
    """

    brace: "lox.Token"
    entries: tuple


# ---------------------------------------------------------------------------
# Statements


@_node
class Expression(Stmt):
    """Expression evaluated for its side effects."""

    expression: Expr


@_node
class Print(Stmt):
    """`print` statement."""

    expression: Expr


@_node
class Declarator:
    """One `name = initializer` entry of a `var` statement."""

    name: "lox.Token"
    initializer: Optional[Expr]


@_node
class Var(Stmt):
    """Variable declaration with one or more declarators."""

    declarators: tuple


@_node
class Block(Stmt):
    """Braced statement list with its own scope."""

    statements: tuple


@_node
class If(Stmt):
    """Conditional with optional else branch."""

    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@_node
class While(Stmt):
    """Loop. `for` loops are desugared into this by the parser."""

    condition: Expr
    body: Stmt


@_node
class Function(Stmt):
    """Named function declaration, also used for class methods."""

    name: "lox.Token"
    params: tuple
    body: tuple


@_node
class Return(Stmt):
    """`return` with an optional value."""

    keyword: "lox.Token"
    value: Optional[Expr]


@_node
class Class(Stmt):
    """Class declaration.

    Attributes:
        name: (Token) Class name
        superclasses: (tuple[Variable]) Superclass references in declared order
        methods: (tuple[Function]) Method declarations
    """

    name: "lox.Token"
    superclasses: tuple
    methods: tuple
