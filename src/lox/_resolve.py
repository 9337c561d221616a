"""Static scope resolution.

The resolver walks the syntax tree once, before execution, keeping a stack
of block scopes that mirrors the frames the interpreter will create. For
each variable reference that names a local it records how many frames out
the declaration lives. References it cannot find are left unrecorded and
are looked up in the globals at runtime.

It also reports static errors: redeclaring a local, reading a local in its
own initializer, `return` at top level, and `this`/`super` where they have
no meaning. Errors do not stop the walk.
"""

__all__ = ["Resolver", "Resolution", "resolve"]

import enum

import lox
from lox import _ast as ast


class FunctionType(enum.Enum):
    NONE = "none"
    FUNCTION = "function"
    INITIALIZER = "initializer"
    METHOD = "method"


class ClassType(enum.Enum):
    NONE = "none"
    CLASS = "class"
    SUBCLASS = "subclass"


class Resolution:
    """Result of resolving a program.

    Attributes:
        locals: (dict[Expr, int]) Scope distance for each resolved reference,
            keyed by node identity
        diagnostics: (Diagnostics) Static errors found
    """

    __slots__ = ("locals", "diagnostics")

    def __init__(self, locals, diagnostics):
        self.locals = locals
        self.diagnostics = diagnostics

    def __repr__(self):
        return f"Resolution<{len(self.locals)} locals, {len(self.diagnostics)} errors>"

    def distance(self, expr):
        """Recorded distance for a reference, or None for globals."""
        return self.locals.get(expr)


class Resolver:
    """Compute scope distances for a list of statements.

    Args:
        diagnostics: (Diagnostics | None) Where to record static errors
    """

    def __init__(self, diagnostics=None):
        self.diagnostics = diagnostics if diagnostics is not None else lox.Diagnostics()
        self.locals = {}
        self.scopes = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, statements):
        """Resolve a program.

        Args:
            statements: (list[Stmt]) Parsed statements

        Returns:
            (Resolution) Distances and diagnostics
        """
        for statement in statements:
            self._statement(statement)
        return Resolution(self.locals, self.diagnostics)

    def resolve_expression(self, expr):
        """Resolve a single bare expression, used by the REPL."""
        self._expression(expr)
        return Resolution(self.locals, self.diagnostics)

    def _statement(self, stmt):
        match stmt:
            case ast.Block(statements=statements):
                self._begin_scope()
                for statement in statements:
                    self._statement(statement)
                self._end_scope()

            case ast.Var(declarators=declarators):
                for declarator in declarators:
                    self._declare(declarator.name)
                    if declarator.initializer is not None:
                        self._expression(declarator.initializer)
                    self._define(declarator.name)

            case ast.Function(name=name):
                # Defined before the body so the function can recurse
                self._declare(name)
                self._define(name)
                self._function(stmt, FunctionType.FUNCTION)

            case ast.Class():
                self._class(stmt)

            case ast.Expression(expression=expression) | ast.Print(expression=expression):
                self._expression(expression)

            case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self._expression(condition)
                self._statement(then_branch)
                if else_branch is not None:
                    self._statement(else_branch)

            case ast.Return(keyword=keyword, value=value):
                if self.current_function is FunctionType.NONE:
                    self._error(keyword, "Can't return from top-level code.")
                if value is not None:
                    self._expression(value)

            case ast.While(condition=condition, body=body):
                self._expression(condition)
                self._statement(body)

            case _:
                raise TypeError(f"Unknown statement node: {type(stmt).__name__}")

    def _class(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self._declare(stmt.name)
        self._define(stmt.name)

        for superclass in stmt.superclasses:
            if superclass.name.lexeme == stmt.name.lexeme:
                self._error(superclass.name, "A class can't inherit from itself.")
            self._expression(superclass)

        if stmt.superclasses:
            self.current_class = ClassType.SUBCLASS
            self._begin_scope()
            self.scopes[-1]["super"] = True

        self._begin_scope()
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            if method.name.lexeme == "init":
                kind = FunctionType.INITIALIZER
            else:
                kind = FunctionType.METHOD
            self._function(method, kind)

        self._end_scope()
        if stmt.superclasses:
            self._end_scope()

        self.current_class = enclosing_class

    def _function(self, function, kind):
        """Resolve a function or lambda body in its own scope."""
        enclosing_function = self.current_function
        self.current_function = kind

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        for statement in function.body:
            self._statement(statement)
        self._end_scope()

        self.current_function = enclosing_function

    def _expression(self, expr):
        match expr:
            case ast.Variable(name=name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self._error(name, "Can't read local variable in its own initializer.")
                self._resolve_local(expr, name)

            case ast.Assign(name=name, value=value):
                self._expression(value)
                self._resolve_local(expr, name)

            case ast.Binary(left=left, right=right) | ast.Logical(left=left, right=right):
                self._expression(left)
                self._expression(right)

            case ast.Unary(right=right):
                self._expression(right)

            case ast.Grouping(expression=expression):
                self._expression(expression)

            case ast.Literal():
                pass

            case ast.Call(callee=callee, arguments=arguments):
                self._expression(callee)
                for argument in arguments:
                    self._expression(argument)

            case ast.Get(target=target):
                self._expression(target)

            case ast.Set(target=target, value=value):
                self._expression(value)
                self._expression(target)

            case ast.Index(target=target, index=index):
                self._expression(target)
                self._expression(index)

            case ast.IndexSet(target=target, index=index, value=value):
                self._expression(target)
                self._expression(index)
                self._expression(value)

            case ast.This(keyword=keyword):
                if self.current_class is ClassType.NONE:
                    self._error(keyword, "Can't use 'this' outside of a class.")
                    return
                self._resolve_local(expr, keyword)

            case ast.Super(keyword=keyword):
                if self.current_class is ClassType.NONE:
                    self._error(keyword, "Can't use 'super' outside of a class.")
                elif self.current_class is not ClassType.SUBCLASS:
                    self._error(keyword, "Can't use 'super' in a class with no superclass.")
                self._resolve_local(expr, keyword)

            case ast.Lambda():
                self._function(expr, FunctionType.FUNCTION)

            case ast.ArrayLiteral(elements=elements):
                for element in elements:
                    self._expression(element)

            case ast.ObjectLiteral(entries=entries):
                for _, value in entries:
                    self._expression(value)

            case _:
                raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    def _begin_scope(self):
        self.scopes.append({})

    def _end_scope(self):
        self.scopes.pop()

    def _declare(self, name):
        """Add a name to the innermost scope, marked as not ready yet."""
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self._error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def _define(self, name):
        """Mark a declared name as ready for use."""
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, expr, name):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr] = depth
                return

    def _error(self, token, message):
        self.diagnostics.token_error("resolve", token, message)


def resolve(statements, diagnostics=None):
    """Resolve parsed statements.

    Args:
        statements: (list[Stmt]) Parsed program
        diagnostics: (Diagnostics | None) Where to record static errors

    Returns:
        (Resolution) Distances and diagnostics
    """
    return Resolver(diagnostics).resolve(statements)
