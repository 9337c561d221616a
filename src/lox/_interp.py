"""Tree walking interpreter.

Statements are executed and expressions evaluated by exhaustive `match`
dispatch over the node classes in `lox.ast`.

Executing a statement produces an execution result. Normal completion is
None, while a `return` produces a `ReturnValue`. Blocks and loops stop and
hand a `ReturnValue` straight back to their caller, and only a function call
consumes it. Runtime errors are a separate channel, raised as
`LoxRuntimeError` and caught once per top-level statement.
"""

__all__ = ["Interpreter", "ReturnValue"]

import sys

import lox
from lox import _ast as ast


T = lox.TokenType


class ReturnValue:
    """Execution result of a `return` statement.

    Attributes:
        value: (object) Value returned, nil by default
    """

    __slots__ = ("value",)

    def __init__(self, value=None):
        self.value = value

    def __repr__(self):
        return f"ReturnValue<{self.value!r}>"


class Interpreter:
    """Evaluate resolved programs against a persistent global frame.

    The same interpreter can run many programs, as the REPL does, and
    globals defined by one are visible to the next.

    Args:
        out: (TextIO | None) Stream for program output, default stdout

    Attributes:
        globals: (Environment) Global frame holding the builtins
        environment: (Environment) Frame of the code currently executing
        locals: (dict[Expr, int]) Scope distances from every resolution
    """

    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout
        self.globals = lox.Environment()
        lox.install_builtins(self.globals)
        self.environment = self.globals
        self.locals = {}

    def resolve(self, resolution):
        """Take in the scope distances of a resolved program.

        Args:
            resolution: (Resolution) Output of the resolver
        """
        self.locals.update(resolution.locals)

    def interpret(self, statements, diagnostics=None):
        """Execute top-level statements.

        A runtime error is reported and abandons only the statement that
        raised it. Execution continues with the next statement.

        Args:
            statements: (list[Stmt]) Resolved program
            diagnostics: (Diagnostics | None) Where to record runtime errors

        Returns:
            (Diagnostics) Runtime errors reported
        """
        if diagnostics is None:
            diagnostics = lox.Diagnostics()
        for statement in statements:
            try:
                self.execute(statement)
            except lox.LoxRuntimeError as err:
                diagnostics.runtime_error(err)
        return diagnostics

    # -----------------------------------------------------------------------
    # Statements

    def execute(self, stmt):
        """Execute one statement.

        Returns:
            (ReturnValue | None) ReturnValue when a `return` ran, else None

        Raises:
            LoxRuntimeError: Evaluation failed
        """
        match stmt:
            case ast.Expression(expression=expression):
                self.evaluate(expression)

            case ast.Print(expression=expression):
                value = self.evaluate(expression)
                print(lox.stringify(value), file=self.out)

            case ast.Var(declarators=declarators):
                for declarator in declarators:
                    value = None
                    if declarator.initializer is not None:
                        value = self.evaluate(declarator.initializer)
                    self.environment.define(declarator.name.lexeme, value)

            case ast.Block(statements=statements):
                return self.execute_block(statements, lox.Environment(self.environment))

            case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                if lox.is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)

            case ast.While(condition=condition, body=body):
                while lox.is_truthy(self.evaluate(condition)):
                    result = self.execute(body)
                    if result is not None:
                        return result

            case ast.Function(name=name):
                function = lox.LoxFunction(stmt, self.environment)
                self.environment.define(name.lexeme, function)

            case ast.Return(value=value):
                if value is None:
                    return ReturnValue()
                return ReturnValue(self.evaluate(value))

            case ast.Class():
                self._class(stmt)

            case _:
                raise TypeError(f"Unknown statement node: {type(stmt).__name__}")

        return None

    def execute_block(self, statements, environment):
        """Execute statements inside a given frame.

        The previous frame is restored afterwards, also when an error
        unwinds through here.

        Args:
            statements: (Sequence[Stmt]) Statements to execute
            environment: (Environment) Frame to execute them in

        Returns:
            (ReturnValue | None) The first ReturnValue produced, if any
        """
        previous = self.environment
        self.environment = environment
        try:
            for statement in statements:
                result = self.execute(statement)
                if result is not None:
                    return result
        finally:
            self.environment = previous
        return None

    def _class(self, stmt):
        superclasses = []
        for expr in stmt.superclasses:
            superclass = self.evaluate(expr)
            if not isinstance(superclass, lox.LoxClass):
                raise lox.LoxRuntimeError(expr.name, "Superclass must be a class.")
            superclasses.append(superclass)

        self.environment.define(stmt.name.lexeme, None)

        # Methods of a subclass close over a frame that binds `super`
        closure = self.environment
        if superclasses:
            closure = lox.Environment(closure)

        methods = {}
        for method in stmt.methods:
            is_init = method.name.lexeme == "init"
            methods[method.name.lexeme] = lox.LoxFunction(method, closure, is_init)

        klass = lox.LoxClass(stmt.name.lexeme, superclasses, methods)
        if superclasses:
            closure.define("super", klass)

        self.environment.assign(stmt.name, klass)

    # -----------------------------------------------------------------------
    # Expressions

    def evaluate(self, expr):
        """Evaluate an expression to a value.

        Raises:
            LoxRuntimeError: Evaluation failed
        """
        match expr:
            case ast.Literal(value=value):
                return value

            case ast.Grouping(expression=expression):
                return self.evaluate(expression)

            case ast.Unary(operator=operator, right=right):
                value = self.evaluate(right)
                if operator.type is T.BANG:
                    return not lox.is_truthy(value)
                return lox.math_unary(operator, value)

            case ast.Binary(left=left, operator=operator, right=right):
                return self._binary(operator, self.evaluate(left), self.evaluate(right))

            case ast.Logical(left=left, operator=operator, right=right):
                value = self.evaluate(left)
                if operator.type in (T.OR, T.OR_OR):
                    if lox.is_truthy(value):
                        return value
                elif not lox.is_truthy(value):
                    return value
                return self.evaluate(right)

            case ast.Variable(name=name):
                return self._lookup_variable(name, expr)

            case ast.Assign(name=name, value=value):
                value = self.evaluate(value)
                distance = self.locals.get(expr)
                if distance is not None:
                    self.environment.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value

            case ast.Call(callee=callee, paren=paren, arguments=arguments):
                return self._call(callee, paren, arguments)

            case ast.Get(target=target, name=name):
                value = self.evaluate(target)
                if isinstance(value, (lox.LoxInstance, lox.LoxArray)):
                    return value.get(name)
                if isinstance(value, str) and name.lexeme == "length":
                    return float(len(value))
                raise lox.LoxRuntimeError(name, "Only instances have properties.")

            case ast.Set(target=target, name=name, value=value):
                instance = self.evaluate(target)
                if not isinstance(instance, lox.LoxInstance):
                    raise lox.LoxRuntimeError(name, "Only instances have fields.")
                value = self.evaluate(value)
                instance.set(name, value)
                return value

            case ast.Index(target=target, bracket=bracket, index=index):
                return self._index(self.evaluate(target), bracket, self.evaluate(index))

            case ast.IndexSet(target=target, bracket=bracket, index=index, value=value):
                container = self.evaluate(target)
                key = self.evaluate(index)
                value = self.evaluate(value)
                self._index_set(container, bracket, key, value)
                return value

            case ast.This(keyword=keyword):
                return self._lookup_variable(keyword, expr)

            case ast.Super(method=method):
                distance = self.locals[expr]
                klass = self.environment.get_at(distance, "super")
                # The frame binding `this` sits just inside the one binding `super`
                instance = self.environment.get_at(distance - 1, "this")
                function = klass.find_method_in_superclasses(method.lexeme)
                if function is None:
                    raise lox.LoxRuntimeError(
                        method, f"Undefined property '{method.lexeme}'."
                    )
                return function.bind(instance)

            case ast.Lambda():
                return lox.LoxFunction(expr, self.environment)

            case ast.ArrayLiteral(elements=elements):
                return lox.LoxArray(self.evaluate(element) for element in elements)

            case ast.ObjectLiteral(entries=entries):
                instance = lox.LoxInstance(lox.OBJECT_CLASS)
                for key, value in entries:
                    name = key.literal if key.type is T.STRING else key.lexeme
                    instance.set_key(name, self.evaluate(value))
                return instance

            case _:
                raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    def _lookup_variable(self, name, expr):
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def _binary(self, operator, left, right):
        match operator.type:
            case T.PLUS:
                return lox.add(operator, left, right)
            case T.MINUS | T.STAR | T.SLASH:
                return lox.math_binary(operator, left, right)
            case T.GREATER | T.GREATER_EQUAL | T.LESS | T.LESS_EQUAL:
                return lox.compare(operator, left, right)
            case T.EQUAL_EQUAL | T.BANG_EQUAL:
                return lox.equality(operator, left, right)
        raise TypeError(f"Unknown binary operator: {operator.lexeme}")

    def _call(self, callee, paren, arguments):
        function = self.evaluate(callee)
        values = [self.evaluate(argument) for argument in arguments]

        if not isinstance(function, lox.LoxCallable):
            raise lox.LoxRuntimeError(paren, "Can only call functions and classes.")

        arity = function.arity()
        if arity is not None and len(values) != arity:
            raise lox.LoxRuntimeError(
                paren, f"Expected {arity} arguments but got {len(values)}."
            )
        return function.call(self, values)

    def _index(self, container, bracket, key):
        match container:
            case lox.LoxArray():
                return container.get_index(bracket, key)
            case str():
                position = lox.index_position(bracket, key)
                if position >= len(container):
                    raise lox.LoxRuntimeError(bracket, "String index out of range.")
                return container[position]
            case lox.LoxInstance():
                if not isinstance(key, str):
                    raise lox.LoxRuntimeError(bracket, "Property key must be a string.")
                return container.get_key(bracket, key)
        raise lox.LoxRuntimeError(
            bracket, "Only arrays, strings and instances can be indexed."
        )

    def _index_set(self, container, bracket, key, value):
        match container:
            case lox.LoxArray():
                container.set_index(bracket, key, value)
            case lox.LoxInstance():
                if not isinstance(key, str):
                    raise lox.LoxRuntimeError(bracket, "Property key must be a string.")
                container.set_key(key, value)
            case _:
                raise lox.LoxRuntimeError(
                    bracket, "Only arrays and instances support index assignment."
                )
