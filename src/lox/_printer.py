"""Text renderings of the syntax tree for debugging"""

__all__ = ["AstPrinter", "RpnPrinter"]

import lox
from lox import _ast as ast


def _literal(value):
    if isinstance(value, str):
        return f'"{value}"'
    return lox.stringify(value)


class AstPrinter:
    """Render nodes as parenthesized prefix expressions.

    `1 + 2 * 3` renders as `(+ 1 (* 2 3))` and `var a = 1;` as `(var a 1)`.
    """

    def print(self, node):
        """Render an expression or statement.

        Args:
            node: (Expr | Stmt) Node to render

        Returns:
            (str) Rendering
        """
        if isinstance(node, ast.Stmt):
            return self._statement(node)
        return self._expression(node)

    def _parens(self, name, *parts):
        text = " ".join(str(part) for part in parts)
        if not text:
            return f"({name})"
        return f"({name} {text})"

    def _statement(self, stmt):
        match stmt:
            case ast.Expression(expression=expression):
                return self._parens(";", self._expression(expression))
            case ast.Print(expression=expression):
                return self._parens("print", self._expression(expression))
            case ast.Var(declarators=declarators):
                if len(declarators) == 1:
                    return self._parens("var", *self._declarator(declarators[0]))
                parts = [self._parens(*self._declarator(d)) for d in declarators]
                return self._parens("var", *parts)
            case ast.Block(statements=statements):
                return self._parens("block", *map(self._statement, statements))
            case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                parts = [self._expression(condition), self._statement(then_branch)]
                if else_branch is not None:
                    parts.append(self._statement(else_branch))
                return self._parens("if", *parts)
            case ast.While(condition=condition, body=body):
                return self._parens("while", self._expression(condition), self._statement(body))
            case ast.Function(name=name, params=params, body=body):
                return self._function(f"fun {name.lexeme}", params, body)
            case ast.Return(value=value):
                if value is None:
                    return self._parens("return")
                return self._parens("return", self._expression(value))
            case ast.Class(name=name, superclasses=superclasses, methods=methods):
                parts = [name.lexeme]
                if superclasses:
                    parts.append("<")
                    parts.extend(s.name.lexeme for s in superclasses)
                parts.extend(self._statement(method) for method in methods)
                return self._parens("class", *parts)
        raise TypeError(f"Unknown statement node: {type(stmt).__name__}")

    def _declarator(self, declarator):
        if declarator.initializer is None:
            return (declarator.name.lexeme,)
        return (declarator.name.lexeme, self._expression(declarator.initializer))

    def _function(self, head, params, body):
        names = "(" + " ".join(p.lexeme for p in params) + ")"
        return self._parens(head, names, *map(self._statement, body))

    def _expression(self, expr):
        match expr:
            case ast.Literal(value=value):
                return _literal(value)
            case ast.Grouping(expression=expression):
                return self._parens("group", self._expression(expression))
            case ast.Unary(operator=operator, right=right):
                return self._parens(operator.lexeme, self._expression(right))
            case ast.Binary(left=left, operator=operator, right=right) | ast.Logical(
                left=left, operator=operator, right=right
            ):
                return self._parens(
                    operator.lexeme, self._expression(left), self._expression(right)
                )
            case ast.Variable(name=name):
                return name.lexeme
            case ast.Assign(name=name, value=value):
                return self._parens("=", name.lexeme, self._expression(value))
            case ast.Call(callee=callee, arguments=arguments):
                return self._parens(
                    "call", self._expression(callee), *map(self._expression, arguments)
                )
            case ast.Get(target=target, name=name):
                return self._parens(".", self._expression(target), name.lexeme)
            case ast.Set(target=target, name=name, value=value):
                return self._parens(
                    "=", self._parens(".", self._expression(target), name.lexeme),
                    self._expression(value),
                )
            case ast.Index(target=target, index=index):
                return self._parens("[]", self._expression(target), self._expression(index))
            case ast.IndexSet(target=target, index=index, value=value):
                return self._parens(
                    "=", self._parens("[]", self._expression(target), self._expression(index)),
                    self._expression(value),
                )
            case ast.This():
                return "this"
            case ast.Super(method=method):
                return self._parens("super", method.lexeme)
            case ast.Lambda(params=params, body=body):
                return self._function("fun", params, body)
            case ast.ArrayLiteral(elements=elements):
                return self._parens("array", *map(self._expression, elements))
            case ast.ObjectLiteral(entries=entries):
                parts = [self._parens(key.lexeme, self._expression(value)) for key, value in entries]
                return self._parens("object", *parts)
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")


class RpnPrinter:
    """Render expressions in reverse Polish notation.

    `(1 + 2) * (4 - 3)` renders as `1 2 + 4 3 - *`. Unary minus is written
    `neg` to keep it apart from subtraction. Statements other than expression
    and print statements have no postfix form and are rendered by
    `AstPrinter` instead.
    """

    def print(self, node):
        """Render an expression, or a statement holding one.

        Returns:
            (str) Rendering
        """
        match node:
            case ast.Expression(expression=expression):
                return self._expression(expression)
            case ast.Print(expression=expression):
                return f"{self._expression(expression)} print"
            case ast.Stmt():
                return AstPrinter().print(node)
        return self._expression(node)

    def _join(self, *parts):
        return " ".join(part for part in parts if part)

    def _expression(self, expr):
        match expr:
            case ast.Literal(value=value):
                return _literal(value)
            case ast.Grouping(expression=expression):
                return self._expression(expression)
            case ast.Unary(operator=operator, right=right):
                name = "neg" if operator.lexeme == "-" else operator.lexeme
                return self._join(self._expression(right), name)
            case ast.Binary(left=left, operator=operator, right=right) | ast.Logical(
                left=left, operator=operator, right=right
            ):
                return self._join(self._expression(left), self._expression(right), operator.lexeme)
            case ast.Variable(name=name):
                return name.lexeme
            case ast.Assign(name=name, value=value):
                return self._join(self._expression(value), name.lexeme, "=")
            case ast.Call(callee=callee, arguments=arguments):
                args = map(self._expression, arguments)
                return self._join(self._expression(callee), *args, f"call/{len(arguments)}")
            case ast.Get(target=target, name=name):
                return self._join(self._expression(target), name.lexeme, ".")
            case ast.Set(target=target, name=name, value=value):
                return self._join(
                    self._expression(target), name.lexeme, self._expression(value), ".="
                )
            case ast.Index(target=target, index=index):
                return self._join(self._expression(target), self._expression(index), "[]")
            case ast.IndexSet(target=target, index=index, value=value):
                return self._join(
                    self._expression(target), self._expression(index),
                    self._expression(value), "[]=",
                )
            case ast.This():
                return "this"
            case ast.Super(method=method):
                return self._join("super", method.lexeme, ".")
            case ast.Lambda():
                return AstPrinter().print(expr)
            case ast.ArrayLiteral(elements=elements):
                return self._join(*map(self._expression, elements), f"array/{len(elements)}")
            case ast.ObjectLiteral(entries=entries):
                parts = []
                for key, value in entries:
                    parts.extend((key.lexeme, self._expression(value)))
                return self._join(*parts, f"object/{len(entries)}")
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")
