"""Recursive descent parser producing the Lox syntax tree.

Expression precedence, lowest to highest:

    assignment -> or -> and -> equality -> comparison -> term -> factor
    -> unary -> call (call, member, index) -> primary

Assignment is right associative, every binary tier is left associative.

A syntax error records a diagnostic and raises `ParseError`, which unwinds to
the enclosing declaration. The parser then synchronizes by discarding tokens
until a statement boundary, so one parse can report many independent errors.
"""

__all__ = ["Parser", "parse", "parse_expr"]

import lox
from lox import _ast as ast


T = lox.TokenType

MAX_ARGUMENTS = 255

# Tokens that begin a declaration or statement, used to resynchronize
_STATEMENT_STARTS = frozenset(
    (T.CLASS, T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN)
)


class Parser:
    """Build statements or a bare expression from a token sequence.

    Args:
        tokens: (list[Token]) Tokens ending with EOF
        diagnostics: (Diagnostics | None) Where to record syntax errors

    Attributes:
        diagnostics: (Diagnostics) Syntax errors found so far
    """

    def __init__(self, tokens, diagnostics=None):
        self.tokens = tokens
        self.current = 0
        self.diagnostics = diagnostics if diagnostics is not None else lox.Diagnostics()

    def parse(self):
        """Parse a whole program.

        Declarations that fail to parse are reported and left out.

        Returns:
            (list[Stmt]) Parsed statements
        """
        statements = []
        while not self._is_at_end():
            statement = self._declaration()
            if statement is not None:
                statements.append(statement)
        return statements

    def parse_expression(self):
        """Parse the tokens as a single bare expression.

        This is for the REPL, which prints the value of a line that is just
        an expression.

        Returns:
            (Expr | None) The expression, or None if the tokens are not
            exactly one expression
        """
        try:
            expr = self._expression()
        except lox.ParseError:
            return None
        if not self._is_at_end():
            return None
        return expr

    # -----------------------------------------------------------------------
    # Declarations and statements

    def _declaration(self):
        try:
            if self._match(T.CLASS):
                return self._class_declaration()
            if self._check(T.FUN) and self._check_next(T.IDENTIFIER):
                self._advance()
                return self._function("function")
            if self._match(T.VAR):
                return self._var_declaration()
            return self._statement()
        except lox.ParseError:
            self._synchronize()
            return None

    def _class_declaration(self):
        name = self._consume(T.IDENTIFIER, "Expect class name.")

        superclasses = []
        if self._match(T.LESS):
            while True:
                self._consume(T.IDENTIFIER, "Expect superclass name.")
                superclasses.append(ast.Variable(self._previous()))
                if not self._match(T.COMMA):
                    break

        self._consume(T.LEFT_BRACE, "Expect '{' before class body.")
        methods = []
        while not self._check(T.RIGHT_BRACE) and not self._is_at_end():
            methods.append(self._function("method"))
        self._consume(T.RIGHT_BRACE, "Expect '}' after class body.")

        return ast.Class(name, tuple(superclasses), tuple(methods))

    def _function(self, kind):
        name = self._consume(T.IDENTIFIER, f"Expect {kind} name.")
        self._consume(T.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params = self._parameters()
        self._consume(T.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self._block()
        return ast.Function(name, params, body)

    def _parameters(self):
        """Parse a parameter list up to and including the closing paren."""
        params = []
        if not self._check(T.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self._error(self._peek(), "Can't have more than 255 parameters.")
                params.append(self._consume(T.IDENTIFIER, "Expect parameter name."))
                if not self._match(T.COMMA):
                    break
        self._consume(T.RIGHT_PAREN, "Expect ')' after parameters.")
        return tuple(params)

    def _var_declaration(self, terminated=True):
        declarators = []
        while True:
            name = self._consume(T.IDENTIFIER, "Expect variable name.")
            initializer = None
            if self._match(T.EQUAL):
                initializer = self._expression()
            declarators.append(ast.Declarator(name, initializer))
            if not self._match(T.COMMA):
                break

        if terminated:
            self._consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return ast.Var(tuple(declarators))

    def _statement(self):
        if self._match(T.FOR):
            return self._for_statement()
        if self._match(T.IF):
            return self._if_statement()
        if self._match(T.PRINT):
            return self._print_statement()
        if self._match(T.RETURN):
            return self._return_statement()
        if self._match(T.WHILE):
            return self._while_statement()
        if self._match(T.LEFT_BRACE):
            return ast.Block(self._block())
        return self._expression_statement()

    def _for_statement(self):
        """Parse a `for` loop and desugar it into a while loop.

        `for (init; cond; incr) body` becomes
        `{ init; while (cond) { body; incr; } }`.
        """
        self._consume(T.LEFT_PAREN, "Expect '(' after 'for'.")

        if self._match(T.SEMICOLON):
            initializer = None
        elif self._match(T.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(T.SEMICOLON):
            condition = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(T.RIGHT_PAREN):
            increment = self._expression()
        self._consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        if increment is not None:
            body = ast.Block((body, ast.Expression(increment)))
        if condition is None:
            condition = ast.Literal(True)
        body = ast.While(condition, body)
        if initializer is not None:
            body = ast.Block((initializer, body))
        return body

    def _if_statement(self):
        self._consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(T.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(T.ELSE):
            else_branch = self._statement()
        return ast.If(condition, then_branch, else_branch)

    def _print_statement(self):
        value = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after value.")
        return ast.Print(value)

    def _return_statement(self):
        keyword = self._previous()
        value = None
        if not self._check(T.SEMICOLON):
            value = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after return value.")
        return ast.Return(keyword, value)

    def _while_statement(self):
        self._consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(T.RIGHT_PAREN, "Expect ')' after condition.")
        body = self._statement()
        return ast.While(condition, body)

    def _block(self):
        """Parse declarations up to the closing brace."""
        statements = []
        while not self._check(T.RIGHT_BRACE) and not self._is_at_end():
            statement = self._declaration()
            if statement is not None:
                statements.append(statement)
        self._consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return tuple(statements)

    def _expression_statement(self):
        expr = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after expression.")
        return ast.Expression(expr)

    # -----------------------------------------------------------------------
    # Expressions

    def _expression(self):
        return self._assignment()

    def _assignment(self):
        expr = self._or()

        if self._match(T.EQUAL):
            equals = self._previous()
            value = self._assignment()

            match expr:
                case ast.Variable(name=name):
                    return ast.Assign(name, value)
                case ast.Get(target=target, name=name):
                    return ast.Set(target, name, value)
                case ast.Index(target=target, bracket=bracket, index=index):
                    return ast.IndexSet(target, bracket, index, value)

            # Reported without unwinding, the parser is not confused
            self._error(equals, "Invalid assignment target.")

        return expr

    def _or(self):
        expr = self._and()
        while self._match(T.OR, T.OR_OR):
            operator = self._previous()
            right = self._and()
            expr = ast.Logical(expr, operator, right)
        return expr

    def _and(self):
        expr = self._equality()
        while self._match(T.AND, T.AND_AND):
            operator = self._previous()
            right = self._equality()
            expr = ast.Logical(expr, operator, right)
        return expr

    def _binary_tier(self, operand, *operators):
        """Parse one left associative tier of binary operators."""
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = ast.Binary(expr, operator, right)
        return expr

    def _equality(self):
        return self._binary_tier(self._comparison, T.BANG_EQUAL, T.EQUAL_EQUAL)

    def _comparison(self):
        return self._binary_tier(
            self._term, T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL
        )

    def _term(self):
        return self._binary_tier(self._factor, T.MINUS, T.PLUS)

    def _factor(self):
        return self._binary_tier(self._unary, T.SLASH, T.STAR)

    def _unary(self):
        if self._match(T.BANG, T.MINUS):
            operator = self._previous()
            right = self._unary()
            return ast.Unary(operator, right)
        return self._call()

    def _call(self):
        expr = self._primary()
        while True:
            if self._match(T.LEFT_PAREN):
                expr = self._finish_call(expr)
            elif self._match(T.DOT):
                name = self._consume(T.IDENTIFIER, "Expect property name after '.'.")
                expr = ast.Get(expr, name)
            elif self._match(T.LEFT_BRACKET):
                bracket = self._previous()
                index = self._expression()
                self._consume(T.RIGHT_BRACKET, "Expect ']' after index.")
                expr = ast.Index(expr, bracket, index)
            else:
                break
        return expr

    def _finish_call(self, callee):
        arguments = []
        if not self._check(T.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self._error(self._peek(), "Can't have more than 255 arguments.")
                arguments.append(self._expression())
                if not self._match(T.COMMA):
                    break
        paren = self._consume(T.RIGHT_PAREN, "Expect ')' after arguments.")
        return ast.Call(callee, paren, tuple(arguments))

    def _primary(self):
        if self._match(T.FALSE):
            return ast.Literal(False)
        if self._match(T.TRUE):
            return ast.Literal(True)
        if self._match(T.NIL):
            return ast.Literal(None)
        if self._match(T.NUMBER, T.STRING):
            return ast.Literal(self._previous().literal)

        if self._match(T.THIS):
            return ast.This(self._previous())
        if self._match(T.SUPER):
            keyword = self._previous()
            self._consume(T.DOT, "Expect '.' after 'super'.")
            method = self._consume(T.IDENTIFIER, "Expect superclass method name.")
            return ast.Super(keyword, method)
        if self._match(T.IDENTIFIER):
            return ast.Variable(self._previous())

        if self._match(T.FUN):
            return self._lambda()
        if self._match(T.LEFT_PAREN):
            expr = self._expression()
            self._consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return ast.Grouping(expr)
        if self._match(T.LEFT_BRACKET):
            return self._array_literal()
        if self._match(T.LEFT_BRACE):
            return self._object_literal()

        raise self._error(self._peek(), "Expect expression.")

    def _lambda(self):
        keyword = self._previous()
        self._consume(T.LEFT_PAREN, "Expect '(' after 'fun'.")
        params = self._parameters()
        self._consume(T.LEFT_BRACE, "Expect '{' before function body.")
        body = self._block()
        return ast.Lambda(keyword, params, body)

    def _array_literal(self):
        bracket = self._previous()
        elements = []
        while not self._check(T.RIGHT_BRACKET) and not self._is_at_end():
            elements.append(self._expression())
            if not self._match(T.COMMA):
                break
        self._consume(T.RIGHT_BRACKET, "Expect ']' after array elements.")
        return ast.ArrayLiteral(bracket, tuple(elements))

    def _object_literal(self):
        brace = self._previous()
        entries = []
        while not self._check(T.RIGHT_BRACE) and not self._is_at_end():
            if not self._match(T.IDENTIFIER, T.STRING):
                raise self._error(self._peek(), "Expect property name.")
            key = self._previous()
            self._consume(T.COLON, "Expect ':' after property name.")
            entries.append((key, self._expression()))
            if not self._match(T.COMMA):
                break
        self._consume(T.RIGHT_BRACE, "Expect '}' after object properties.")
        return ast.ObjectLiteral(brace, tuple(entries))

    # -----------------------------------------------------------------------
    # Token helpers

    def _synchronize(self):
        """Discard tokens until the likely start of the next statement."""
        self._advance()
        while not self._is_at_end():
            if self._previous().type is T.SEMICOLON:
                return
            if self._peek().type in _STATEMENT_STARTS:
                return
            self._advance()

    def _error(self, token, message):
        """Record a syntax error and build the signal to unwind with."""
        self.diagnostics.token_error("parse", token, message)
        return lox.ParseError(message)

    def _consume(self, type, message):
        if self._check(type):
            return self._advance()
        raise self._error(self._peek(), message)

    def _match(self, *types):
        for type in types:
            if self._check(type):
                self._advance()
                return True
        return False

    def _check(self, type):
        if self._is_at_end():
            return False
        return self._peek().type is type

    def _check_next(self, type):
        if self.current + 1 >= len(self.tokens):
            return False
        return self.tokens[self.current + 1].type is type

    def _advance(self):
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self):
        return self._peek().type is T.EOF

    def _peek(self):
        return self.tokens[self.current]

    def _previous(self):
        return self.tokens[self.current - 1]


def parse(source, diagnostics=None):
    """Scan and parse source text into statements.

    Args:
        source: (str) Source text
        diagnostics: (Diagnostics | None) Where to record lexical and syntax errors

    Returns:
        (tuple[list[Stmt], Diagnostics]) Statements and the diagnostics
    """
    tokens, diagnostics = lox.scan(source, diagnostics)
    parser = Parser(tokens, diagnostics)
    return parser.parse(), diagnostics


def parse_expr(source):
    """Scan and parse source text as a single bare expression.

    Returns:
        (Expr | None) The expression, or None when the source is anything else
    """
    diagnostics = lox.Diagnostics()
    tokens, _ = lox.scan(source, diagnostics)
    expr = Parser(tokens, diagnostics).parse_expression()
    if diagnostics:
        return None
    return expr
