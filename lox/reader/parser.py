"""
  Lox Parser

Recursive descent over the token list, one method per grammar rule:

    program     -> declaration* EOF
    declaration -> classDecl | funDecl | varDecl | statement
    classDecl   -> "class" IDENT ( "<" IDENT )? "{" function* "}"
    funDecl     -> "fun" function
    function    -> IDENT "(" parameters? ")" block
    varDecl     -> "var" IDENT ( "=" expression )? ";"
    statement   -> exprStmt | forStmt | ifStmt | printStmt | returnStmt
                 | whileStmt | block
    expression  -> assignment
    assignment  -> ( call "." )? IDENT "=" assignment | logic_or
    logic_or    -> logic_and ( "or" logic_and )*
    logic_and   -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | call
    call        -> primary ( "(" arguments? ")" | "." IDENT )*
    primary     -> "true" | "false" | "nil" | "this" | NUMBER | STRING
                 | IDENT | "(" expression ")" | "super" "." IDENT

Syntax errors are reported and the parser synchronizes to the next statement
boundary, so a single pass reports as many errors as it can. `for` loops are
desugared into Block and While nodes.
Source nested deeper than the host stack allows is reported as
"Too much nesting." and parsing stops there.
"""

from __future__ import annotations

from typing import Optional

from lox.ast import expr, stmt
from lox.ast.expr import Expr
from lox.ast.stmt import Stmt
from lox.reporter import ErrorReporter
from lox.types.token import Token, TokenType

MAX_ARGUMENTS = 255
NESTING_ERROR = "Too much nesting."

_STATEMENT_STARTS = {
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
}


class ParseError(Exception):
    """Unwinds the parser to the enclosing declaration after a reported error."""


class Parser:
    def __init__(self, tokens: list[Token], reporter: ErrorReporter):
        self.tokens = tokens
        self.reporter = reporter
        self.current = 0

    def parse(self) -> list[Stmt]:
        statements: list[Stmt] = []
        try:
            while not self._is_at_end():
                declaration = self._declaration()
                if declaration is not None:
                    statements.append(declaration)
        except RecursionError:
            # Reported as a static error so the caller never runs a half-parsed program.
            self.reporter.error(self._peek(), NESTING_ERROR)
        return statements

    # --- Declarations ---

    def _declaration(self) -> Optional[Stmt]:
        try:
            if self._match(TokenType.CLASS):
                return self._class_declaration()
            if self._match(TokenType.FUN):
                return self._function("function")
            if self._match(TokenType.VAR):
                return self._var_declaration()
            return self._statement()
        except ParseError:
            self._synchronize()
            return None

    def _class_declaration(self) -> Stmt:
        name = self._consume(TokenType.IDENTIFIER, "Expect class name.")

        superclass = None
        if self._match(TokenType.LESS):
            self._consume(TokenType.IDENTIFIER, "Expect superclass name.")
            superclass = expr.Variable(self._previous())

        self._consume(TokenType.LEFT_BRACE, "Expect '{' before class body.")
        methods: list[stmt.Function] = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            methods.append(self._function("method"))
        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after class body.")

        return stmt.Class(name, superclass, methods)

    def _function(self, kind: str) -> stmt.Function:
        name = self._consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self._consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        parameters: list[Token] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(parameters) >= MAX_ARGUMENTS:
                    self._error(self._peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                parameters.append(self._consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")

        self._consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self._block()
        return stmt.Function(name, parameters, body)

    def _var_declaration(self) -> Stmt:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return stmt.Var(name, initializer)

    # --- Statements ---

    def _statement(self) -> Stmt:
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.RETURN):
            return self._return_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.LEFT_BRACE):
            return stmt.Block(self._block())
        return self._expression_statement()

    def _for_statement(self) -> Stmt:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[Stmt]
        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        if increment is not None:
            body = stmt.Block([body, stmt.Expression(increment)])
        if condition is None:
            condition = expr.Literal(True)
        body = stmt.While(condition, body)
        if initializer is not None:
            body = stmt.Block([initializer, body])

        return body

    def _if_statement(self) -> Stmt:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._statement()

        return stmt.If(condition, then_branch, else_branch)

    def _print_statement(self) -> Stmt:
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return stmt.Print(value)

    def _return_statement(self) -> Stmt:
        keyword = self._previous()
        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return stmt.Return(keyword, value)

    def _while_statement(self) -> Stmt:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self._statement()
        return stmt.While(condition, body)

    def _expression_statement(self) -> Stmt:
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return stmt.Expression(value)

    def _block(self) -> list[Stmt]:
        statements: list[Stmt] = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            declaration = self._declaration()
            if declaration is not None:
                statements.append(declaration)
        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # --- Expressions ---

    def _expression(self) -> Expr:
        return self._assignment()

    def _assignment(self) -> Expr:
        target = self._or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            match target:
                case expr.Variable(name=name):
                    return expr.Assign(name, value)
                case expr.Get(object=obj, name=name):
                    return expr.Set(obj, name, value)

            # Reported, not raised: the parser is not confused about where it is.
            self._error(equals, "Invalid assignment target.")

        return target

    def _or(self) -> Expr:
        left = self._and()
        while self._match(TokenType.OR):
            operator = self._previous()
            right = self._and()
            left = expr.Logical(left, operator, right)
        return left

    def _and(self) -> Expr:
        left = self._equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            right = self._equality()
            left = expr.Logical(left, operator, right)
        return left

    def _equality(self) -> Expr:
        return self._binary(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self) -> Expr:
        return self._binary(
            self._term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def _term(self) -> Expr:
        return self._binary(self._factor, TokenType.MINUS, TokenType.PLUS)

    def _factor(self) -> Expr:
        return self._binary(self._unary, TokenType.SLASH, TokenType.STAR)

    def _binary(self, operand, *operators: TokenType) -> Expr:
        """Left-associative chain of `operand (op operand)*`."""
        left = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            left = expr.Binary(left, operator, right)
        return left

    def _unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self._unary()
            return expr.Unary(operator, right)
        return self._call()

    def _call(self) -> Expr:
        callee = self._primary()
        while True:
            if self._match(TokenType.LEFT_PAREN):
                callee = self._finish_call(callee)
            elif self._match(TokenType.DOT):
                name = self._consume(TokenType.IDENTIFIER, "Expect property name after '.'.")
                callee = expr.Get(callee, name)
            else:
                break
        return callee

    def _finish_call(self, callee: Expr) -> Expr:
        arguments: list[Expr] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self._error(self._peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break
        paren = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return expr.Call(callee, paren, arguments)

    def _primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return expr.Literal(False)
        if self._match(TokenType.TRUE):
            return expr.Literal(True)
        if self._match(TokenType.NIL):
            return expr.Literal(None)
        if self._match(TokenType.NUMBER, TokenType.STRING):
            return expr.Literal(self._previous().literal)
        if self._match(TokenType.SUPER):
            keyword = self._previous()
            self._consume(TokenType.DOT, "Expect '.' after 'super'.")
            method = self._consume(TokenType.IDENTIFIER, "Expect superclass method name.")
            return expr.Super(keyword, method)
        if self._match(TokenType.THIS):
            return expr.This(self._previous())
        if self._match(TokenType.IDENTIFIER):
            return expr.Variable(self._previous())
        if self._match(TokenType.LEFT_PAREN):
            inner = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return expr.Grouping(inner)

        raise self._error(self._peek(), "Expect expression.")

    # --- Token stream helpers ---

    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _error(self, token: Token, message: str) -> ParseError:
        self.reporter.error(token, message)
        return ParseError(message)

    def _synchronize(self) -> None:
        self._advance()
        while not self._is_at_end():
            if self._previous().type == TokenType.SEMICOLON:
                return
            if self._peek().type in _STATEMENT_STARTS:
                return
            self._advance()


def parse(tokens: list[Token], reporter: ErrorReporter | None = None) -> list[Stmt]:
    """Convenience wrapper: parse `tokens` with a fresh or given reporter."""
    return Parser(tokens, reporter if reporter is not None else ErrorReporter()).parse()
