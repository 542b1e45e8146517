"""Recursive-descent parser for the Lox language.

Grammar, lowest precedence first:

    program     -> declaration* EOF ;
    declaration -> "fun" function | varDecl | varGoDecl | statement ;
    function    -> IDENTIFIER "(" parameters? ")" block ;
    parameters  -> IDENTIFIER ( "," IDENTIFIER )* ;
    varDecl     -> "var" IDENTIFIER ( "=" expression )? ";" ;
    varGoDecl   -> IDENTIFIER ":=" expression ";" ;
    statement   -> exprStmt | forStmt | ifStmt | printStmt | returnStmt
                 | whileStmt | block ;
    forStmt     -> "for" "(" ( varDecl | exprStmt | ";" )
                   expression? ";" expression? ")" statement ;
    ifStmt      -> "if" "(" expression ")" statement ( "else" statement )? ;
    printStmt   -> "print" expression ";" ;
    returnStmt  -> "return" expression? ";" ;
    whileStmt   -> "while" "(" expression ")" statement ;
    block       -> "{" declaration* "}" ;
    exprStmt    -> expression ";" ;

    expression  -> assignment ;
    assignment  -> IDENTIFIER "=" assignment | logic_or ;
    logic_or    -> logic_and ( "or" logic_and )* ;
    logic_and   -> equality ( "and" equality )* ;
    equality    -> comparison ( ( "!=" | "==" ) comparison )* ;
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )* ;
    term        -> factor ( ( "-" | "+" ) factor )* ;
    factor      -> unary ( ( "/" | "*" ) unary )* ;
    unary       -> ( "!" | "-" ) unary | call ;
    call        -> primary ( "(" arguments? ")" )* ;
    arguments   -> expression ( "," expression )* ;
    primary     -> "true" | "false" | "nil" | NUMBER | STRING
                 | "(" expression ")" | IDENTIFIER ;

Syntax errors are reported through the `ErrorReporter` and never escape
`parse`. After an error the parser skips ahead to the next statement
boundary and carries on, so one pass reports every independent mistake.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
    Stmt, Expression, Print, Var, Block, If, While, Function, Return,
)
from .errors import ErrorReporter, ParseError
from .tokens import Token, TokenType

MAX_ARGUMENTS = 255

# tokens that can start a declaration; synchronize() stops in front of them
STATEMENT_STARTS = {
    TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
}


class Parser:
    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.current = 0
        self.function_depth = 0

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # Declarations

    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.FUN):
                return self.parse_function('function')
            if self.match(TokenType.VAR):
                return self.parse_var_declaration()
            if self.match(TokenType.IDENTIFIER):
                if self.check(TokenType.COLON_EQUAL):
                    return self.parse_var_go_declaration()
                # not a declaration after all, hand the identifier back
                self.current -= 1
            return self.parse_statement()
        except ParseError:
            self.synchronize()
            return None

    def parse_function(self, kind: str) -> Function:
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params: List[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, 'Expect parameter name.'))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        self.function_depth += 1
        try:
            body = self.parse_block()
        finally:
            self.function_depth -= 1
        return Function(name, params, body)

    def parse_var_declaration(self) -> Var:
        name = self.consume(TokenType.IDENTIFIER, 'Expect variable name.')
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def parse_var_go_declaration(self) -> Var:
        # the identifier has been consumed and ':=' is the current token
        name = self.previous()
        self.advance()
        initializer = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after ':=' declaration.")
        return Var(name, initializer)

    # Statements

    def parse_statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.parse_for_statement()
        if self.match(TokenType.IF):
            return self.parse_if_statement()
        if self.match(TokenType.PRINT):
            return self.parse_print_statement()
        if self.match(TokenType.RETURN):
            return self.parse_return_statement()
        if self.match(TokenType.WHILE):
            return self.parse_while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.parse_block())
        return self.parse_expression_statement()

    def parse_for_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.parse_var_declaration()
        else:
            initializer = self.parse_expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.parse_statement()

        # Lower to: { initializer; while (condition) { body; increment; } }
        if increment is not None:
            body = Block([body, Expression(increment)])
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block([initializer, body])
        return body

    def parse_if_statement(self) -> If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.parse_statement()
        return If(condition, then_branch, else_branch)

    def parse_print_statement(self) -> Print:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def parse_return_statement(self) -> Return:
        keyword = self.previous()
        if self.function_depth == 0:
            # reported, but the statement still parses
            self.error(keyword, "Can't return from top-level code.")
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def parse_while_statement(self) -> While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.parse_statement()
        return While(condition, body)

    def parse_block(self) -> List[Stmt]:
        # the opening brace has already been consumed
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def parse_expression_statement(self) -> Expression:
        expr = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        # Any valid target is also a valid expression, so parse the left side
        # as one and check it once we see '='.
        expr = self.parse_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            self.error(equals, 'Invalid assignment target.')
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.parse_and()
            expr = Logical(expr, operator, right)
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.parse_equality()
            expr = Logical(expr, operator, right)
        return expr

    def parse_equality(self) -> Expr:
        return self.parse_binary(self.parse_comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def parse_comparison(self) -> Expr:
        return self.parse_binary(
            self.parse_term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def parse_term(self) -> Expr:
        return self.parse_binary(self.parse_factor, TokenType.MINUS, TokenType.PLUS)

    def parse_factor(self) -> Expr:
        return self.parse_binary(self.parse_unary, TokenType.SLASH, TokenType.STAR)

    def parse_binary(self, operand, *operators: TokenType) -> Expr:
        """Parse a left-associative chain of `operand (operator operand)*`."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def parse_unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)
        return self.parse_call()

    def parse_call(self) -> Expr:
        expr = self.parse_primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    # keep parsing, the call is still well formed
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.parse_expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, arguments)

    def parse_primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), 'Expect expression.')

    # Token helpers

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        self.reporter.error(token, message)
        return ParseError(message)

    def synchronize(self):
        """Discard tokens until the start of the next statement."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()


def parse(tokens: List[Token], reporter: Optional[ErrorReporter] = None) -> List[Stmt]:
    return Parser(tokens, reporter).parse()
