"""Scanner for the Lox language.

The scanner is a thin layer over a Lark basic lexer. The grammar below
declares one terminal per `TokenType`; the start rule only exists so that
Lark keeps every terminal, the parser itself is never used. Keywords are
plain string terminals: Lark notices that `IDENTIFIER` also matches them and
re-types the match, so `or` becomes `OR` while `orchid` stays an identifier.

Lark stops at the first character it cannot match. To keep reporting
errors the way a hand-written scanner would, `scan_tokens` reports the bad
character and restarts the lexer just after it.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import ErrorReporter
from .tokens import Token, TokenType


LOX_LEXER_GRAMMAR = r"""
    start: _token*
    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG_EQUAL | BANG | EQUAL_EQUAL | EQUAL
          | GREATER_EQUAL | GREATER | LESS_EQUAL | LESS | COLON_EQUAL
          | IDENTIFIER | STRING | NUMBER
          | AND | CLASS | ELSE | FALSE | FUN | FOR | IF | NIL | OR
          | PRINT | RETURN | SUPER | THIS | TRUE | VAR | WHILE

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG_EQUAL: "!="
    BANG: "!"
    EQUAL_EQUAL: "=="
    EQUAL: "="
    GREATER_EQUAL: ">="
    GREATER: ">"
    LESS_EQUAL: "<="
    LESS: "<"
    COLON_EQUAL: ":="

    AND: "and"
    CLASS: "class"
    ELSE: "else"
    FALSE: "false"
    FUN: "fun"
    FOR: "for"
    IF: "if"
    NIL: "nil"
    OR: "or"
    PRINT: "print"
    RETURN: "return"
    SUPER: "super"
    THIS: "this"
    TRUE: "true"
    VAR: "var"
    WHILE: "while"

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT

    %import common.WS
    %ignore WS
"""


LOX_LEXER = Lark(
    LOX_LEXER_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


class Scanner:
    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.tokens: List[Token] = []

    def scan_tokens(self) -> List[Token]:
        offset = 0
        # line number of source[offset] minus one
        line_base = 0
        while offset < len(self.source):
            try:
                for raw in LOX_LEXER.lex(self.source[offset:]):
                    self.tokens.append(self._make_token(raw, line_base))
                break
            except UnexpectedCharacters as e:
                line = line_base + e.line
                if e.char == '"':
                    self.reporter.error_at_line(line, 'Unterminated string.')
                    break
                self.reporter.error_at_line(line, 'Unexpected character.')
                offset += e.pos_in_stream + 1
                line_base = line - 1
        self.tokens.append(Token(TokenType.EOF, '', None, self.source.count('\n') + 1))
        return self.tokens

    @staticmethod
    def _make_token(raw, line_base: int) -> Token:
        token_type = TokenType[raw.type]
        text = str(raw)
        literal = None
        if token_type == TokenType.NUMBER:
            literal = float(text)
        elif token_type == TokenType.STRING:
            # trim the surrounding quotes
            literal = text[1:-1]
        return Token(token_type, text, literal, line_base + raw.line)


def scan(source: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    return Scanner(source, reporter).scan_tokens()
