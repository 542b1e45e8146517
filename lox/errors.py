import sys
from typing import List, Optional, TextIO

from lox.tokens import Token, TokenType


class LoxRuntimeError(Exception):
    """Exception type used to propagate Lox runtime errors.

    The token is the one the error is reported at. Natives raise it without a
    token; the interpreter fills in the call site before it propagates.
    """
    def __init__(self, token: Optional[Token], message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ParseError(Exception):
    """Internal exception used by the parser to unwind to a statement boundary."""


def location(token: Token) -> str:
    if token.type == TokenType.EOF:
        return ' at end'
    return f" at '{token.lexeme}'"


class ErrorReporter:
    """Formats syntax and runtime errors and remembers that they happened.

    Every report is written to `stream` as `[line N] Error<where>: <message>`
    and kept in `messages` so callers and tests can inspect it.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.had_error = False
        self.had_runtime_error = False
        self.messages: List[str] = []

    def report(self, line: int, where: str, message: str):
        text = f"[line {line}] Error{where}: {message}"
        self.messages.append(text)
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def error_at_line(self, line: int, message: str):
        self.report(line, '', message)
        self.had_error = True

    def error(self, token: Token, message: str):
        self.report(token.line, location(token), message)
        self.had_error = True

    def runtime_error(self, err: LoxRuntimeError):
        if err.token is None:
            text = f"Error: {err.message}"
            self.messages.append(text)
            print(text, file=self.stream if self.stream is not None else sys.stderr)
        else:
            self.report(err.token.line, location(err.token), err.message)
        self.had_runtime_error = True

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False
