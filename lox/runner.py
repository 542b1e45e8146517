"""Running Lox source: files, single strings and the interactive prompt."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .ast import Stmt
from .errors import ErrorReporter
from .interpreter import Interpreter
from .parser import Parser
from .scanner import Scanner

EXIT_OK = 0
EXIT_DATA_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_SOFTWARE = 70

PS1 = '>>> '


class Lox:
    """One interpreter session.

    The session owns a single interpreter, so globals defined by one call to
    `run` are still visible to the next one. The REPL relies on that.
    """
    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        debug_level: int = 0,
    ):
        self.reporter = ErrorReporter(err)
        self.interpreter = Interpreter(self.reporter, out=out, debug_level=debug_level)

    @property
    def had_error(self) -> bool:
        return self.reporter.had_error

    @property
    def had_runtime_error(self) -> bool:
        return self.reporter.had_runtime_error

    def parse(self, source: str) -> List[Stmt]:
        tokens = Scanner(source, self.reporter).scan_tokens()
        return Parser(tokens, self.reporter).parse()

    def run(self, source: str):
        statements = self.parse(source)
        # stop if there was a syntax error
        if self.reporter.had_error:
            return
        self.execute(statements)

    def execute(self, statements: List[Stmt]):
        self.interpreter.interpret(statements)

    def exit_status(self) -> int:
        if self.reporter.had_error:
            return EXIT_DATA_ERROR
        if self.reporter.had_runtime_error:
            return EXIT_SOFTWARE
        return EXIT_OK

    def run_file(self, path: str) -> int:
        source = Path(path).read_text(encoding='utf-8')
        self.run(source)
        return self.exit_status()

    def run_prompt(self, session: Optional[PromptSession] = None):
        if session is None:
            session = PromptSession(history=InMemoryHistory())
        print('lox REPL')
        while True:
            # each line gets a clean slate, the globals stay
            self.reporter.reset()
            try:
                line = session.prompt(PS1)
            except EOFError:
                break
            except KeyboardInterrupt:
                continue
            if not line.strip():
                continue
            self.run(line)
        print('Bye!')

    def close(self):
        self.interpreter.close()


def run_source(source: str, debug_level: int = 0) -> Lox:
    """Convenience function to run a Lox program from a source string."""
    lox = Lox(debug_level=debug_level)
    lox.run(source)
    return lox
