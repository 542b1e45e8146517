from dataclasses import dataclass
from typing import Any, Callable, List

from lox.types import LoxCallable


@dataclass(eq=False)
class BuiltinFunction(LoxCallable):
    name: str
    expected_args: int
    fn: Callable[[List[Any]], Any]

    def arity(self) -> int:
        return self.expected_args

    def call(self, interpreter, arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
