"""Runtime value helpers for Lox.

Lox values map directly onto Python objects:

- `nil` is `None`
- booleans are `bool`
- every number is a `float` (Lox numbers are doubles)
- strings are `str`
- functions are `LoxCallable` instances

Because `bool` is a subclass of `int` in Python, and `True == 1.0` holds,
the helpers below compare and classify values by exact type rather than
with `==` or `isinstance` alone.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .interpreter import Interpreter


class LoxCallable(ABC):
    """Anything that can be called from Lox code."""

    @abstractmethod
    def arity(self) -> int:
        """Exact number of arguments the callable expects."""

    @abstractmethod
    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        """Invoke the callable. Arity has already been checked by the caller."""


def is_number(value: Any) -> bool:
    return type(value) is float


def is_truthy(value: Any) -> bool:
    """Return the truthiness of a Lox value.

    `nil`, `false`, the number zero and the empty string are falsey. Every
    other value, functions included, is truthy.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0.0
    if isinstance(value, str):
        return value != ''
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Lox equality: values of different types are never equal."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if isinstance(a, LoxCallable) or isinstance(b, LoxCallable):
        return a is b
    if type(a) is not type(b):
        return False
    if is_number(a) and math.isnan(a) and math.isnan(b):
        # NaN is equal to itself in Lox
        return True
    return a == b


def to_string(value: Any) -> str:
    """Convert a Lox value to the text `print` writes.

    Integral numbers drop the trailing `.0` so `print 4;` shows `4`.
    """
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)
