"""Lisp-style printer for expressions, handy when debugging the parser."""

from __future__ import annotations

from .ast import Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call
from .types import to_string


class AstPrinter:
    def print(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            if isinstance(expr.value, str):
                return expr.value
            return to_string(expr.value)
        if isinstance(expr, Grouping):
            return self.parenthesize('group', expr.expression)
        if isinstance(expr, Unary):
            return self.parenthesize(expr.operator.lexeme, expr.right)
        if isinstance(expr, (Binary, Logical)):
            return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)
        if isinstance(expr, Variable):
            return expr.name.lexeme
        if isinstance(expr, Assign):
            return self.parenthesize(f'= {expr.name.lexeme}', expr.value)
        if isinstance(expr, Call):
            return self.parenthesize('call', expr.callee, *expr.arguments)
        raise TypeError(f"cannot print {type(expr).__name__}")

    def parenthesize(self, name: str, *exprs: Expr) -> str:
        parts = [name] + [self.print(e) for e in exprs]
        return '(' + ' '.join(parts) + ')'
