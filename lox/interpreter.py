"""Tree-walking interpreter for the Lox language.

Statements are executed by `Interpreter.execute` and expressions evaluated by
`Interpreter.evaluate`. Both take the environment to run in as an argument;
the interpreter holds no "current scope" of its own, so leaving a block on
any path simply means the caller keeps using the environment it had.

`return` does not raise. Every statement executor returns either `None`
(the statement completed normally) or a `ReturnSignal` carrying the value,
and blocks, loops and conditionals hand a signal straight back to their
caller until a function call consumes it.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
    Stmt, Expression, Print, Var, Block, If, While, Function, Return,
)
from .environment import Environment
from .errors import ErrorReporter, LoxRuntimeError
from .std import populate_native_environment
from .tokens import Token, TokenType
from .types import LoxCallable, is_equal, is_number, is_truthy, to_string

# Each Lox call costs several Python frames
RECURSION_LIMIT = 10000


@dataclass
class ReturnSignal:
    """Outcome of a statement that executed `return`."""
    value: Any


class LoxFunction(LoxCallable):
    """Represents a user-defined Lox function."""
    def __init__(self, declaration: Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure  # scope the function was declared in

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        # Parent is the closure, not the caller's scope
        call_env = Environment(self.closure)
        for param, arg in zip(self.declaration.params, arguments):
            call_env.define(param.lexeme, arg)
        res = interpreter.execute_block(self.declaration.body, call_env)
        if isinstance(res, ReturnSignal):
            return res.value
        return None

    def __str__(self) -> str:
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self) -> str:
        return f"<function {self.declaration.name.lexeme}>"


class Interpreter:
    """Core interpreter that executes Lox AST."""
    def __init__(
        self,
        reporter: Optional[ErrorReporter] = None,
        out: Optional[TextIO] = None,
        debug_level: int = 0,
        debug_file: str = 'debug.txt',
    ):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out
        self.globals = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        populate_native_environment(self.globals)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: List[Stmt]) -> bool:
        """Run top-level statements in the global scope.

        Returns False if a runtime error stopped the run. The error has been
        reported by then; statements before it keep their effects.
        """
        if self.debug_level >= 1:
            self.debug(f"run {len(statements)} statement(s)")
        try:
            for stmt in statements:
                self.execute(stmt, self.globals)
        except LoxRuntimeError as err:
            if self.debug_level >= 1:
                self.debug(f"runtime error: {err.message}")
            self.reporter.runtime_error(err)
            return False
        except RecursionError:
            if self.debug_level >= 1:
                self.debug('runtime error: stack overflow')
            self.reporter.runtime_error(LoxRuntimeError(None, 'Stack overflow.'))
            return False
        return True

    def execute_block(self, statements: List[Stmt], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expression, env)
            print(to_string(value), file=self.out)
            return None
        if isinstance(node, Var):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else None
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme} = {to_string(value)}")
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, Environment(env))
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.then_branch, env)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env)
            return None
        if isinstance(node, While):
            while True:
                cond = self.evaluate(node.condition, env)
                if not is_truthy(cond):
                    if self.debug_level >= 3:
                        self.debug(f"while condition {to_string(cond)} -> exit")
                    break
                res = self.execute(node.body, env)
                if isinstance(res, ReturnSignal):
                    return res
            return None
        if isinstance(node, Function):
            env.define(node.name.lexeme, LoxFunction(node, env))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme}")
            return None
        if isinstance(node, Return):
            value = self.evaluate(node.value, env) if node.value is not None else None
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            # The deciding operand is returned as is, not coerced to a boolean
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            if node.operator.type == TokenType.BANG:
                return not is_truthy(right)
            if node.operator.type == TokenType.MINUS:
                check_number_operand(node.operator, right)
                return -right
            raise LoxRuntimeError(node.operator, f"Unknown unary operator '{node.operator.lexeme}'.")
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            arguments = [self.evaluate(arg, env) for arg in node.arguments]
            return self.call_function(callee, arguments, node.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any], paren: Token) -> Any:
        if not isinstance(func, LoxCallable):
            raise LoxRuntimeError(paren, 'Can only call functions and classes.')
        if len(args) != func.arity():
            raise LoxRuntimeError(paren, f"Expected {func.arity()} arguments but got {len(args)}.")
        if self.debug_level >= 4:
            self.debug(f"call {func!r} with {len(args)} argument(s)")
        try:
            return func.call(self, args)
        except LoxRuntimeError as ex:
            # natives do not know where they were called from
            if ex.token is None:
                ex.token = paren
            raise
        except RecursionError:
            raise LoxRuntimeError(paren, 'Stack overflow.') from None

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        # equality works on operands of any type
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        # plus is addition for numbers and concatenation for strings
        if op == TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(operator, 'Operands must be two numbers or two strings.')

        check_number_operands(operator, a, b)
        if op == TokenType.MINUS:
            return a - b
        if op == TokenType.STAR:
            return a * b
        if op == TokenType.SLASH:
            return divide(a, b)
        if op == TokenType.GREATER:
            return a > b
        if op == TokenType.GREATER_EQUAL:
            return a >= b
        if op == TokenType.LESS:
            return a < b
        if op == TokenType.LESS_EQUAL:
            return a <= b
        raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")


def check_number_operand(operator: Token, operand: Any):
    if is_number(operand):
        return
    raise LoxRuntimeError(operator, 'Operand must be a number.')


def check_number_operands(operator: Token, left: Any, right: Any):
    if is_number(left) and is_number(right):
        return
    raise LoxRuntimeError(operator, 'Operands must be numbers.')


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b
