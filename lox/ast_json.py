"""JSON serialization/deserialization for the Lox AST.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Tokens are kept whole,
line numbers included, so a loaded tree reports errors at the same
locations as the freshly parsed one.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict

from .ast import (
    Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
    Expression, Print, Var, Block, If, While, Function, Return,
)
from .tokens import Token, TokenType

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
        Expression, Print, Var, Block, If, While, Function, Return,
    )
}


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "__type__": "Token",
        "type": token.type.name,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.line,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["lexeme"], o.get("literal"), o["line"])


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, float, int, str)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Token):
        return token_to_obj(node)
    if type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, float, int, str)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if obj.get("__type__") == "Token":
        return token_from_obj(obj)
    t = obj.get("type")
    cls = NODE_TYPES.get(t)
    if cls is None:
        raise ValueError(f"Unknown AST node type: {t}")
    kwargs = {f.name: ast_from_obj(obj.get(f.name)) for f in fields(cls)}
    if cls is Literal and isinstance(kwargs["value"], int) and not isinstance(kwargs["value"], bool):
        # JSON writes 3.0 as 3.0, but hand-written files may say 3
        kwargs["value"] = float(kwargs["value"])
    return cls(**kwargs)


def program_to_obj(statements) -> Dict[str, Any]:
    return {"type": "Program", "body": ast_to_obj(list(statements))}


def program_from_obj(obj: Dict[str, Any]):
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("AST file must contain a Program object")
    return ast_from_obj(obj["body"])
