"""JSON serialization/deserialization for the Alp AST.

This module converts between Alp AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types, including the token each node was built
from.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    StringLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    ArrayLiteral,
    HashLiteral,
    IndexExpression,
)
from .token import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type.name, "literal": t.literal, "line": t.line, "column": t.column}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["literal"], o.get("line", 0), o.get("column", 0))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    tok = token_to_obj(node.token)
    if isinstance(node, LetStatement):
        return {"type": "LetStatement", "token": tok, "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "token": tok, "return_value": ast_to_obj(node.return_value)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "token": tok, "expression": ast_to_obj(node.expression)}
    if isinstance(node, BlockStatement):
        return {"type": "BlockStatement", "token": tok, "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "token": tok, "value": node.value}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "token": tok, "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "token": tok, "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "token": tok, "value": node.value}
    if isinstance(node, PrefixExpression):
        return {"type": "PrefixExpression", "token": tok, "operator": node.operator, "right": ast_to_obj(node.right)}
    if isinstance(node, InfixExpression):
        return {
            "type": "InfixExpression",
            "token": tok,
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            "type": "IfExpression",
            "token": tok,
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "token": tok,
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "token": tok,
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "token": tok, "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, HashLiteral):
        return {"type": "HashLiteral", "token": tok, "pairs": [[ast_to_obj(k), ast_to_obj(v)] for (k, v) in node.pairs]}
    if isinstance(node, IndexExpression):
        return {"type": "IndexExpression", "token": tok, "left": ast_to_obj(node.left), "index": ast_to_obj(node.index)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    tok = token_from_obj(obj["token"])
    if t == "LetStatement":
        return LetStatement(tok, name=ast_from_obj(obj["name"]), value=ast_from_obj(obj.get("value")))
    if t == "ReturnStatement":
        return ReturnStatement(tok, return_value=ast_from_obj(obj.get("return_value")))
    if t == "ExpressionStatement":
        return ExpressionStatement(tok, expression=ast_from_obj(obj.get("expression")))
    if t == "BlockStatement":
        return BlockStatement(tok, statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Identifier":
        return Identifier(tok, value=obj["value"])
    if t == "IntegerLiteral":
        return IntegerLiteral(tok, value=int(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(tok, value=obj["value"])
    if t == "BooleanLiteral":
        return BooleanLiteral(tok, value=bool(obj["value"]))
    if t == "PrefixExpression":
        return PrefixExpression(tok, operator=obj["operator"], right=ast_from_obj(obj["right"]))
    if t == "InfixExpression":
        return InfixExpression(
            tok,
            left=ast_from_obj(obj["left"]),
            operator=obj["operator"],
            right=ast_from_obj(obj["right"]),
        )
    if t == "IfExpression":
        return IfExpression(
            tok,
            condition=ast_from_obj(obj["condition"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            tok,
            parameters=[ast_from_obj(p) for p in obj["parameters"]],
            body=ast_from_obj(obj["body"]),
        )
    if t == "CallExpression":
        return CallExpression(
            tok,
            function=ast_from_obj(obj["function"]),
            arguments=[ast_from_obj(a) for a in obj["arguments"]],
        )
    if t == "ArrayLiteral":
        return ArrayLiteral(tok, elements=[ast_from_obj(e) for e in obj["elements"]])
    if t == "HashLiteral":
        return HashLiteral(tok, pairs=[(ast_from_obj(k), ast_from_obj(v)) for (k, v) in obj["pairs"]])
    if t == "IndexExpression":
        return IndexExpression(tok, left=ast_from_obj(obj["left"]), index=ast_from_obj(obj["index"]))

    raise ValueError(f"Unknown AST node type: {t}")
