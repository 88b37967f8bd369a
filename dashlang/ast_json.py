"""JSON serialization/deserialization for the Dash AST.

This module converts between Dash AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node carries a
``"type"`` tag naming its class.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    PrintStmt,
    LetStmt,
    IfStmt,
    WhileStmt,
    BreakStmt,
    ContinueStmt,
    FnStmt,
    CallStmt,
    ReturnStmt,
    IntLit,
    StrLit,
    Var,
    Call,
    BinaryOp,
    Op,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Expressions
    if isinstance(node, IntLit):
        return {"type": "IntLit", "value": node.value}
    if isinstance(node, StrLit):
        return {"type": "StrLit", "value": node.value}
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": ast_to_obj(node.args)}
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "left": ast_to_obj(node.left),
            "op": node.op.value,
            "right": ast_to_obj(node.right),
        }

    # Statements
    if isinstance(node, Program):
        return {"type": "Program", "body": ast_to_obj(node.body)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, LetStmt):
        return {"type": "LetStmt", "name": node.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, BreakStmt):
        return {"type": "BreakStmt"}
    if isinstance(node, ContinueStmt):
        return {"type": "ContinueStmt"}
    if isinstance(node, FnStmt):
        return {
            "type": "FnStmt",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallStmt):
        return {"type": "CallStmt", "name": node.name, "args": ast_to_obj(node.args)}
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "expr": ast_to_obj(node.expr)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _block(items: Any) -> Any:
    if items is None:
        return None
    return [ast_from_obj(s) for s in items]


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "IntLit":
        return IntLit(int(obj["value"]))
    if t == "StrLit":
        return StrLit(obj["value"])
    if t == "Var":
        return Var(obj["name"])
    if t == "Call":
        return Call(obj["name"], _block(obj["args"]))
    if t == "BinaryOp":
        return BinaryOp(ast_from_obj(obj["left"]), Op(obj["op"]), ast_from_obj(obj["right"]))
    if t == "Program":
        return Program(body=_block(obj["body"]))
    if t == "PrintStmt":
        return PrintStmt(ast_from_obj(obj["expr"]))
    if t == "LetStmt":
        return LetStmt(obj["name"], ast_from_obj(obj["expr"]))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=_block(obj["then_branch"]),
            else_branch=_block(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=_block(obj["body"]))
    if t == "BreakStmt":
        return BreakStmt()
    if t == "ContinueStmt":
        return ContinueStmt()
    if t == "FnStmt":
        return FnStmt(name=obj["name"], params=list(obj["params"]), body=_block(obj["body"]))
    if t == "CallStmt":
        return CallStmt(obj["name"], _block(obj["args"]))
    if t == "ReturnStmt":
        return ReturnStmt(ast_from_obj(obj["expr"]))

    raise ValueError(f"Unknown AST node type: {t}")
