"""JSON (de)serialization for BCC AST nodes.

Every node becomes a dict with a "type" key and a "span" ({"start", "end"}).
Literal values are tagged with their BCC type so that ints, doubles, bools,
nil and tuples survive a trip through JSON unchanged.
"""

from typing import Any, Dict

from .ast import (
    Program, ExprStmt, PrintStmt, Block, IfStmt, WhileStmt, ForStmt,
    Literal, Ident, Assign, NameTarget, IgnoreTarget, MultiAssign, BinaryOp,
    UnaryOp, LogicalOp, KeywordArg, Call, Grouping, TupleLit, Member,
)
from .tokens import Span
from .types import NIL, NilVal, TupleVal, type_name


def span_to_obj(span: Span) -> Dict[str, int]:
    return {"start": span.start, "end": span.end}


def span_from_obj(obj: Dict[str, int]) -> Span:
    return Span(obj["start"], obj["end"])


def value_to_obj(value: Any) -> Dict[str, Any]:
    if isinstance(value, NilVal):
        return {"value_type": "nil"}
    if isinstance(value, TupleVal):
        return {"value_type": "tuple", "value": [value_to_obj(v) for v in value.items]}
    if isinstance(value, (bool, int, float, str)):
        return {"value_type": type_name(value), "value": value}
    raise TypeError(f"Unsupported literal value for serialization: {value!r}")


def value_from_obj(obj: Dict[str, Any]) -> Any:
    t = obj.get("value_type")
    if t == "nil":
        return NIL
    if t == "bool":
        return bool(obj["value"])
    if t == "int":
        return int(obj["value"])
    if t == "double":
        return float(obj["value"])
    if t == "string":
        return str(obj["value"])
    if t == "tuple":
        return TupleVal(tuple(value_from_obj(v) for v in obj["value"]))
    raise ValueError(f"Unknown literal value type: {t}")


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(s) for s in node.body]}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr), "span": span_to_obj(node.span)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr), "span": span_to_obj(node.span)}
    if isinstance(node, Block):
        return {
            "type": "Block",
            "statements": [ast_to_obj(s) for s in node.statements],
            "span": span_to_obj(node.span),
        }
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, WhileStmt):
        return {
            "type": "WhileStmt",
            "condition": ast_to_obj(node.condition),
            "body": ast_to_obj(node.body),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, ForStmt):
        return {
            "type": "ForStmt",
            "init": ast_to_obj(node.init),
            "condition": ast_to_obj(node.condition),
            "post": ast_to_obj(node.post),
            "body": ast_to_obj(node.body),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value), "span": span_to_obj(node.span)}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name, "span": span_to_obj(node.span)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value), "span": span_to_obj(node.span)}
    if isinstance(node, NameTarget):
        return {"type": "NameTarget", "name": node.name, "span": span_to_obj(node.span)}
    if isinstance(node, IgnoreTarget):
        return {"type": "IgnoreTarget", "span": span_to_obj(node.span)}
    if isinstance(node, MultiAssign):
        return {
            "type": "MultiAssign",
            "targets": [ast_to_obj(t) for t in node.targets],
            "value": ast_to_obj(node.value),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, LogicalOp):
        return {
            "type": "LogicalOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand), "span": span_to_obj(node.span)}
    if isinstance(node, KeywordArg):
        return {"type": "KeywordArg", "name": node.name, "value": ast_to_obj(node.value), "span": span_to_obj(node.span)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "func": ast_to_obj(node.func),
            "args": [ast_to_obj(a) for a in node.args],
            "kwargs": [ast_to_obj(k) for k in node.kwargs],
            "span": span_to_obj(node.span),
        }
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expr": ast_to_obj(node.expr), "span": span_to_obj(node.span)}
    if isinstance(node, TupleLit):
        return {"type": "TupleLit", "elements": [ast_to_obj(e) for e in node.elements], "span": span_to_obj(node.span)}
    if isinstance(node, Member):
        return {"type": "Member", "target": ast_to_obj(node.target), "name": node.name, "span": span_to_obj(node.span)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=tuple(ast_from_obj(s) for s in obj["body"]))
    if "span" not in obj:
        raise ValueError(f"AST node {t} has no span")
    span = span_from_obj(obj["span"])
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]), span=span)
    if t == "PrintStmt":
        return PrintStmt(expr=ast_from_obj(obj["expr"]), span=span)
    if t == "Block":
        return Block(statements=tuple(ast_from_obj(s) for s in obj["statements"]), span=span)
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
            span=span,
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]), span=span)
    if t == "ForStmt":
        return ForStmt(
            init=ast_from_obj(obj.get("init")),
            condition=ast_from_obj(obj.get("condition")),
            post=ast_from_obj(obj.get("post")),
            body=ast_from_obj(obj["body"]),
            span=span,
        )
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]), span=span)
    if t == "Ident":
        return Ident(name=obj["name"], span=span)
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]), span=span)
    if t == "NameTarget":
        return NameTarget(name=obj["name"], span=span)
    if t == "IgnoreTarget":
        return IgnoreTarget(span=span)
    if t == "MultiAssign":
        return MultiAssign(
            targets=tuple(ast_from_obj(x) for x in obj["targets"]),
            value=ast_from_obj(obj["value"]),
            span=span,
        )
    if t == "BinaryOp":
        return BinaryOp(left=ast_from_obj(obj["left"]), op=obj["op"], right=ast_from_obj(obj["right"]), span=span)
    if t == "LogicalOp":
        return LogicalOp(left=ast_from_obj(obj["left"]), op=obj["op"], right=ast_from_obj(obj["right"]), span=span)
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]), span=span)
    if t == "KeywordArg":
        return KeywordArg(name=obj["name"], value=ast_from_obj(obj["value"]), span=span)
    if t == "Call":
        return Call(
            func=ast_from_obj(obj["func"]),
            args=tuple(ast_from_obj(a) for a in obj["args"]),
            kwargs=tuple(ast_from_obj(k) for k in obj.get("kwargs", [])),
            span=span,
        )
    if t == "Grouping":
        return Grouping(expr=ast_from_obj(obj["expr"]), span=span)
    if t == "TupleLit":
        return TupleLit(elements=tuple(ast_from_obj(e) for e in obj["elements"]), span=span)
    if t == "Member":
        return Member(target=ast_from_obj(obj["target"]), name=obj["name"], span=span)

    raise ValueError(f"Unknown AST node type: {t}")
