"""Abstract Syntax Tree (AST) definitions for the BCC language.

The AST classes defined in this module represent the syntactic structure
of parsed BCC programs. They are used by the interpreter to evaluate BCC
code. Each node corresponds to a construct in the BCC grammar and carries
the source span it was parsed from. Nodes are frozen: once the parser
returns a node it is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .tokens import Span


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Node, ...]


# Statements

@dataclass(frozen=True)
class ExprStmt(Node):
    expr: Node
    span: Span


@dataclass(frozen=True)
class PrintStmt(Node):
    expr: Node
    span: Span


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple[Node, ...]
    span: Span


@dataclass(frozen=True)
class IfStmt(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node]
    span: Span


@dataclass(frozen=True)
class WhileStmt(Node):
    condition: Node
    body: Node
    span: Span


@dataclass(frozen=True)
class ForStmt(Node):
    init: Optional[Node]  # ExprStmt or None
    condition: Optional[Node]
    post: Optional[Node]
    body: Node
    span: Span


# Expressions

@dataclass(frozen=True)
class Literal(Node):
    value: Any  # a runtime value: NIL, bool, int, float, str or TupleVal
    span: Span


@dataclass(frozen=True)
class Ident(Node):
    name: str
    span: Span


@dataclass(frozen=True)
class Assign(Node):
    name: str
    value: Node
    span: Span


@dataclass(frozen=True)
class NameTarget:
    name: str
    span: Span


@dataclass(frozen=True)
class IgnoreTarget:
    """The `_` placeholder in a multi-assignment: consumes a value, binds nothing."""
    span: Span


@dataclass(frozen=True)
class MultiAssign(Node):
    targets: Tuple[Any, ...]  # NameTarget | IgnoreTarget
    value: Node
    span: Span


@dataclass(frozen=True)
class BinaryOp(Node):
    left: Node
    op: str  # '+', '-', '*', '/', '==', '!=', '<', '<=', '>', '>=', 'in'
    right: Node
    span: Span


@dataclass(frozen=True)
class UnaryOp(Node):
    op: str  # '-' or '!'
    operand: Node
    span: Span


@dataclass(frozen=True)
class LogicalOp(Node):
    left: Node
    op: str  # 'and' or 'or'
    right: Node
    span: Span


@dataclass(frozen=True)
class KeywordArg:
    name: str
    value: Node
    span: Span


@dataclass(frozen=True)
class Call(Node):
    func: Node
    args: Tuple[Node, ...]
    kwargs: Tuple[KeywordArg, ...]
    span: Span


@dataclass(frozen=True)
class Grouping(Node):
    expr: Node
    span: Span


@dataclass(frozen=True)
class TupleLit(Node):
    elements: Tuple[Node, ...]
    span: Span


@dataclass(frozen=True)
class Member(Node):
    target: Node
    name: str
    span: Span
