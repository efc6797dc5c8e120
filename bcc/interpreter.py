"""Tree-walking evaluator for BCC programs.

The `Interpreter` executes a `Program` produced by the parser. It holds a
single pointer to the current scope: entering a block pushes a child
`Environment` and leaving it, normally or through an error, restores the
parent. Built-in functions live in a registry separate from the variable
scopes, so the global environment starts out empty.
"""

from __future__ import annotations

import difflib
import sys
from typing import Any, Dict, Iterable, List, Optional, TextIO, Tuple

from .ast import (
    Node, Program, ExprStmt, PrintStmt, Block, IfStmt, WhileStmt, ForStmt,
    Literal, Ident, Assign, NameTarget, MultiAssign, BinaryOp, UnaryOp,
    LogicalOp, KeywordArg, Call, Grouping, TupleLit, Member,
)
from .builtin_function import BuiltinFunction
from .diagnostics import report
from .environment import Environment
from .errors import BccError, BuiltinError, EvalError
from .parser import parse_program
from .std import standard_builtins
from .tokens import Span
from .types import (
    TupleVal, fits_int, is_int, is_number, is_truthy, to_string, type_name,
    values_equal,
)

ARITHMETIC_VERBS = {'+': 'add', '-': 'subtract', '*': 'multiply', '/': 'divide'}
COMPARISONS = ('<', '<=', '>', '>=')

_UNBOUND = object()


class Interpreter:
    def __init__(self, env: Optional[Environment] = None,
                 builtins: Optional[Iterable[BuiltinFunction]] = None,
                 out: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.global_env = env if env is not None else Environment()
        self.env = self.global_env
        self.builtins: Dict[str, BuiltinFunction] = {}
        for builtin in (standard_builtins() if builtins is None else builtins):
            self.register(builtin)
        # None means whatever sys.stdout is at print time
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = None
        if debug_level > 0 and debug_file is not None:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def register(self, builtin: BuiltinFunction):
        self.builtins[builtin.name] = builtin

    def run(self, program: Program, env: Optional[Environment] = None):
        if env is not None:
            self.global_env = env
        self.env = self.global_env
        if self.debug_level >= 1:
            self.debug(f"run: {len(program.body)} statements")
        try:
            for stmt in program.body:
                self.execute(stmt)
        except BccError as e:
            if self.debug_level >= 1:
                self.debug(f"error: {e.name}: {e.message} at {e.span.start}..{e.span.end}")
            raise
        finally:
            self.env = self.global_env
        if self.debug_level >= 1:
            self.debug("run: finished")

    # Statements

    def execute(self, node: Node):
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr)
            print(to_string(value), file=self.out)
            return
        if isinstance(node, Block):
            self.execute_block(node.statements)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
            return
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition)
                truthy = is_truthy(cond)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)} -> {truthy}")
                if not truthy:
                    break
                self.execute(node.body)
            return
        if isinstance(node, ForStmt):
            self.execute_for(node)
            return
        raise NotImplementedError(f"Execution not implemented for {type(node).__name__}")

    def execute_block(self, statements: Iterable[Node]):
        previous = self.env
        self.env = Environment(parent=previous)
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.env = previous

    def execute_for(self, node: ForStmt):
        if node.init is not None:
            self.execute(node.init)
        while True:
            if node.condition is not None:
                cond = self.evaluate(node.condition)
                truthy = is_truthy(cond)
                if self.debug_level >= 3:
                    self.debug(f"for condition {to_string(cond)} -> {truthy}")
                if not truthy:
                    break
            self.execute(node.body)
            if node.post is not None:
                self.evaluate(node.post)

    # Expressions

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            try:
                return self.env.get(node.name)
            except KeyError:
                raise EvalError('UndefinedVariable', f"Undefined variable '{node.name}'", node.span,
                                help=f"Assign a value before using it: {node.name} = ...") from None
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.assign(node.name, value)
            return value
        if isinstance(node, MultiAssign):
            return self.evaluate_multi_assign(node)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.binary_op(node.op, left, right, node.span)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            return self.unary_op(node.op, operand, node.span)
        if isinstance(node, LogicalOp):
            left = self.evaluate(node.left)
            if node.op == 'or':
                return left if is_truthy(left) else self.evaluate(node.right)
            return self.evaluate(node.right) if is_truthy(left) else left
        if isinstance(node, Call):
            return self.call(node)
        if isinstance(node, TupleLit):
            return TupleVal(tuple(self.evaluate(e) for e in node.elements))
        if isinstance(node, Grouping):
            return self.evaluate(node.expr)
        if isinstance(node, Member):
            target = self.evaluate(node.target)
            raise EvalError('PropertyAccess', f"Property access not supported for type {type_name(target)}",
                            node.span)
        raise NotImplementedError(f"Evaluation not implemented for {type(node).__name__}")

    def assign(self, name: str, value: Any):
        self.env.assign(name, value)
        if self.debug_level >= 2:
            self.debug(f"assign {name}: {type_name(value)} = {to_string(value)} (depth {self.env.depth()})")

    def evaluate_multi_assign(self, node: MultiAssign) -> Any:
        value = self.evaluate(node.value)
        values = value.items if isinstance(value, TupleVal) else (value,)
        if len(values) != len(node.targets):
            raise EvalError('UnpackMismatch',
                            f"cannot unpack {len(values)} values into {len(node.targets)} targets",
                            node.span,
                            help='The number of targets must match the number of tuple elements; use _ to skip one.')
        for target, item in zip(node.targets, values):
            if isinstance(target, NameTarget):
                self.assign(target.name, item)
        return value

    def check_int(self, value: int, span: Span) -> int:
        if not fits_int(value):
            raise EvalError('IntegerOverflow', 'Integer overflow', span,
                            help='Integers are signed 64-bit; use a double for larger magnitudes.')
        return value

    def binary_op(self, op: str, left: Any, right: Any, span: Span) -> Any:
        if op == '==':
            return values_equal(left, right)
        if op == '!=':
            return not values_equal(left, right)
        if op == '+' and isinstance(left, str) and isinstance(right, str):
            return left + right
        if op in ('+', '-', '*'):
            if not (is_number(left) and is_number(right)):
                raise self.type_mismatch(ARITHMETIC_VERBS[op], left, right, span)
            if is_int(left) and is_int(right):
                if op == '+':
                    return self.check_int(left + right, span)
                if op == '-':
                    return self.check_int(left - right, span)
                return self.check_int(left * right, span)
            left, right = float(left), float(right)
            if op == '+':
                return left + right
            if op == '-':
                return left - right
            return left * right
        if op == '/':
            if not (is_number(left) and is_number(right)):
                raise self.type_mismatch('divide', left, right, span)
            if right == 0:
                raise EvalError('DivisionByZero', 'Division by zero', span)
            return float(left / right)
        if op in COMPARISONS:
            if not (is_number(left) and is_number(right)):
                raise self.type_mismatch('compare', left, right, span)
            if is_int(left) != is_int(right):
                left, right = float(left), float(right)
            if op == '<':
                return left < right
            if op == '<=':
                return left <= right
            if op == '>':
                return left > right
            return left >= right
        if op == 'in':
            if isinstance(right, TupleVal):
                return any(values_equal(left, item) for item in right.items)
            if isinstance(right, str) and isinstance(left, str):
                return left in right
            raise EvalError('TypeMismatch', f"Cannot check membership of {type_name(left)} in {type_name(right)}",
                            span, help="'in' works on a tuple, or on a string with a string on the left.")
        raise NotImplementedError(f"Unknown binary operator {op}")

    def type_mismatch(self, verb: str, left: Any, right: Any, span: Span) -> EvalError:
        return EvalError('TypeMismatch', f"Cannot {verb} {type_name(left)} and {type_name(right)}", span)

    def unary_op(self, op: str, operand: Any, span: Span) -> Any:
        if op == '!':
            return not is_truthy(operand)
        if is_int(operand):
            return self.check_int(-operand, span)
        if isinstance(operand, float):
            return -operand
        raise EvalError('TypeMismatch', f"Cannot negate {type_name(operand)}", span)

    # Calls

    def call(self, node: Call) -> Any:
        if not isinstance(node.func, Ident):
            callee = self.evaluate(node.func)
            raise EvalError('NotCallable', f"Cannot call a value of type {type_name(callee)}", node.func.span,
                            help='Only built-in functions can be called, by name.')
        builtin = self.builtins.get(node.func.name)
        if builtin is None:
            raise EvalError('UndefinedFunction', f"Undefined function '{node.func.name}'", node.func.span,
                            help=self.suggest_builtin(node.func.name))
        positional = [self.evaluate(arg) for arg in node.args]
        keywords = [(kw, self.evaluate(kw.value)) for kw in node.kwargs]
        args = self.bind_arguments(builtin, positional, keywords, node.span)
        if self.debug_level >= 4:
            bound = ', '.join(f"{p.name}={to_string(v)}" for p, v in zip(builtin.params, args))
            self.debug(f"call {builtin.name}({bound})")
        try:
            return builtin.fn(args)
        except BuiltinError as e:
            raise EvalError('BuiltinError', e.message, node.span, e.help) from e

    def bind_arguments(self, builtin: BuiltinFunction, positional: List[Any],
                       keywords: List[Tuple[KeywordArg, Any]], span: Span) -> List[Any]:
        """Resolve positional and keyword arguments against the built-in's parameters.

        Returns one value per parameter in declaration order. Positionals bind
        by index first; keywords bind by name to what is left; remaining
        parameters take their defaults.
        """
        params = builtin.params
        if len(positional) > len(params):
            raise EvalError('TooManyArguments',
                            f"{builtin.name}() takes {len(params)} argument{'s' if len(params) != 1 else ''} "
                            f"but {len(positional)} were given",
                            span, help=f"Signature: {builtin.signature()}")
        slots: List[Any] = [_UNBOUND] * len(params)
        for i, value in enumerate(positional):
            slots[i] = value
        for kw, value in keywords:
            index = builtin.param_index(kw.name)
            if index is None:
                raise EvalError('UnknownParameter', f"{builtin.name}() got an unknown parameter '{kw.name}'",
                                kw.span, help=f"Signature: {builtin.signature()}")
            if slots[index] is not _UNBOUND:
                raise EvalError('DuplicateArgument',
                                f"{builtin.name}() got a duplicate argument for parameter '{kw.name}'",
                                kw.span, help=f"Signature: {builtin.signature()}")
            slots[index] = value
        for i, param in enumerate(params):
            if slots[i] is _UNBOUND:
                if param.required:
                    raise EvalError('MissingRequiredParameter',
                                    f"{builtin.name}() missing required parameter '{param.name}'",
                                    span, help=f"Signature: {builtin.signature()}")
                slots[i] = param.default
        return slots

    def suggest_builtin(self, name: str) -> Optional[str]:
        matches = difflib.get_close_matches(name, list(self.builtins), n=1)
        if matches:
            return f"Did you mean '{matches[0]}'?"
        return None


def run_program(source: str, debug_level: int = 0, out: Optional[TextIO] = None) -> Interpreter:
    """Parse and execute a BCC program, returning the interpreter that ran it."""
    program = parse_program(source)
    interpreter = Interpreter(out=out, debug_level=debug_level)
    try:
        interpreter.run(program)
    finally:
        interpreter.close()
    return interpreter


def run_source(source: str, filename: Optional[str] = None, interpreter: Optional[Interpreter] = None,
               stream: Optional[TextIO] = None) -> bool:
    """Run source text, reporting any error as a rendered diagnostic.

    Returns True when the program ran to completion.
    """
    if interpreter is None:
        interpreter = Interpreter()
    try:
        program = parse_program(source)
        interpreter.run(program)
    except BccError as e:
        report(e, source, filename, stream)
        return False
    return True
