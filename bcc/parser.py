"""Recursive-descent parser for the BCC language.

The parser consumes the token list produced by `bcc.lexer.tokenize` and
builds a `Program` AST. There is one method per grammar level; precedence
is encoded by call order, from lowest to highest:

    assignment / multi-assignment
    or
    and
    equality        == !=
    comparison      < <= > >= in
    term            + -
    factor          * /
    unary           ! not -          (right-associative)
    call            f(...)  obj.name
    primary         literals, identifiers, ( ... )

Binary levels are left-associative folds. Statement terminators are
optional: a trailing `;` is consumed when present. The first error aborts
the parse with a `ParseError`; there is no resynchronization.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .ast import (
    Program, ExprStmt, PrintStmt, Block, IfStmt, WhileStmt, ForStmt,
    Literal, Ident, Assign, MultiAssign, NameTarget, IgnoreTarget,
    BinaryOp, UnaryOp, LogicalOp, Call, KeywordArg, TupleLit, Member, Node,
)
from .errors import ParseError
from .lexer import tokenize
from .tokens import Span, Token, IDENT, STRING, INT, DOUBLE, EOF
from .types import NIL

PLACEHOLDER = '_'

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
    '\\': '\\',
    '"': '"',
}

UNEXPECTED_TOKEN_HELP = {
    ')': "Found ')' without matching '('. Check for unbalanced parentheses.",
    '}': "Found '}' without matching '{'. Check for unbalanced braces.",
    ']': "Found ']' without matching '['. Check for unbalanced brackets.",
    EOF: 'Reached end of input while expecting an expression.',
}


def unescape(raw: str) -> str:
    """Decode the escape sequences of a string literal body.

    Unknown escapes are kept verbatim, backslash included.
    """
    out: List[str] = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c == '\\' and i + 1 < len(raw):
            nxt = raw[i + 1]
            out.append(ESCAPES.get(nxt, c + nxt))
            i += 2
            continue
        out.append(c)
        i += 1
    return ''.join(out)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != EOF:
            end = self.tokens[-1].span.end if self.tokens else 0
            self.tokens.append(Token(EOF, '', Span.single(end)))
        self.pos = 0

    # Token helpers

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == EOF

    def check(self, *types: str) -> bool:
        return self.peek().type in types

    def advance(self) -> Token:
        token = self.peek()
        if not self.is_at_end():
            self.pos += 1
        return token

    def match(self, *types: str) -> Optional[Token]:
        if self.check(*types):
            return self.advance()
        return None

    def consume(self, expected: str, message: str, help: Optional[str] = None) -> Token:
        if self.check(expected):
            return self.advance()
        raise ParseError('UnexpectedToken', message, self.error_span(), help)

    def error_span(self) -> Span:
        # At end of input, point just past the last real token.
        if self.is_at_end() and self.pos > 0:
            return Span.single(self.previous().span.end)
        return self.peek().span

    # Statements

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.is_at_end():
            if self.match(';'):
                continue
            statements.append(self.parse_statement())
        return Program(tuple(statements))

    def parse_statement(self) -> Node:
        if self.check('{'):
            return self.parse_block()
        if self.match('if'):
            return self.parse_if_stmt()
        if self.match('while'):
            return self.parse_while_stmt()
        if self.match('for'):
            return self.parse_for_stmt()
        if self.match('print'):
            return self.parse_print_stmt()
        return self.parse_expression_stmt()

    def parse_block(self) -> Block:
        open_brace = self.consume('{', "Expected '{' to start a block")
        statements: List[Node] = []
        while not self.check('}') and not self.is_at_end():
            if self.match(';'):
                continue
            statements.append(self.parse_statement())
        close_brace = self.consume(
            '}', "Expected '}' after block",
            "Block statements must be closed with '}' after the opening '{'.")
        return Block(tuple(statements), open_brace.span.to(close_brace.span))

    def parse_if_stmt(self) -> IfStmt:
        keyword = self.previous()
        self.consume('(', "Expected '(' after 'if'",
                     'If statements require parentheses around the condition: if (condition) { ... }')
        condition = self.parse_expression()
        self.consume(')', "Expected ')' after if condition",
                     'If conditions must be enclosed in parentheses: if (condition) { ... }')
        then_branch = self.parse_statement()
        else_branch = None
        if self.match('else'):
            else_branch = self.parse_statement()
        last = else_branch if else_branch is not None else then_branch
        return IfStmt(condition, then_branch, else_branch, keyword.span.to(last.span))

    def parse_while_stmt(self) -> WhileStmt:
        keyword = self.previous()
        self.consume('(', "Expected '(' after 'while'")
        condition = self.parse_expression()
        self.consume(')', "Expected ')' after while condition")
        body = self.parse_statement()
        return WhileStmt(condition, body, keyword.span.to(body.span))

    def parse_for_stmt(self) -> ForStmt:
        keyword = self.previous()
        self.consume('(', "Expected '(' after 'for'")
        init = None
        if not self.match(';'):
            # the initializer's own ';' is optional, like any expression statement
            init = self.parse_expression_stmt()
        condition = None
        if not self.check(';'):
            condition = self.parse_expression()
        self.consume(';', "Expected ';' after loop condition")
        post = None
        if not self.check(')'):
            post = self.parse_expression()
        self.consume(')', "Expected ')' after for clauses")
        body = self.parse_statement()
        return ForStmt(init, condition, post, body, keyword.span.to(body.span))

    def parse_print_stmt(self) -> PrintStmt:
        keyword = self.previous()
        expr = self.parse_expression()
        end = expr.span
        semicolon = self.match(';')
        if semicolon is not None:
            end = semicolon.span
        return PrintStmt(expr, keyword.span.to(end))

    def parse_expression_stmt(self) -> ExprStmt:
        if self.starts_multi_assign():
            expr = self.parse_multi_assign()
        else:
            expr = self.parse_expression()
        end = expr.span
        semicolon = self.match(';')
        if semicolon is not None:
            end = semicolon.span
        return ExprStmt(expr, expr.span.to(end))

    def starts_multi_assign(self) -> bool:
        first = self.peek()
        if first.type != IDENT:
            return False
        following = self.peek(1).type
        return following == ',' or (first.value == PLACEHOLDER and following == '=')

    def parse_multi_assign(self) -> MultiAssign:
        targets = []
        while True:
            token = self.peek()
            if token.type != IDENT:
                raise ParseError(
                    'InvalidAssignmentTarget', 'Invalid assignment target in multi-assignment',
                    self.error_span(),
                    "Multi-assignment targets must be variables or underscores. Example: 'a, b, _ = expr'")
            self.advance()
            if token.value == PLACEHOLDER:
                targets.append(IgnoreTarget(token.span))
            else:
                targets.append(NameTarget(token.value, token.span))
            if not self.match(','):
                break
        self.consume('=', "Expected '=' after assignment targets",
                     "Multi-assignment needs a value: 'a, b = expr'")
        value = self.parse_assignment()
        return MultiAssign(tuple(targets), value, targets[0].span.to(value.span))

    # Expressions

    def parse_expression(self) -> Node:
        return self.parse_assignment()

    def parse_assignment(self) -> Node:
        expr = self.parse_or()
        equals = self.match('=')
        if equals is None:
            return expr
        value = self.parse_assignment()
        if isinstance(expr, Ident):
            return Assign(expr.name, value, expr.span.to(value.span))
        raise ParseError(
            'InvalidAssignmentTarget', 'Invalid assignment target', equals.span,
            "Only variables can be assigned to. Examples: 'x = 10' or 'a, b = expr'")

    def parse_operand(self, operator: Token, parse: Callable[[], Node]) -> Node:
        """Parse the right operand of operator.

        When the operand cannot even start, the error names the operator;
        errors raised further inside the operand keep their own location.
        """
        start = self.pos
        try:
            return parse()
        except ParseError as e:
            if self.pos != start:
                raise
            raise ParseError(
                'ExpectedExpression', f"Expected expression after '{operator.value}'",
                operator.span, f"'{operator.value}' requires an expression on its right-hand side.") from e

    def parse_logical(self, op: str, parse: Callable[[], Node]) -> Node:
        node = parse()
        while True:
            op_token = self.match(op)
            if op_token is None:
                return node
            right = self.parse_operand(op_token, parse)
            node = LogicalOp(node, op, right, node.span.to(right.span))

    def parse_or(self) -> Node:
        return self.parse_logical('or', self.parse_and)

    def parse_and(self) -> Node:
        return self.parse_logical('and', self.parse_equality)

    def parse_binary(self, operators: tuple, parse: Callable[[], Node]) -> Node:
        node = parse()
        while True:
            op_token = self.match(*operators)
            if op_token is None:
                return node
            right = self.parse_operand(op_token, parse)
            node = BinaryOp(node, op_token.type, right, node.span.to(right.span))

    def parse_equality(self) -> Node:
        return self.parse_binary(('==', '!='), self.parse_comparison)

    def parse_comparison(self) -> Node:
        return self.parse_binary(('<', '<=', '>', '>=', 'in'), self.parse_term)

    def parse_term(self) -> Node:
        return self.parse_binary(('+', '-'), self.parse_factor)

    def parse_factor(self) -> Node:
        return self.parse_binary(('*', '/'), self.parse_unary)

    def parse_unary(self) -> Node:
        op_token = self.match('!', 'not', '-')
        if op_token is None:
            return self.parse_call()
        operand = self.parse_operand(op_token, self.parse_unary)
        op = '-' if op_token.type == '-' else '!'
        return UnaryOp(op, operand, op_token.span.to(operand.span))

    def parse_call(self) -> Node:
        node = self.parse_primary()
        while True:
            if self.match('('):
                node = self.finish_call(node)
                continue
            if self.match('.'):
                name_token = self.consume(IDENT, "Expected property name after '.'")
                node = Member(node, name_token.value, node.span.to(name_token.span))
                continue
            return node

    def finish_call(self, callee: Node) -> Call:
        args: List[Node] = []
        kwargs: List[KeywordArg] = []
        if not self.check(')'):
            while True:
                if self.check(IDENT) and self.peek(1).type == '=':
                    name_token = self.advance()
                    self.advance()  # '='
                    value = self.parse_expression()
                    kwargs.append(KeywordArg(name_token.value, value, name_token.span.to(value.span)))
                else:
                    if kwargs:
                        raise ParseError(
                            'PositionalAfterKeyword', 'Positional arguments must precede keyword arguments',
                            self.error_span(),
                            'All positional arguments must come before keyword arguments. '
                            'Example: func(pos1, pos2, kw1=val1, kw2=val2)')
                    args.append(self.parse_expression())
                if not self.match(','):
                    break
                if self.check(')'):
                    break  # trailing comma
        paren = self.consume(
            ')', "Expected ')' after arguments",
            "Function calls must be closed with ')' after the arguments. Example: func(arg1, arg2)")
        return Call(callee, tuple(args), tuple(kwargs), callee.span.to(paren.span))

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.type == 'true':
            self.advance()
            return Literal(True, token.span)
        if token.type == 'false':
            self.advance()
            return Literal(False, token.span)
        if token.type == 'nil':
            self.advance()
            return Literal(NIL, token.span)
        if token.type == INT:
            self.advance()
            return Literal(int(token.value), token.span)
        if token.type == DOUBLE:
            self.advance()
            return Literal(float(token.value), token.span)
        if token.type == STRING:
            self.advance()
            return Literal(unescape(token.value), token.span)
        if token.type == IDENT:
            self.advance()
            return Ident(token.value, token.span)
        if token.type == '(':
            return self.parse_parenthesized()
        raise ParseError(
            'ExpectedExpression', f"Expected expression, found {token.describe()}", token.span,
            UNEXPECTED_TOKEN_HELP.get(token.type,
                                      'Expected a literal value, variable, or parenthesized expression here.'))

    def parse_parenthesized(self) -> Node:
        open_paren = self.advance()
        close_paren = self.match(')')
        if close_paren is not None:
            return TupleLit((), open_paren.span.to(close_paren.span))
        first = self.parse_expression()
        if self.match(','):
            elements = [first]
            while not self.check(')'):
                elements.append(self.parse_expression())
                if not self.match(','):
                    break
            close_paren = self.consume(
                ')', "Expected ')' after tuple elements",
                'Tuple literals are written (a, b, c); a single element needs a trailing comma: (a,)')
            return TupleLit(tuple(elements), open_paren.span.to(close_paren.span))
        self.consume(')', "Expected ')' after expression",
                     "Every opening parenthesis '(' must have a matching closing parenthesis ')'.")
        # plain grouping: the parentheses carry no meaning of their own
        return first


def parse_tokens(tokens: List[Token]) -> Program:
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Parse BCC source code into a Program AST.

    Raises LexError for malformed tokens and ParseError for malformed syntax.
    """
    return parse_tokens(tokenize(source))
