import io
import json

from bcc.ast import Literal
from bcc.ast_json import ast_from_obj, ast_to_obj
from bcc.interpreter import Interpreter
from bcc.parser import parse_program
from bcc.tokens import Span
from bcc.types import NIL, TupleVal

SOURCE = '''
x = 10
a, _, c = (1, 2.5, "three")
if (x > 5 and not false) { print x / 4 } else print nil
for (i = 0; i < 2; i = i + 1) print divmod(7, 2, mode="zero")
while (false) print -1
print "q" in ("q",)
'''


def test_json_roundtrip_preserves_the_tree():
    program = parse_program(SOURCE)
    data = json.loads(json.dumps(ast_to_obj(program)))
    assert ast_from_obj(data) == program


def test_literal_values_are_tagged():
    program = parse_program('print 1\nprint 1.0\nprint true\nprint nil\nprint "s"')
    values = [ast_to_obj(stmt)['expr']['value'] for stmt in program.body]
    assert values == [
        {'value_type': 'int', 'value': 1},
        {'value_type': 'double', 'value': 1.0},
        {'value_type': 'bool', 'value': True},
        {'value_type': 'nil'},
        {'value_type': 'string', 'value': 's'},
    ]


def test_tuple_literal_values_roundtrip():
    node = Literal(TupleVal((1, NIL, TupleVal(()))), Span(0, 1))
    assert ast_from_obj(json.loads(json.dumps(ast_to_obj(node)))) == node


def test_deserialized_program_runs():
    program = ast_from_obj(json.loads(json.dumps(ast_to_obj(parse_program(SOURCE)))))
    out = io.StringIO()
    Interpreter(out=out).run(program)
    assert out.getvalue().splitlines() == ['2.5', '(3, 1)', '(3, 1)', 'true']
