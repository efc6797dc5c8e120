from pathlib import Path

from bcc.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_loops_and_logic(capsys):
    with open(EXAMPLES / 'program_6.bcc', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.splitlines()
    assert out == ['120', 'x', '0', 'default', 'true', 'false', 'true', 'false', 'true']
