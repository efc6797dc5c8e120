from pathlib import Path

from bcc.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_scopes(capsys):
    with open(EXAMPLES / 'program_4.bcc', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.splitlines()
    assert out == ['5', '2', '20']
    assert interp.global_env.values == {'x': 20}
