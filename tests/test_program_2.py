from pathlib import Path

from bcc.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_arithmetic(capsys):
    with open(EXAMPLES / 'program_2.bcc', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.splitlines()
    # division always yields a double, integral doubles keep one decimal place
    assert out == ['15', '3.5', '2.0', '7.0', '-5', '9', '-10', '5']
    assert interp.global_env.get('x') == 10
