from pathlib import Path

from bcc.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_strings(capsys):
    with open(EXAMPLES / 'program_8.bcc', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        'ADA LOVELACE',
        'ada lovelace',
        '12',
        '(Ada, Lovelace)',
        'Lovelace, Ada',
        'a-b-c',
        'ababab',
        'true',
        'line1',
        'line2',
        'tab\there',
        '3.0!',
        'tuple',
        '43',
        '3.0',
    ]
