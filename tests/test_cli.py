import io
import json

import pytest

from bcc.__main__ import main
from bcc.interpreter import Interpreter
from bcc import repl


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_runs_a_program_file(tmp_path, capsys):
    path = write(tmp_path, 'hello.bcc', 'print "hi"\nprint 1 + 1')
    main([str(path)])
    assert capsys.readouterr().out == 'hi\n2\n'


def test_missing_file_exits_with_status_1(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'nope.bcc')])
    assert exc.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_errors_are_reported_and_exit_1(tmp_path, capsys):
    path = write(tmp_path, 'bad.bcc', 'print 1\nprint 1 / 0')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert captured.err.startswith('Runtime Error: Division by zero\n')
    assert f'{path}:2:7' in captured.err


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write(tmp_path, 'prog.bcc', 'a, b = divmod(9, 4)\nprint a + b')
    main(['--emit-ast', str(path)])
    out_path = tmp_path / 'prog.bcc.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    assert json.loads(out_path.read_text(encoding='utf-8'))['type'] == 'Program'
    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '3\n'


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = write(tmp_path, 'prog.bcc', 'x = 1')
    main(['-vv', str(path)])
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'assign x: int = 1' in trace


def fake_input(lines):
    pending = list(lines)

    def read(prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)
    return read


def test_repl_session_keeps_state():
    out = io.StringIO()
    errors = io.StringIO()
    interp = Interpreter(out=out)
    repl.start(interp, read=fake_input(['x = 2', '', 'x * 21', 'a, b = (1, 2)', 'b', 'oops +', 'print x', 'exit']),
               stream=errors)
    lines = out.getvalue().splitlines()
    assert lines[0] == 'BCC Interpreter v0.1.0'
    assert lines[2:] == ['42', '2', '2', 'Goodbye!']
    assert errors.getvalue().startswith("Parse Error: Expected expression after '+'")


def test_repl_ends_at_end_of_input():
    out = io.StringIO()
    repl.start(Interpreter(out=out), read=fake_input(['print "once"']))
    assert out.getvalue().splitlines()[2:] == ['once', '']


def test_repl_recovers_after_a_runtime_error():
    out = io.StringIO()
    errors = io.StringIO()
    interp = Interpreter(out=out)
    assert repl.run_line('{ y = 1\nprint missing }', interp, errors) is False
    assert interp.env is interp.global_env
    assert repl.run_line('print 5', interp, errors) is True
    assert out.getvalue() == '5\n'
