"""CLI entry point for the BCC interpreter.

Usage:
    python -m bcc [-v|-vv|-vvv|-vvvv] [program_file]
    python -m bcc [-v...] -i
    python -m bcc [-v...] --emit-ast <program_file>
    python -m bcc [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  -i            Start the interactive REPL (the default without a file)
  --emit-ast    Parse the given .bcc file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported with their source
location on stderr and make the process exit with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from . import repl
from .ast_json import ast_to_obj, ast_from_obj
from .diagnostics import report
from .errors import BccError
from .interpreter import Interpreter, run_source
from .parser import parse_program


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='bcc', description="BCC language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-i', '--interactive', action='store_true', help='start the interactive REPL')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='BCC_FILE', help='emit AST JSON for the given .bcc file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='BCC program file (.bcc) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except BccError as e:
            report(e, source, str(program_file))
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            data = json.loads(read_source(ast_path))
            try:
                interpreter.run(ast_from_obj(data))
            except BccError as e:
                print(f"{e.kind.value}: {e.message}", file=sys.stderr)
                sys.exit(1)
            return

        if args.program is None or args.interactive:
            if args.program is not None:
                program_file = Path(args.program)
                if not run_source(read_source(program_file), str(program_file), interpreter):
                    sys.exit(1)
            repl.start(interpreter)
            return

        program_file = Path(args.program)
        if not run_source(read_source(program_file), str(program_file), interpreter):
            sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
