"""CLI entry point for the Alp interpreter.

Usage:
    python -m alp [-v|-vv|-vvv] [--timeout SECONDS] [program_file]
    python -m alp [-v...] --emit-ast <program_file>
    python -m alp [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --timeout     Abort evaluation after this many seconds
  --emit-ast    Parse the given .alp file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive session is started on stdin.
Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from . import repl
from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .context import Context
from .environment import Environment
from .errors import EvaluationInterrupted, ParseError
from .evaluator import Evaluator
from .parser import parse_program
from .types import Error, NULL


def _read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _parse_or_exit(source: str) -> Program:
    try:
        return parse_program(source)
    except ParseError as e:
        for msg in e.errors:
            print(f"\t{msg}", file=sys.stderr)
        sys.exit(1)


def _execute(program: Program, debug_level: int, timeout: Optional[float]) -> None:
    ctx = Context.with_timeout(timeout) if timeout is not None else Context.background()
    with Evaluator(debug_level=debug_level) as evaluator:
        try:
            result = evaluator.run(program, Environment(), ctx)
        except EvaluationInterrupted as e:
            print(f"Interrupted: {e}", file=sys.stderr)
            sys.exit(1)
        except RecursionError:
            print(f"Error: {repl.RECURSION_MESSAGE}", file=sys.stderr)
            sys.exit(1)
    if isinstance(result, Error):
        print(result.inspect(), file=sys.stderr)
        sys.exit(1)
    if result is not None and result is not NULL:
        print(result.inspect())


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='alp', description="Alp language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--timeout', type=float, default=None, metavar='SECONDS',
                        help='abort evaluation after this many seconds')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='ALP_FILE', help='emit AST JSON for the given .alp file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Alp program file (.alp) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = _parse_or_exit(_read_source(program_file))
        obj = ast_to_obj(program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        data = json.loads(_read_source(Path(args.ast)))
        _execute(ast_from_obj(data), args.v, args.timeout)
        return

    if not args.program:
        with Evaluator(debug_level=args.v) as evaluator:
            repl.start(sys.stdin, sys.stdout, timeout=args.timeout, evaluator=evaluator)
        return

    program = _parse_or_exit(_read_source(Path(args.program)))
    _execute(program, args.v, args.timeout)


if __name__ == '__main__':
    main()
