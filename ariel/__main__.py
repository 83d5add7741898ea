"""CLI entry point for the Ariel interpreter.

Usage:
    python -m ariel [-v|-vv|-vvv] [--seed N] <program_file>
    python -m ariel [-v...] --emit-ast <program_file>
    python -m ariel [-v...] --ast <ast_json_file>
    python -m ariel [--repl]

Options:
  -v            Increase debug verbosity (can be repeated)
  --seed        Seed the random number generator behind rand()
  --emit-ast    Parse the given .ariel file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --repl        Start the interactive session (the default without a file)

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import dump_program, load_program
from .errors import ArielSyntaxError, is_error
from .interpreter import Interpreter
from .parser import parse_program
from .repl import ReplSession, repl


def _read_source(path: Path) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        print("error: failed to open input.", file=sys.stderr)
        sys.exit(1)


def _execute(program, args) -> None:
    with Interpreter(debug_level=args.v, seed=args.seed) as interpreter:
        result = interpreter.run(program)
    if is_error(result):
        print(result.inspect())
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='ariel', description="Ariel language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--seed', type=int, default=None, help='seed for rand()')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='ARIEL_FILE', help='emit AST JSON for the given .ariel file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--repl', action='store_true', help='start the interactive session')
    parser.add_argument('program', nargs='?', help='Ariel program file (.ariel) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = _read_source(program_file)
        try:
            ast_program = parse_program(source)
        except ArielSyntaxError as e:
            print(f"error: {e}", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        dump_program(ast_program, out_path)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        try:
            ast_program = load_program(args.ast)
        except OSError:
            print("error: failed to open input.", file=sys.stderr)
            sys.exit(1)
        except (TypeError, ValueError) as e:
            print(f"error: invalid AST file: {e}", file=sys.stderr)
            sys.exit(1)
        _execute(ast_program, args)
        return

    # Interactive session
    if args.repl or not args.program:
        with Interpreter(debug_level=args.v, seed=args.seed) as interpreter:
            repl(sys.stdin, sys.stdout, ReplSession(interpreter))
        return

    # Default: execute source file
    source = _read_source(Path(args.program))
    try:
        ast_program = parse_program(source)
    except ArielSyntaxError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    _execute(ast_program, args)


if __name__ == '__main__':
    main()
