"""CLI entry point for the Dash interpreter.

Usage:
    python -m dashlang [-v|-vv|-vvv] [program_file]
    python -m dashlang [-v...] --emit-ast <program_file>
    python -m dashlang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .dash file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file a small built-in script is run. Debug information
is written to `debug.txt` in the current directory when verbosity is
greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .interpreter import run, execute_fatal
from .parser import parse_program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import DashSyntaxError


FALLBACK_SCRIPT = """
let x = 0
while x < 5 {
  print(x)
  let x = x + 1
}
"""


def normalize_newlines(source: str) -> str:
    return source.replace('\r\n', '\n').replace('\r', '\n')


def read_source(path: Path) -> str:
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return normalize_newlines(f.read())
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file '{path}': {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='dash', description="Dash language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='DASH_FILE', help='emit AST JSON for the given .dash file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Dash program file to execute (default: built-in demo)')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except DashSyntaxError as e:
            print(f"Parse error: {e}", file=sys.stderr)
            sys.exit(1)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Error reading file '{ast_path}': {e}", file=sys.stderr)
            sys.exit(1)
        execute_fatal(ast_from_obj(data), debug_level=args.v)
        return

    # Default: execute source file, or the built-in script
    if args.program:
        source = read_source(Path(args.program))
    else:
        source = FALLBACK_SCRIPT
    run(source, debug_level=args.v)


if __name__ == '__main__':
    main()
