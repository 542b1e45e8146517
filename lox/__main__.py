"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv|-vvvv]                 start the REPL
    python -m lox [-v...] <script>                    run a script
    python -m lox [-v...] --emit-ast <script>         write <script>.ast.json
    python -m lox [-v...] --ast <ast_json_file>       run a saved AST

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status is 65 after a syntax error, 70 after a runtime error and 66
when the input file does not exist.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import program_from_obj, program_to_obj
from .runner import EXIT_DATA_ERROR, EXIT_NO_INPUT, EXIT_OK, Lox


def _read_source(path: Path) -> Optional[str]:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script (.lox) to execute; omit for a REPL')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = _read_source(program_file)
        if source is None:
            return EXIT_NO_INPUT
        lox = Lox(debug_level=args.v)
        try:
            statements = lox.parse(source)
            if lox.had_error:
                return EXIT_DATA_ERROR
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return EXIT_OK
        finally:
            lox.close()

    # Execute from AST JSON
    if args.ast:
        source = _read_source(Path(args.ast))
        if source is None:
            return EXIT_NO_INPUT
        data = json.loads(source)
        lox = Lox(debug_level=args.v)
        try:
            lox.execute(program_from_obj(data))
            return lox.exit_status()
        finally:
            lox.close()

    lox = Lox(debug_level=args.v)
    try:
        if args.script is None:
            lox.run_prompt()
            return EXIT_OK
        source = _read_source(Path(args.script))
        if source is None:
            return EXIT_NO_INPUT
        lox.run(source)
        return lox.exit_status()
    finally:
        lox.close()


if __name__ == '__main__':
    sys.exit(main())
