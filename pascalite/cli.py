"""
pascalite - Command Line Interface

Usage:
    pascalite program.pas [--debug] [--emit-ast] [-o output.json] [--dot ast.dot] [--png ast.png]
    python -m pascalite program.pas
"""

import sys
import argparse
import os
import subprocess


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pascalite",
        description="pascalite — tree-walking interpreter for a small Pascal subset",
    )
    parser.add_argument("input", help="Path to the .pas source file")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print interpreter phase info to stderr",
    )
    parser.add_argument(
        "--emit-ast",
        action="store_true",
        dest="emit_ast",
        help="Emit the parsed AST as JSON instead of running the program",
    )
    parser.add_argument("-o", "--output", help="Path for the --emit-ast JSON (default: stdout)")
    parser.add_argument("--dot", help="Also write the AST as a Graphviz DOT file")
    parser.add_argument(
        "--png",
        help="Also render the AST to PNG with Graphviz (implies a DOT file next to it)",
    )

    args = parser.parse_args(argv)
    if args.emit_ast and (args.dot or args.png):
        parser.error("--emit-ast cannot be combined with --dot or --png")

    from .errors import PascalError
    from .runner import parse_source, ast_to_json
    from .interpreter import Interpreter
    from .visualizer import write_dot, render_png

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"[pascalite] Error: Input file not found: {args.input!r}", file=sys.stderr)
        return 1

    try:
        tree = parse_source(source, debug=args.debug)

        if args.emit_ast:
            result = ast_to_json(tree)
            if args.output:
                with open(args.output, "w", encoding="utf-8") as f:
                    f.write(result + "\n")
            else:
                print(result)
            return 0

        table = Interpreter().interpret(tree)
    except PascalError as e:
        print(str(e), file=sys.stderr)
        return 1

    print("GLOBAL_SCOPE")
    print("-" * 24)
    for name in sorted(table):
        print(f"{name:<10} | {table[name]:f}")

    dot_path = args.dot
    if args.png and not dot_path:
        dot_path = os.path.splitext(args.png)[0] + ".dot"
    if dot_path:
        write_dot(tree, dot_path)
    if args.png:
        try:
            render_png(dot_path, args.png)
        except subprocess.CalledProcessError as e:
            print(f"[pascalite] dot failed: {e.stderr.decode(errors='replace').strip()}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
