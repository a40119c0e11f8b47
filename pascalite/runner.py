"""
pascalite - Run Orchestrator
Drives lexing, parsing and evaluation in sequence.
"""

import json
import sys
from enum import Enum
from typing import Dict

from .lexer import Lexer
from .parser import Parser
from .interpreter import Interpreter
from .ast_nodes import ProgramNode
from .errors import PascalError


def _logger(debug: bool):
    def log(msg):
        if debug:
            print(f"[pascalite] {msg}", file=sys.stderr)
    return log


def parse_source(source: str, debug: bool = False) -> ProgramNode:
    """
    Lex and parse Pascal source text into a ProgramNode.
    Raises LexerError or ParseError on the first failure.
    """
    log = _logger(debug)

    # ── Phase 1: Lexing and parsing, tokens pulled on demand ──
    log("Phase 1: Parsing")
    lexer = Lexer(source)
    tree = Parser(lexer).parse()

    log(f"  {lexer.token_count} tokens consumed")
    log(f"  program {tree.name!r}: {len(tree.block.declarations)} declarations, "
        f"{len(tree.block.compound.statements)} top-level statements")
    return tree


def run_source(source: str, debug: bool = False) -> Dict[str, float]:
    """
    Parse and evaluate Pascal source text.

    Parameters
    ----------
    source : program text
    debug  : print each phase summary to stderr

    Returns
    -------
    The variable table: every assigned name mapped to its final float value.

    Raises
    ------
    PascalError subclass (LexerError, ParseError, UndefinedVariableError,
    UnknownOperatorError) on the first failure
    """
    log = _logger(debug)

    tree = parse_source(source, debug=debug)

    # ── Phase 2: Evaluation ──
    log("Phase 2: Evaluation")
    table = Interpreter().interpret(tree)

    log(f"  {len(table)} variables bound")
    return table


def run_file(input_path: str, debug: bool = False) -> Dict[str, float]:
    """Read a Pascal source file and evaluate it."""
    with open(input_path, "r", encoding="utf-8") as f:
        source = f.read()

    return run_source(source, debug=debug)


# ── AST serialization (for --emit-ast) ────────────────────────────────────────

def ast_to_json(node: ProgramNode) -> str:
    try:
        return json.dumps(_node_to_dict(node), indent=2)
    except RecursionError:
        raise PascalError("AST is nested too deeply to serialize as JSON", node.line) from None


def _node_to_dict(node):
    if node is None:
        return None
    if isinstance(node, (list, tuple)):
        return [_node_to_dict(n) for n in node]
    if isinstance(node, Enum):
        return node.name
    if not hasattr(node, '__dataclass_fields__'):
        return node  # primitive
    d = {"_type": type(node).__name__}
    for field_name in node.__dataclass_fields__:
        val = getattr(node, field_name)
        d[field_name] = _node_to_dict(val)
    return d
