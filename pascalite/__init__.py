"""
pascalite - a tree-walking interpreter for a small Pascal subset.
"""

from .errors import (
    PascalError, LexerError, ParseError, UndefinedVariableError, UnknownOperatorError
)
from .lexer import Lexer, Token, TokenType, TokenCategory, tokenize
from .parser import Parser
from .interpreter import Interpreter
from .runner import parse_source, run_source, run_file, ast_to_json

__version__ = "0.1.0"
