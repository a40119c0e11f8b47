"""
pascalite - Error Taxonomy
Every failure raised by the lexer, parser and interpreter derives from
PascalError, so callers can catch one base class or a specific phase.
"""


class PascalError(Exception):
    """Base class for all pascalite errors."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(f"[{type(self).__name__}] Line {line}: {message}")
        self.message = message
        self.line = line
        self.column = column


class LexerError(PascalError):
    """An unrecognized character outside any token rule."""


class ParseError(PascalError):
    """The lookahead token does not match what the grammar requires."""


class UndefinedVariableError(PascalError):
    """A variable was read before it was ever assigned."""


class UnknownOperatorError(PascalError):
    """An operator tag reached evaluation outside the supported set."""
