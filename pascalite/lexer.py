"""
pascalite - Lexer
Turns Pascal source text into tokens, one at a time, on demand.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional

from .errors import LexerError


class TokenCategory(Enum):
    NUMBER      = auto()
    OPERATOR    = auto()
    KEYWORD     = auto()
    IDENTIFIER  = auto()
    PUNCTUATION = auto()
    EOF         = auto()


class TokenType(Enum):
    # Literals
    INTEGER_CONST = auto()
    REAL_CONST    = auto()
    ID            = auto()
    # Reserved words
    PROGRAM       = auto()
    VAR           = auto()
    INTEGER_DIV   = auto()   # DIV
    INTEGER       = auto()
    REAL          = auto()
    BEGIN         = auto()
    END           = auto()
    # Operators
    ASSIGN        = auto()   # :=
    PLUS          = auto()   # +
    MINUS         = auto()   # -
    MUL           = auto()   # *
    FLOAT_DIV     = auto()   # /
    # Punctuation
    SEMI          = auto()   # ;
    COLON         = auto()   # :
    COMMA         = auto()   # ,
    LPAREN        = auto()   # (
    RPAREN        = auto()   # )
    DOT           = auto()   # .
    # Sentinel
    EOF           = auto()

    @property
    def category(self) -> TokenCategory:
        return _CATEGORIES[self]


_CATEGORIES = {
    TokenType.INTEGER_CONST: TokenCategory.NUMBER,
    TokenType.REAL_CONST:    TokenCategory.NUMBER,
    TokenType.ID:            TokenCategory.IDENTIFIER,
    TokenType.PROGRAM:       TokenCategory.KEYWORD,
    TokenType.VAR:           TokenCategory.KEYWORD,
    TokenType.INTEGER_DIV:   TokenCategory.KEYWORD,
    TokenType.INTEGER:       TokenCategory.KEYWORD,
    TokenType.REAL:          TokenCategory.KEYWORD,
    TokenType.BEGIN:         TokenCategory.KEYWORD,
    TokenType.END:           TokenCategory.KEYWORD,
    TokenType.ASSIGN:        TokenCategory.OPERATOR,
    TokenType.PLUS:          TokenCategory.OPERATOR,
    TokenType.MINUS:         TokenCategory.OPERATOR,
    TokenType.MUL:           TokenCategory.OPERATOR,
    TokenType.FLOAT_DIV:     TokenCategory.OPERATOR,
    TokenType.SEMI:          TokenCategory.PUNCTUATION,
    TokenType.COLON:         TokenCategory.PUNCTUATION,
    TokenType.COMMA:         TokenCategory.PUNCTUATION,
    TokenType.LPAREN:        TokenCategory.PUNCTUATION,
    TokenType.RPAREN:        TokenCategory.PUNCTUATION,
    TokenType.DOT:           TokenCategory.PUNCTUATION,
    TokenType.EOF:           TokenCategory.EOF,
}

# Case-sensitive, exact match only
RESERVED_WORDS = {
    "PROGRAM": TokenType.PROGRAM,
    "VAR":     TokenType.VAR,
    "DIV":     TokenType.INTEGER_DIV,
    "INTEGER": TokenType.INTEGER,
    "REAL":    TokenType.REAL,
    "BEGIN":   TokenType.BEGIN,
    "END":     TokenType.END,
}

SYMBOLS = {
    ";": TokenType.SEMI,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MUL,
    "/": TokenType.FLOAT_DIV,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ".": TokenType.DOT,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int
    column: int = 1
    number: Optional[float] = None

    @property
    def category(self) -> TokenCategory:
        return self.type.category

    def __repr__(self):
        if self.number is not None:
            return f"Token({self.type.name}, {self.number!r}, line={self.line})"
        return f"Token({self.type.name}, {self.value!r}, line={self.line})"


_WHITESPACE_RE = re.compile(r'[ \t\n\r]+')
# An unterminated comment runs to end of input
_COMMENT_RE    = re.compile(r'\{[^}]*\}?')
_WORD_RE       = re.compile(r'[A-Za-z][A-Za-z0-9]*')
_NUMBER_RE     = re.compile(r'[0-9]+(\.[0-9]*)?')


class Lexer:
    """
    Pull-based scanner over a source string.

    next_token() advances past exactly one token per call; once the input is
    exhausted every further call returns an EOF token.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.token_count = 0

    # ------------------------------------------------------------------ public

    def next_token(self) -> Token:
        self._skip_ignored()

        if self.pos >= len(self.text):
            return Token(TokenType.EOF, "", self.line, self.column)

        tok = self._scan()
        self.token_count += 1
        return tok

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    # ------------------------------------------------------------------ helpers

    def _skip_ignored(self) -> None:
        while self.pos < len(self.text):
            m = _WHITESPACE_RE.match(self.text, self.pos) or _COMMENT_RE.match(self.text, self.pos)
            if not m:
                return
            self._consume(m.group(0))

    def _consume(self, lexeme: str) -> None:
        newlines = lexeme.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(lexeme) - lexeme.rfind("\n")
        else:
            self.column += len(lexeme)
        self.pos += len(lexeme)

    def _scan(self) -> Token:
        line, column = self.line, self.column

        m = _WORD_RE.match(self.text, self.pos)
        if m:
            word = m.group(0)
            self._consume(word)
            return Token(RESERVED_WORDS.get(word, TokenType.ID), word, line, column)

        m = _NUMBER_RE.match(self.text, self.pos)
        if m:
            raw = m.group(0)
            self._consume(raw)
            ttype = TokenType.REAL_CONST if m.group(1) is not None else TokenType.INTEGER_CONST
            return Token(ttype, raw, line, column, number=float(raw))

        if self.text.startswith(":=", self.pos):
            self._consume(":=")
            return Token(TokenType.ASSIGN, ":=", line, column)

        char = self.text[self.pos]
        if char in SYMBOLS:
            self._consume(char)
            return Token(SYMBOLS[char], char, line, column)

        raise LexerError(
            f"Unexpected character {char!r} at position {self.pos} (column {column})",
            line, column,
        )


def tokenize(source: str) -> List[Token]:
    """
    Scan the whole source into a list of Tokens ending with a single EOF.
    Raises LexerError on unrecognized characters.
    """
    return list(Lexer(source))
