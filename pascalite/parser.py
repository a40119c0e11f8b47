"""
pascalite - Recursive Descent Parser
Pulls tokens from a Lexer one at a time and builds the AST.

    program         : PROGRAM variable SEMI block DOT
    block           : declarations compound_statement
    declarations    : VAR (variable_declaration SEMI)+ | empty
    variable_decl   : ID (COMMA ID)* COLON type_spec
    type_spec       : INTEGER | REAL
    compound_stmt   : BEGIN statement_list END
    statement_list  : statement (SEMI statement)*
    statement       : compound_stmt | assignment | empty
    assignment      : variable ASSIGN expr
    expr            : term ((PLUS | MINUS) term)*
    term            : factor ((MUL | INTEGER_DIV | FLOAT_DIV) factor)*
    factor          : (PLUS | MINUS) factor | INTEGER_CONST | REAL_CONST
                    | LPAREN expr RPAREN | variable
"""

from typing import List, Union

from .errors import ParseError
from .lexer import Lexer, Token, TokenType
from .ast_nodes import (
    ProgramNode, BlockNode, VarDeclNode, TypeSpecNode, CompoundNode,
    AssignNode, BinaryOpNode, UnaryOpNode, NumberNode, VarNode, NoOpNode,
    ASTNode
)

_ADDITIVE       = (TokenType.PLUS, TokenType.MINUS)
_MULTIPLICATIVE = (TokenType.MUL, TokenType.INTEGER_DIV, TokenType.FLOAT_DIV)
_TYPE_NAMES     = (TokenType.INTEGER, TokenType.REAL)

# Deepest allowed nesting of BEGIN blocks, parentheses and unary signs combined
MAX_NESTING_DEPTH = 200


class Parser:
    def __init__(self, lexer: Union[Lexer, str]):
        if isinstance(lexer, str):
            lexer = Lexer(lexer)
        self._lexer = lexer
        self._current: Token = self._lexer.next_token()
        self._depth = 0

    # ------------------------------------------------------------------ helpers

    def _peek(self) -> Token:
        return self._current

    def _match(self, *types: TokenType) -> bool:
        return self._current.type in types

    def _eat(self, ttype: TokenType) -> Token:
        tok = self._current
        if tok.type != ttype:
            raise ParseError(
                f"Expected {ttype.name} but got {tok.type.name} ({tok.value!r})",
                tok.line, tok.column,
            )
        self._current = self._lexer.next_token()
        return tok

    def _enter(self, tok: Token) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise ParseError(
                f"Nested too deeply (more than {MAX_NESTING_DEPTH} levels)",
                tok.line, tok.column,
            )

    def _leave(self) -> None:
        self._depth -= 1

    # ------------------------------------------------------------------ public

    def parse(self) -> ProgramNode:
        node = self._parse_program()
        tok = self._peek()
        if tok.type != TokenType.EOF:
            raise ParseError(
                f"Unexpected {tok.type.name} ({tok.value!r}) after end of program",
                tok.line, tok.column,
            )
        return node

    # ------------------------------------------------------------------ program structure

    def _parse_program(self) -> ProgramNode:
        prog_tok = self._eat(TokenType.PROGRAM)
        name = self._parse_variable().name
        self._eat(TokenType.SEMI)
        block = self._parse_block()
        self._eat(TokenType.DOT)
        return ProgramNode(name=name, block=block, line=prog_tok.line)

    def _parse_block(self) -> BlockNode:
        line = self._peek().line
        declarations = self._parse_declarations()
        compound = self._parse_compound_statement()
        return BlockNode(declarations=tuple(declarations), compound=compound, line=line)

    def _parse_declarations(self) -> List[VarDeclNode]:
        declarations: List[VarDeclNode] = []
        if not self._match(TokenType.VAR):
            return declarations

        self._eat(TokenType.VAR)
        # VAR needs at least one declaration
        while True:
            declarations.extend(self._parse_variable_declaration())
            self._eat(TokenType.SEMI)
            if not self._match(TokenType.ID):
                break
        return declarations

    def _parse_variable_declaration(self) -> List[VarDeclNode]:
        names = [self._eat(TokenType.ID)]
        while self._match(TokenType.COMMA):
            self._eat(TokenType.COMMA)
            names.append(self._eat(TokenType.ID))

        self._eat(TokenType.COLON)
        type_tok = self._parse_type_spec()

        # One node per identifier, each with its own TypeSpec
        return [
            VarDeclNode(
                var=VarNode(name=tok.value, line=tok.line),
                type_spec=TypeSpecNode(type_name=type_tok.value, line=type_tok.line),
                line=tok.line,
            )
            for tok in names
        ]

    def _parse_type_spec(self) -> Token:
        tok = self._peek()
        if not self._match(*_TYPE_NAMES):
            raise ParseError(
                f"Expected INTEGER or REAL but got {tok.type.name} ({tok.value!r})",
                tok.line, tok.column,
            )
        return self._eat(tok.type)

    # ------------------------------------------------------------------ statements

    def _parse_compound_statement(self) -> CompoundNode:
        begin_tok = self._eat(TokenType.BEGIN)
        self._enter(begin_tok)
        statements = self._parse_statement_list()
        self._eat(TokenType.END)
        self._leave()
        return CompoundNode(statements=tuple(statements), line=begin_tok.line)

    def _parse_statement_list(self) -> List[ASTNode]:
        statements = [self._parse_statement()]
        while self._match(TokenType.SEMI):
            self._eat(TokenType.SEMI)
            statements.append(self._parse_statement())

        if self._match(TokenType.ID):
            tok = self._peek()
            raise ParseError(
                f"Missing ';' before statement starting with {tok.value!r}",
                tok.line, tok.column,
            )
        return statements

    def _parse_statement(self) -> ASTNode:
        if self._match(TokenType.BEGIN):
            return self._parse_compound_statement()
        if self._match(TokenType.ID):
            return self._parse_assignment()
        return NoOpNode(line=self._peek().line)

    def _parse_assignment(self) -> AssignNode:
        target = self._parse_variable()
        assign_tok = self._eat(TokenType.ASSIGN)
        value = self._parse_expr()
        return AssignNode(target=target, value=value, line=assign_tok.line)

    def _parse_variable(self) -> VarNode:
        tok = self._eat(TokenType.ID)
        return VarNode(name=tok.value, line=tok.line)

    # ------------------------------------------------------------------ expressions

    def _parse_expr(self) -> ASTNode:
        left = self._parse_term()

        while self._match(*_ADDITIVE):
            op_tok = self._eat(self._peek().type)
            right = self._parse_term()
            left = BinaryOpNode(left=left, op=op_tok.type, right=right, line=op_tok.line)

        return left

    def _parse_term(self) -> ASTNode:
        left = self._parse_factor()

        while self._match(*_MULTIPLICATIVE):
            op_tok = self._eat(self._peek().type)
            right = self._parse_factor()
            left = BinaryOpNode(left=left, op=op_tok.type, right=right, line=op_tok.line)

        return left

    def _parse_factor(self) -> ASTNode:
        tok = self._peek()

        if self._match(*_ADDITIVE):
            self._eat(tok.type)
            self._enter(tok)
            operand = self._parse_factor()
            self._leave()
            return UnaryOpNode(op=tok.type, operand=operand, line=tok.line)

        if self._match(TokenType.INTEGER_CONST, TokenType.REAL_CONST):
            self._eat(tok.type)
            return NumberNode(value=tok.number, line=tok.line)

        if self._match(TokenType.LPAREN):
            self._eat(TokenType.LPAREN)
            self._enter(tok)
            expr = self._parse_expr()
            self._eat(TokenType.RPAREN)
            self._leave()
            return expr

        return self._parse_variable()
