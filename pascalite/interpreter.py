"""
pascalite - Tree-Walking Interpreter
Evaluates a parsed program once, recording every assignment in a flat
variable table owned by the Interpreter instance.

All runtime values are floats. DIV and / both perform floating-point
division; division by zero yields inf or nan as IEEE-754 doubles do.
"""

import math
import operator
from typing import Dict, Optional

from .errors import UndefinedVariableError, UnknownOperatorError
from .lexer import TokenType
from .ast_nodes import (
    ProgramNode, BlockNode, VarDeclNode, TypeSpecNode, CompoundNode,
    AssignNode, BinaryOpNode, UnaryOpNode, NumberNode, VarNode, NoOpNode,
    NodeKind, NodeVisitor
)


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


BINARY_OPS = {
    TokenType.PLUS:        operator.add,
    TokenType.MINUS:       operator.sub,
    TokenType.MUL:         operator.mul,
    TokenType.INTEGER_DIV: _divide,
    TokenType.FLOAT_DIV:   _divide,
}

UNARY_OPS = {
    TokenType.PLUS:  operator.pos,
    TokenType.MINUS: operator.neg,
}


class Interpreter(NodeVisitor):
    def __init__(self):
        super().__init__()
        self.global_scope: Dict[str, float] = {}

    def interpret(self, tree: ProgramNode) -> Dict[str, float]:
        """Run the program and return the resulting variable table."""
        self.global_scope = {}
        self.visit(tree)
        return self.global_scope

    # ------------------------------------------------------------------ structure

    def _visit_ProgramNode(self, node: ProgramNode) -> None:
        self.visit(node.block)

    def _visit_BlockNode(self, node: BlockNode) -> None:
        for decl in node.declarations:
            self.visit(decl)
        self.visit(node.compound)

    def _visit_VarDeclNode(self, node: VarDeclNode) -> None:
        pass  # declarations never touch the table

    def _visit_TypeSpecNode(self, node: TypeSpecNode) -> None:
        pass

    # ------------------------------------------------------------------ statements

    def _visit_CompoundNode(self, node: CompoundNode) -> None:
        for stmt in node.statements:
            self.visit(stmt)

    def _visit_AssignNode(self, node: AssignNode) -> None:
        self.global_scope[node.target.name] = self.visit(node.value)

    def _visit_NoOpNode(self, node: NoOpNode) -> None:
        pass

    # ------------------------------------------------------------------ expressions

    def _visit_BinaryOpNode(self, node: BinaryOpNode) -> float:
        # a + b + c nests to the left; fold the chain in a loop, left to right
        chain = []
        while node.kind == NodeKind.BINARY_OP:
            chain.append(node)
            node = node.left

        value = self.visit(node)
        for op_node in reversed(chain):
            func = BINARY_OPS.get(op_node.op)
            if func is None:
                raise UnknownOperatorError(
                    f"Unknown binary operator {_op_name(op_node.op)}", op_node.line
                )
            value = func(value, self.visit(op_node.right))
        return value

    def _visit_UnaryOpNode(self, node: UnaryOpNode) -> float:
        func = UNARY_OPS.get(node.op)
        if func is None:
            raise UnknownOperatorError(f"Unknown unary operator {_op_name(node.op)}", node.line)
        return func(self.visit(node.operand))

    def _visit_NumberNode(self, node: NumberNode) -> float:
        return float(node.value)

    def _visit_VarNode(self, node: VarNode) -> float:
        value: Optional[float] = self.global_scope.get(node.name)
        if value is None:
            raise UndefinedVariableError(f"Variable '{node.name}' is not defined", node.line)
        return value


def _op_name(op) -> str:
    return getattr(op, "name", repr(op))
