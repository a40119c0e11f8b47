"""
pascalite - AST Visualizer
Walks a finished AST read-only and emits a Graphviz DOT description.
"""

import shutil
import subprocess
import sys
from typing import List

from .ast_nodes import (
    ProgramNode, BlockNode, VarDeclNode, TypeSpecNode, CompoundNode,
    AssignNode, BinaryOpNode, UnaryOpNode, NumberNode, VarNode, NoOpNode,
    ASTNode, NodeKind, NodeVisitor
)

DOT_HEADER = """digraph astgraph {
  node [shape=circle, fontsize=12, fontname="Courier", height=.1];
  ranksep=.3;
  edge [arrowsize=.5]
"""


class ASTVisualizer(NodeVisitor):
    def __init__(self):
        super().__init__()
        self._next_id = 0
        self._lines: List[str] = []

    def generate(self, tree: ProgramNode) -> str:
        """Return the DOT source for the given tree."""
        self._next_id = 0
        self._lines = []
        self.visit(tree)
        return DOT_HEADER + "".join(self._lines) + "}\n"

    # ------------------------------------------------------------------ emit helpers

    def _emit_node(self, node: ASTNode) -> int:
        node_id = self._next_id
        self._next_id += 1
        label = node.label.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        self._lines.append(f'  Node{node_id} [label="{label}"]\n')
        return node_id

    def _emit_branch(self, node: ASTNode, *children: ASTNode) -> int:
        node_id = self._emit_node(node)
        for child in children:
            self._emit_edge(node_id, self.visit(child))
        return node_id

    def _emit_edge(self, parent_id: int, child_id: int) -> None:
        self._lines.append(f"  Node{parent_id} -> Node{child_id}\n")

    # ------------------------------------------------------------------ visitor

    def _visit_ProgramNode(self, node: ProgramNode) -> int:
        return self._emit_branch(node, node.block)

    def _visit_BlockNode(self, node: BlockNode) -> int:
        return self._emit_branch(node, *node.declarations, node.compound)

    def _visit_VarDeclNode(self, node: VarDeclNode) -> int:
        return self._emit_branch(node, node.var, node.type_spec)

    def _visit_TypeSpecNode(self, node: TypeSpecNode) -> int:
        return self._emit_node(node)

    def _visit_CompoundNode(self, node: CompoundNode) -> int:
        return self._emit_branch(node, *node.statements)

    def _visit_AssignNode(self, node: AssignNode) -> int:
        return self._emit_branch(node, node.target, node.value)

    def _visit_BinaryOpNode(self, node: BinaryOpNode) -> int:
        # Walk a left-nested chain in a loop; ids stay in pre-order
        chain = []
        while node.kind == NodeKind.BINARY_OP:
            node_id = self._emit_node(node)
            if chain:
                self._emit_edge(chain[-1][1], node_id)
            chain.append((node, node_id))
            node = node.left

        self._emit_edge(chain[-1][1], self.visit(node))
        for op_node, node_id in reversed(chain):
            self._emit_edge(node_id, self.visit(op_node.right))
        return chain[0][1]

    def _visit_UnaryOpNode(self, node: UnaryOpNode) -> int:
        return self._emit_branch(node, node.operand)

    def _visit_NumberNode(self, node: NumberNode) -> int:
        return self._emit_node(node)

    def _visit_VarNode(self, node: VarNode) -> int:
        return self._emit_node(node)

    def _visit_NoOpNode(self, node: NoOpNode) -> int:
        return self._emit_node(node)


def write_dot(tree: ProgramNode, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(ASTVisualizer().generate(tree))


def render_png(dot_path: str, png_path: str) -> bool:
    """
    Render a DOT file to PNG with Graphviz.
    Returns False when the `dot` executable is not on PATH.
    """
    dot = shutil.which("dot")
    if dot is None:
        print('[pascalite] could not locate program "dot"', file=sys.stderr)
        return False

    subprocess.run([dot, "-Tpng", f"-o{png_path}", dot_path], check=True, capture_output=True)
    return True
