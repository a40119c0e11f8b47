"""
pascalite - AST Node Definitions
Immutable tagged AST for the Pascal subset, plus the handler-registry base
class every tree walker derives from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple

from .lexer import TokenType


class NodeKind(Enum):
    PROGRAM   = "ProgramNode"
    BLOCK     = "BlockNode"
    VAR_DECL  = "VarDeclNode"
    TYPE_SPEC = "TypeSpecNode"
    COMPOUND  = "CompoundNode"
    ASSIGN    = "AssignNode"
    BINARY_OP = "BinaryOpNode"
    UNARY_OP  = "UnaryOpNode"
    NUMBER    = "NumberNode"
    VAR       = "VarNode"
    NO_OP     = "NoOpNode"


OPERATOR_SYMBOLS = {
    TokenType.PLUS:        "+",
    TokenType.MINUS:       "-",
    TokenType.MUL:         "*",
    TokenType.INTEGER_DIV: "DIV",
    TokenType.FLOAT_DIV:   "/",
}


@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""
    kind: ClassVar[NodeKind]
    line: int = 0

    @property
    def label(self) -> str:
        return self.kind.value[:-len("Node")]

    def children(self) -> Tuple["ASTNode", ...]:
        return ()


@dataclass(frozen=True)
class NumberNode(ASTNode):
    """An integer or real literal; both are held as float."""
    kind: ClassVar[NodeKind] = NodeKind.NUMBER
    value: float = 0.0

    @property
    def label(self) -> str:
        v = self.value
        return str(int(v)) if float(v).is_integer() else repr(float(v))


@dataclass(frozen=True)
class VarNode(ASTNode):
    """A variable reference."""
    kind: ClassVar[NodeKind] = NodeKind.VAR
    name: str = ""

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class NoOpNode(ASTNode):
    """The empty statement."""
    kind: ClassVar[NodeKind] = NodeKind.NO_OP

    @property
    def label(self) -> str:
        return "noop"


@dataclass(frozen=True)
class UnaryOpNode(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.UNARY_OP
    op: TokenType = TokenType.PLUS
    operand: ASTNode = None

    @property
    def label(self) -> str:
        return OPERATOR_SYMBOLS.get(self.op, self.op.name)

    def children(self):
        return (self.operand,)


@dataclass(frozen=True)
class BinaryOpNode(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.BINARY_OP
    left: ASTNode = None
    op: TokenType = TokenType.PLUS
    right: ASTNode = None

    @property
    def label(self) -> str:
        return OPERATOR_SYMBOLS.get(self.op, self.op.name)

    def children(self):
        return (self.left, self.right)


@dataclass(frozen=True)
class AssignNode(ASTNode):
    """target := value"""
    kind: ClassVar[NodeKind] = NodeKind.ASSIGN
    target: VarNode = None
    value: ASTNode = None

    @property
    def label(self) -> str:
        return ":="

    def children(self):
        return (self.target, self.value)


@dataclass(frozen=True)
class CompoundNode(ASTNode):
    """BEGIN statement; ... END"""
    kind: ClassVar[NodeKind] = NodeKind.COMPOUND
    statements: Tuple[ASTNode, ...] = ()

    def children(self):
        return self.statements


@dataclass(frozen=True)
class TypeSpecNode(ASTNode):
    """INTEGER or REAL. Carries no runtime behavior."""
    kind: ClassVar[NodeKind] = NodeKind.TYPE_SPEC
    type_name: str = "INTEGER"

    @property
    def label(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class VarDeclNode(ASTNode):
    """One declared identifier with its type."""
    kind: ClassVar[NodeKind] = NodeKind.VAR_DECL
    var: VarNode = None
    type_spec: TypeSpecNode = None

    def children(self):
        return (self.var, self.type_spec)


@dataclass(frozen=True)
class BlockNode(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.BLOCK
    declarations: Tuple[VarDeclNode, ...] = ()
    compound: CompoundNode = None

    def children(self):
        return self.declarations + (self.compound,)


@dataclass(frozen=True)
class ProgramNode(ASTNode):
    """Root node of the program."""
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM
    name: str = ""
    block: BlockNode = None

    @property
    def label(self) -> str:
        return f"Program\n{self.name}"

    def children(self):
        return (self.block,)


ALL_NODE_TYPES = (
    ProgramNode, BlockNode, VarDeclNode, TypeSpecNode, CompoundNode,
    AssignNode, BinaryOpNode, UnaryOpNode, NumberNode, VarNode, NoOpNode,
)


class NodeVisitor:
    """
    Base class for tree walkers.

    The handler table is built once per instance, one `_visit_<NodeKind.value>`
    method per node kind. A subclass missing any handler cannot be instantiated.
    """

    def __init__(self):
        self._handlers: Dict[NodeKind, Callable[[Any], Any]] = {}
        missing = []
        for kind in NodeKind:
            handler: Optional[Callable] = getattr(self, f"_visit_{kind.value}", None)
            if handler is None:
                missing.append(kind.value)
            else:
                self._handlers[kind] = handler
        if missing:
            raise TypeError(
                f"{type(self).__name__} has no handler for: {', '.join(missing)}"
            )

    def handles(self, kind: NodeKind) -> bool:
        return kind in self._handlers

    def visit(self, node: ASTNode) -> Any:
        return self._handlers[node.kind](node)
