"""Abstract Syntax Tree (AST) definitions for the Ariel language.

The AST classes defined in this module represent the syntactic structure
of parsed Ariel programs. They are plain data: the interpreter walks them
and the parser (or any other front end, see ``ast_json``) builds them.
Each node corresponds to a construct in the Ariel grammar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    statements: List[Node] = field(default_factory=list)


@dataclass
class Param:
    # For array parameters `type_name` is the element type and `array` is set.
    type_name: str
    name: str
    array: bool = False


@dataclass
class FuncDecl(Node):
    return_type: str
    name: str
    params: List[Param]
    body: 'Block'


@dataclass
class VarDecl(Node):
    type_name: str
    name: str
    value: Optional[Node]  # initializer, or size expression for sized arrays
    initialized: bool = True


@dataclass
class Block(Node):
    statements: List[Node] = field(default_factory=list)


@dataclass
class While(Node):
    condition: Node
    body: Node


@dataclass
class For(Node):
    init: Optional[Node]  # VarDecl or expression
    condition: Optional[Node]
    increment: Optional[Node]
    body: Node


@dataclass
class IfElse(Node):
    condition: Node
    consequence: Node
    alternative: Optional[Node] = None


@dataclass
class Return(Node):
    value: Optional[Node]  # None for a void return


@dataclass
class ExprStmt(Node):
    expression: Node


@dataclass
class PrefixExpr(Node):
    op: str
    right: Node


@dataclass
class InfixExpr(Node):
    left: Node
    op: str
    right: Node


@dataclass
class Assign(Node):
    name: str
    value: Node


@dataclass
class AssignExpr(Node):
    name: str
    op: str
    value: Node


@dataclass
class Call(Node):
    name: str
    arguments: List[Node] = field(default_factory=list)


@dataclass
class Identifier(Node):
    name: str


@dataclass
class CharCon(Node):
    value: str


@dataclass
class IntCon(Node):
    value: int


@dataclass
class FloatCon(Node):
    value: float


@dataclass
class StringCon(Node):
    value: str


@dataclass
class BoolCon(Node):
    value: bool


@dataclass
class ArrayLit(Node):
    elements: List[Node] = field(default_factory=list)


@dataclass
class IndexExpr(Node):
    name: str
    index: Node


@dataclass
class AssignIndexExpr(Node):
    name: str
    index: Node
    value: Node


@dataclass
class AssignExprIndexExpr(Node):
    name: str
    index: Node
    op: str
    value: Node


NODE_TYPES: Dict[str, Any] = {
    cls.__name__: cls
    for cls in (
        Program, Param, FuncDecl, VarDecl, Block, While, For, IfElse,
        Return, ExprStmt, PrefixExpr, InfixExpr, Assign, AssignExpr, Call,
        Identifier, CharCon, IntCon, FloatCon, StringCon, BoolCon,
        ArrayLit, IndexExpr, AssignIndexExpr, AssignExprIndexExpr,
    )
}
