"""Expression syntax tree node definitions.

Nodes are built bottom-up by the parser: children first, then the node that
contains them. Building a node attaches its children, so every parent link is
fixed at construction time. After that a tree is read-only.

The parent link is a weak reference. A tree is owned from its root downward;
holding only a child does not keep its ancestors alive.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .tokens import Token

logger = logging.getLogger(__name__)


# ============================================================
# ERRORS
# ============================================================


class TreeInvariantError(Exception):
    """A tree violates a structural invariant. Always a producer bug."""

    def __init__(self, msg: str, line: int = 0, col: int = 0):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class CycleError(TreeInvariantError):
    """A node was reached twice along one path."""


class NestingTooDeepError(TreeInvariantError):
    """Expression nesting exceeds the walker's depth limit."""


# ============================================================
# BASE
# ============================================================


@dataclass(frozen=True, eq=False)
class ExprNode:
    """Base for all expression nodes.

    Every variant answers token(), the first token of the node, and parent(),
    the enclosing node or None at the root.
    """

    _parent_ref: weakref.ref[ExprNode] | None = field(
        default=None, init=False, repr=False
    )

    def token(self) -> Token:
        """First token of the node.

        Nodes without a token of their own follow their designated child
        until one that has one, iteratively, so long chains like
        foo.a.b.c... resolve without recursion.
        """
        n: ExprNode = self
        seen: set[int] = set()
        child = n._token_child()
        while child is not None:
            if id(child) in seen:
                logger.debug("token chain of %r loops", self)
                raise CycleError(type(self).__name__ + " token chain loops")
            seen.add(id(child))
            n = child
            child = n._token_child()
        if n is self:
            raise NotImplementedError(type(self).__name__ + ".token")
        return n.token()

    def _token_child(self) -> ExprNode | None:
        """Child whose token stands for this node, or None when it has its own."""
        return None

    def parent(self) -> ExprNode | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def children(self) -> tuple[ExprNode, ...]:
        """Direct children in the order the walker visits them."""
        return ()

    def _adopt(self, *children: ExprNode) -> None:
        # Everything is checked before any link is set, so a rejected node
        # leaves its would-be children untouched.
        seen: set[int] = set()
        for child in children:
            if not isinstance(child, ExprNode):
                raise TreeInvariantError(
                    "child of " + type(self).__name__ + " is not an expression node: "
                    + repr(child)
                )
            if child.parent() is not None or id(child) in seen:
                tok = child.token()
                logger.debug("reattach of %r refused", child)
                raise TreeInvariantError(
                    type(child).__name__ + " already belongs to another node",
                    tok.line,
                    tok.col,
                )
            seen.add(id(child))
        for child in children:
            object.__setattr__(child, "_parent_ref", weakref.ref(self))


# ============================================================
# VARIABLE
# ============================================================


@dataclass(frozen=True, eq=False)
class VariableNode(ExprNode):
    """Variable access: github, matrix, env."""

    name: str
    tok: Token

    def token(self) -> Token:
        return self.tok


# ============================================================
# LITERALS
# ============================================================


@dataclass(frozen=True, eq=False)
class NullNode(ExprNode):
    """null."""

    tok: Token

    def token(self) -> Token:
        return self.tok


@dataclass(frozen=True, eq=False)
class BoolNode(ExprNode):
    """true or false."""

    value: bool
    tok: Token

    def token(self) -> Token:
        return self.tok


@dataclass(frozen=True, eq=False)
class IntNode(ExprNode):
    """Integer literal."""

    value: int
    tok: Token

    def token(self) -> Token:
        return self.tok


@dataclass(frozen=True, eq=False)
class FloatNode(ExprNode):
    """Float literal."""

    value: float
    tok: Token

    def token(self) -> Token:
        return self.tok


@dataclass(frozen=True, eq=False)
class StringNode(ExprNode):
    """String literal with escapes resolved and quotes removed."""

    value: str
    tok: Token

    def token(self) -> Token:
        return self.tok


# ============================================================
# OPERATORS
# ============================================================


@dataclass(frozen=True, eq=False)
class ObjectDerefNode(ExprNode):
    """Property dereference: foo.bar."""

    receiver: ExprNode
    property: str

    def __post_init__(self) -> None:
        self._adopt(self.receiver)

    def _token_child(self) -> ExprNode:
        return self.receiver

    def children(self) -> tuple[ExprNode, ...]:
        return (self.receiver,)


@dataclass(frozen=True, eq=False)
class ArrayDerefNode(ExprNode):
    """Element dereference: the * in foo.bar.*.piyo."""

    receiver: ExprNode

    def __post_init__(self) -> None:
        self._adopt(self.receiver)

    def _token_child(self) -> ExprNode:
        return self.receiver

    def children(self) -> tuple[ExprNode, ...]:
        return (self.receiver,)


@dataclass(frozen=True, eq=False)
class IndexAccessNode(ExprNode):
    """operand[index], dynamic property access or array indexing.

    The index is visited before the operand; see visit.visit_expr_node.
    """

    operand: ExprNode
    index: ExprNode

    def __post_init__(self) -> None:
        self._adopt(self.operand, self.index)

    def _token_child(self) -> ExprNode:
        return self.operand

    def children(self) -> tuple[ExprNode, ...]:
        return (self.index, self.operand)


# ! is the only unary operator
@dataclass(frozen=True, eq=False)
class NotOpNode(ExprNode):
    """!operand."""

    operand: ExprNode
    tok: Token

    def __post_init__(self) -> None:
        self._adopt(self.operand)

    def token(self) -> Token:
        return self.tok

    def children(self) -> tuple[ExprNode, ...]:
        return (self.operand,)


class CompareOpKind(Enum):
    """Comparison operators. The value is the operator symbol."""

    LESS = "<"
    LESS_EQ = "<="
    GREATER = ">"
    GREATER_EQ = ">="
    EQ = "=="
    NOT_EQ = "!="

    def is_equality_op(self) -> bool:
        return self is CompareOpKind.EQ or self is CompareOpKind.NOT_EQ

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class CompareOpNode(ExprNode):
    """left op right for ==, !=, <, <=, >, >=."""

    kind: CompareOpKind
    left: ExprNode
    right: ExprNode

    def __post_init__(self) -> None:
        self._adopt(self.left, self.right)

    def _token_child(self) -> ExprNode:
        return self.left

    def children(self) -> tuple[ExprNode, ...]:
        return (self.left, self.right)


class LogicalOpKind(Enum):
    """Logical binary operators. The value is the operator symbol."""

    AND = "&&"
    OR = "||"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class LogicalOpNode(ExprNode):
    """left && right, left || right."""

    kind: LogicalOpKind
    left: ExprNode
    right: ExprNode

    def __post_init__(self) -> None:
        self._adopt(self.left, self.right)

    def _token_child(self) -> ExprNode:
        return self.left

    def children(self) -> tuple[ExprNode, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, eq=False)
class FuncCallNode(ExprNode):
    """callee(args). Only builtin functions can be called, so callee is a name."""

    callee: str
    args: Sequence[ExprNode]
    tok: Token

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        self._adopt(*self.args)

    def token(self) -> Token:
        return self.tok

    def children(self) -> tuple[ExprNode, ...]:
        return tuple(self.args)


# ============================================================
# VARIANT SET
# ============================================================

ExprNodeVariant = (
    VariableNode
    | NullNode
    | BoolNode
    | IntNode
    | FloatNode
    | StringNode
    | ObjectDerefNode
    | ArrayDerefNode
    | IndexAccessNode
    | NotOpNode
    | CompareOpNode
    | LogicalOpNode
    | FuncCallNode
)
"""Closed set of node shapes the expression grammar produces."""
