"""Traversal over expression trees.

visit_expr_node is the one depth-first walk every analyzer shares. Child order
is part of its contract and differs from field order for IndexAccessNode.

find_parent answers "which enclosing node first satisfies this predicate".
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, TypeVar

from .ast import (
    ArrayDerefNode,
    BoolNode,
    CompareOpNode,
    CycleError,
    ExprNode,
    FloatNode,
    FuncCallNode,
    IndexAccessNode,
    IntNode,
    LogicalOpNode,
    NestingTooDeepError,
    NotOpNode,
    NullNode,
    ObjectDerefNode,
    StringNode,
    TreeInvariantError,
    VariableNode,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_DEPTH: int = 256
"""Default bound on nesting depth for visit_expr_node."""

VisitExprNodeFunc = Callable[[ExprNode, "ExprNode | None", bool], None]
"""Visitor callback: (node, parent, entering).

Called with entering=True before the node's children are visited and with
entering=False after them, so it runs twice per node. parent is None for the
root passed to visit_expr_node.
"""


# ============================================================
# WALKER
# ============================================================


class _Walker:
    def __init__(self, f: VisitExprNodeFunc, max_depth: int):
        self.f: VisitExprNodeFunc = f
        self.max_depth: int = max_depth
        self.on_path: set[int] = set()

    def visit(self, n: ExprNode, p: ExprNode | None) -> None:
        key = id(n)
        if key in self.on_path:
            tok = n.token()
            logger.debug(
                "cycle through %s at %d:%d", type(n).__name__, tok.line, tok.col
            )
            raise CycleError(
                type(n).__name__ + " is its own ancestor", tok.line, tok.col
            )
        if len(self.on_path) >= self.max_depth:
            tok = n.token()
            logger.debug("depth limit %d reached", self.max_depth)
            raise NestingTooDeepError(
                "expression nested deeper than " + str(self.max_depth),
                tok.line,
                tok.col,
            )
        self.on_path.add(key)
        self.f(n, p, True)
        match n:
            case ObjectDerefNode(receiver=receiver):
                self.visit(receiver, n)
            case ArrayDerefNode(receiver=receiver):
                self.visit(receiver, n)
            case IndexAccessNode(operand=operand, index=index):
                # Index goes first so an untrusted-input checker sees it
                # before it judges the whole access.
                self.visit(index, n)
                self.visit(operand, n)
            case NotOpNode(operand=operand):
                self.visit(operand, n)
            case CompareOpNode(left=left, right=right):
                self.visit(left, n)
                self.visit(right, n)
            case LogicalOpNode(left=left, right=right):
                self.visit(left, n)
                self.visit(right, n)
            case FuncCallNode(args=args):
                for a in args:
                    self.visit(a, n)
            case (
                VariableNode()
                | NullNode()
                | BoolNode()
                | IntNode()
                | FloatNode()
                | StringNode()
            ):
                pass
            case _:
                raise TreeInvariantError(
                    "unknown expression node: " + type(n).__name__
                )
        self.f(n, p, False)
        self.on_path.discard(key)


def visit_expr_node(
    n: ExprNode, f: VisitExprNodeFunc, max_depth: int | None = None
) -> None:
    """Visit the tree rooted at n depth-first, calling f on entry and exit.

    Raises CycleError or NestingTooDeepError on a malformed tree, before
    descending further.
    """
    depth = MAX_DEPTH if max_depth is None else max_depth
    _Walker(f, depth).visit(n, None)


# ============================================================
# ANCESTORS
# ============================================================


def iter_parents(n: ExprNode) -> Iterator[ExprNode]:
    """Yield ancestors of n, nearest first. n itself is not included."""
    seen: set[int] = {id(n)}
    parent = n.parent()
    while parent is not None:
        if id(parent) in seen:
            tok = parent.token()
            logger.debug("parent chain of %r loops", n)
            raise CycleError(
                "parent chain of " + type(n).__name__ + " loops", tok.line, tok.col
            )
        seen.add(id(parent))
        yield parent
        parent = parent.parent()


def find_parent(
    n: ExprNode, predicate: Callable[[ExprNode], tuple[T, bool]]
) -> tuple[T | None, bool]:
    """Apply predicate to each ancestor of n until it reports a match.

    predicate returns (value, matched). The first matching value is returned
    as (value, True). When no ancestor matches, returns (None, False).
    """
    for parent in iter_parents(n):
        t, ok = predicate(parent)
        if ok:
            return t, True
    return None, False


def find_parent_of_type(n: ExprNode, kind: type[T]) -> T | None:
    """Nearest ancestor of n that is an instance of kind, or None."""

    def is_kind(p: ExprNode) -> tuple[T | None, bool]:
        if isinstance(p, kind):
            return p, True
        return None, False

    t, _ = find_parent(n, is_kind)
    return t
