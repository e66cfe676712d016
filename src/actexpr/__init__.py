"""Expression syntax tree and traversal, public API."""

from __future__ import annotations

from .ast import (
    ArrayDerefNode as ArrayDerefNode,
    BoolNode as BoolNode,
    CompareOpKind as CompareOpKind,
    CompareOpNode as CompareOpNode,
    CycleError as CycleError,
    ExprNode as ExprNode,
    ExprNodeVariant as ExprNodeVariant,
    FloatNode as FloatNode,
    FuncCallNode as FuncCallNode,
    IndexAccessNode as IndexAccessNode,
    IntNode as IntNode,
    LogicalOpKind as LogicalOpKind,
    LogicalOpNode as LogicalOpNode,
    NestingTooDeepError as NestingTooDeepError,
    NotOpNode as NotOpNode,
    NullNode as NullNode,
    ObjectDerefNode as ObjectDerefNode,
    StringNode as StringNode,
    TreeInvariantError as TreeInvariantError,
    VariableNode as VariableNode,
)
from .emit import to_source as to_source
from .tokens import Pos as Pos, Token as Token
from .visit import (
    VisitExprNodeFunc as VisitExprNodeFunc,
    find_parent as find_parent,
    find_parent_of_type as find_parent_of_type,
    iter_parents as iter_parents,
    visit_expr_node as visit_expr_node,
)
