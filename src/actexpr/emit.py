"""Expression emitter: renders a tree back to canonical expression text.

Total over the node variants in `ast.py`: a new node type needs a case here.
"""

from __future__ import annotations

import math

from . import visit
from .ast import (
    ArrayDerefNode,
    BoolNode,
    CompareOpNode,
    ExprNode,
    FloatNode,
    FuncCallNode,
    IndexAccessNode,
    IntNode,
    LogicalOpKind,
    LogicalOpNode,
    NestingTooDeepError,
    NotOpNode,
    NullNode,
    ObjectDerefNode,
    StringNode,
    TreeInvariantError,
    VariableNode,
)


def to_source(node: ExprNode, max_depth: int | None = None) -> str:
    """Render an expression tree as source text, without the ${{ }} wrapper.

    Nesting is bounded like visit_expr_node; max_depth defaults to
    visit.MAX_DEPTH.
    """
    depth = visit.MAX_DEPTH if max_depth is None else max_depth
    return _Emitter(depth).render(node, 0)


class _Emitter:
    _PREC_OR: int = 1
    _PREC_AND: int = 2
    _PREC_COMPARE: int = 3
    _PREC_UNARY: int = 4
    _PREC_POSTFIX: int = 5
    _PREC_PRIMARY: int = 6

    def __init__(self, max_depth: int):
        self.max_depth: int = max_depth
        self.depth: int = 0

    def prec(self, node: ExprNode) -> int:
        match node:
            case LogicalOpNode(kind=LogicalOpKind.OR):
                return self._PREC_OR
            case LogicalOpNode():
                return self._PREC_AND
            case CompareOpNode():
                return self._PREC_COMPARE
            case NotOpNode():
                return self._PREC_UNARY
            case ObjectDerefNode() | ArrayDerefNode() | IndexAccessNode():
                return self._PREC_POSTFIX
            case _:
                return self._PREC_PRIMARY

    def render(self, node: ExprNode, parent_prec: int, side: str = "") -> str:
        if self.depth >= self.max_depth:
            tok = node.token()
            raise NestingTooDeepError(
                "expression nested deeper than " + str(self.max_depth),
                tok.line,
                tok.col,
            )
        self.depth += 1
        prec = self.prec(node)
        text = self.render_inner(node)
        self.depth -= 1
        need_parens = False
        if prec < parent_prec:
            need_parens = True
        elif prec == parent_prec and side == "right" and prec in (
            self._PREC_AND,
            self._PREC_OR,
        ):
            need_parens = True
        elif prec == parent_prec and side != "" and prec == self._PREC_COMPARE:
            need_parens = True
        if need_parens:
            return f"({text})"
        return text

    def render_inner(self, node: ExprNode) -> str:
        match node:
            case VariableNode(name=name):
                return name
            case NullNode():
                return "null"
            case BoolNode(value=value):
                return "true" if value else "false"
            case IntNode(value=value):
                return str(value)
            case FloatNode(value=value, tok=tok):
                if not math.isfinite(value):
                    raise TreeInvariantError(
                        "float literal has no source form: " + repr(value),
                        tok.line,
                        tok.col,
                    )
                return repr(value)
            case StringNode(value=value):
                return "'" + value.replace("'", "''") + "'"
            case ObjectDerefNode(receiver=receiver, property=prop):
                return self.render(receiver, self._PREC_POSTFIX) + "." + prop
            case ArrayDerefNode(receiver=receiver):
                return self.render(receiver, self._PREC_POSTFIX) + ".*"
            case IndexAccessNode(operand=operand, index=index):
                op = self.render(operand, self._PREC_POSTFIX)
                return op + "[" + self.render(index, 0) + "]"
            case NotOpNode(operand=operand):
                return "!" + self.render(operand, self._PREC_UNARY)
            case CompareOpNode(kind=kind, left=left, right=right):
                lhs = self.render(left, self._PREC_COMPARE, "left")
                rhs = self.render(right, self._PREC_COMPARE, "right")
                return f"{lhs} {kind} {rhs}"
            case LogicalOpNode(kind=kind, left=left, right=right):
                prec = self.prec(node)
                lhs = self.render(left, prec, "left")
                rhs = self.render(right, prec, "right")
                return f"{lhs} {kind} {rhs}"
            case FuncCallNode(callee=callee, args=args):
                return callee + "(" + ", ".join(self.render(a, 0) for a in args) + ")"
            case _:
                raise TreeInvariantError(
                    "unknown expression node: " + type(node).__name__
                )
