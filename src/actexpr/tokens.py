"""Expression tokens: the lexer output that node constructors consume."""

from __future__ import annotations

from dataclasses import dataclass


# Token kind constants
TK_END = "END"
TK_IDENT = "IDENT"
TK_STRING = "STRING"
TK_INT = "INT"
TK_FLOAT = "FLOAT"
TK_LEFT_PAREN = "LEFT_PAREN"
TK_RIGHT_PAREN = "RIGHT_PAREN"
TK_LEFT_BRACKET = "LEFT_BRACKET"
TK_RIGHT_BRACKET = "RIGHT_BRACKET"
TK_DOT = "DOT"
TK_NOT = "NOT"
TK_LESS = "LESS"
TK_LESS_EQ = "LESS_EQ"
TK_GREATER = "GREATER"
TK_GREATER_EQ = "GREATER_EQ"
TK_EQ = "EQ"
TK_NOT_EQ = "NOT_EQ"
TK_AND = "AND"
TK_OR = "OR"
TK_STAR = "STAR"
TK_COMMA = "COMMA"


@dataclass(frozen=True)
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int

    def is_valid(self) -> bool:
        return self.line >= 1 and self.col >= 1


class Token:
    """A token with kind, raw value, and position.

    offset is the 0-indexed character offset into the expression source;
    line and col are 1-indexed.
    """

    __slots__ = ("kind", "value", "offset", "line", "col")

    def __init__(self, kind: str, value: str, offset: int, line: int, col: int):
        self.kind: str = kind
        self.value: str = value
        self.offset: int = offset
        self.line: int = line
        self.col: int = col

    def pos(self) -> Pos:
        return Pos(self.line, self.col)

    def __repr__(self) -> str:
        return (
            "Token("
            + self.kind
            + ", "
            + repr(self.value)
            + ", "
            + str(self.offset)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )
