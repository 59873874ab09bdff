"""Abstract Syntax Tree (AST) definitions for bitcalc.

A parsed line is a `Statement`: either a `Binding` (``let x = ...``) or a
bare `Evaluation`. Expressions form a closed set of four node kinds. The
nodes are frozen dataclasses, so a tree built by the parser is never
modified afterwards.

`str()` on any node gives a prefix rendering, e.g. ``(& (+ 5 7) (! 7))``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


UNARY_OPERATORS = ('!', '-')
BINARY_OPERATORS = ('+', '-', '*', '/', '&', '|', '^', '<<', '>>')


@dataclass(frozen=True)
class Literal:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Variable:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class UnaryOp:
    op: str  # '!' (bitwise not) or '-' (negation)
    operand: 'Expression'

    def __str__(self) -> str:
        return f"({self.op} {self.operand})"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: 'Expression'
    right: 'Expression'

    def __str__(self) -> str:
        return f"({self.op} {self.left} {self.right})"


Expression = Union[Literal, Variable, UnaryOp, BinaryOp]


@dataclass(frozen=True)
class Binding:
    name: str
    expr: Expression

    def __str__(self) -> str:
        return f"(let {self.name} {self.expr})"


@dataclass(frozen=True)
class Evaluation:
    expr: Expression

    def __str__(self) -> str:
        return str(self.expr)


Statement = Union[Binding, Evaluation]
