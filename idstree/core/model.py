from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union


UNARY_OPS: frozenset[str] = frozenset("⿾⿿〾")
BINARY_OPS: frozenset[str] = frozenset("⿰⿱⿴⿵⿶⿷⿸⿹⿺⿻⿼⿽㇯")
TERNARY_OPS: frozenset[str] = frozenset("⿲⿳")


@dataclass(frozen=True)
class Empty:
    """No decomposition: an unresolved character reference or a stroke leaf."""

    arity: ClassVar[int] = 0

    @property
    def args(self) -> list[IdsNode]:
        return []


@dataclass
class UnaryExpr:
    op: str
    args: list[IdsNode]

    arity: ClassVar[int] = 1


@dataclass
class BinExpr:
    op: str
    args: list[IdsNode]
    op_arg: Optional[str] = None  # overlay argument, e.g. ⿻[...]

    arity: ClassVar[int] = 2


@dataclass
class TerExpr:
    op: str
    args: list[IdsNode]

    arity: ClassVar[int] = 3


Expression = Union[Empty, UnaryExpr, BinExpr, TerExpr]


@dataclass
class IdsNode:
    char: Optional[str] = None
    strokes: Optional[str] = None
    hint: str = ""
    variant: str = ""
    expr: Expression = field(default_factory=Empty)

    @property
    def children(self) -> list[IdsNode]:
        return self.expr.args

    @property
    def is_unresolved(self) -> bool:
        """A character placeholder still waiting for its own description."""
        return self.char is not None and self.strokes is None and isinstance(self.expr, Empty)

    @property
    def is_resolved(self) -> bool:
        return self.strokes is not None or not isinstance(self.expr, Empty)


@dataclass
class IdsTree:
    root: IdsNode
