"""Expression trees and definition entries read from unit definition files."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from unitlore.numeric import Numeric


class BinOp(enum.Enum):
    """Binary operators that appear in definition expressions."""

    ADD = "add"
    SUB = "sub"
    FRAC = "frac"
    POW = "pow"


class UnaryOp(enum.Enum):
    """Unary sign operators."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class UnitExpr:
    """A reference to a unit, prefix or quantity by name."""

    name: str


@dataclass(frozen=True)
class ConstExpr:
    """A literal number."""

    value: Numeric


@dataclass(frozen=True)
class OfExpr:
    """A property of a substance, as in ``density of water``."""

    property: str
    expr: Expr


@dataclass(frozen=True)
class MulExpr:
    """Juxtaposed or ``*``-joined factors."""

    exprs: tuple[Expr, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "exprs", tuple(self.exprs))


@dataclass(frozen=True)
class BinOpExpr:
    """A binary operation."""

    op: BinOp
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnaryOpExpr:
    """A unary sign applied to an expression."""

    op: UnaryOp
    expr: Expr


@dataclass(frozen=True)
class ErrorExpr:
    """A parse failure kept in place of the expression."""

    message: str


Expr = Union[UnitExpr, ConstExpr, OfExpr, MulExpr, BinOpExpr, UnaryOpExpr, ErrorExpr]


@dataclass(frozen=True)
class Property:
    """A substance property: ``output`` of ``output_name`` per ``input`` of ``input_name``."""

    name: str
    input: Expr
    input_name: str
    output: Expr
    output_name: str
    doc: str | None = None


@dataclass(frozen=True)
class PrefixDef:
    """A prefix usable only in front of a unit."""

    expr: Expr


@dataclass(frozen=True)
class SPrefixDef:
    """A prefix that is also a unit on its own."""

    expr: Expr


@dataclass(frozen=True)
class UnitDef:
    """A unit derived from an expression."""

    expr: Expr


@dataclass(frozen=True)
class QuantityDef:
    """A named physical quantity."""

    expr: Expr


@dataclass(frozen=True)
class DimensionDef:
    """A base dimension."""


@dataclass(frozen=True)
class CanonicalizationDef:
    """A long name standing for a base dimension."""

    of: str


@dataclass(frozen=True)
class SubstanceDef:
    """A substance with its properties and optional chemical symbol."""

    properties: tuple[Property, ...] = field(default_factory=tuple)
    symbol: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", tuple(self.properties))


@dataclass(frozen=True)
class CategoryDef:
    """A category of units with its display name."""

    display_name: str


Definition = Union[
    PrefixDef,
    SPrefixDef,
    UnitDef,
    QuantityDef,
    DimensionDef,
    CanonicalizationDef,
    SubstanceDef,
    CategoryDef,
]


@dataclass(frozen=True)
class DefEntry:
    """One named definition with its documentation and category."""

    name: str
    definition: Definition
    doc: str | None = None
    category: str | None = None