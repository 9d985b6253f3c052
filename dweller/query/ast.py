"""Query AST nodes."""

from dataclasses import dataclass
from enum import Enum


class SourceKind(str, Enum):
    """Where a query's matches come from. Only tags can be evaluated."""

    TAG = "tag"
    FOLDER = "folder"
    FILE = "file"
    IN_LINK = "in_link"
    OUT_LINK = "out_link"


@dataclass(frozen=True)
class DataSource:
    kind: SourceKind
    value: str


@dataclass(frozen=True)
class Expr:
    """Base class for AST nodes."""


@dataclass(frozen=True)
class Source(Expr):
    source: DataSource

    @classmethod
    def tag(cls, name: str) -> "Source":
        return cls(DataSource(SourceKind.TAG, name))


@dataclass(frozen=True)
class And(Expr):
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Or(Expr):
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Negate(Expr):
    operand: Expr


@dataclass(frozen=True)
class From(Expr):
    expr: Expr


@dataclass(frozen=True)
class ListDecl(Expr):
    """``LIST FROM ...`` - results are shown as a list of note names."""

    source: From


@dataclass(frozen=True)
class TableDecl(Expr):
    """Table-shaped results. Not reachable from the grammar yet."""

    source: From
