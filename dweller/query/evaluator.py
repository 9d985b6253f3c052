"""Evaluate a query AST against a vault index's tag map."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from dweller.errors import QueryEvaluationError, UnsupportedQueryError

from .ast import And, DataSource, Expr, From, ListDecl, Negate, Or, Source, SourceKind, TableDecl

if TYPE_CHECKING:
    from dweller.indexer.vault import VaultIndex

logger = logging.getLogger(__name__)

# None means "no matches"
Matches = list[str] | None


class OutputShape(str, Enum):
    LIST = "list"
    TABLE = "table"


@dataclass
class QueryState:
    """What evaluation has resolved so far."""

    shape: OutputShape | None = None
    matches: Matches = None
    sources: list[DataSource] = field(default_factory=list)


def eval_or(x: Matches, y: Matches) -> Matches:
    """Union of two match lists, sorted and deduplicated.

    A missing side is ignored; an empty union is None.
    """
    combined = set(x or []) | set(y or [])
    return sorted(combined) or None


def eval_and(x: Matches, y: Matches) -> Matches:
    """Intersection keeping the left side's order. None if either side is None."""
    if x is None or y is None:
        return None
    right = set(y)
    out = [item for item in x if item in right]
    return out or None


class Evaluator:
    """Walks an AST, resolving tag sources against the index."""

    def __init__(self, index: "VaultIndex") -> None:
        self.index = index
        self.state = QueryState()

    def run(self, expr: Expr) -> QueryState:
        self.state = QueryState()
        self.evaluate(expr)
        return self.state

    def evaluate(self, expr: Expr) -> Matches:
        if isinstance(expr, ListDecl):
            self.state.shape = OutputShape.LIST
            return self.evaluate(expr.source)
        if isinstance(expr, TableDecl):
            self.state.shape = OutputShape.TABLE
            return self.evaluate(expr.source)
        if isinstance(expr, From):
            matches = self.evaluate(expr.expr)
            self.state.matches = matches
            return matches
        if isinstance(expr, Source):
            return self.get_matches(expr.source)
        if isinstance(expr, Or):
            return eval_or(self.evaluate(expr.left), self.evaluate(expr.right))
        if isinstance(expr, And):
            return eval_and(self.evaluate(expr.left), self.evaluate(expr.right))
        if isinstance(expr, Negate):
            raise UnsupportedQueryError("Negation isn't implemented yet")
        raise QueryEvaluationError(f"Can't evaluate {type(expr).__name__} node")

    def get_matches(self, source: DataSource) -> Matches:
        self.state.sources.append(source)
        if source.kind != SourceKind.TAG:
            raise UnsupportedQueryError(f"{source.kind.value} sources aren't implemented yet")

        matches = self.index.tags.get(source.value)
        logger.debug(f"#{source.value}: {len(matches) if matches else 0} matches")
        return list(matches) if matches is not None else None


def evaluate(expr: Expr, index: "VaultIndex") -> QueryState:
    """Evaluate ``expr`` and return the resolved state."""
    return Evaluator(index).run(expr)
