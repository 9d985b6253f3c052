"""Tag query DSL - ``LIST FROM #tag AND (#other OR #more)``."""

import logging
from typing import TYPE_CHECKING

from dweller.errors import QueryError

from .ast import And, DataSource, Expr, From, ListDecl, Negate, Or, Source, SourceKind, TableDecl
from .evaluator import Evaluator, OutputShape, QueryState, eval_and, eval_or, evaluate
from .output import (
    ErrorOutput,
    ListItem,
    ListOutput,
    QueryOutput,
    TableOutput,
    build_output,
    output_as_json,
)
from .parser import Diagnostic, Parser, parse, tokenize

if TYPE_CHECKING:
    from dweller.indexer.vault import VaultIndex

logger = logging.getLogger(__name__)

__all__ = [
    "And",
    "DataSource",
    "Diagnostic",
    "ErrorOutput",
    "Evaluator",
    "Expr",
    "From",
    "ListDecl",
    "ListItem",
    "ListOutput",
    "Negate",
    "Or",
    "OutputShape",
    "Parser",
    "QueryOutput",
    "QueryState",
    "Source",
    "SourceKind",
    "TableDecl",
    "TableOutput",
    "build_output",
    "eval_and",
    "eval_or",
    "evaluate",
    "output_as_json",
    "parse",
    "run_query",
    "tokenize",
]


def run_query(text: str, index: "VaultIndex") -> QueryOutput:
    """Parse, evaluate and shape a query.

    Parse and evaluation failures come back as an ``ErrorOutput``.
    """
    try:
        ast = parse(text)
        state = evaluate(ast, index)
    except QueryError as e:
        logger.debug(f"Query failed: {text!r}: {e}")
        return ErrorOutput(messages=e.messages)
    return build_output(state)
