"""Exception types and error records used across the indexer and query engine."""

from dataclasses import dataclass
from pathlib import Path


class DwellerError(Exception):
    """Base class for all vault-dweller errors."""


class VaultNotFoundError(DwellerError, FileNotFoundError):
    """The vault path does not exist or is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Vault path could not be found, could not be accessed, or is not a directory: {path}"
        )
        self.path = path


class NoteNotFoundError(DwellerError, FileNotFoundError):
    """No note matches the requested name or local path."""

    def __init__(self, name_or_path: str) -> None:
        super().__init__(f"Couldn't match note name or local path: {name_or_path}")
        self.name_or_path = name_or_path


class FrontMatterError(DwellerError):
    """A note's front matter block is not valid YAML."""


@dataclass
class IndexingError:
    """A single entry that could not be indexed."""

    path: Path
    message: str

    def to_dict(self) -> dict:
        return {"path": str(self.path), "message": self.message}

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class IndexingFailedError(DwellerError):
    """Raised in strict mode when any entry fails to index."""

    def __init__(self, error: IndexingError) -> None:
        super().__init__(str(error))
        self.error = error


class QueryError(DwellerError):
    """Base class for query failures that are reported back as results."""

    @property
    def messages(self) -> list[str]:
        return [str(self)]


class QueryParseError(QueryError):
    """The query text is not valid DSL.

    Carries every diagnostic found; no AST is produced.
    """

    def __init__(self, diagnostics: list) -> None:
        self.diagnostics = diagnostics
        super().__init__("; ".join(str(d) for d in diagnostics))

    @property
    def messages(self) -> list[str]:
        return [f"Parse error: {d}" for d in self.diagnostics]


class QueryEvaluationError(QueryError):
    """The AST could not be evaluated against the index."""

    @property
    def messages(self) -> list[str]:
        return [f"Evaluation error: {self}"]


class UnsupportedQueryError(QueryEvaluationError):
    """The query uses a construct that has no evaluation semantics yet."""
