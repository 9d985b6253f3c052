"""Vault Dweller - index Obsidian-style vaults and query them by tag."""

from .indexer import FileItem, FolderItem, NoteItem, Property, VaultIndex
from .query import ErrorOutput, ListOutput, QueryOutput, TableOutput, run_query

__version__ = "0.1.0"

__all__ = [
    "ErrorOutput",
    "FileItem",
    "FolderItem",
    "ListOutput",
    "NoteItem",
    "Property",
    "QueryOutput",
    "TableOutput",
    "VaultIndex",
    "run_query",
]
