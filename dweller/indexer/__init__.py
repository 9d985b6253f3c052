"""Vault indexing - walks a vault and builds an in-memory index."""

from .extractor import NoteMetadata, expand_tag, extract_metadata, extract_tags, strip_code
from .models import FileItem, FolderItem, NoteItem, Property, PropertyKind, VaultItem
from .tree import ItemKind, TreeNode, VaultTree
from .vault import VaultIndex
from .walker import VaultWalker, WalkResult

__all__ = [
    "FileItem",
    "FolderItem",
    "ItemKind",
    "NoteItem",
    "NoteMetadata",
    "Property",
    "PropertyKind",
    "TreeNode",
    "VaultIndex",
    "VaultItem",
    "VaultTree",
    "VaultWalker",
    "WalkResult",
    "expand_tag",
    "extract_metadata",
    "extract_tags",
    "strip_code",
]
