"""Vault entities: properties, folders, files and notes."""

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class PropertyKind(str, Enum):
    """Kinds of front-matter property values."""

    TEXT = "text"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    LIST = "list"
    DATE = "date"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Property:
    """A single front-matter value.

    ``value`` holds a ``str``, ``float``, ``bool``, ``list[Property]`` or
    ``datetime`` depending on ``kind``; it is ``None`` for unknown values.
    """

    kind: PropertyKind
    value: Any = None

    @classmethod
    def text(cls, value: str) -> "Property":
        return cls(PropertyKind.TEXT, value)

    @classmethod
    def number(cls, value: float) -> "Property":
        return cls(PropertyKind.NUMBER, float(value))

    @classmethod
    def checkbox(cls, value: bool) -> "Property":
        return cls(PropertyKind.CHECKBOX, value)

    @classmethod
    def list_of(cls, items: list["Property"]) -> "Property":
        return cls(PropertyKind.LIST, list(items))

    @classmethod
    def date(cls, value: datetime) -> "Property":
        return cls(PropertyKind.DATE, value)

    @classmethod
    def unknown(cls) -> "Property":
        return cls(PropertyKind.UNKNOWN)

    @classmethod
    def from_yaml(cls, node: Any, _parents: frozenset[int] = frozenset()) -> "Property":
        """Convert a value produced by ``yaml.safe_load`` into a Property.

        Unrecognised node types (mappings, nulls, ...), integers too large
        for a float and lists that contain themselves through an anchor
        become ``Unknown``.
        """
        # bool is a subclass of int, so it must be checked first
        if isinstance(node, bool):
            return cls.checkbox(node)
        if isinstance(node, (int, float)):
            try:
                return cls.number(node)
            except OverflowError:
                logger.debug("Front matter number out of range for a float")
                return cls.unknown()
        if isinstance(node, str):
            return cls.text(node)
        if isinstance(node, list):
            if id(node) in _parents:
                logger.debug("Recursive front matter list")
                return cls.unknown()
            parents = _parents | {id(node)}
            return cls.list_of([cls.from_yaml(item, parents) for item in node])
        if isinstance(node, datetime):
            if node.tzinfo is None:
                node = node.replace(tzinfo=timezone.utc)
            return cls.date(node.astimezone(timezone.utc))
        if isinstance(node, date):
            return cls.date(datetime.combine(node, time(), tzinfo=timezone.utc))
        logger.debug(f"Unrecognised front matter value: {node!r}")
        return cls.unknown()

    def to_python(self) -> Any:
        """Plain value for serialisation (dates as UNIX seconds)."""
        if self.kind == PropertyKind.LIST:
            return [item.to_python() for item in self.value]
        if self.kind == PropertyKind.DATE:
            return int(self.value.timestamp())
        return self.value


@dataclass
class FolderItem:
    """A folder in the vault.

    Folders only record that they exist; use the vault tree to walk their
    children.
    """

    name: str
    path: Path
    local_path: Path

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.path),
            "local_path": str(self.local_path),
        }


@dataclass
class FileItem:
    """A non-note file. ``name`` keeps the extension."""

    name: str
    file_type: str
    path: Path
    local_path: Path

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "file_type": self.file_type,
            "path": str(self.path),
            "local_path": str(self.local_path),
        }

    def as_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass
class NoteItem:
    """A markdown note with its tags and front-matter properties."""

    name: str
    file_type: str
    path: Path
    local_path: Path
    properties: dict[str, Property] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)

    def get_contents(self) -> str:
        """Read the note from disk. Nothing is cached."""
        return self.path.read_text(encoding="utf-8")

    def properties_to_dict(self) -> dict[str, Any]:
        return {key: prop.to_python() for key, prop in self.properties.items()}

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "file_type": self.file_type,
            "path": str(self.path),
            "local_path": str(self.local_path),
            "properties": self.properties_to_dict(),
            "tags": self.tags,
        }

    def as_json(self) -> str:
        """Return the note as a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def properties_as_json(self) -> str:
        """Return only the note's properties as a JSON string."""
        return json.dumps(self.properties_to_dict(), ensure_ascii=False)


VaultItem = NoteItem | FileItem
