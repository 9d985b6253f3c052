"""In-memory vault index: name and path lookup, tag map and tree."""

import logging
import os
from dataclasses import dataclass, field
from itertools import groupby
from pathlib import Path
from typing import TYPE_CHECKING

from dweller.errors import IndexingError, NoteNotFoundError, VaultNotFoundError

from .models import FileItem, FolderItem, NoteItem, VaultItem
from .tree import VaultTree
from .walker import CONFIG_FOLDER, NOTE_EXTENSION, VaultWalker

if TYPE_CHECKING:
    from dweller.config import DwellerSettings
    from dweller.query.output import QueryOutput

logger = logging.getLogger(__name__)


@dataclass
class VaultIndex:
    """Everything in a vault, built in a single pass and read-only afterwards.

    Notes and files are keyed by display name; ``filepath_ref`` maps local
    paths (using the platform separator) back to those names. ``tags`` maps
    every tag, including hierarchical prefixes, to the names of the notes
    carrying it.
    """

    name: str = ""
    path: Path | None = None
    notes: dict[str, NoteItem] = field(default_factory=dict)
    files: dict[str, FileItem] = field(default_factory=dict)
    folders: list[FolderItem] = field(default_factory=list)
    filepath_ref: dict[str, str] = field(default_factory=dict)
    tags: dict[str, list[str]] = field(default_factory=dict)
    properties: list[str] = field(default_factory=list)
    tree: VaultTree = field(default_factory=VaultTree)
    errors: list[IndexingError] = field(default_factory=list)
    note_extension: str = NOTE_EXTENSION

    @classmethod
    def build(
        cls,
        path: str | Path | None = None,
        include_config_folder: bool = False,
        config_folder: str = CONFIG_FOLDER,
        note_extension: str = NOTE_EXTENSION,
        strict: bool = False,
    ) -> "VaultIndex":
        """Index the vault at ``path``.

        ``None`` gives an empty index. Entries that can't be read are
        skipped and collected in ``errors`` unless ``strict`` is set, in
        which case the first one raises ``IndexingFailedError``.

        Raises:
            VaultNotFoundError: if ``path`` is missing or not a directory.
        """
        if path is None:
            return cls()

        vault_path = Path(path)
        if not vault_path.is_dir():
            raise VaultNotFoundError(vault_path)

        logger.info(f"Indexing vault: {vault_path}")
        walker = VaultWalker(
            vault_path,
            include_config_folder=include_config_folder,
            config_folder=config_folder,
            note_extension=note_extension,
            strict=strict,
        )
        result = walker.walk()

        index = cls(
            name=vault_path.name,
            path=vault_path,
            tree=result.tree,
            errors=result.errors,
            note_extension=walker.note_extension,
        )
        for item in result.items:
            index._add(item)
        # Only adjacent duplicates are collapsed
        index.properties = [key for key, _ in groupby(index.properties)]

        logger.info(
            f"Indexed {len(index.notes)} notes, {len(index.files)} files, "
            f"{len(index.folders)} folders, {len(index.tags)} tags"
        )
        if index.errors:
            logger.warning(f"{len(index.errors)} entries could not be indexed")
        return index

    @classmethod
    def from_settings(cls, settings: "DwellerSettings") -> "VaultIndex":
        """Build an index using the configured vault and options."""
        return cls.build(
            settings.vault_path,
            include_config_folder=settings.include_config_folder,
            config_folder=settings.config_folder,
            note_extension=settings.note_extension,
            strict=settings.strict,
        )

    def _add(self, item: FolderItem | FileItem | NoteItem) -> None:
        if isinstance(item, NoteItem):
            self.filepath_ref[str(item.local_path)] = item.name
            for tag in item.tags:
                self.tags.setdefault(tag, []).append(item.name)
            self.properties.extend(item.properties)
            self.notes[item.name] = item
        elif isinstance(item, FileItem):
            self.filepath_ref[str(item.local_path)] = item.name
            self.files[item.name] = item
        else:
            self.folders.append(item)

    def _resolve_name(self, name_or_path: str) -> str | None:
        """Turn a display name or local path into a canonical name."""
        normalized = name_or_path.replace("/", os.sep).replace("\\", os.sep)
        if os.sep not in normalized:
            return name_or_path

        name = self.filepath_ref.get(normalized)
        if name is None:
            # Allow "Folder/Note.md" as well as "Folder/Note"
            suffix = f".{self.note_extension}"
            if normalized.endswith(suffix):
                name = self.filepath_ref.get(normalized[: -len(suffix)])
        return name

    def get_item(self, name_or_path: str) -> VaultItem | None:
        """Look up a note or file by display name or local path.

        Notes take priority over files sharing the same name.
        """
        name = self._resolve_name(name_or_path)
        if name is None:
            return None
        if name in self.notes:
            return self.notes[name]
        return self.files.get(name)

    def get_note(self, name_or_path: str) -> NoteItem | None:
        """Look up a note by display name or local path."""
        item = self.get_item(name_or_path)
        return item if isinstance(item, NoteItem) else None

    def get_note_contents(self, name_or_path: str) -> str:
        """Read a note's contents from disk.

        Raises:
            NoteNotFoundError: if no note matches.
            OSError: if the note can't be read.
        """
        note = self.get_note(name_or_path)
        if note is None:
            raise NoteNotFoundError(name_or_path)
        return note.get_contents()

    @property
    def tag_names(self) -> list[str]:
        return sorted(self.tags)

    def query(self, text: str) -> "QueryOutput":
        """Run a DSL query such as ``LIST FROM #project AND #active``."""
        from dweller.query import run_query

        return run_query(text, self)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.path) if self.path else None,
            "notes": [n.to_dict() for n in self.notes.values()],
            "files": [f.to_dict() for f in self.files.values()],
            "folders": [f.to_dict() for f in self.folders],
            "tags": self.tags,
            "properties": self.properties,
            "tree": [node.to_dict() for node in self.tree],
            "errors": [e.to_dict() for e in self.errors],
        }
