"""Recursive vault walker - classifies entries and builds the tree."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from dweller.errors import FrontMatterError, IndexingError, IndexingFailedError

from .extractor import NoteMetadata, extract_metadata, extract_tags
from .models import FileItem, FolderItem, NoteItem
from .tree import ItemKind, VaultTree

logger = logging.getLogger(__name__)

CONFIG_FOLDER = ".obsidian"
NOTE_EXTENSION = "md"


@dataclass
class WalkResult:
    """Everything found under a vault root, in traversal order."""

    items: list[FolderItem | FileItem | NoteItem] = field(default_factory=list)
    tree: VaultTree = field(default_factory=VaultTree)
    errors: list[IndexingError] = field(default_factory=list)


class VaultWalker:
    """Walks a vault directory and extracts metadata from every note."""

    def __init__(
        self,
        vault_path: Path,
        include_config_folder: bool = False,
        config_folder: str = CONFIG_FOLDER,
        note_extension: str = NOTE_EXTENSION,
        strict: bool = False,
    ) -> None:
        self.vault_path = vault_path
        self.include_config_folder = include_config_folder
        self.config_folder = config_folder
        self.note_extension = note_extension.lstrip(".")
        self.strict = strict

    def walk(self) -> WalkResult:
        """Walk the whole vault depth-first."""
        result = WalkResult(tree=VaultTree(self.vault_path.name))
        self._walk_dir(self.vault_path, VaultTree.ROOT, result)
        return result

    def _walk_dir(self, dir_path: Path, parent: int, result: WalkResult) -> None:
        try:
            children = list(dir_path.iterdir())
        except OSError as e:
            self._record(result, dir_path, f"Failed to read directory: {e}")
            return

        for child in children:
            if child.is_dir():
                if child.name == self.config_folder and not self.include_config_folder:
                    logger.debug(f"Skipping config folder {child}")
                    continue

                result.items.append(self._folder_item(child))
                index = result.tree.add(child.name, ItemKind.FOLDER, parent)
                if child.is_symlink():
                    # Listed, but never followed
                    logger.info(f"Not descending into symlinked folder {child}")
                    continue
                self._walk_dir(child, index, result)
            elif child.suffix == f".{self.note_extension}":
                note = self._note_item(child, result)
                if note is not None:
                    result.items.append(note)
                    result.tree.add(note.name, ItemKind.NOTE, parent)
            else:
                item = self._file_item(child)
                result.items.append(item)
                result.tree.add(item.name, ItemKind.FILE, parent)

    def _folder_item(self, path: Path) -> FolderItem:
        return FolderItem(
            name=path.name,
            path=path,
            local_path=path.relative_to(self.vault_path),
        )

    def _file_item(self, path: Path) -> FileItem:
        return FileItem(
            name=path.name,
            file_type=path.suffix.lstrip("."),
            path=path,
            local_path=path.relative_to(self.vault_path),
        )

    def _note_item(self, path: Path, result: WalkResult) -> NoteItem | None:
        """Read a note and extract its metadata. Returns None if unreadable."""
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._record(result, path, f"Failed to read note: {e}")
            return None

        try:
            metadata = extract_metadata(content)
        except FrontMatterError as e:
            # The note is still indexed, just without properties
            self._record(result, path, str(e))
            metadata = NoteMetadata(tags=extract_tags(content))

        return NoteItem(
            name=path.stem,
            file_type=self.note_extension,
            path=path,
            local_path=path.relative_to(self.vault_path).with_suffix(""),
            properties=metadata.properties,
            tags=metadata.tags,
        )

    def _record(self, result: WalkResult, path: Path, message: str) -> None:
        error = IndexingError(path=path, message=message)
        if self.strict:
            raise IndexingFailedError(error)
        logger.warning(f"Failed to index {path}: {message}")
        result.errors.append(error)
