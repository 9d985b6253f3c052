"""CLI interface for Vault Dweller - index a vault and query it from the terminal."""

import argparse
import json
import logging
import sys

from dweller.config import get_settings
from dweller.errors import DwellerError
from dweller.indexer import VaultIndex
from dweller.query import ErrorOutput

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for CLI."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level, logging.INFO),
    )
    # front matter parsing is noisy at debug level
    logging.getLogger("yaml").setLevel(logging.WARNING)


def print_stats(index: VaultIndex) -> None:
    print(f"Vault: {index.name} ({index.path})")
    print(f"  {len(index.notes)} notes, {len(index.files)} files, {len(index.folders)} folders")
    print(f"  {len(index.tags)} tags, {len(index.properties)} property keys")
    for error in index.errors:
        print(f"  ! {error}")


def run(args: argparse.Namespace) -> int:
    """Execute the requested action. Returns the exit status."""
    overrides = {}
    if args.vault:
        overrides["vault_path"] = args.vault
    if args.include_config:
        overrides["include_config_folder"] = True
    if args.strict:
        overrides["strict"] = True

    try:
        settings = get_settings(**overrides)
    except ValueError as e:
        logger.error(f"Failed to load settings: {e}")
        return 1

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    if settings.vault_path is None:
        logger.error("No vault given. Pass --vault or set DWELLER_VAULT_PATH.")
        return 1

    try:
        index = VaultIndex.from_settings(settings)
    except DwellerError as e:
        logger.error(f"Failed to index vault: {e}")
        return 1

    if args.query:
        output = index.query(args.query)
        if isinstance(output, ErrorOutput):
            for message in output.messages:
                print(message, file=sys.stderr)
            return 1
        print(json.dumps(output.to_dict(), ensure_ascii=False, indent=2))
        return 0

    if args.note:
        note = index.get_note(args.note)
        if note is None:
            logger.error(f"Note not found: {args.note}")
            return 1
        if args.contents:
            print(note.get_contents())
        else:
            print(json.dumps(note.to_dict(), ensure_ascii=False, indent=2))
        return 0

    if args.tree:
        print(index.tree.render())
        return 0

    print_stats(index)
    return 0


def cli() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="dweller",
        description="Index an Obsidian vault and query notes by tag.",
    )
    parser.add_argument(
        "--vault",
        type=str,
        help="Path to the vault (defaults to DWELLER_VAULT_PATH)",
    )
    parser.add_argument(
        "--include-config",
        action="store_true",
        help="Also index the vault's .obsidian config folder",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first file or folder that can't be read",
    )
    parser.add_argument(
        "-q",
        "--query",
        type=str,
        help="Run a query, e.g. 'LIST FROM #project AND #active'",
    )
    parser.add_argument(
        "-n",
        "--note",
        type=str,
        help="Show a note by name or local path",
    )
    parser.add_argument(
        "--contents",
        action="store_true",
        help="With --note, print the note's contents instead of its metadata",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the vault's folder tree",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sys.exit(run(parser.parse_args()))


if __name__ == "__main__":
    cli()
