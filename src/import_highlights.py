"""Command line entry point for importing a Kindle notebook export into an Obsidian vault."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from kindle_notebook.config import DEFAULT_CONFIG_FILE, ImportConfig, load_config, save_config
from kindle_notebook.parsers import NotebookHtmlParser
from kindle_notebook.storage import (
    DestinationMissingError,
    NoteCreationError,
    build_note_path,
    create_note,
    list_folders,
    normalise_folder,
)

logger = logging.getLogger(__name__)

CREATED_NOTICE = "File created"
INVALID_PATH_NOTICE = "Invalid path. Please select a valid folder in the plugin settings"
CONFLICT_NOTICE = "File already exists"


def _parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("html", type=Path, nargs="?", help="Path to the exported notebook HTML file")
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to JSON configuration file (default: {DEFAULT_CONFIG_FILE})",
        default=None,
    )
    parser.add_argument("--vault", type=Path, help="Path to the root of the Obsidian vault", default=None)
    parser.add_argument("--folder", help="Vault folder to save the note into ('/' for the root)", default=None)
    parser.add_argument("--stdout", action="store_true", help="Print the note instead of writing it")
    parser.add_argument(
        "--list-folders", action="store_true", help="List the vault folders a note can be saved into"
    )
    parser.add_argument("--save", action="store_true", help="Remember the vault and folder for later runs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _combine_config(args: argparse.Namespace) -> ImportConfig:
    config_path = args.config or DEFAULT_CONFIG_FILE
    try:
        file_config = load_config(config_path, required=args.config is not None)
    except FileNotFoundError as exc:  # pragma: no cover - user error
        raise SystemExit(f"Configuration file not found: {args.config}") from exc
    except (OSError, ValueError) as exc:  # pragma: no cover - user error
        raise SystemExit(f"Failed to read configuration file: {exc}") from exc
    config = ImportConfig.from_mapping(file_config)

    if args.vault is not None:
        config.vault_root = args.vault
    if args.folder is not None:
        config.folder = args.folder
    return config


def _save_settings(config: ImportConfig, path: Path) -> int:
    config.folder = normalise_folder(config.folder)
    folders = list_folders(config.vault_root)
    if config.folder not in folders:
        print(f"Folder {config.folder!r} is not a folder of {config.vault_root}; settings not saved.")
        return 1
    save_config(config, path)
    print(f"Settings saved to {path}.")
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    config = _combine_config(args)

    if args.list_folders:
        for folder in list_folders(config.vault_root):
            print(folder)
        return 0

    if args.save:
        status = _save_settings(config, args.config or DEFAULT_CONFIG_FILE)
        if status or args.html is None:
            return status

    if args.html is None:
        print("No notebook export given.")
        return 1

    html_path = args.html.expanduser()
    if not html_path.is_file():
        print(f"Error: {html_path} not found.")
        return 1

    result = NotebookHtmlParser().parse(html_path)
    document = result.render()
    logger.debug("Parsed %d highlight(s) for %r by %r", result.highlight_count, result.title, result.author)

    if args.stdout:
        sys.stdout.write(document)
        return 0

    note_path = build_note_path(config.vault_root, config.folder, result.title)
    try:
        create_note(note_path, document)
    except DestinationMissingError:
        print(INVALID_PATH_NOTICE)
        return 1
    except NoteCreationError as exc:
        # Any other failure is reported the way a conflict is.
        logger.debug("Note creation failed: %s", exc)
        print(CONFLICT_NOTICE)
        return 1

    print(CREATED_NOTICE)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
