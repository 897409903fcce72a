"""Helpers for persisting extracted notebooks as Markdown notes in a vault."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

ROOT_FOLDER = "/"


class NoteCreationError(RuntimeError):
    """Raised when a note cannot be created in the vault."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class DestinationMissingError(NoteCreationError):
    """Raised when the configured folder does not exist."""


class DestinationConflictError(NoteCreationError):
    """Raised when a file already exists at the note path."""


def list_folders(vault_root: Path) -> List[str]:
    """Return the vault-relative folders a note can be saved into.

    The vault root is reported as ``/`` and always comes first. Hidden
    folders (such as ``.obsidian``) and their contents are skipped.
    """

    root = vault_root.expanduser()
    if not root.is_dir():
        return []
    folders: List[str] = []
    for candidate in root.rglob("*"):
        if not candidate.is_dir():
            continue
        relative = candidate.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        folders.append(relative.as_posix())
    return [ROOT_FOLDER] + sorted(folders)


def normalise_folder(folder: str) -> str:
    """Return ``folder`` in the form ``list_folders`` reports it."""

    return folder.strip().strip("/") or ROOT_FOLDER


def build_note_path(vault_root: Path, folder: str, title: str) -> Path:
    folder = normalise_folder(folder)
    filename = f"{title or 'untitled'}.md"
    if folder == ROOT_FOLDER:
        return vault_root / filename
    return vault_root / folder / filename


def create_note(path: Path, content: str) -> Path:
    """Create a new note at ``path``; an existing file is never overwritten."""

    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(content)
    except FileExistsError as exc:
        raise DestinationConflictError(path, f"File already exists: {path}") from exc
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise DestinationMissingError(path, f"Folder does not exist: {path.parent}") from exc
    except (OSError, ValueError) as exc:
        raise NoteCreationError(path, f"Cannot create {path}: {exc}") from exc
    logger.info("Created %s", path)
    return path
