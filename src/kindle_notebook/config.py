"""Configuration helpers for the notebook importer."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

CONFIG_DIR = Path.home() / ".obsidian_kindle_highlights"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "config.json"


@dataclass
class ImportConfig:
    """Holds the vault location and the folder new notes are saved into."""

    vault_root: Path = Path(".")
    folder: str = "/"

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ImportConfig":
        kwargs: Dict[str, Any] = {}
        if "vault_root" in data and data["vault_root"]:
            kwargs["vault_root"] = Path(data["vault_root"])
        if "path" in data and data["path"]:
            kwargs["folder"] = str(data["path"])
        return cls(**kwargs)

    def to_mapping(self) -> Dict[str, Any]:
        return {"vault_root": str(self.vault_root), "path": self.folder}


def load_config(path: Optional[Path], *, required: bool = True) -> Dict[str, Any]:
    """Load a JSON configuration file if provided.

    With ``required=False`` a missing file is treated as an empty configuration.
    """

    if path is None:
        return {}
    resolved = path.expanduser().resolve()
    if not required and not resolved.exists():
        return {}
    with resolved.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def save_config(config: ImportConfig, path: Path) -> None:
    resolved = path.expanduser()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    with resolved.open("w", encoding="utf-8") as handle:
        json.dump(config.to_mapping(), handle, indent=2)
