"""
Booster data files on disk.

Layout:
    <data_dir>/index.json             {"boosters": {set_code: [booster_type, ...]}}
    <data_dir>/boosters/{set}-{type}.json
"""

import json
from pathlib import Path
from typing import Any

from boostercheck.config import KNOWN_BOOSTER_TYPES


class DocumentLoadError(Exception):
    """Raised when a JSON file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path.name}: Invalid JSON - {reason}")


def booster_file_name(set_code: str, booster_type: str) -> str:
    """File name a booster document must use."""
    return f"{set_code}-{booster_type}.json"


def list_booster_files(boosters_dir: Path) -> list[Path]:
    """All booster JSON files, sorted by name."""
    if not boosters_dir.is_dir():
        return []
    return sorted(p for p in boosters_dir.iterdir() if p.suffix == ".json" and p.is_file())


def load_json(path: Path) -> Any:
    """
    Load a JSON file.

    Raises:
        DocumentLoadError: If the file is unreadable or not valid JSON
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(path, str(e)) from e
    except OSError as e:
        raise DocumentLoadError(path, e.strerror or str(e)) from e


def load_booster(boosters_dir: Path, set_code: str, booster_type: str) -> dict[str, Any] | None:
    """
    Load the booster document for a set and booster type.

    Returns:
        The parsed document, or None if no such file exists

    Raises:
        DocumentLoadError: If the file exists but is not valid JSON
    """
    path = boosters_dir / booster_file_name(set_code, booster_type)
    if not path.exists():
        return None
    data: dict[str, Any] = load_json(path)
    return data


def available_booster_types(boosters_dir: Path, set_code: str) -> list[str]:
    """Known booster types that have a file for this set."""
    return [
        booster_type
        for booster_type in KNOWN_BOOSTER_TYPES
        if (boosters_dir / booster_file_name(set_code, booster_type)).exists()
    ]
