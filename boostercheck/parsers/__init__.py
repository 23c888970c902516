"""Readers for the booster data files."""

from boostercheck.parsers.booster_files import (
    DocumentLoadError,
    available_booster_types,
    booster_file_name,
    list_booster_files,
    load_booster,
    load_json,
)

__all__ = [
    "DocumentLoadError",
    "available_booster_types",
    "booster_file_name",
    "list_booster_files",
    "load_booster",
    "load_json",
]
