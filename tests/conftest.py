import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


def _make_booster(
    set_code: str = "dsk",
    booster_type: str = "play",
    slots: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a well-formed booster document."""
    document: dict[str, Any] = {
        "set": set_code,
        "setName": extra.pop("setName", "Duskmourn: House of Horror"),
        "boosterType": booster_type,
        "source": extra.pop("source", "https://example.com/collecting-dsk"),
        "slots": slots
        if slots is not None
        else [{"name": "common", "count": 7, "pool": {"nonfoil": ["1-100"]}}],
    }
    document.update(extra)
    return document


@pytest.fixture
def make_booster() -> Callable[..., dict[str, Any]]:
    """Factory for well-formed booster documents."""
    return _make_booster


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty booster data directory with a boosters/ folder."""
    (tmp_path / "boosters").mkdir()
    return tmp_path


@pytest.fixture
def write_booster(data_dir: Path) -> Callable[..., Path]:
    """Write a booster document to boosters/, named after its set and type."""

    def _write(document: Any, file_name: str | None = None) -> Path:
        if file_name is None:
            file_name = f"{document['set']}-{document['boosterType']}.json"
        path = data_dir / "boosters" / file_name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_index(data_dir: Path) -> Callable[[dict[str, list[str]]], Path]:
    """Write index.json with the given set -> booster types mapping."""

    def _write(boosters: dict[str, list[str]]) -> Path:
        path = data_dir / "index.json"
        path.write_text(json.dumps({"boosters": boosters}), encoding="utf-8")
        return path

    return _write
