from __future__ import annotations

import json
from pathlib import Path

import pytest

from lexicon_db.lexicon.registry import LexiconRegistry

WORD_LISTS = {
    "TWL06.txt": "AT to be in a place\nCAT a feline\nQUIZ to question\n",
    "NWL.txt": "AT to be in a place\nCAT a feline\nZAX a tool for cutting slate\n",
    "CSW19.txt": "AT\nCAT\nQUIZ\n",
}


def write_word_list(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    data_dir = tmp_path / "lexica"
    data_dir.mkdir()
    for name, text in WORD_LISTS.items():
        write_word_list(data_dir / name, text)
    write_word_list(data_dir / "NWL-difficulty.txt", "AXZ 87\nACT 12\n")

    payload = {
        "data_dir": "lexica",
        "lexica": [
            {"name": "TWL06", "family": "twl", "order": 1, "filename": "TWL06.txt"},
            {
                "name": "NWL",
                "family": "TWL",
                "order": 2,
                "filename": "NWL.txt",
                "difficulties": "NWL-difficulty.txt",
            },
            {"name": "CSW19", "family": "CSW", "order": 1, "filename": "CSW19.txt"},
        ],
    }
    path = tmp_path / "lexica.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def registry(registry_path: Path) -> LexiconRegistry:
    return LexiconRegistry.load(registry_path)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "out"
    out.mkdir()
    return out
