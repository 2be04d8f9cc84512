from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from agentcraft.assignment_store import AssignmentStore


@pytest.fixture
def assignments_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".agentcraft" / "assignments.json"


@pytest.fixture
def store(assignments_path: Path) -> AssignmentStore:
    return AssignmentStore(assignments_path)


@pytest.fixture
def write_doc(assignments_path: Path):
    def _write(data) -> Path:
        assignments_path.parent.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data)
        assignments_path.write_text(text, encoding="utf-8")
        return assignments_path

    return _write


@pytest.fixture
def packs_root(tmp_path: Path) -> Path:
    root = tmp_path / "packs"
    files = [
        "rohenaz/agentcraft-sounds/sc2/terran/scv-ready.mp3",
        "rohenaz/agentcraft-sounds/sc2/terran/scv-yes.mp3",
        "rohenaz/agentcraft-sounds/ui/sc2/click.mp3",
        "rohenaz/agentcraft-sounds/ui/wc3/hover.mp3",
        "acme/retro/beeps/done.wav",
        "acme/retro/notes.txt",
    ]
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
    (root / "acme" / "retro" / "pack.json").write_text(
        json.dumps({"description": "Retro beeps", "version": "1.2.0"})
    )
    return root


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


class RecordingPlayer:
    def __init__(self):
        self.calls: list[tuple[Path, float]] = []

    def __call__(self, path, volume):
        self.calls.append((Path(path), volume))
        return True


@pytest.fixture
def player() -> RecordingPlayer:
    return RecordingPlayer()
