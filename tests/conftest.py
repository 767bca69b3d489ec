"""Shared test fixtures for the transcript_segments test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def write_frames(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Return a helper that writes frame records to a temporary file.

    ``.jsonl`` names receive one JSON object per line; any other name receives
    the payload serialized as a single JSON document.
    """

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        if path.suffix == ".jsonl":
            path.write_text("\n".join(json.dumps(item) for item in payload) + "\n")
        else:
            path.write_text(json.dumps(payload))
        return path

    return _write
