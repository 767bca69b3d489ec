"""Frame I/O helpers.

Loads word frames from disk for the CLI and other batch callers. Two layouts
are understood:

- ``.jsonl``: one ``WordFrame`` JSON object per non-blank line, already in
  timeline order;
- ``.json``: either a list of frame objects, or an object with
  ``final_words`` and ``partial_words`` lists that are interleaved into one
  timeline-ordered stream (``is_final`` defaults to true / false respectively).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from transcript_segments.segmentation.models import WordFrame
from transcript_segments.segmentation.ordering import interleave_frames
from transcript_segments.utils.constant import SUPPORTED_FRAME_EXTENSIONS
from transcript_segments.utils.logging_config import get_logger

logger = get_logger(__name__)

__all__ = ["FrameLoadError", "load_frames", "parse_frame_records"]


class FrameLoadError(ValueError):
    """Raised when a frame file cannot be parsed into word frames."""


def _validate_record(record: Any, location: str, *, default_final: bool | None = None) -> WordFrame:
    if not isinstance(record, dict):
        raise FrameLoadError(f"{location}: expected a JSON object, got {type(record).__name__}")
    if default_final is not None:
        record = {**record}
        record.setdefault("is_final", default_final)
    try:
        return WordFrame.model_validate(record)
    except ValidationError as exc:
        raise FrameLoadError(f"{location}: invalid frame: {exc}") from exc


def parse_frame_records(payload: Any) -> list[WordFrame]:
    """Convert a decoded ``.json`` payload into frames.

    Args:
        payload: Either a list of frame objects or a mapping with
            ``final_words`` / ``partial_words`` lists.

    Returns:
        list[WordFrame]: Frames in timeline order for the split layout, or in
        file order for the list layout.

    Raises:
        FrameLoadError: If the payload shape or any record is invalid.
    """
    if isinstance(payload, list):
        return [_validate_record(item, f"item {i}") for i, item in enumerate(payload)]

    if isinstance(payload, dict) and ("final_words" in payload or "partial_words" in payload):
        finals_raw = payload.get("final_words") or []
        partials_raw = payload.get("partial_words") or []
        if not isinstance(finals_raw, list) or not isinstance(partials_raw, list):
            raise FrameLoadError("final_words and partial_words must be lists")
        finals = [
            _validate_record(item, f"final_words[{i}]", default_final=True)
            for i, item in enumerate(finals_raw)
        ]
        partials = [
            _validate_record(item, f"partial_words[{i}]", default_final=False)
            for i, item in enumerate(partials_raw)
        ]
        return interleave_frames(finals, partials)

    raise FrameLoadError(
        "Expected a list of frames or an object with 'final_words'/'partial_words'"
    )


def load_frames(path: Path | str) -> list[WordFrame]:
    """Load word frames from a ``.json`` or ``.jsonl`` file.

    Args:
        path: Frame file to read.

    Returns:
        list[WordFrame]: Parsed frames.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        FrameLoadError: If the extension is unsupported or the content is
            malformed.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_FRAME_EXTENSIONS:
        supported = sorted(SUPPORTED_FRAME_EXTENSIONS)
        raise FrameLoadError(f"Unsupported frame file '{path.name}'. Supported: {supported}")

    text = path.read_text(encoding="utf-8")

    if suffix == ".jsonl":
        frames: list[WordFrame] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                raise FrameLoadError(f"line {lineno}: invalid JSON: {exc.msg}") from exc
            frames.append(_validate_record(record, f"line {lineno}"))
    else:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FrameLoadError(f"{path.name}: invalid JSON: {exc.msg}") from exc
        frames = parse_frame_records(payload)

    logger.debug("Loaded %d frame(s) from %s", len(frames), path)
    return frames
