"""Unit tests for segmentation data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from transcript_segments.segmentation.models import (
    ProtoSegment,
    SegmentKey,
    SpeakerIdentity,
    WordFrame,
)


def test_word_frame_is_immutable() -> None:
    """Frames are read-only once constructed."""
    frame = WordFrame(start_ms=0, end_ms=10, channel=0, is_final=True)
    with pytest.raises(ValidationError):
        frame.start_ms = 5  # type: ignore[misc]


def test_word_frame_defaults() -> None:
    """Text defaults to empty and identity to absent."""
    frame = WordFrame(start_ms=0, end_ms=0, channel="mic", is_final=False)
    assert frame.text == ""
    assert frame.identity is None


def test_word_frame_requires_finality() -> None:
    """``is_final`` has no default."""
    with pytest.raises(ValidationError):
        WordFrame(start_ms=0, end_ms=10, channel=0)  # type: ignore[call-arg]


def test_identity_fields_optional() -> None:
    """Either, both or neither identity field may be present."""
    assert SpeakerIdentity().speaker_index is None
    assert SpeakerIdentity(human_id="a").human_id == "a"


def test_proto_segment_requires_words() -> None:
    """Segments are never empty."""
    with pytest.raises(ValidationError):
        ProtoSegment(key=SegmentKey.make(0), words=[])


def test_proto_segment_derived_fields() -> None:
    """Bounds, text and finality derive from the word list."""
    words = [
        WordFrame(text="hello", start_ms=10, end_ms=200, channel=0, is_final=True),
        WordFrame(text="", start_ms=210, end_ms=220, channel=0, is_final=True),
        WordFrame(text="world", start_ms=230, end_ms=400, channel=0, is_final=False),
    ]
    seg = ProtoSegment(key=SegmentKey.make(0), words=words)

    assert (seg.start_ms, seg.end_ms) == (10, 400)
    assert seg.text == "hello world"
    assert seg.is_final is False
    assert seg.last_word is words[-1]
    assert seg.words[0] is words[0]
