"""Unit tests for `build_segments()` grouping, continuity and gap rules."""

from __future__ import annotations

import random

import pytest

from transcript_segments.config import SegmenterConfig
from transcript_segments.segmentation.builder import build_segments
from transcript_segments.segmentation.models import SegmentKey, SpeakerIdentity, WordFrame
from transcript_segments.segmentation.ordering import interleave_frames


def _f(
    text: str,
    start: int,
    end: int,
    *,
    channel: int | str = 0,
    final: bool = True,
    idx: int | None = None,
    human: str | None = None,
) -> WordFrame:
    """Create a `WordFrame` for test fixtures.

    Args:
        text: Token text.
        start: Start offset in milliseconds.
        end: End offset in milliseconds.
        channel: Channel identifier.
        final: Finality flag.
        idx: Optional speaker index for the tentative identity.
        human: Optional human id for the tentative identity.

    Returns:
        WordFrame: Configured frame instance for tests.

    """
    identity = None
    if idx is not None or human is not None:
        identity = SpeakerIdentity(speaker_index=idx, human_id=human)
    return WordFrame(
        text=text, start_ms=start, end_ms=end, channel=channel, is_final=final, identity=identity
    )


def _texts(segments) -> list[list[str]]:
    return [[w.text for w in seg.words] for seg in segments]


def test_empty_input_yields_no_segments() -> None:
    """No frames, no segments."""
    assert build_segments([]) == []


def test_single_frame_yields_single_segment() -> None:
    """One frame becomes a one-word segment keyed by its channel."""
    frame = _f("0", 0, 100)
    segs = build_segments([frame])
    assert len(segs) == 1
    assert segs[0].key == SegmentKey.make(0)
    assert segs[0].words == [frame]


def test_interim_then_final_with_new_identity_splits() -> None:
    """A final frame whose identity differs from the continuity key starts a new segment."""
    frames = [
        _f("a", 0, 100, channel=1, final=False),
        _f("b", 150, 300, channel=1, final=True, idx=5),
    ]
    segs = build_segments(frames, SegmenterConfig(max_gap_ms=2000))

    assert len(segs) == 2
    assert segs[0].key == SegmentKey.make(1)
    assert segs[0].words == [frames[0]]
    assert segs[1].key == SegmentKey.make(1, speaker_index=5)
    assert segs[1].words == [frames[1]]


def test_gap_exceeding_threshold_splits() -> None:
    """Same-key words 2100 ms apart split at the default threshold."""
    frames = [
        _f("a", 0, 500, channel=1, idx=5),
        _f("b", 2600, 3000, channel=1, idx=5),
    ]
    segs = build_segments(frames, {"max_gap_ms": 2000})
    assert _texts(segs) == [["a"], ["b"]]


@pytest.mark.parametrize(
    ("gap", "expected_segments"),
    [(2000, 1), (2001, 2)],
)
def test_gap_boundary_is_inclusive(gap: int, expected_segments: int) -> None:
    """A gap equal to ``max_gap_ms`` merges; one more millisecond splits."""
    frames = [_f("a", 0, 100), _f("b", 100 + gap, 200 + gap)]
    assert len(build_segments(frames, SegmenterConfig(max_gap_ms=2000))) == expected_segments


def test_zero_gap_threshold_merges_only_touching_words() -> None:
    """With ``max_gap_ms=0`` only back-to-back words share a segment."""
    frames = [_f("a", 0, 100), _f("b", 100, 200), _f("c", 201, 300)]
    segs = build_segments(frames, SegmenterConfig(max_gap_ms=0))
    assert _texts(segs) == [["a", "b"], ["c"]]


def test_custom_gap_threshold() -> None:
    """A smaller threshold splits where the default would merge."""
    frames = [_f("0", 0, 100), _f("1", 500, 600), _f("2", 1700, 1800)]
    segs = build_segments(frames, SegmenterConfig(max_gap_ms=1000))
    assert _texts(segs) == [["0", "1"], ["2"]]


def test_channel_interleaving_forces_split() -> None:
    """A channel cannot reach back past another channel's segment."""
    a1 = _f("a1", 0, 100, channel="X", idx=1)
    b1 = _f("b1", 100, 150, channel="Y", idx=2)
    a2 = _f("a2", 100, 200, channel="X", idx=1)

    segs = build_segments([a1, b1, a2])

    assert _texts(segs) == [["a1"], ["b1"], ["a2"]]
    assert segs[0].key == segs[2].key
    assert segs[0] is not segs[2]


def test_interleaved_short_turns_alternate() -> None:
    """Rapid cross-talk between channels produces alternating segments."""
    frames = [
        _f("0", 0, 100, channel=0),
        _f("1", 150, 200, channel=1),
        _f("2", 250, 300, channel=0),
        _f("3", 350, 400, channel=1),
        _f("4", 450, 500, channel=0),
    ]
    segs = build_segments(frames)
    assert [seg.key.channel for seg in segs] == [0, 1, 0, 1, 0]


def test_interim_continuity_ignores_missing_identity() -> None:
    """An interim frame without identity joins the open segment of its channel."""
    frames = [
        _f("a", 0, 100, idx=3, human="alice"),
        _f("b", 150, 250, final=False),
    ]
    segs = build_segments(frames)
    assert len(segs) == 1
    assert segs[0].key == SegmentKey.make(0, speaker_index=3, human_id="alice")
    assert _texts(segs) == [["a", "b"]]


def test_interim_continuity_ignores_conflicting_identity() -> None:
    """An interim frame's own conflicting identity is ignored for continuity."""
    frames = [
        _f("0", 0, 90),
        _f("1", 140, 220, final=False, idx=4, human="alice"),
    ]
    segs = build_segments(frames)
    assert len(segs) == 1
    assert segs[0].key == SegmentKey.make(0)


def test_interim_continuity_still_respects_gap() -> None:
    """Continuity reuses the key but a long silence still starts a new segment."""
    frames = [_f("a", 0, 100, idx=1), _f("b", 5000, 5100, final=False)]
    segs = build_segments(frames)
    assert len(segs) == 2
    assert segs[1].key == SegmentKey.make(0, speaker_index=1)


def test_finalization_rekeys_after_interim_run() -> None:
    """A final frame with a settled identity does not merge into the interim run."""
    frames = [
        _f("a", 0, 100, idx=1),
        _f("b", 120, 200, final=False),
        _f("c", 220, 300, final=True, idx=2),
    ]
    segs = build_segments(frames)

    assert _texts(segs) == [["a", "b"], ["c"]]
    assert segs[0].key == SegmentKey.make(0, speaker_index=1)
    assert segs[1].key == SegmentKey.make(0, speaker_index=2)


def test_speaker_change_within_channel_splits() -> None:
    """Final frames with alternating speaker indices split on each change."""
    frames = [
        _f("0", 0, 100, idx=0),
        _f("1", 150, 250, idx=1),
        _f("2", 300, 400, idx=0),
    ]
    segs = build_segments(frames)
    assert [seg.key.speaker_index for seg in segs] == [0, 1, 0]


def test_human_id_change_for_same_speaker_index_splits() -> None:
    """The human id is part of the key even when the speaker index matches."""
    frames = [_f("0", 0, 100, idx=0, human="alice"), _f("1", 150, 250, idx=0, human="bob")]
    segs = build_segments(frames)
    assert [seg.key.human_id for seg in segs] == ["alice", "bob"]


def test_merges_on_human_id_without_speaker_index() -> None:
    """Human id alone is enough to keep consecutive words together."""
    frames = [_f("0", 0, 100, human="alice"), _f("1", 140, 240, human="alice")]
    segs = build_segments(frames)
    assert len(segs) == 1
    assert segs[0].key == SegmentKey.make(0, human_id="alice")


def test_final_and_partial_streams_interleave_by_start() -> None:
    """Committed and interim words merged by start time group per channel."""
    finals = [_f("0", 0, 100, channel=0)]
    partials = [
        _f("1", 150, 200, channel=0, final=False),
        _f("2", 150, 200, channel=1, final=False),
        _f("3", 210, 260, channel=1, final=False),
    ]
    segs = build_segments(interleave_frames(finals, partials))

    assert _texts(segs) == [["0", "1"], ["2", "3"]]
    assert [seg.key for seg in segs] == [SegmentKey.make(0), SegmentKey.make(1)]
    assert [seg.is_final for seg in segs] == [False, False]


def test_partial_words_inherit_speaker_across_channel_interleaving() -> None:
    """Interim words keep their channel's key even when a new segment is needed."""
    finals = [_f("0", 0, 100, channel=0, idx=0), _f("1", 150, 250, channel=1, idx=1)]
    partials = [
        _f("2", 300, 400, channel=0, final=False),
        _f("3", 450, 550, channel=1, final=False),
    ]
    segs = build_segments(interleave_frames(finals, partials))

    assert [seg.key for seg in segs] == [
        SegmentKey.make(0, speaker_index=0),
        SegmentKey.make(1, speaker_index=1),
        SegmentKey.make(0, speaker_index=0),
        SegmentKey.make(1, speaker_index=1),
    ]


def test_options_are_not_mutated_and_reusable() -> None:
    """The same config object can drive several independent runs."""
    config = SegmenterConfig(max_gap_ms=50)
    frames = [_f("a", 0, 10), _f("b", 100, 110)]
    first = build_segments(frames, config)
    second = build_segments(frames, config)
    assert _texts(first) == _texts(second) == [["a"], ["b"]]
    assert config.max_gap_ms == 50


def _random_frames(rng: random.Random, count: int) -> list[WordFrame]:
    frames: list[WordFrame] = []
    start = 0
    for i in range(count):
        start += rng.choice([0, 10, 80, 400, 1900, 2500])
        idx = rng.choice([None, 0, 1])
        human = rng.choice([None, None, "alice"])
        frames.append(
            _f(
                str(i),
                start,
                start + rng.randint(0, 300),
                channel=rng.choice([0, 1, 2]),
                final=rng.random() < 0.6,
                idx=idx,
                human=human,
            )
        )
    return frames


@pytest.mark.parametrize("seed", range(5))
def test_output_covers_input_exactly(seed: int) -> None:
    """Flattened output words are the input frames, same objects, same order."""
    frames = _random_frames(random.Random(seed), 200)
    segs = build_segments(frames)

    flattened = [word for seg in segs for word in seg.words]
    assert len(flattened) == len(frames)
    assert all(a is b for a, b in zip(flattened, frames, strict=True))
    assert all(len(seg.words) >= 1 for seg in segs)


@pytest.mark.parametrize("seed", range(5))
def test_consecutive_words_respect_gap_and_key(seed: int) -> None:
    """Within a segment, every step is within the threshold and on one channel."""
    frames = _random_frames(random.Random(100 + seed), 200)
    segs = build_segments(frames, SegmenterConfig(max_gap_ms=500))

    for seg in segs:
        for prev, cur in zip(seg.words, seg.words[1:]):
            assert cur.start_ms - prev.end_ms <= 500
            assert cur.channel == seg.key.channel
