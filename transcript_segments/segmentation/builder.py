"""Group ordered word frames into speaker-attributed proto-segments.

A single pass keeps two notions of "last segment":

- the global tail of the output list, which alone decides whether a frame may
  extend an existing segment;
- the most recent segment per channel, which is only consulted to resolve the
  key of interim frames (continuity).

Because merging looks at the global tail only, a channel can never reach back
into an older segment of its own once another segment has been appended after
it, so cross-talk always yields alternating segments.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from transcript_segments.config import SegmenterConfig, resolve_config
from transcript_segments.segmentation.keys import resolve_key
from transcript_segments.segmentation.models import (
    ChannelId,
    ProtoSegment,
    SegmentKey,
    WordFrame,
)
from transcript_segments.utils.logging_config import get_logger

logger = get_logger(__name__)

__all__ = ["SegmentAccumulator", "build_segments"]


class SegmentAccumulator:
    """Long-lived segmentation state that folds frames in one at a time.

    Frames must be ingested in non-decreasing ``start_ms`` order; ordering is
    not checked here (see :mod:`transcript_segments.segmentation.ordering`).
    The accumulator has no internal locking, so concurrent callers must
    serialize ``ingest`` calls.

    Examples:
        >>> acc = SegmentAccumulator({"max_gap_ms": 1000})
        >>> for frame in frames:
        ...     acc.ingest(frame)
        >>> acc.segments
    """

    def __init__(self, options: SegmenterConfig | Mapping[str, Any] | None = None) -> None:
        self._config = resolve_config(options)
        self._segments: list[ProtoSegment] = []
        self._open_by_channel: dict[ChannelId, ProtoSegment] = {}

    @property
    def config(self) -> SegmenterConfig:
        return self._config

    @property
    def segments(self) -> list[ProtoSegment]:
        """Segments built so far, in output order.

        The list is a new one, but its segments are the live objects owned by
        the accumulator: the tail may still grow on the next ``ingest``.
        Callers must not mutate them (e.g. append to ``words``), since the
        tail's last word drives the next gap check.
        """
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def open_segment(self, channel: ChannelId) -> ProtoSegment | None:
        """Return the segment most recently created or extended on ``channel``."""
        return self._open_by_channel.get(channel)

    def reset(self) -> None:
        """Drop all accumulated segments and per-channel state."""
        self._segments = []
        self._open_by_channel = {}

    def ingest(self, frame: WordFrame) -> ProtoSegment:
        """Fold a single frame into the segment list.

        Args:
            frame: Next word in timeline order.

        Returns:
            ProtoSegment: The segment that received ``frame`` (either the
            extended global tail or a newly created segment).
        """
        key = resolve_key(frame, self._open_by_channel)
        last = self._segments[-1] if self._segments else None

        if (
            last is not None
            and SegmentKey.equals(last.key, key)
            and frame.start_ms - last.last_word.end_ms <= self._config.max_gap_ms
        ):
            last.words.append(frame)
            target = last
        else:
            target = ProtoSegment(key=key, words=[frame])
            self._segments.append(target)

        self._open_by_channel[frame.channel] = target
        return target

    def extend(self, frames: Iterable[WordFrame]) -> list[ProtoSegment]:
        """Fold many frames in order.

        Args:
            frames: Words in timeline order.

        Returns:
            list[ProtoSegment]: Segments created during this call, in order.
        """
        before = len(self._segments)
        for frame in frames:
            self.ingest(frame)
        return self._segments[before:]


def build_segments(
    frames: Iterable[WordFrame],
    options: SegmenterConfig | Mapping[str, Any] | None = None,
) -> list[ProtoSegment]:
    """Group ordered word frames into proto-segments.

    Pure with respect to its inputs: a fresh accumulator is folded over
    ``frames`` and its segment list returned. Flattening the returned
    segments' words reproduces ``frames`` exactly.

    Args:
        frames: Word frames in non-decreasing ``start_ms`` order across all
            channels.
        options: Builder configuration (``SegmenterConfig``, a mapping with
            ``max_gap_ms``, or ``None`` for defaults).

    Returns:
        list[ProtoSegment]: Segments in output order; empty for empty input.
    """
    accumulator = SegmentAccumulator(options)
    accumulator.extend(frames)
    segments = accumulator.segments
    logger.debug(
        "Built %d segment(s) with max_gap_ms=%d",
        len(segments),
        accumulator.config.max_gap_ms,
    )
    return segments
