"""Ordering contract for frames entering the segment builder.

The builder assumes frames arrive in non-decreasing ``start_ms`` order across
all channels and never checks it. These helpers enforce that contract at the
pipeline boundary: a regression is reported as :class:`FrameOrderError` and
no correction (re-sorting, dropping) is attempted.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import chain

from transcript_segments.segmentation.models import WordFrame
from transcript_segments.utils.logging_config import get_logger

logger = get_logger(__name__)

__all__ = [
    "FrameOrderError",
    "FrameOrderGuard",
    "interleave_frames",
    "validate_frame_order",
]


class FrameOrderError(ValueError):
    """Raised when a frame starts earlier than the frame before it."""

    def __init__(self, index: int, previous_start_ms: int, start_ms: int) -> None:
        self.index = index
        self.previous_start_ms = previous_start_ms
        self.start_ms = start_ms
        super().__init__(
            f"Frame {index} starts at {start_ms} ms, before the previous frame "
            f"({previous_start_ms} ms); frames must be in non-decreasing start_ms order"
        )


class FrameOrderGuard:
    """Streaming ordering check for frames fed one at a time.

    Examples:
        >>> guard = FrameOrderGuard()
        >>> guard.check(frame)  # raises FrameOrderError on regression
    """

    def __init__(self) -> None:
        self._count = 0
        self._last_start_ms: int | None = None

    @property
    def count(self) -> int:
        """Number of frames accepted so far."""
        return self._count

    def check(self, frame: WordFrame) -> WordFrame:
        """Accept ``frame`` if it does not start before the previous one.

        Args:
            frame: Next frame in the stream.

        Returns:
            WordFrame: The same frame, for use in pipelines.

        Raises:
            FrameOrderError: If ``frame.start_ms`` regresses.
        """
        if self._last_start_ms is not None and frame.start_ms < self._last_start_ms:
            error = FrameOrderError(self._count, self._last_start_ms, frame.start_ms)
            logger.warning("Frame ordering violated: %s", error)
            raise error
        self._last_start_ms = frame.start_ms
        self._count += 1
        return frame

    def reset(self) -> None:
        self._count = 0
        self._last_start_ms = None


def validate_frame_order(frames: Iterable[WordFrame]) -> list[WordFrame]:
    """Check that ``frames`` are in non-decreasing ``start_ms`` order.

    Args:
        frames: Frames destined for the segment builder.

    Returns:
        list[WordFrame]: The frames, materialized in their original order.

    Raises:
        FrameOrderError: On the first frame that starts before its predecessor.
    """
    guard = FrameOrderGuard()
    return [guard.check(frame) for frame in frames]


def interleave_frames(
    final_frames: Iterable[WordFrame],
    partial_frames: Iterable[WordFrame],
) -> list[WordFrame]:
    """Merge committed and interim words into one timeline-ordered stream.

    Finals come before partials when their ``start_ms`` ties, and each input
    keeps its own relative order (stable sort).

    Args:
        final_frames: Words the recognizer has committed.
        partial_frames: Interim words not yet committed.

    Returns:
        list[WordFrame]: All frames sorted by ``start_ms``.
    """
    return sorted(chain(final_frames, partial_frames), key=lambda frame: frame.start_ms)
