"""Speaker-attributed segmentation of streamed word frames.

Groups ordered word-level ASR results into proto-segments keyed by channel
and tentative speaker identity, bounded by a silence gap threshold.
"""

from .builder import SegmentAccumulator, build_segments
from .keys import key_from_identity, resolve_key
from .models import (
    ProtoSegment,
    SegmentationResult,
    SegmentKey,
    SpeakerIdentity,
    WordFrame,
)
from .ordering import (
    FrameOrderError,
    FrameOrderGuard,
    interleave_frames,
    validate_frame_order,
)

__all__ = [
    "FrameOrderError",
    "FrameOrderGuard",
    "ProtoSegment",
    "SegmentAccumulator",
    "SegmentKey",
    "SegmentationResult",
    "SpeakerIdentity",
    "WordFrame",
    "build_segments",
    "interleave_frames",
    "key_from_identity",
    "resolve_key",
    "validate_frame_order",
]
