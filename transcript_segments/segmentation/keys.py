"""Segment key construction and continuity-based key resolution."""

from __future__ import annotations

from collections.abc import Mapping

from transcript_segments.segmentation.models import (
    ChannelId,
    ProtoSegment,
    SegmentKey,
    SpeakerIdentity,
    WordFrame,
)

__all__ = ["key_from_identity", "resolve_key"]


def key_from_identity(channel: ChannelId, identity: SpeakerIdentity | None = None) -> SegmentKey:
    """Derive a segment key from a word's channel and tentative identity.

    Only fields present on ``identity`` are copied; a missing identity yields
    a key carrying the channel alone.

    Args:
        channel: Channel of the word.
        identity: Tentative speaker identity, if any.

    Returns:
        SegmentKey: Freshly derived key.
    """
    if identity is None:
        return SegmentKey.make(channel)
    return SegmentKey.make(
        channel,
        speaker_index=identity.speaker_index,
        human_id=identity.human_id,
    )


def resolve_key(
    frame: WordFrame,
    open_by_channel: Mapping[ChannelId, ProtoSegment],
) -> SegmentKey:
    """Resolve the candidate key for ``frame``.

    Interim frames inherit the key of the segment currently open on their
    channel, ignoring their own (possibly noisy) identity. Final frames, and
    interim frames on a channel with no open segment yet, derive the key from
    their identity.

    Args:
        frame: Word being folded into the segment list.
        open_by_channel: Most recently created-or-extended segment per channel.

    Returns:
        SegmentKey: Key the frame is grouped under.
    """
    if not frame.is_final:
        previous = open_by_channel.get(frame.channel)
        if previous is not None:
            return previous.key
    return key_from_identity(frame.channel, frame.identity)
