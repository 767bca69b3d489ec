"""Data models for speaker-attributed transcript segmentation.

This module defines the pydantic models shared by key resolution, the
segment builder, frame loading and the output formatters.

Optional identity fields use ``None`` as the explicit *absent* marker. Present
values are always ``int``/``str``, so an absent field never compares equal to
a present one (``speaker_index=0`` is not the same key as no speaker index).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

__all__ = [
    "ChannelId",
    "SpeakerIdentity",
    "WordFrame",
    "SegmentKey",
    "ProtoSegment",
    "SegmentationResult",
]

ChannelId = int | str


class SpeakerIdentity(BaseModel):
    """Tentative speaker attribution attached to a word upstream."""

    model_config = ConfigDict(frozen=True)

    speaker_index: int | None = Field(
        None, description="Provider diarization index, if known."
    )
    human_id: str | None = Field(
        None, description="Resolved human identifier, if assigned."
    )


class WordFrame(BaseModel):
    """A single recognized word with timing, channel and finality."""

    model_config = ConfigDict(frozen=True)

    text: str = Field("", description="Recognized token (not inspected by the builder).")
    start_ms: int = Field(..., description="Start offset in the session timeline (ms).")
    end_ms: int = Field(..., description="End offset in the session timeline (ms).")
    channel: ChannelId = Field(..., description="Opaque audio source / track identifier.")
    is_final: bool = Field(..., description="Whether the recognizer committed to this word.")
    identity: SpeakerIdentity | None = Field(
        None, description="Tentative speaker identity; absent means unknown."
    )

    @model_validator(mode="after")
    def _validate_window(self) -> WordFrame:
        if self.end_ms < self.start_ms:
            raise ValueError("WordFrame.end_ms must be >= WordFrame.start_ms")
        return self


class SegmentKey(BaseModel):
    """Identifies the logical speaker turn a word belongs to.

    Two keys are equal iff ``channel`` matches exactly and each optional field
    is either absent on both sides or present and equal on both sides.
    """

    model_config = ConfigDict(frozen=True)

    channel: ChannelId
    speaker_index: int | None = None
    human_id: str | None = None

    @classmethod
    def make(
        cls,
        channel: ChannelId,
        *,
        speaker_index: int | None = None,
        human_id: str | None = None,
    ) -> SegmentKey:
        """Build a key, leaving omitted fields absent.

        Args:
            channel: Channel the key is bound to.
            speaker_index: Optional provider speaker index.
            human_id: Optional human identifier.

        Returns:
            SegmentKey: The constructed key.
        """
        return cls(channel=channel, speaker_index=speaker_index, human_id=human_id)

    @staticmethod
    def equals(left: SegmentKey, right: SegmentKey) -> bool:
        """Return True when both keys denote the same speaker turn."""
        return (
            type(left.channel) is type(right.channel)
            and left.channel == right.channel
            and left.speaker_index == right.speaker_index
            and left.human_id == right.human_id
        )

    @property
    def has_speaker_index(self) -> bool:
        return self.speaker_index is not None

    @property
    def has_human_id(self) -> bool:
        return self.human_id is not None

    def describe(self) -> str:
        """Render a short human-readable label, e.g. ``ch=0 spk=1 human=alice``."""
        parts = [f"ch={self.channel}"]
        if self.has_speaker_index:
            parts.append(f"spk={self.speaker_index}")
        if self.has_human_id:
            parts.append(f"human={self.human_id}")
        return " ".join(parts)


class ProtoSegment(BaseModel):
    """A maximal same-key run of words bounded by the gap threshold.

    The key is fixed when the segment is created; words are only ever
    appended by the builder that owns the segment.
    """

    key: SegmentKey = Field(..., description="Speaker-turn key fixed at creation.")
    words: list[WordFrame] = Field(
        ..., min_length=1, description="Ordered words assigned to this segment."
    )

    @property
    def last_word(self) -> WordFrame:
        return self.words[-1]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def start_ms(self) -> int:
        return self.words[0].start_ms

    @computed_field  # type: ignore[prop-decorator]
    @property
    def end_ms(self) -> int:
        return self.words[-1].end_ms

    @computed_field  # type: ignore[prop-decorator]
    @property
    def text(self) -> str:
        return " ".join(word.text for word in self.words if word.text)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_final(self) -> bool:
        """False while any word is interim, i.e. the key may still be revised."""
        return all(word.is_final for word in self.words)


class SegmentationResult(BaseModel):
    """Serializable envelope for one segmentation run."""

    segments: list[ProtoSegment] = Field(..., description="Segments in output order.")
    frame_count: int = Field(..., ge=0, description="Number of frames segmented.")
    max_gap_ms: int = Field(..., ge=0, description="Gap threshold used for the run.")
