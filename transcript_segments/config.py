"""Configuration schema for the segment builder.

The builder has a single tunable, the gap threshold. The default comes from
``SEGMENT_MAX_GAP_MS`` (environment or project ``.env``) and falls back to
2000 ms.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from transcript_segments.utils.constant import SEGMENT_MAX_GAP_MS

__all__ = ["SegmenterConfig", "resolve_config"]


class SegmenterConfig(BaseModel):
    """Validated, read-only builder configuration.

    Instances are immutable and may be shared across any number of builder
    runs.

    Attributes:
        max_gap_ms: Maximum gap, in milliseconds, between the end of the last
            word of the open segment and the start of the next same-key word
            for that word to extend the segment (inclusive, >= 0).

    Examples:
        >>> SegmenterConfig().max_gap_ms
        2000

        >>> SegmenterConfig(max_gap_ms=500).max_gap_ms
        500
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_gap_ms: int = Field(
        default=SEGMENT_MAX_GAP_MS,
        validate_default=True,
        ge=0,
        description="Maximum same-key silence (ms) before a new segment starts",
    )


def resolve_config(options: SegmenterConfig | Mapping[str, Any] | None = None) -> SegmenterConfig:
    """Normalize caller-supplied options into a ``SegmenterConfig``.

    Args:
        options: An existing config, a mapping of config fields, or ``None``
            for defaults.

    Returns:
        SegmenterConfig: Validated configuration.

    Raises:
        pydantic.ValidationError: If a mapping holds invalid or unknown fields.
    """
    if options is None:
        return SegmenterConfig()
    if isinstance(options, SegmenterConfig):
        return options
    return SegmenterConfig.model_validate(dict(options))
