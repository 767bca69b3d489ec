"""Formatter for JSON Lines (.jsonl) output.

Each line contains a JSON object representing a single *ProtoSegment* of the
result.
"""

from __future__ import annotations

from transcript_segments.segmentation.models import SegmentationResult


def to_jsonl(result: SegmentationResult, **kwargs: object) -> str:  # noqa: D401
    """Convert a ``SegmentationResult`` into JSON Lines (one segment per line).

    Args:
        result: The segmentation result.
        **kwargs: Additional arguments (ignored for JSONL output).

    Returns:
        A JSON Lines string where each line is a JSON object for one segment.

    """
    return "\n".join(segment.model_dump_json() for segment in result.segments)
