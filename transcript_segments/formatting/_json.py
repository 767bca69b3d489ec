"""Formatter for JSON (.json) output."""

from transcript_segments.segmentation.models import SegmentationResult


def to_json(result: SegmentationResult, **kwargs: object) -> str:
    """Convert a SegmentationResult into a JSON-formatted string.

    Args:
        result: The SegmentationResult to serialize.
        **kwargs: Additional arguments; ignored for JSON output.

    Returns:
        JSON string representation of the result (two-space indentation).
    """
    return result.model_dump_json(indent=2)
