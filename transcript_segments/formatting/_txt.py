"""Formatter for plain text (.txt) output."""

from transcript_segments.segmentation.models import SegmentationResult

INTERIM_MARKER = " …"


def to_txt(result: SegmentationResult, **kwargs: object) -> str:
    """Format a SegmentationResult as one labelled line per segment.

    Each line reads ``[<key label>] <text>``; segments still holding interim
    words end with an ellipsis marker.

    Args:
        result: The segmentation result.
        **kwargs: Additional keyword arguments (ignored for plain text output).

    Returns:
        str: Newline-joined segment lines; empty string when there are no segments.
    """
    lines = []
    for segment in result.segments:
        line = f"[{segment.key.describe()}] {segment.text}".rstrip()
        if not segment.is_final:
            line += INTERIM_MARKER
        lines.append(line)
    return "\n".join(lines)
