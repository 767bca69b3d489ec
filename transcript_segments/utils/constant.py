"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import sys
from typing import Final

from transcript_segments.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Maximum silence (milliseconds) between the last word of the open segment and
# the next same-key word for that word to extend the segment.
DEFAULT_MAX_GAP_MS: Final[int] = 2000
SEGMENT_MAX_GAP_MS: Final[int] = int(
    os.getenv("SEGMENT_MAX_GAP_MS", "").strip() or DEFAULT_MAX_GAP_MS
)

# Output format used by the CLI when none is requested
DEFAULT_OUTPUT_FORMAT: Final[str] = os.getenv("DEFAULT_OUTPUT_FORMAT", "json").lower()

# Logging configuration
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

# Frame file extensions understood by the loader
SUPPORTED_FRAME_EXTENSIONS: Final[frozenset[str]] = frozenset({
    ".json",
    ".jsonl",
})
