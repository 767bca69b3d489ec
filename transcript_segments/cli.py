"""Command-line interface for transcript segmentation using Typer.

Features:
- `segment` command grouping a word-frame file into speaker-attributed segments.
- `check` command validating the frame ordering contract only.
- Options for the gap threshold, output format and destination.
- Verbose / quiet modes for logging.
"""

import pathlib
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError

from transcript_segments import __version__
from transcript_segments.config import SegmenterConfig
from transcript_segments.formatting import FORMATTERS, get_formatter_spec
from transcript_segments.segmentation.builder import build_segments
from transcript_segments.segmentation.models import SegmentationResult
from transcript_segments.segmentation.ordering import FrameOrderError, validate_frame_order
from transcript_segments.utils.constant import DEFAULT_OUTPUT_FORMAT, SEGMENT_MAX_GAP_MS
from transcript_segments.utils.frame_io import FrameLoadError, load_frames
from transcript_segments.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"transcript-segments version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="transcript-segments",
    help="Group streamed word-level ASR results into speaker-attributed segments.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Print help when invoked without a subcommand.

    Args:
        ctx: Typer context.
        version: Whether to print version and exit.

    Raises:
        typer.Exit: Raised to terminate after displaying help or version.

    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def segment(
    input_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Word-frame file (.jsonl, or .json list / final+partial object).",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    max_gap_ms: Annotated[
        int,
        typer.Option(
            "--max-gap-ms",
            help="Maximum same-key silence in milliseconds before a new segment starts.",
        ),
    ] = SEGMENT_MAX_GAP_MS,
    output_format: Annotated[
        str,
        typer.Option(
            "--output-format",
            "-f",
            help=f"Output format ({', '.join(FORMATTERS)}).",
        ),
    ] = DEFAULT_OUTPUT_FORMAT,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help=(
                "Write the result to this file instead of stdout. "
                "The format's extension is added when the name has none."
            ),
            dir_okay=False,
            writable=True,
        ),
    ] = None,
    validate: Annotated[
        bool,
        typer.Option(
            "--validate/--no-validate",
            help="Reject frames that are not in non-decreasing start_ms order.",
        ),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress all non-critical logs."),
    ] = False,
) -> SegmentationResult:
    """Build speaker-attributed segments from a word-frame file.

    Args:
        input_file: Frame file to segment.
        max_gap_ms: Gap threshold in milliseconds.
        output_format: Output format name.
        output: Optional destination file; suffixless names receive the
            format's file extension.
        validate: Enforce the frame ordering contract before segmenting.
        verbose: Enable DEBUG logging.
        quiet: Suppress non-critical logging.

    Returns:
        SegmentationResult: The result that was written.

    Raises:
        typer.Exit: With code 1 on invalid input or options.

    """
    configure_logging(verbose=verbose, quiet=quiet)

    try:
        spec = get_formatter_spec(output_format)
        config = SegmenterConfig(max_gap_ms=max_gap_ms)
    except (ValueError, ValidationError) as exc:
        _fail(str(exc))

    try:
        frames = load_frames(input_file)
        if validate:
            frames = validate_frame_order(frames)
    except (FrameLoadError, FrameOrderError) as exc:
        _fail(str(exc))

    segments = build_segments(frames, config)
    result = SegmentationResult(
        segments=segments,
        frame_count=len(frames),
        max_gap_ms=config.max_gap_ms,
    )
    logger.info(
        "Segmented %d frame(s) into %d segment(s)", result.frame_count, len(segments)
    )

    rendered = spec.format_func(result)
    if output is None:
        typer.echo(rendered)
    else:
        if not output.suffix:
            output = output.with_suffix(spec.file_extension)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
        logger.info("Wrote %s output to %s", output_format, output)
    return result


@app.command()
def check(
    input_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Word-frame file to validate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
) -> None:
    """Validate that a frame file satisfies the ordering contract.

    Args:
        input_file: Frame file to validate.

    Raises:
        typer.Exit: With code 1 when the file is malformed or out of order.

    """
    configure_logging(quiet=True)
    try:
        frames = validate_frame_order(load_frames(input_file))
    except (FrameLoadError, FrameOrderError) as exc:
        _fail(str(exc))
    typer.echo(f"OK: {len(frames)} frame(s) in order")


if __name__ == "__main__":
    app()
