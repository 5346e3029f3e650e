"""CLI application entry point for icemold.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from icemold import __version__
from icemold.cli.output import (
    console,
    print_error,
    print_font_info,
    print_header,
    print_layout,
    print_preview_summary,
    print_shapes_summary,
    print_step,
    print_success,
)
from icemold.config import IceMoldSettings, LoggingConfig
from icemold.core import MoldPipeline
from icemold.domain import ICE_POP_MOLD, MoldParameters
from icemold.exceptions import FontLoadError, IceMoldError
from icemold.io import FontRepository, shapes_to_dict, write_shapes
from icemold.utils import configure_logging

MAX_CHARACTERS = 4

# Create the Typer app
app = typer.Typer(
    name="icemold",
    help="Turn 1-4 characters into ice-pop mold outlines and solids.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]icemold[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    font_path: Annotated[
        Path,
        typer.Argument(
            help="Path to a TTF/OTF font file",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="1-4 characters, stacked top to bottom",
            show_default=False,
        ),
    ],
    offset_x: Annotated[
        float,
        typer.Option("--offset-x", "-x", help="Horizontal offset of the text block (mm)"),
    ] = 0.0,
    offset_y: Annotated[
        float,
        typer.Option("--offset-y", "-y", help="Vertical offset of the text block (mm)"),
    ] = 0.0,
    scale: Annotated[
        float,
        typer.Option(
            "--scale", "-s", help="Font size scale in percent (50-150)", min=50.0, max=150.0
        ),
    ] = 100.0,
    rotation: Annotated[
        float,
        typer.Option("--rotation", "-r", help="Block rotation in degrees", min=-180.0, max=180.0),
    ] = 0.0,
    fill: Annotated[
        bool,
        typer.Option("--fill", "-f", help="Outline the characters and merge them into one shape"),
    ] = False,
    fill_offset: Annotated[
        float,
        typer.Option("--fill-offset", help="Outline offset for --fill (mm)", min=0.0, max=10.0),
    ] = 3.0,
    auto_gap: Annotated[
        bool,
        typer.Option("--auto-gap", help="Derive the fill offset from the gaps between characters"),
    ] = False,
    mirror: Annotated[
        bool,
        typer.Option("--mirror", help="Mirror the outlines (mold side view)"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the 2D outlines as JSON"),
    ] = None,
    preview: Annotated[
        bool,
        typer.Option("--preview", help="Extrude the ice, base and stick solids"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose console output"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build mold outlines for TEXT using the font at FONT_PATH.

    Example:
        icemold NotoSansJP-Bold.otf 鎌倉 --fill --fill-offset 3 -o shapes.json

    This lays out the two characters in the mold cavity, merges them into one
    outline and writes the outline as JSON.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not 1 <= len(text) <= MAX_CHARACTERS:
        print_error(
            f"Expected 1-{MAX_CHARACTERS} characters, got {len(text)}",
            details="Characters are stacked vertically inside the mold cavity.",
        )
        raise typer.Exit(code=1)

    if not font_path.is_file():
        print_error(
            f"Font file not found: {font_path}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    settings = IceMoldSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    params = MoldParameters(
        text=text,
        offset_x=offset_x,
        offset_y=offset_y,
        scale=scale,
        rotation=rotation,
        fill_text=fill,
        fill_offset=fill_offset,
    )

    if not quiet:
        print_header(__version__)

    start = time.time()
    repository = FontRepository.from_path(font_path)
    try:
        if not quiet:
            print_step("Loading font")
        font = repository.load()
        if not quiet:
            print_font_info(str(font_path), font.format, font.family_name, font.units_per_em)

        pipeline = MoldPipeline(settings, ICE_POP_MOLD, logger)

        if not quiet:
            print_step("Building outlines")
        upright = pipeline.build_text_block(font, params, rotate=False, auto_gap=auto_gap)
        block = pipeline.orient_block(upright, params, mirror=mirror)
        if not quiet:
            print_layout(text, block.font_size, block.bounds.y_min)
            print_shapes_summary(
                shape_count=len(block.shapes),
                hole_count=block.hole_count,
                fill_offset=block.fill.offset if block.fill else None,
                fallback=block.fill.fallback.value if block.fill and block.fill.fallback else None,
            )

        if preview:
            if not quiet:
                print_step("Extruding preview")
            mold_preview = pipeline.build_preview(font, params, block=upright)
            if not quiet:
                stick = [mold_preview.stick] if mold_preview.stick is not None else []
                print_preview_summary(
                    [
                        (name, len(solids), sum(s.triangle_count for s in solids))
                        for name, solids in (
                            ("ice", mold_preview.ice),
                            ("base", mold_preview.base),
                            ("stick", stick),
                        )
                    ]
                )

        file_size = None
        if output is not None:
            data = shapes_to_dict(block.shapes, params, block.font_size, ICE_POP_MOLD)
            file_size = _format_file_size(write_shapes(output, data))

        stats = pipeline.pipeline_logger.stats
        logger.info(
            "Run finished",
            shapes=stats.shapes,
            holes=stats.holes,
            solids=stats.solids,
            fallbacks=stats.fallbacks,
            duration=round(stats.duration_seconds, 3),
        )

        if not quiet:
            print_success(
                total_time_s=time.time() - start,
                output_path=str(output) if output else None,
                file_size=file_size,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except IceMoldError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)
    finally:
        repository.close()


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form.

    Args:
        size_bytes: File size in bytes

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
