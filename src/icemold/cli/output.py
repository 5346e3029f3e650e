"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with summary tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Fallback
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]icemold[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, family: str | None, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        family: Family name from the name table, if any
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    line.append(f" ({font_type})")
    console.print(line)
    console.print(f"  {family or 'unknown family'} {SYM_DOT} {upm:,} UPM")


def print_layout(characters: str, font_size: float, bottom_y: float) -> None:
    """Print the fitted layout of the character column."""
    line = Text("  ")
    line.append(characters, style="bold")
    line.append(f" {SYM_DOT} font size {font_size:.2f} mm {SYM_DOT} lowest point {bottom_y:.2f} mm")
    console.print(line)


def print_shapes_summary(
    shape_count: int,
    hole_count: int,
    fill_offset: float | None,
    fallback: str | None,
) -> None:
    """Print the outline summary.

    Args:
        shape_count: Number of shapes with holes
        hole_count: Total number of holes
        fill_offset: Offset used when the text was filled
        fallback: Fallback reason when the fill did not complete
    """
    console.print(f"  [green]{shape_count}[/green] shapes {SYM_DOT} {hole_count} holes")
    if fill_offset is not None:
        console.print(f"  filled with {fill_offset:.2f} mm offset")
    if fallback:
        console.print(f"  [yellow]{SYM_WARN} fill fallback: {fallback}[/yellow]")


def print_preview_summary(parts: list[tuple[str, int, int]]) -> None:
    """Print a table of extruded parts.

    Args:
        parts: (name, solid count, triangle count) per mold part
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Part")
    table.add_column("Solids", justify="right")
    table.add_column("Triangles", justify="right")
    for name, solids, triangles in parts:
        table.add_row(name, str(solids), f"{triangles:,}")
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    total_time_s: float,
    output_path: str | None = None,
    file_size: str | None = None,
) -> None:
    """Print success message.

    Args:
        total_time_s: Total processing time in seconds
        output_path: Path of the written JSON file, if any
        file_size: Human-readable file size string
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        if file_size:
            line.append(f" ({file_size})")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
