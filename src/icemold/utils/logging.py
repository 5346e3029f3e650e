"""Logging utilities for icemold."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on every call
_handlers: list[logging.Handler] = []


@dataclass
class PipelineStats:
    """Statistics from one or more pipeline runs."""

    characters: int = 0
    shapes: int = 0
    holes: int = 0
    solids: int = 0
    fallbacks: list[str] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("icemold")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class PipelineLogger:
    """Logger for tracking pipeline progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = PipelineStats()

    def log_layout(self, characters: list[str], font_size: float) -> None:
        """Log the fitted font size for a character column."""
        self._logger.debug(
            "Text laid out",
            characters="".join(characters),
            font_size=round(font_size, 3),
        )
        self._stats.characters += len(characters)

    def log_shapes(self, stage: str, shape_count: int, hole_count: int) -> None:
        """Log the outline count produced by a stage."""
        self._logger.info("Shapes built", stage=stage, shapes=shape_count, holes=hole_count)
        self._stats.shapes += shape_count
        self._stats.holes += hole_count

    def log_fallback(self, stage: str, reason: str, error: str | None = None) -> None:
        """Log a fill that returned fallback shapes."""
        self._logger.warning("Fill fallback", stage=stage, reason=reason, error=error)
        self._stats.fallbacks.append(f"{stage}:{reason}")

    def log_solids(self, part: str, solid_count: int, triangle_count: int) -> None:
        """Log extruded solids for one mold part."""
        self._logger.debug(
            "Solids extruded",
            part=part,
            solids=solid_count,
            triangles=triangle_count,
        )
        self._stats.solids += solid_count

    def log_skipped(self, reason: str) -> None:
        """Log a render that produced nothing."""
        self._logger.debug("Render skipped", reason=reason)

    @property
    def stats(self) -> PipelineStats:
        """Get current pipeline statistics."""
        return self._stats
