"""Logging utilities for RasterLab."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

_FILE_HANDLER = "rasterlab.file"
_CONSOLE_HANDLER = "rasterlab.console"
_HANDLER_NAMES = (_FILE_HANDLER, _CONSOLE_HANDLER)


@dataclass
class RenderStats:
    """Statistics accumulated by a scene renderer."""

    shapes_rendered: int = 0
    shapes_clipped_away: int = 0
    pixels_produced: int = 0
    fills: int = 0
    transforms: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate time spent in the last render."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are closed and replaced, so the
    function can run once per command in the same process.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        if handler.get_name() in _HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setLevel(file_level.upper())
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER)
        console_handler.setLevel(console_level.upper())
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        root_logger.addHandler(console_handler)

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
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("rasterlab")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking render, fill and transform activity."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_shape_rendered(self, index: int, kind: str, pixel_count: int) -> None:
        """Log a shape that produced pixels."""
        self._logger.debug("Shape rendered", index=index, kind=kind, pixels=pixel_count)
        self._stats.shapes_rendered += 1

    def log_shape_clipped_away(self, index: int, kind: str) -> None:
        """Log a shape that left nothing inside the clip window."""
        self._logger.debug("Shape clipped away", index=index, kind=kind)
        self._stats.shapes_clipped_away += 1

    def log_render_complete(self, shape_count: int, pixel_count: int, duration_ms: float) -> None:
        """Log the end of a scene render."""
        self._logger.info(
            "Scene rendered",
            shapes=shape_count,
            pixels=pixel_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.pixels_produced = pixel_count

    def log_fill(self, seed: tuple[int, int], algorithm: str, changed: int) -> None:
        """Log a flood fill."""
        self._logger.info("Region filled", seed=list(seed), algorithm=algorithm, changed=changed)
        self._stats.fills += 1

    def log_transform(self, index: int, kind: str, transform: str, moved: int) -> None:
        """Log a shape transform and the number of pixels that moved with it."""
        self._logger.info(
            "Shape transformed",
            index=index,
            kind=kind,
            transform=transform,
            associated_pixels=moved,
        )
        self._stats.transforms += 1

    @property
    def stats(self) -> RenderStats:
        """Get current statistics."""
        return self._stats
