"""Console and file logging for grammar build passes."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    def __init__(self, fmt: str, datefmt: str, colors: dict):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.colors = colors

    def format(self, record):
        original = record.levelname
        color = self.colors.get(original, self.colors["RESET"])
        record.levelname = f"{color}{original}{self.colors['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class BuildLogger:
    """Logging for grammar build passes.

    Provides console logging (colored, concise) and, when a log directory is
    given, a timestamped log file (detailed, persistent), plus framing
    messages for the start and end of a pass.

    Parameters
    ----------
    log_dir : str, optional
        Directory for log files. If None, only the console is used.
    log_level : str
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_name : str, optional
        Logger name. Default: "grammar_gen"

    Attributes
    ----------
    log_file : Path or None
        Path to the build log file
    logger : logging.Logger
        Python logger instance

    Example
    -------
    >>> build_logger = BuildLogger("logs/", log_level="DEBUG")
    >>> build_logger.setup()
    >>> build_logger.log_build_start(Path("src/main/antlr3"))
    >>> build_logger.log_build_complete(3, 1.2)
    """

    COLORS = {
        "DEBUG": "\033[0;36m",  # Cyan
        "INFO": "\033[0;34m",  # Blue
        "WARNING": "\033[1;33m",  # Yellow
        "ERROR": "\033[0;31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
        "RESET": "\033[0m",
    }

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_level: str = "INFO",
        log_name: str = "grammar_gen",
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_file: Optional[Path] = None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file = self.log_dir / f"grammar_gen_{timestamp}.log"

        self.log_level = getattr(logging, log_level.upper())
        self.logger = logging.getLogger(log_name)
        self.logger.setLevel(self.log_level)
        self.logger.handlers = []
        self.logger.propagate = False

    def setup(self) -> None:
        """Configure logging handlers."""
        if self.log_file is not None:
            file_handler = logging.FileHandler(self.log_file, mode="w")
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(self._get_file_formatter())
            self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(self._get_console_formatter())
        self.logger.addHandler(console_handler)

    def _get_file_formatter(self) -> logging.Formatter:
        """Get formatter for file logging (detailed, no colors)."""
        return logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def _get_console_formatter(self) -> logging.Formatter:
        """Get formatter for console logging (colored, concise)."""
        return ColoredFormatter(
            fmt="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
            colors=self.COLORS,
        )

    def log_build_start(self, source_directory: Path) -> None:
        """Log the start of a build pass."""
        separator = "=" * 80
        self.logger.info(separator)
        self.logger.info(f"Generating grammar sources from {source_directory}")
        self.logger.info(separator)

    def log_build_complete(self, grammar_count: int, duration: float) -> None:
        """Log successful completion of a build pass.

        Parameters
        ----------
        grammar_count : int
            Number of grammars handed to the engine
        duration : float
            Execution time in seconds
        """
        duration_str = self.format_duration(duration)
        self.logger.info(
            f"Processed {grammar_count} grammar(s) successfully in {duration_str}"
        )

    def log_build_error(self, error: str) -> None:
        """Log a failed build pass."""
        self.logger.error(f"Grammar generation failed: {error}")

    @staticmethod
    def format_duration(seconds: float) -> str:
        """Format duration in seconds to human-readable string.

        Returns
        -------
        str
            Formatted string (e.g., "45.2s", "1m 23s", "2h 15m")
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            mins = int(seconds // 60)
            secs = int(seconds % 60)
            return f"{mins}m {secs}s"
        else:
            hours = int(seconds // 3600)
            mins = int((seconds % 3600) // 60)
            return f"{hours}h {mins}m"
