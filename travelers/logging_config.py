"""
Centralized logging configuration for Travelers.

Provides comprehensive debug logging to file for all generation operations.
Log file: data/debug.log (with rotation)

Usage:
    from travelers.logging_config import setup_logging
    setup_logging(data_root)  # Call once at startup

All travelers.* loggers will write DEBUG to file, WARNING+ to console.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.types import ChunkCoord


# Global configuration
ROOT_LOGGER_NAME = "travelers"
LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files

_logging_initialized = False


def setup_logging(
    data_root: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for Travelers.

    Args:
        data_root: Path to data directory (log file goes here)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    data_path = Path(data_root)
    data_path.mkdir(parents=True, exist_ok=True)
    log_path = data_path / LOG_FILE_NAME

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all levels

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    # File handler with rotation
    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-35s | %(funcName)-25s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    # Console handler (less verbose)
    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    # Log startup
    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"Travelers logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def _coord_str(coord: ChunkCoord | None) -> str:
    return "(?)" if coord is None else f"({coord[0]},{coord[1]})"


def log_tick(
    logger: logging.Logger,
    tick: int,
    phase: str,
    details: str | None = None,
) -> None:
    """Log tick-related activity."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"TICK {tick:05d} | {phase}{details_str}")


def log_phase(
    logger: logging.Logger,
    tick: int,
    phase_name: str,
    status: str,
    duration_ms: int | None = None,
    details: str | None = None,
) -> None:
    """Log pipeline phase execution."""
    duration_str = f" | {duration_ms}ms" if duration_ms else ""
    details_str = f" | {details}" if details else ""
    logger.debug(f"TICK {tick:05d} | PHASE | {phase_name} | {status}{duration_str}{details_str}")


def log_chunk(
    logger: logging.Logger,
    tick: int,
    action: str,
    coord: ChunkCoord,
    success: bool = True,
    details: str | None = None,
) -> None:
    """Log a chunk being spawned or despawned."""
    status = "OK" if success else "FAILED"
    details_str = f" | {details}" if details else ""
    logger.info(f"TICK {tick:05d} | CHUNK | {action} | {_coord_str(coord)} | {status}{details_str}")


def log_stitch(
    logger: logging.Logger,
    tick: int,
    coord: ChunkCoord,
    resolved: int,
    total: int,
    details: str | None = None,
) -> None:
    """Log a stitching pass over one chunk's perimeter ring."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"TICK {tick:05d} | STITCH | {_coord_str(coord)} | {resolved}/{total} resolved{details_str}")


def log_contradiction(
    logger: logging.Logger,
    stage: str,
    coord: ChunkCoord | None,
    count: int,
    fallback: int,
    details: str | None = None,
) -> None:
    """Log cells resolved with the fallback tile after a contradiction."""
    details_str = f" | {details}" if details else ""
    logger.warning(
        f"CONTRADICTION | {stage} | {_coord_str(coord)} | {count} cell(s) -> fallback {fallback}{details_str}"
    )


def log_schematic(
    logger: logging.Logger,
    operation: str,
    path: Path | str | None = None,
    success: bool = True,
    details: str | None = None,
) -> None:
    """Log schematic loading."""
    status = "OK" if success else "FAILED"
    path_str = f" | {path}" if path else ""
    details_str = f" | {details}" if details else ""
    logger.info(f"SCHEMATIC | {operation}{path_str} | {status}{details_str}")
