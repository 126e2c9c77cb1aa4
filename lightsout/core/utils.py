"""
Utility functions for the Lights Out engine.
"""

import logging
from pathlib import Path
from typing import List, Optional
from datetime import datetime
import time
from functools import wraps
import numpy as np

import config
from .grid import Grid


def setup_logger(name: str, log_file: Optional[Path] = None, level: str = config.LOG_LEVEL) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))

    # Formatter
    formatter = logging.Formatter(config.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        execution_time = time.perf_counter() - start_time

        # Try to get logger from first argument (usually self)
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.4f} seconds")
        else:
            logging.getLogger(func.__module__).debug(f"{func.__name__} took {execution_time:.4f} seconds")

        return result
    return wrapper


def format_time(seconds: float) -> str:
    """Format elapsed seconds as m:ss.mmm"""
    total_ms = int(round(seconds * 1000))
    mins, rem = divmod(total_ms, 60000)
    secs, ms = divmod(rem, 1000)
    return f"{mins}:{secs:02d}.{ms:03d}"


def format_timestamp(timestamp_ms: int) -> str:
    """Format an epoch-milliseconds timestamp for display"""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime('%m/%d %H:%M')


class GridConverter:
    """Convert grids between different formats"""

    ON = 'O'
    OFF = '.'

    @staticmethod
    def to_array(grid: Grid) -> np.ndarray:
        """Writable 0/1 integer copy of the board"""
        return grid.cells.astype(int)

    @staticmethod
    def from_array(array: np.ndarray) -> Grid:
        return Grid(np.asarray(array) != 0)

    @staticmethod
    def to_string(grid: Grid, show_coordinates: bool = False) -> str:
        """
        Convert a grid to text.

        Args:
            grid: The grid to convert
            show_coordinates: Whether to add row and column indices

        Returns:
            One line per row, 'O' for on and '.' for off
        """
        rows = [''.join(GridConverter.ON if on else GridConverter.OFF for on in row)
                for row in grid.cells]
        if not show_coordinates:
            return '\n'.join(rows)

        width = len(str(grid.size - 1))
        header = ' ' * (width + 1) + ' '.join(str(c % 10) for c in range(grid.size))
        lines = [header]
        for r, row in enumerate(rows):
            lines.append(f"{r:>{width}} " + ' '.join(row))
        return '\n'.join(lines)

    @staticmethod
    def from_string(s: str) -> Grid:
        """
        Create a grid from text.
        'O', '1' and '#' are lit cells; '.', '0' and '_' are dark; whitespace is ignored.
        """
        rows: List[List[bool]] = []
        for line in s.strip().splitlines():
            cells = [ch for ch in line if not ch.isspace()]
            if not cells:
                continue
            row = []
            for ch in cells:
                if ch in 'O1#':
                    row.append(True)
                elif ch in '.0_':
                    row.append(False)
                else:
                    raise ValueError(f"Cannot parse cell character {ch!r}")
            rows.append(row)
        return Grid.from_list(rows)
