# lightsout/core/__init__.py
"""
Core data structures and utilities for Lights Out.
"""

from .grid import Grid, Coordinate, ToggleSet, create_solved, toggle, is_win, apply_toggles
from .validator import GridValidator, ValidationResult
from .session import SessionRecord, GameSession, SessionState
from .utils import setup_logger, timer, GridConverter, format_time, format_timestamp

__all__ = [
    # Grid engine
    'Grid', 'Coordinate', 'ToggleSet',
    'create_solved', 'toggle', 'is_win', 'apply_toggles',

    # Validation
    'GridValidator', 'ValidationResult',

    # Sessions
    'SessionRecord', 'GameSession', 'SessionState',

    # Utilities
    'setup_logger', 'timer', 'GridConverter',
    'format_time', 'format_timestamp',
]
