"""
Validators for grids, toggle sets and stored session records.
"""

import math
from typing import Any, List, Mapping, Sequence
from .grid import Grid


class ValidationResult:
    """Result of a validation pass"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def merge(self, other: 'ValidationResult'):
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


class GridValidator:
    """Validates board shapes, press coordinates and record payloads"""

    RECORD_FIELDS = ('id', 'timestamp', 'time_spent', 'moves', 'initial_grid')

    @staticmethod
    def validate_rows(rows: Any) -> ValidationResult:
        """Validate a nested-list board before turning it into a Grid"""
        result = ValidationResult()

        if not isinstance(rows, (list, tuple)) or not rows:
            result.add_error("Grid must be a non-empty list of rows")
            return result

        n = len(rows)
        for i, row in enumerate(rows):
            if not isinstance(row, (list, tuple)):
                result.add_error(f"Row {i} is not a list")
                continue
            if len(row) != n:
                result.add_error(f"Row {i} has length {len(row)}, expected {n} (grid must be square)")
            for j, cell in enumerate(row):
                if not isinstance(cell, bool):
                    result.add_error(f"Cell ({i}, {j}) is not a boolean: {cell!r}")

        return result

    @staticmethod
    def validate_toggles(toggles: Sequence, size: int) -> ValidationResult:
        """Check every coordinate of a toggle set lies inside an size x size board"""
        result = ValidationResult()

        seen = set()
        for item in toggles:
            try:
                row, col = item
            except (TypeError, ValueError):
                result.add_error(f"Toggle {item!r} is not a (row, col) pair")
                continue
            if not (0 <= row < size and 0 <= col < size):
                result.add_error(f"Toggle ({row}, {col}) is outside a {size}x{size} grid")
            if (row, col) in seen:
                result.add_warning(f"Toggle ({row}, {col}) appears more than once and cancels out")
            seen.add((row, col))

        return result

    @staticmethod
    def validate_record(data: Mapping[str, Any]) -> ValidationResult:
        """Validate a stored session record dict"""
        result = ValidationResult()

        if not isinstance(data, Mapping):
            result.add_error(f"Record must be an object, got {type(data).__name__}")
            return result

        for key in GridValidator.RECORD_FIELDS:
            if key not in data:
                result.add_error(f"Record is missing field '{key}'")
        if not result:
            return result

        time_spent = data['time_spent']
        if (isinstance(time_spent, bool) or not isinstance(time_spent, (int, float))
                or not math.isfinite(time_spent) or time_spent < 0):
            result.add_error(f"Invalid time_spent: {time_spent!r}")
        if isinstance(data['moves'], bool) or not isinstance(data['moves'], int) or data['moves'] < 0:
            result.add_error(f"Invalid moves: {data['moves']!r}")
        if isinstance(data['timestamp'], bool) or not isinstance(data['timestamp'], int):
            result.add_error(f"Invalid timestamp: {data['timestamp']!r}")

        grid_result = GridValidator.validate_rows(data['initial_grid'])
        result.merge(grid_result)

        if 'grid_size' not in data:
            result.add_warning("Record has no grid_size; treating it as a legacy record")
        elif grid_result and data['grid_size'] != len(data['initial_grid']):
            result.add_error(
                f"grid_size {data['grid_size']} does not match initial grid size {len(data['initial_grid'])}"
            )

        return result

    @staticmethod
    def get_grid_statistics(grid: Grid) -> dict:
        """Get simple statistics about a board"""
        off = grid.count_off()
        total = grid.size * grid.size
        return {
            'size': grid.size,
            'cells': total,
            'lights_on': total - off,
            'lights_off': off,
            'off_ratio': off / total,
        }
