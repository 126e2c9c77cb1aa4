"""
Game history storage and statistics.
"""

from .history import HistoryStore, HistoryFileStore, HistoryFormatError
from .history_stats import (
    HistogramBucket, HistoryStatSummary,
    build_histogram, compute_history_stats,
    records_to_dataframe, summarize_by_size
)

__all__ = [
    # Storage
    'HistoryStore', 'HistoryFileStore', 'HistoryFormatError',

    # Statistics
    'HistogramBucket', 'HistoryStatSummary',
    'build_histogram', 'compute_history_stats',
    'records_to_dataframe', 'summarize_by_size',
]
