"""
Summary statistics and completion-time histogram for game history.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

import config
from ..core.session import SessionRecord


@dataclass(frozen=True)
class HistogramBucket:
    """Half-open time range [lower, upper); the overflow bucket has no upper bound"""
    lower: int
    upper: Optional[int]
    count: int
    overflow: bool = False

    @property
    def label(self) -> str:
        if self.overflow:
            return f">{self.lower}s"
        return f"{self.lower}-{self.upper}s"

    def contains(self, value: float) -> bool:
        if self.overflow:
            return value >= self.lower
        return self.lower <= value < self.upper


@dataclass
class HistoryStatSummary:
    """Statistics over the games played on one board size"""
    grid_size: int
    total_games: int
    mean_time: float
    best_time: float
    buckets: List[HistogramBucket] = field(default_factory=list)
    has_outliers: bool = False
    threshold: float = 0.0

    @property
    def overflow_bucket(self) -> Optional[HistogramBucket]:
        if self.buckets and self.buckets[-1].overflow:
            return self.buckets[-1]
        return None

    def to_dict(self) -> dict:
        return {
            'grid_size': self.grid_size,
            'total_games': self.total_games,
            'mean_time': self.mean_time,
            'best_time': self.best_time,
            'has_outliers': self.has_outliers,
            'threshold': self.threshold,
            'buckets': [
                {'range': b.label, 'lower': b.lower, 'upper': b.upper, 'count': b.count}
                for b in self.buckets
            ],
        }


def build_histogram(times: Iterable[float],
                    target_bins: int = config.HISTOGRAM_TARGET_BINS,
                    percentile: float = config.OUTLIER_PERCENTILE,
                    outlier_factor: float = config.OUTLIER_FACTOR):
    """
    Bin completion times, folding slow outliers into one overflow bucket.

    The regular buckets span the minimum time up to either the maximum time
    or, when the maximum is beyond `outlier_factor` times the percentile
    time, that cut-off. Bucket edges are multiples of the width so labels
    stay round. Every time is counted exactly once.

    Args:
        times: Completion times in seconds (non-empty)
        target_bins: Approximate number of regular buckets
        percentile: Percentile used for the outlier cut-off
        outlier_factor: Multiplier applied to the percentile time

    Returns:
        (buckets, has_outliers, threshold)
    """
    times = np.sort(np.asarray(list(times), dtype=float))
    if times.size == 0:
        raise ValueError("Cannot build a histogram from no times")

    min_time = float(times[0])
    max_time = float(times[-1])

    # 'lower' takes sorted index floor(p * (n - 1)), so one slow run among ten still splits off
    p_time = float(np.percentile(times, percentile, method='lower'))
    threshold = p_time * outlier_factor
    has_outliers = max_time > threshold
    effective_max = threshold if has_outliers else max_time

    width = max(1, math.ceil((effective_max - min_time + 1) / target_bins))
    start = math.floor(min_time / width) * width
    end = math.ceil((effective_max + 1) / width) * width

    buckets = []
    for low in range(start, end, width):
        high = low + width
        count = int(np.searchsorted(times, high, side='left') - np.searchsorted(times, low, side='left'))
        buckets.append(HistogramBucket(low, high, count))

    if has_outliers:
        overflow = int(times.size - np.searchsorted(times, end, side='left'))
        if overflow > 0:
            buckets.append(HistogramBucket(end, None, overflow, overflow=True))

    return buckets, has_outliers, threshold


def compute_history_stats(records: Iterable[SessionRecord],
                          grid_size: int) -> Optional[HistoryStatSummary]:
    """
    Summarise the games played on one board size.

    Args:
        records: All stored records (any size)
        grid_size: Board size to report on

    Returns:
        The summary, or None when no game of that size was played
    """
    times = [r.time_spent for r in records if r.grid_size == grid_size]
    if not times:
        return None

    buckets, has_outliers, threshold = build_histogram(times)

    return HistoryStatSummary(
        grid_size=grid_size,
        total_games=len(times),
        mean_time=float(np.mean(times)),
        best_time=float(min(times)),
        buckets=buckets,
        has_outliers=has_outliers,
        threshold=threshold,
    )


def records_to_dataframe(records: Iterable[SessionRecord]) -> pd.DataFrame:
    """Tabulate records (one row per game) for export and analysis"""
    rows = [
        {
            'id': r.id,
            'timestamp': pd.to_datetime(r.timestamp, unit='ms'),
            'grid_size': r.grid_size,
            'time_spent': r.time_spent,
            'moves': r.moves,
            'initial_off': r.initial_grid.count_off(),
        }
        for r in records
    ]
    columns = ['id', 'timestamp', 'grid_size', 'time_spent', 'moves', 'initial_off']
    return pd.DataFrame(rows, columns=columns)


def summarize_by_size(records: Iterable[SessionRecord]) -> pd.DataFrame:
    """Games, mean/best time and mean moves per board size"""
    df = records_to_dataframe(records)
    if df.empty:
        return pd.DataFrame(columns=['games', 'mean_time', 'best_time', 'mean_moves'])

    grouped = df.groupby('grid_size').agg(
        games=('id', 'count'),
        mean_time=('time_spent', 'mean'),
        best_time=('time_spent', 'min'),
        mean_moves=('moves', 'mean'),
    )
    return grouped
