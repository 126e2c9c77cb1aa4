"""
Static visualization for Lights Out boards and history statistics.
"""

import matplotlib.pyplot as plt
import matplotlib.patches as patches
import seaborn as sns
from typing import Iterable, Optional, Tuple
from pathlib import Path

import config
from ..core.grid import Grid, Coordinate
from ..analysis.history_stats import HistoryStatSummary


class GridVisualizer:
    """Visualize boards and completion-time histograms"""

    def __init__(self, figsize: Tuple[int, int] = config.VIZ_FIGSIZE, dpi: int = config.VIZ_DPI,
                 style: str = 'darkgrid'):
        """
        Initialize visualizer.

        Args:
            figsize: Figure size in inches for boards
            dpi: Dots per inch for saved images
            style: Seaborn style for the histogram
        """
        self.figsize = figsize
        self.dpi = dpi
        self.style = style

        # Visual parameters
        self.cell_gap = 0.08
        self.on_color = '#FBBF24'
        self.off_color = '#3F3F46'
        self.hint_color = '#EF4444'
        self.background_color = '#18181B'

    def visualize(self, grid: Grid,
                  hints: Iterable[Coordinate] = (),
                  title: Optional[str] = None,
                  save_path: Optional[Path] = None,
                  show_plot: bool = False) -> plt.Figure:
        """
        Draw a board.

        Args:
            grid: The board to draw
            hints: Cells to outline as hints
            title: Optional title for the plot
            save_path: Optional path to save the image
            show_plot: Whether to display the plot

        Returns:
            The matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)
        fig.patch.set_facecolor(self.background_color)
        ax.set_facecolor(self.background_color)

        n = grid.size
        ax.set_xlim(0, n)
        ax.set_ylim(0, n)
        ax.set_aspect('equal')
        ax.invert_yaxis()

        hint_set = set(hints)
        side = 1 - 2 * self.cell_gap
        for r in range(n):
            for c in range(n):
                color = self.on_color if grid.cell(r, c) else self.off_color
                ax.add_patch(patches.FancyBboxPatch(
                    (c + self.cell_gap, r + self.cell_gap), side, side,
                    boxstyle='round,pad=0,rounding_size=0.1',
                    facecolor=color,
                    edgecolor=self.hint_color if (r, c) in hint_set else 'none',
                    linewidth=3,
                ))

        ax.set_xticks([])
        ax.set_yticks([])
        for spine in ax.spines.values():
            spine.set_visible(False)

        if title:
            ax.set_title(title, fontsize=14, color='white', pad=12)

        self._finish(fig, save_path, show_plot)
        return fig

    def plot_history(self, summary: HistoryStatSummary,
                     save_path: Optional[Path] = None,
                     show_plot: bool = False) -> plt.Figure:
        """
        Bar chart of the completion-time histogram.

        Args:
            summary: Statistics for one board size
            save_path: Optional path to save the image
            show_plot: Whether to display the plot
        """
        sns.set_style(self.style)
        fig, ax = plt.subplots(figsize=config.VIZ_HIST_FIGSIZE)

        labels = [b.label for b in summary.buckets]
        counts = [b.count for b in summary.buckets]
        colors = [self.hint_color if b.overflow else self.on_color for b in summary.buckets]
        ax.bar(labels, counts, color=colors, alpha=0.85)

        ax.set_xlabel('Completion time', fontsize=12)
        ax.set_ylabel('Games', fontsize=12)
        ax.set_title(
            f"{summary.grid_size}x{summary.grid_size}: {summary.total_games} games, "
            f"mean {summary.mean_time:.1f}s, best {summary.best_time:.1f}s",
            fontsize=13, pad=12,
        )
        ax.yaxis.get_major_locator().set_params(integer=True)
        plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
        plt.tight_layout()

        self._finish(fig, save_path, show_plot)
        return fig

    def _finish(self, fig: plt.Figure, save_path: Optional[Path], show_plot: bool):
        if save_path:
            save_path = Path(save_path)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight',
                        facecolor=fig.get_facecolor())

        if show_plot:
            plt.show()
        else:
            plt.close(fig)
