import matplotlib

from lightsout.analysis.history_stats import compute_history_stats
from lightsout.core.grid import create_solved, toggle
from lightsout.visualization.grid_viz import GridVisualizer


def test_visualize_board(tmp_path):
    path = tmp_path / "board.png"
    fig = GridVisualizer(dpi=50).visualize(toggle(create_solved(4), 1, 1), hints=[(1, 1)],
                                           title="4x4", save_path=path)
    assert isinstance(fig, matplotlib.figure.Figure)
    assert path.exists()


def test_plot_history(tmp_path, make_record):
    summary = compute_history_stats([make_record(1.0) for _ in range(9)] + [make_record(100.0)], 5)
    path = tmp_path / "plots" / "history.png"
    GridVisualizer(dpi=50).plot_history(summary, save_path=path)
    assert path.exists()
