"""
Command line interface for Lights Out.

Usage:
    lightsout play --size 5
    lightsout play --replay <record-id>
    lightsout tutorial chase-intro --hint step
    lightsout history --size 5 --plot results/history.png
    lightsout generate --size 7 --seed 42
"""

import sys
from pathlib import Path

import click

import config
from .core.grid import Grid
from .core.session import GameSession
from .core.utils import GridConverter, setup_logger, format_time, format_timestamp
from .generators.level_generator import LevelGenerator, LevelGeneratorConfig
from .generators.tutorial import HintMode, TutorialSession, get_lesson, TUTORIAL_CATEGORIES
from .analysis.history import HistoryFileStore, HistoryFormatError
from .analysis.history_stats import compute_history_stats, records_to_dataframe


SIZE_OPTION = click.IntRange(config.MIN_GRID_SIZE, config.MAX_GRID_SIZE)


def _parse_move(text: str, size: int):
    """Parse 'row col' (or 'row,col'); returns None when malformed or out of range"""
    parts = text.replace(',', ' ').split()
    if len(parts) != 2:
        return None
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= row < size and 0 <= col < size):
        return None
    return row, col


def _render(grid: Grid, hints=()) -> str:
    text = GridConverter.to_string(grid, show_coordinates=True)
    if not hints:
        return text
    lines = text.split('\n')
    width = len(str(grid.size - 1)) + 1
    for r, c in hints:
        line = lines[r + 1]
        pos = width + 2 * c
        lines[r + 1] = line[:pos] + ('x' if not grid.cell(r, c) else '*') + line[pos + 1:]
    return '\n'.join(lines)


def _load_store(file_store: HistoryFileStore):
    try:
        return file_store.load()
    except HistoryFormatError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option('--verbose', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx, verbose):
    """Lights Out: turn every light on."""
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = "DEBUG" if verbose else "WARNING"
    ctx.obj['logger'] = setup_logger("LightsOut", level=ctx.obj['log_level'])


@main.command()
@click.option('--size', '-s', type=SIZE_OPTION, default=config.DEFAULT_GRID_SIZE,
              help='Board size (N x N)')
@click.option('--difficulty', '-d', type=click.IntRange(min=0), default=None,
              help='Number of scramble presses (default: proportional to board area)')
@click.option('--seed', type=int, default=None, help='Random seed for reproducibility')
@click.option('--replay', 'replay_id', default=None, metavar='RECORD_ID',
              help='Replay the starting board of a recorded game; the replay is not recorded')
@click.option('--history-file', type=click.Path(dir_okay=False), default=str(config.HISTORY_FILE),
              help='Where finished games are recorded')
@click.pass_context
def play(ctx, size, difficulty, seed, replay_id, history_file):
    """Play a random board. Enter 'row col' to press, 'r' to reset, 'q' to quit."""
    log_level = ctx.obj['log_level']
    file_store = HistoryFileStore(history_file, log_level=log_level)

    if replay_id is not None:
        record = _load_store(file_store).find(replay_id)
        if record is None:
            click.echo(f"Error: no recorded game with id {replay_id}", err=True)
            sys.exit(1)
        session = GameSession(record.initial_grid, record_history=False, log_level=log_level)
        _play_loop(session, record.initial_grid.size)
        if session.is_won:
            click.echo(f"Replay solved in {session.moves} moves, {format_time(session.elapsed)} (not recorded)")
        return

    generator = LevelGenerator(LevelGeneratorConfig(random_seed=seed, log_level=log_level))
    level = generator.generate(size, difficulty)
    ctx.obj['logger'].debug(f"Generated {size}x{size} board with {level.difficulty} presses")

    session = GameSession(level.grid, log_level=log_level)
    session.on_win(file_store.append)
    _play_loop(session, size)

    if session.record is not None:
        record = session.record
        click.echo(f"Solved in {record.moves} moves, {format_time(record.time_spent)}")
        click.echo(f"Recorded to {file_store.path}")


def _play_loop(session: GameSession, size: int):
    while not session.is_won:
        click.echo(_render(session.grid))
        click.echo(f"Moves: {session.moves}")
        answer = click.prompt('Move', default='q', show_default=False).strip().lower()
        if answer in ('q', 'quit'):
            click.echo("Bye.")
            return
        if answer in ('r', 'reset'):
            session.reset()
            continue
        move = _parse_move(answer, size)
        if move is None:
            click.echo(f"Enter a row and column between 0 and {size - 1}, e.g. '1 2'")
            continue
        session.toggle(*move)

    click.echo(_render(session.grid))


@main.command()
@click.argument('lesson_id', required=False)
@click.option('--hint', type=click.Choice([m.value for m in HintMode]), default=None,
              help='Show hints: step (next row only) or full (every pending press)')
@click.pass_context
def tutorial(ctx, lesson_id, hint):
    """List tutorial lessons, or play LESSON_ID."""
    if lesson_id is None:
        for category in TUTORIAL_CATEGORIES:
            click.echo(category.title)
            for lesson in category.lessons:
                click.echo(f"  {lesson.id:<14} {lesson.title}")
        return

    try:
        lesson = get_lesson(lesson_id)
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        sys.exit(1)

    session = TutorialSession(lesson, log_level=ctx.obj['log_level'])
    mode = HintMode(hint) if hint else None
    click.echo(lesson.title)
    click.echo(lesson.description)

    while not session.is_won:
        hints = session.hint_cells(mode) if mode else ()
        click.echo(_render(session.grid, hints))
        if mode and session.hint_row() is not None:
            click.echo(f"Hint: work on row {session.hint_row()}")
        answer = click.prompt('Move', default='q', show_default=False).strip().lower()
        if answer in ('q', 'quit'):
            return
        if answer in ('r', 'reset'):
            session.reset()
            continue
        move = _parse_move(answer, lesson.size)
        if move is None:
            click.echo(f"Enter a row and column between 0 and {lesson.size - 1}")
            continue
        session.toggle(*move)

    click.echo(_render(session.grid))
    click.echo("Excellent!")


@main.command()
@click.option('--size', '-s', type=SIZE_OPTION, default=config.DEFAULT_GRID_SIZE,
              help='Board size to report on')
@click.option('--history-file', type=click.Path(dir_okay=False), default=str(config.HISTORY_FILE))
@click.option('--limit', '-n', type=click.IntRange(min=0), default=config.HISTORY_PAGE_SIZE,
              help='Number of recent games to list')
@click.option('--plot', type=click.Path(dir_okay=False), default=None,
              help='Save a histogram image to this path')
@click.option('--export', type=click.Path(dir_okay=False), default=None,
              help='Export all records to CSV')
@click.option('--clear', is_flag=True, help='Delete the whole history')
@click.pass_context
def history(ctx, size, history_file, limit, plot, export, clear):
    """Show statistics for past games."""
    file_store = HistoryFileStore(history_file, log_level=ctx.obj['log_level'])

    if clear:
        click.confirm(f"Delete every record in {file_store.path}?", abort=True)
        file_store.clear()
        click.echo("History cleared.")
        return

    store = _load_store(file_store)

    if export:
        records_to_dataframe(store).to_csv(export, index=False)
        click.echo(f"Exported {len(store)} records to {export}")

    summary = compute_history_stats(store, size)
    if summary is None:
        click.echo(f"No {size}x{size} games recorded yet.")
        return

    click.echo(f"Games: {summary.total_games}")
    click.echo(f"Average: {format_time(summary.mean_time)}")
    click.echo(f"Best: {format_time(summary.best_time)}")
    click.echo("")
    peak = max(b.count for b in summary.buckets) or 1
    for bucket in summary.buckets:
        bar = '#' * round(30 * bucket.count / peak)
        click.echo(f"{bucket.label:>12} | {bar} {bucket.count}")

    recent = store.recent(size, limit=limit)
    if recent:
        click.echo("")
        click.echo(f"Recent games ({size}x{size})")
        for record in recent:
            click.echo(f"  {format_timestamp(record.timestamp)}  "
                       f"{format_time(record.time_spent):>10}  {record.moves:>4} moves")

    if plot:
        from .visualization.grid_viz import GridVisualizer
        GridVisualizer().plot_history(summary, save_path=Path(plot))
        click.echo(f"Histogram saved to {plot}")


@main.command()
@click.option('--size', '-s', type=SIZE_OPTION, default=config.DEFAULT_GRID_SIZE)
@click.option('--difficulty', '-d', type=click.IntRange(min=0), default=None)
@click.option('--seed', type=int, default=None)
@click.option('--show-solution', is_flag=True, help='Also print the scramble presses')
@click.option('--save-image', type=click.Path(dir_okay=False), default=None)
@click.pass_context
def generate(ctx, size, difficulty, seed, show_solution, save_image):
    """Print a freshly generated board."""
    generator = LevelGenerator(LevelGeneratorConfig(random_seed=seed, log_level=ctx.obj['log_level']))
    level = generator.generate(size, difficulty)
    ctx.obj['logger'].debug(f"Generated {size}x{size} board with {level.difficulty} presses")

    click.echo(GridConverter.to_string(level.grid))
    if show_solution:
        click.echo(f"Presses ({level.difficulty}): " +
                   ' '.join(f"{r},{c}" for r, c in level.toggles))

    if save_image:
        from .visualization.grid_viz import GridVisualizer
        GridVisualizer().visualize(level.grid, title=f"{size}x{size}", save_path=Path(save_image))
        click.echo(f"Board saved to {save_image}")


if __name__ == '__main__':
    main()
