import json

from click.testing import CliRunner

from lightsout.cli import main
from lightsout.analysis.history import HistoryFileStore, HistoryStore


def test_play_records_a_win(tmp_path):
    history_file = tmp_path / "history.json"
    runner = CliRunner()
    # A 1x1 board is always a single dark light after generation
    result = runner.invoke(main, ['play', '--size', '1', '--difficulty', '0',
                                  '--history-file', str(history_file)], input="0 0\n")

    assert result.exit_code == 0, result.output
    assert "Solved in 1 moves" in result.output

    records = list(HistoryFileStore(history_file).load())
    assert len(records) == 1
    assert records[0].grid_size == 1
    assert records[0].moves == 1


def test_play_quit_and_bad_input(tmp_path):
    history_file = tmp_path / "history.json"
    result = CliRunner().invoke(main, ['play', '--size', '3', '--seed', '1',
                                       '--history-file', str(history_file)],
                                input="9 9\nhello\nr\nq\n")
    assert result.exit_code == 0, result.output
    assert "Enter a row and column between 0 and 2" in result.output
    assert "Bye." in result.output
    assert not history_file.exists()


def test_play_rejects_size_out_of_range(tmp_path):
    result = CliRunner().invoke(main, ['play', '--size', '16'])
    assert result.exit_code != 0


def test_tutorial_lists_lessons():
    result = CliRunner().invoke(main, ['tutorial'])
    assert result.exit_code == 0
    assert "Basics" in result.output
    assert "chase-intro" in result.output
    assert "01110" in result.output


def test_tutorial_play_with_hints():
    result = CliRunner().invoke(main, ['tutorial', 'basic', '--hint', 'step'], input="2 2\n")
    assert result.exit_code == 0, result.output
    assert "Hint: work on row 2" in result.output
    assert "Excellent!" in result.output


def test_tutorial_unknown_lesson():
    result = CliRunner().invoke(main, ['tutorial', 'missing'])
    assert result.exit_code == 1


def test_history_summary(tmp_path, make_record):
    history_file = tmp_path / "history.json"
    records = [make_record(1.0) for _ in range(9)] + [make_record(100.0)]
    HistoryFileStore(history_file).save(HistoryStore(records))

    result = CliRunner().invoke(main, ['history', '--size', '5', '--history-file', str(history_file)])
    assert result.exit_code == 0, result.output
    assert "Games: 10" in result.output
    assert "Best: 0:01.000" in result.output
    assert ">3s" in result.output
    assert "Recent games (5x5)" in result.output


def test_history_empty_and_export(tmp_path, make_record):
    history_file = tmp_path / "history.json"
    result = CliRunner().invoke(main, ['history', '--history-file', str(history_file)])
    assert result.exit_code == 0
    assert "No 5x5 games recorded yet." in result.output

    HistoryFileStore(history_file).save(HistoryStore([make_record(4.0, grid_size=3)]))
    export = tmp_path / "out.csv"
    result = CliRunner().invoke(main, ['history', '--size', '3', '--history-file', str(history_file),
                                       '--export', str(export)])
    assert result.exit_code == 0, result.output
    assert export.exists()
    assert "time_spent" in export.read_text().splitlines()[0]


def test_history_clear(tmp_path, make_record):
    history_file = tmp_path / "history.json"
    HistoryFileStore(history_file).save(HistoryStore([make_record(4.0)]))

    result = CliRunner().invoke(main, ['history', '--clear', '--history-file', str(history_file)],
                                input="y\n")
    assert result.exit_code == 0, result.output
    assert json.loads(history_file.read_text()) == {"records": []}


def test_history_malformed_file(tmp_path):
    history_file = tmp_path / "history.json"
    history_file.write_text("oops")
    result = CliRunner().invoke(main, ['history', '--history-file', str(history_file)])
    assert result.exit_code == 1


def test_generate_prints_board():
    result = CliRunner().invoke(main, ['generate', '--size', '4', '--seed', '3', '--show-solution'])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert all(len(line) == 4 for line in lines[:4])
    assert lines[4].startswith("Presses (")


def test_play_keeps_session_logs_quiet(tmp_path):
    result = CliRunner().invoke(main, ['play', '--size', '1', '--difficulty', '0',
                                       '--history-file', str(tmp_path / "history.json")], input="0 0\n")
    assert result.exit_code == 0, result.output
    assert "Solved 1x1" not in result.output

    result = CliRunner().invoke(main, ['tutorial', 'basic'], input="2 2\n")
    assert result.exit_code == 0, result.output
    assert "completed" not in result.output


def test_play_replay_is_not_recorded(tmp_path, make_record):
    history_file = tmp_path / "history.json"
    record = make_record(3.0, grid_size=1)
    HistoryFileStore(history_file).save(HistoryStore([record]))

    result = CliRunner().invoke(main, ['play', '--replay', record.id,
                                       '--history-file', str(history_file)], input="0 0\n")
    assert result.exit_code == 0, result.output
    assert "not recorded" in result.output

    records = list(HistoryFileStore(history_file).load())
    assert records == [record]


def test_play_replay_unknown_record(tmp_path, make_record):
    history_file = tmp_path / "history.json"
    HistoryFileStore(history_file).save(HistoryStore([make_record(3.0)]))
    result = CliRunner().invoke(main, ['play', '--replay', 'missing',
                                       '--history-file', str(history_file)])
    assert result.exit_code == 1


def test_history_rejects_non_finite_times(tmp_path, make_record):
    history_file = tmp_path / "history.json"
    record = make_record(1.0, grid_size=1).to_dict()
    record['time_spent'] = float('nan')
    history_file.write_text(json.dumps({"records": [record]}))

    result = CliRunner().invoke(main, ['history', '--size', '1', '--history-file', str(history_file)])
    assert result.exit_code == 1
