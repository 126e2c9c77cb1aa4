import json

import pytest

from lightsout.analysis.history import HistoryStore, HistoryFileStore, HistoryFormatError


def test_store_append_filter_and_clear(make_record):
    store = HistoryStore()
    store.append(make_record(10.0, grid_size=5))
    store.append(make_record(20.0, grid_size=3))
    store.append(make_record(30.0, grid_size=5))

    assert len(store) == 3
    assert [r.time_spent for r in store.for_size(5)] == [10.0, 30.0]
    assert store.sizes() == [3, 5]

    store.clear()
    assert len(store) == 0
    assert store.for_size(5) == []


def test_recent_is_newest_first_with_paging(make_record):
    store = HistoryStore(make_record(float(i)) for i in range(25))
    page = store.recent(5, limit=10)
    assert [r.time_spent for r in page] == [float(i) for i in range(24, 14, -1)]

    next_page = store.recent(5, limit=10, offset=20)
    assert [r.time_spent for r in next_page] == [4.0, 3.0, 2.0, 1.0, 0.0]
    assert store.recent(3) == []


def test_missing_file_is_empty_history(tmp_path):
    store = HistoryFileStore(tmp_path / "none.json").load()
    assert len(store) == 0


def test_file_store_save_and_load(tmp_path, make_record):
    path = tmp_path / "data" / "history.json"
    file_store = HistoryFileStore(path)
    records = [make_record(12.5, grid_size=4, moves=7), make_record(8.0, grid_size=5)]
    file_store.save(HistoryStore(records))

    assert path.exists()
    loaded = list(file_store.load())
    assert loaded == records

    data = json.loads(path.read_text())
    assert len(data['records']) == 2


def test_file_store_append_and_clear(tmp_path, make_record):
    file_store = HistoryFileStore(tmp_path / "history.json")
    file_store.append(make_record(1.0))
    file_store.append(make_record(2.0))
    assert len(file_store.load()) == 2

    file_store.clear()
    assert len(file_store.load()) == 0


def test_legacy_list_document_and_missing_size(tmp_path, make_record):
    data = make_record(5.0).to_dict()
    del data['grid_size']
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps([data]))

    store = HistoryFileStore(path).load()
    assert [r.grid_size for r in store] == [5]


def test_malformed_files_raise(tmp_path, make_record):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(HistoryFormatError):
        HistoryFileStore(path).load()

    path.write_text(json.dumps({"games": []}))
    with pytest.raises(HistoryFormatError):
        HistoryFileStore(path).load()

    bad_record = make_record(1.0).to_dict()
    bad_record['initial_grid'] = [[True, True], [True]]
    path.write_text(json.dumps({"records": [bad_record]}))
    with pytest.raises(HistoryFormatError):
        HistoryFileStore(path).load()

    path.write_bytes(b'\xff\xfe{"records": []}')
    with pytest.raises(HistoryFormatError):
        HistoryFileStore(path).load()


def test_records_with_bad_scalar_fields_raise(tmp_path, make_record):
    path = tmp_path / "bad.json"
    for field, value in [('timestamp', None), ('timestamp', "yesterday"), ('timestamp', True),
                         ('time_spent', float('nan')), ('time_spent', float('inf')),
                         ('time_spent', False), ('moves', True), ('moves', 2.5)]:
        record = make_record(1.0).to_dict()
        record[field] = value
        path.write_text(json.dumps({"records": [record]}))
        with pytest.raises(HistoryFormatError):
            HistoryFileStore(path).load()


def test_find_by_id(make_record):
    first, second = make_record(1.0), make_record(2.0)
    store = HistoryStore([first, second])
    assert store.find(second.id) == second
    assert store.find("no-such-id") is None
