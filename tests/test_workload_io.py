from pathlib import Path

import pytest

from schedsim.errors import WorkloadError
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"id":2,"arrival":1,"burst":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1] == Process(2, arrival_time=1, burst_time=2, priority=0)


def test_load_positional_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2,3,1\n\n3, 8, 2, 3\n")
    procs = load_workload(p)
    assert procs == [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=0),
        Process(3, arrival_time=2, burst_time=8, priority=3),
    ]


def test_load_csv_with_header(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\n1,0,3,1\n2,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[1].arrival_time == 1
    assert procs[1].priority == 0


def test_load_empty_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("")
    assert load_workload(p) == []


@pytest.mark.parametrize(
    "content",
    [
        "1,five,0\n",
        "1,5\n",
        "1,5,0,2,9\n",
        "1,0,0\n",
        "1,5,-2\n",
        "1,5,0,high\n",
        "pid,arrival_time\n1,0\n",
    ],
)
def test_malformed_csv(tmp_path: Path, content):
    p = tmp_path / "w.csv"
    p.write_text(content)
    with pytest.raises(WorkloadError):
        load_workload(p)


@pytest.mark.parametrize("content", ['{"pid": 1}', "[1, 2]", "[{", '[{"pid": true, "arrival_time": 0, "burst_time": 1}]'])
def test_malformed_json(tmp_path: Path, content):
    p = tmp_path / "w.json"
    p.write_text(content)
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("1,5,0\n")
    with pytest.raises(WorkloadError):
        load_workload(p)


@pytest.mark.parametrize("name", ["w.csv", "w.json"])
def test_invalid_utf8_is_a_workload_error(tmp_path: Path, name):
    p = tmp_path / name
    p.write_bytes(b"1,5,0\n\xff\xfe,3,1\n")
    with pytest.raises(WorkloadError, match="not valid UTF-8"):
        load_workload(p)


@pytest.mark.parametrize("burst", ["2.9", "0.5"])
def test_fractional_json_numbers_are_rejected(tmp_path: Path, burst):
    p = tmp_path / "w.json"
    p.write_text(f'[{{"pid":1,"arrival_time":0,"burst_time":{burst}}}]')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_whole_json_floats_are_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0.0,"burst_time":3.0}]')
    assert load_workload(p) == [Process(1, arrival_time=0, burst_time=3)]


def test_csv_header_with_byte_order_mark(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes("pid,arrival_time,burst_time\n1,0,3\n".encode("utf-8-sig"))
    assert load_workload(p) == [Process(1, arrival_time=0, burst_time=3)]


@pytest.mark.parametrize("row", ["1,0,3,1,7", "1,0"])
def test_headed_csv_row_length_must_match_header(tmp_path: Path, row):
    p = tmp_path / "w.csv"
    p.write_text(f"pid,arrival_time,burst_time,priority\n{row}\n")
    with pytest.raises(WorkloadError, match="columns"):
        load_workload(p)
