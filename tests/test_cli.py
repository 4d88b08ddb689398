import logging
from pathlib import Path

import pytest

from schedsim.cli import build_parser, main


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "processes.csv"
    p.write_text("1,5,0,2\n2,9,1,1\n3,6,2,3\n")
    return p


def test_run_prints_every_algorithm(workload, capsys):
    assert main(["run", str(workload)]) == 0
    out = capsys.readouterr().out
    for title in ("First-come, first-serve", "Shortest-job-first", "Priority", "Round-robin"):
        assert title in out
    assert "Throughput" in out
    assert "Schedule table" in out


def test_run_plain_gantt(workload, capsys):
    assert main(["run", str(workload), "-a", "fcfs", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt schedule" in out
    assert "|   1   |   2   |   3   |" in out
    assert "5.33" in out  # average wait (0 + 4 + 12) / 3
    assert "Round-robin" not in out


def test_compare(workload, capsys):
    assert main(["compare", str(workload), "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "Round-robin" in out


def test_empty_workload_reports_error(tmp_path: Path, capsys):
    p = tmp_path / "empty.csv"
    p.write_text("")
    assert main(["run", str(p)]) == 1
    assert "no processes" in capsys.readouterr().out


def test_missing_file(tmp_path: Path, capsys):
    assert main(["run", str(tmp_path / "nope.csv")]) == 1
    assert "Cannot read workload" in capsys.readouterr().out


def test_strict_rejects_unsorted(tmp_path: Path, capsys):
    p = tmp_path / "unsorted.csv"
    p.write_text("1,2,3\n2,1,0\n")
    assert main(["run", str(p), "-a", "fcfs", "--strict"]) == 1
    assert "must be sorted" in capsys.readouterr().out


def test_invalid_quantum_is_a_usage_error(workload):
    with pytest.raises(SystemExit) as exc:
        main(["run", str(workload), "-q", "0"])
    assert exc.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args(["run", "w.csv"])
    assert args.algorithms == ["fcfs", "sjf", "priority", "rr"]
    assert args.quantum == 6
    assert args.gantt == "coarse"


@pytest.mark.parametrize("name", ["bad.csv", "bad.json"])
def test_invalid_utf8_workload_reports_error(tmp_path: Path, capsys, name):
    p = tmp_path / name
    p.write_bytes(b"1,5,0\n\xff\xfe,3,1\n")
    assert main(["run", str(p)]) == 1
    assert "not valid UTF-8" in capsys.readouterr().out


def test_verbose_logs_scheduling_decisions(workload, caplog):
    assert main(["-v", "run", str(workload), "-a", "sjf"]) == 0
    debug = [r for r in caplog.records if r.name == "schedsim.algorithms" and r.levelno == logging.DEBUG]
    assert any("completed at" in r.getMessage() for r in debug)


def test_quiet_run_hides_debug_decisions(workload, caplog):
    assert main(["run", str(workload), "-a", "sjf"]) == 0
    assert not [r for r in caplog.records if r.levelno == logging.DEBUG]


def test_compare_shows_makespan_and_cpu_busy(workload, capsys):
    assert main(["compare", str(workload), "-a", "fcfs"]) == 0
    out = capsys.readouterr().out
    assert "First-come, first-serve" in out
    assert "CPU busy" in out
    assert "20" in out  # makespan and busy time for bursts 5 + 9 + 6
