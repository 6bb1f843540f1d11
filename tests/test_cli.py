from __future__ import annotations

from pathlib import Path

import openpyxl
import pytest

import run_scheduler
from supervision.parse_inputs import parse_workbook
from supervision.solver import solve
from tests.utils import assert_invariants, make_names, small_config


def _names_csv(tmp_path: Path, names) -> Path:
    path = tmp_path / "names.csv"
    path.write_text("\n".join(names) + "\n", encoding="utf-8")
    return path


def test_setup_then_distribute(tmp_path: Path, capsys) -> None:
    names = make_names(10)
    workbook = tmp_path / "supervisors.xlsx"
    out = tmp_path / "distribution.xlsx"

    run_scheduler.main(["setup", "--workbook", str(workbook), "--names", str(_names_csv(tmp_path, names))])
    run_scheduler.main([
        "distribute", "--workbook", str(workbook), "--out", str(out), "--seed", "3",
        "--two-person-rooms", "2", "--one-person-rooms", "1", "--days", "2",
    ])

    printed = capsys.readouterr().out
    assert "Read 10 name(s)" in printed
    assert "Validation: OK" in printed

    wb = openpyxl.load_workbook(out)
    assert wb.sheetnames == ["DISTRIBUTION", "ROOMS"]
    ws = wb["DISTRIBUTION"]
    assert [ws.cell(r, 1).value for r in range(2, 12)] == names
    assert [c.value for c in ws[1]] == ["Candidate", "Day 1", "Day 2"]


def test_distribute_from_a_bare_csv(tmp_path: Path) -> None:
    names = make_names(12)
    path = _names_csv(tmp_path, names)
    out = tmp_path / "result.xlsx"

    run_scheduler.main([
        "distribute", "--workbook", str(path), "--out", str(out), "--seed", "8",
        "--two-person-rooms", "2", "--one-person-rooms", "2", "--days", "2",
    ])

    assert out.exists()
    # Same seed, same result
    config = small_config(two=2, one=2, days=2)
    distribution, _, _ = solve(parse_workbook(str(path)).candidates, config, random_seed=8)
    assert_invariants(distribution, config)
    ws = openpyxl.load_workbook(out)["ROOMS"]
    assert ws.cell(2, 3).value == ", ".join(distribution[0].rooms["Room 1"])


def test_exhausted_run_writes_conflicts(tmp_path: Path, capsys) -> None:
    path = _names_csv(tmp_path, ["A", "B"])
    out = tmp_path / "distribution.xlsx"

    with pytest.raises(SystemExit) as exc:
        run_scheduler.main([
            "distribute", "--workbook", str(path), "--out", str(out), "--attempts", "5",
            "--two-person-rooms", "0", "--one-person-rooms", "1", "--days", "3",
        ])

    assert exc.value.code == 1
    assert "Distribution FAILED: ATTEMPTS_EXHAUSTED" in capsys.readouterr().out
    wb = openpyxl.load_workbook(out)
    assert wb.sheetnames == ["CONFLICTS"]
    assert "after 5 attempts" in wb["CONFLICTS"].cell(2, 1).value


def test_review_lists_candidates_and_warns(tmp_path: Path, capsys) -> None:
    workbook = tmp_path / "supervisors.xlsx"
    run_scheduler.main(["setup", "--workbook", str(workbook), "--names", str(_names_csv(tmp_path, ["Alice", "Bob"]))])
    capsys.readouterr()

    run_scheduler.main(["review", "--workbook", str(workbook)])

    printed = capsys.readouterr().out
    assert "1. Alice" in printed
    assert "2. Bob" in printed
    assert "Only 2 candidate(s) found for 41 slots per day" in printed


def test_missing_workbook_exits(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        run_scheduler.main(["review", "--workbook", str(tmp_path / "nope.xlsx")])

    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().out


def test_no_command_prints_help() -> None:
    with pytest.raises(SystemExit) as exc:
        run_scheduler.main([])

    assert exc.value.code == 1
