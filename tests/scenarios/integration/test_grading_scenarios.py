"""End-to-end grading scenarios against a stand-in cargo executable."""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path

import pytest
from cargo_test_grader.cli import main

pytestmark = pytest.mark.skipif(sys.platform.startswith("win"), reason="needs a POSIX shell")

_FAKE_CARGO = r"""#!/bin/sh
# Arguments: test <filter> -- -Z unstable-options --format=json --test-threads=N
echo "$@" >> invocations.log
case "$2" in
  unit)
    printf '%s\n' '{ "type": "suite", "event": "started", "test_count": 2 }'
    printf '%s\n' '{ "type": "test", "event": "started", "name": "unit::adds" }'
    printf '%s\n' '{ "type": "test", "name": "unit::adds", "event": "ok" }'
    printf '%s\n' 'note: this line is not JSON'
    printf '%s\n' '{ "type": "test", "event": "started", "name": "unit::divides" }'
    printf '%s\n' '{ "type": "test", "name": "unit::divides", "event": "failed", "stdout": "thread panicked at src/lib.rs:9:5:\nattempt to divide by zero\n" }'
    printf '%s\n' '{ "type": "suite", "event": "failed", "passed": 1, "failed": 1 }'
    exit 101
    ;;
  broken)
    echo "error[E0425]: cannot find value \`x\` in this scope" >&2
    exit 101
    ;;
  thirds)
    for name in a b c; do
      echo "{ \"type\": \"test\", \"name\": \"thirds::$name\", \"event\": \"ok\" }"
    done
    ;;
  *)
    printf '%s\n' '{ "type": "suite", "event": "ok", "passed": 0, "failed": 0 }'
    ;;
esac
"""


def _install_fake_cargo(tmp_path: Path) -> Path:
    cargo = tmp_path / "bin" / "cargo"
    cargo.parent.mkdir()
    cargo.write_text(_FAKE_CARGO, encoding="utf-8")
    cargo.chmod(cargo.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return cargo


def _write_settings(tmp_path: Path, cargo: Path) -> Path:
    crate = tmp_path / "crate"
    crate.mkdir()
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        f"""
target: crate
runner:
  cargo: "{cargo}"
  timeout_seconds: 30
suites:
  - {{number: "1", name: Unit, points: 2.0, filter: unit}}
  - {{number: "2", name: Build, points: 5.0, filter: broken}}
  - {{number: "3", name: Thirds, points: 1.0, filter: thirds}}
  - {{number: "4", name: Missing, points: 4.0, filter: nothing-matches}}
""",
        encoding="utf-8",
    )
    return settings


def test_grade_produces_gradescope_report(tmp_path: Path, capsys) -> None:
    cargo = _install_fake_cargo(tmp_path)
    settings = _write_settings(tmp_path, cargo)
    results_path = tmp_path / "results" / "results.json"

    exit_code = main(["grade", str(settings), "--output", str(results_path)])
    captured = capsys.readouterr()

    assert exit_code == 0
    report = json.loads(captured.out)
    assert json.loads(results_path.read_text(encoding="utf-8")) == report

    assert [test["number"] for test in report["tests"]] == ["1.1", "1.2", "3.1", "3.2", "3.3"]
    assert report["tests"][0] == {
        "number": "1.1",
        "name": "Unit - unit::adds",
        "score": 1.0,
        "max_score": 1.0,
        "output": "",
    }
    assert report["tests"][1]["score"] == 0.0
    assert report["tests"][1]["output"] == (
        "thread panicked at src/lib.rs:9:5:\nattempt to divide by zero\n"
    )
    assert [test["max_score"] for test in report["tests"][2:]] == [0.33, 0.33, 0.33]
    assert "exit code 101" in report["output"]
    assert "cannot find value" in report["output"]


def test_suites_run_one_after_another_in_order(tmp_path: Path, capsys) -> None:
    cargo = _install_fake_cargo(tmp_path)
    settings = _write_settings(tmp_path, cargo)

    assert main(["grade", str(settings)]) == 0
    capsys.readouterr()

    invocations = (tmp_path / "crate" / "invocations.log").read_text(encoding="utf-8").splitlines()
    assert [line.split()[1] for line in invocations] == [
        "unit",
        "broken",
        "thirds",
        "nothing-matches",
    ]
    assert all(line.endswith("--format=json --test-threads=1") for line in invocations)


def test_grade_without_settings_path_exits_with_usage(capsys) -> None:
    assert main(["grade"]) == 2
    assert "Usage:" in capsys.readouterr().err
