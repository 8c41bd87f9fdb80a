"""Suite runner tests."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest
from cargo_test_grader.configuration.runtime_settings import RunnerSettings, SuiteSpec
from cargo_test_grader.suite_running import (
    SuiteInvocationError,
    SuiteRunner,
    build_cargo_test_command,
)

_SUITE = SuiteSpec(number="2", name="Integration", points=4.0, filter="integration")


class _FakeRun:
    def __init__(
        self,
        *,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        error: Exception | None = None,
    ) -> None:
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr
        self._error = error

    def __call__(self, command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append((command, kwargs))
        if self._error is not None:
            raise self._error
        return subprocess.CompletedProcess(command, self._returncode, self._stdout, self._stderr)


def test_build_command_requests_json_output_for_filter() -> None:
    command = build_cargo_test_command(RunnerSettings(), _SUITE)

    assert command == [
        "cargo",
        "test",
        "integration",
        "--",
        "-Z",
        "unstable-options",
        "--format=json",
        "--test-threads=1",
    ]


def test_build_command_omits_empty_filter_and_keeps_extra_args() -> None:
    settings = RunnerSettings(cargo="cargo-nightly", test_threads=3, extra_args=("--release",))
    suite = SuiteSpec(number="1", name="All", points=1.0)

    command = build_cargo_test_command(settings, suite)

    assert command[:3] == ["cargo-nightly", "test", "--release"]
    assert command[3] == "--"
    assert command[-1] == "--test-threads=3"


def test_run_suite_returns_stdout_and_passes_process_options(tmp_path: Path) -> None:
    fake_run = _FakeRun(stdout='{"type": "test"}\n')
    runner = SuiteRunner(
        RunnerSettings(timeout_seconds=30, env={"RUSTC_BOOTSTRAP": "1"}),
        run_command=fake_run,
        base_env={"PATH": "/usr/bin"},
    )

    output = runner.run_suite(tmp_path, _SUITE)

    assert output == '{"type": "test"}\n'
    command, kwargs = fake_run.calls[0]
    assert command[2] == "integration"
    assert kwargs["cwd"] == tmp_path
    assert kwargs["timeout"] == 30
    assert kwargs["capture_output"] is True
    assert kwargs["check"] is False
    assert kwargs["env"] == {
        "PATH": "/usr/bin",
        "RUST_TEST_THREADS": "1",
        "RUSTC_BOOTSTRAP": "1",
    }


def test_failing_tests_with_output_are_not_an_invocation_error(tmp_path: Path) -> None:
    fake_run = _FakeRun(returncode=101, stdout='{"type": "suite", "event": "failed"}\n')
    runner = SuiteRunner(RunnerSettings(), run_command=fake_run, base_env={})

    assert runner.run_suite(tmp_path, _SUITE).startswith('{"type"')


def test_non_zero_exit_without_output_raises_with_stderr_tail(tmp_path: Path) -> None:
    fake_run = _FakeRun(returncode=101, stderr="error[E0425]: cannot find value `x`\n")
    runner = SuiteRunner(RunnerSettings(), run_command=fake_run, base_env={})

    with pytest.raises(SuiteInvocationError, match="exit code 101") as excinfo:
        runner.run_suite(tmp_path, _SUITE)

    assert "cannot find value" in str(excinfo.value)


def test_missing_executable_raises_invocation_error(tmp_path: Path) -> None:
    fake_run = _FakeRun(error=FileNotFoundError(2, "No such file or directory", "cargo"))
    runner = SuiteRunner(RunnerSettings(), run_command=fake_run, base_env={})

    with pytest.raises(SuiteInvocationError, match="Could not start test command"):
        runner.run_suite(tmp_path, _SUITE)


def test_timeout_raises_invocation_error(tmp_path: Path) -> None:
    fake_run = _FakeRun(error=subprocess.TimeoutExpired(cmd=["cargo"], timeout=5))
    runner = SuiteRunner(RunnerSettings(timeout_seconds=5), run_command=fake_run, base_env={})

    with pytest.raises(SuiteInvocationError, match="timed out after 5 seconds"):
        runner.run_suite(tmp_path, _SUITE)


def test_missing_target_directory_raises_before_running(tmp_path: Path) -> None:
    fake_run = _FakeRun()
    runner = SuiteRunner(RunnerSettings(), run_command=fake_run, base_env={})

    with pytest.raises(SuiteInvocationError, match="Target directory does not exist"):
        runner.run_suite(tmp_path / "missing", _SUITE)
    assert fake_run.calls == []
