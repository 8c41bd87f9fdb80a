"""Serial `cargo test` invocation for one suite at a time."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path

from cargo_test_grader.configuration.runtime_settings import RunnerSettings, SuiteSpec

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., subprocess.CompletedProcess[str]]

_JSON_FORMAT_ARGS = ("-Z", "unstable-options", "--format=json")
_STDERR_TAIL_LINES = 20


class SuiteInvocationError(Exception):
    """Raised when a suite's test process could not produce usable output."""


def build_cargo_test_command(settings: RunnerSettings, suite: SuiteSpec) -> list[str]:
    """Return the argv that runs *suite*'s filtered tests with JSON event output."""
    command = [settings.cargo, "test", *settings.extra_args]
    if suite.filter:
        command.append(suite.filter)
    command.extend(["--", *_JSON_FORMAT_ARGS, f"--test-threads={settings.test_threads}"])
    return command


class SuiteRunner:
    """Runs `cargo test` for a suite and returns its raw stdout."""

    def __init__(
        self,
        settings: RunnerSettings,
        *,
        run_command: CommandRunner | None = None,
        base_env: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings
        self._run_command = run_command or subprocess.run
        self._base_env = dict(os.environ if base_env is None else base_env)

    def run_suite(self, target: Path, suite: SuiteSpec) -> str:
        """Invoke the suite's tests in *target* and block until they finish.

        A non-zero exit status is expected when tests fail and is only treated
        as an invocation failure when the process wrote nothing to stdout.

        Raises:
          SuiteInvocationError: If the process cannot be started, times out, or
            exits unsuccessfully without any output.
        """
        if not target.is_dir():
            raise SuiteInvocationError(f"Target directory does not exist: {target}")

        command = build_cargo_test_command(self._settings, suite)
        command_text = shlex.join(command)
        logger.info("Running suite %s (%s): %s", suite.number, suite.name, command_text)
        try:
            completed = self._run_command(
                command,
                cwd=target,
                env=self._build_env(),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._settings.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise SuiteInvocationError(
                f"Suite {suite.number} timed out after {exc.timeout} seconds: {command_text}"
            ) from exc
        except OSError as exc:
            raise SuiteInvocationError(
                f"Could not start test command {command_text}: {exc}"
            ) from exc

        stdout = completed.stdout or ""
        if completed.returncode != 0 and not stdout.strip():
            raise SuiteInvocationError(
                f"Test command failed with exit code {completed.returncode}: {command_text}"
                + _stderr_tail(completed.stderr)
            )
        logger.debug(
            "Suite %s finished with exit code %d (%d bytes of output)",
            suite.number,
            completed.returncode,
            len(stdout),
        )
        return stdout

    def _build_env(self) -> dict[str, str]:
        env = dict(self._base_env)
        env["RUST_TEST_THREADS"] = str(self._settings.test_threads)
        env.update(self._settings.env)
        return env


def _stderr_tail(stderr: str | None) -> str:
    if not stderr or not stderr.strip():
        return ""
    lines = stderr.strip().splitlines()[-_STDERR_TAIL_LINES:]
    return "\n" + "\n".join(lines)
