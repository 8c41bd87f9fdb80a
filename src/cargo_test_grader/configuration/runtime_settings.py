"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CARGO_EXECUTABLE = "cargo"
DEFAULT_TIMEOUT_SECONDS = 600
DEFAULT_TEST_THREADS = 1


@dataclass(frozen=True)
class SuiteSpec:
    """One independently scored group of tests selected by a name filter."""

    number: str
    name: str
    points: float
    filter: str = ""


@dataclass(frozen=True)
class RunnerSettings:
    """How `cargo test` is launched for every suite."""

    cargo: str = DEFAULT_CARGO_EXECUTABLE
    timeout_seconds: int | None = DEFAULT_TIMEOUT_SECONDS
    test_threads: int = DEFAULT_TEST_THREADS
    extra_args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RunConfiguration:
    """Top-level configuration aggregate."""

    path: Path
    target: Path
    suites: tuple[SuiteSpec, ...]
    runner: RunnerSettings = field(default_factory=RunnerSettings)
    strict_escapes: bool = False
