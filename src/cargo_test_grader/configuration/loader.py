"""Configuration loader service."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_CARGO_EXECUTABLE,
    DEFAULT_TEST_THREADS,
    DEFAULT_TIMEOUT_SECONDS,
    RunConfiguration,
    RunnerSettings,
    SuiteSpec,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> RunConfiguration:
    """Load and validate the grading settings file (YAML or JSON)."""
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Could not read configuration file {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    target_value = _require_non_empty_string(parsed.get("target"), "target")
    suites = _parse_suites_section(parsed.get("suites"))
    runner = _parse_runner_section(parsed.get("runner"))
    strict_escapes = _optional_bool(parsed.get("strict_escapes"), "strict_escapes")

    return RunConfiguration(
        path=path,
        target=_resolve_path(path.parent, target_value),
        suites=suites,
        runner=runner,
        strict_escapes=strict_escapes,
    )


def _parse_suites_section(value: Any) -> tuple[SuiteSpec, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError("Configuration section 'suites' must be a list.")
    if not value:
        raise ConfigurationError("Configuration section 'suites' must not be empty.")

    suites: list[SuiteSpec] = []
    seen_numbers: set[str] = set()
    for index, entry in enumerate(value):
        label = f"suites[{index}]"
        section = _require_mapping(entry, label)
        number = _require_non_empty_string(section.get("number"), f"{label}.number")
        if number in seen_numbers:
            raise ConfigurationError(f"{label}.number '{number}' is used by more than one suite.")
        seen_numbers.add(number)
        suites.append(
            SuiteSpec(
                number=number,
                name=_require_non_empty_string(section.get("name"), f"{label}.name"),
                points=_require_non_negative_number(section.get("points"), f"{label}.points"),
                filter=_optional_filter(section.get("filter"), f"{label}.filter"),
            )
        )
    return tuple(suites)


def _parse_runner_section(value: Any) -> RunnerSettings:
    if value is None:
        return RunnerSettings()
    section = _require_mapping(value, "runner")
    cargo = _require_non_empty_string(
        section.get("cargo", DEFAULT_CARGO_EXECUTABLE), "runner.cargo"
    )
    timeout_seconds = section.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if timeout_seconds is not None:
        timeout_seconds = _require_positive_int(timeout_seconds, "runner.timeout_seconds")
    test_threads = _require_positive_int(
        section.get("test_threads", DEFAULT_TEST_THREADS), "runner.test_threads"
    )
    extra_args = _normalize_string_sequence(section.get("extra_args"), "runner.extra_args")
    env = _normalize_string_mapping(section.get("env"), "runner.env")
    return RunnerSettings(
        cargo=cargo,
        timeout_seconds=timeout_seconds,
        test_threads=test_threads,
        extra_args=extra_args,
        env=env,
    )


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            normalized.append(item)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _normalize_string_mapping(value: Any, field_name: str) -> dict[str, str]:
    if value is None:
        return {}
    section = _require_mapping(value, field_name)
    normalized: dict[str, str] = {}
    for key, item in section.items():
        if not isinstance(key, str) or isinstance(item, (Mapping, list)) or item is None:
            raise ConfigurationError(f"{field_name} must map names to scalar values.")
        normalized[key] = str(item).lower() if isinstance(item, bool) else str(item)
    return normalized


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_filter(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    return value.strip()


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_non_negative_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{field_name} must be a number.")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ConfigurationError(f"{field_name} must be a finite number.") from exc
    if not math.isfinite(number):
        raise ConfigurationError(f"{field_name} must be a finite number.")
    if number < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return number


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
