"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "settings.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Grading settings template for cargo-test-grader.
# Replace every <REQUIRED> placeholder before running grade.
# Remove <OPTIONAL> entries you do not need; defaults are shown in comments.

# Crate directory holding Cargo.toml, relative to this file or absolute.
target: "<REQUIRED>"

# Raise instead of warning when failure output holds a broken escape sequence.
# libtest output is re-rendered as JSON text first, so this only guards runners
# that emit already-escaped `stdout` text.
# strict_escapes: false

runner:
  # cargo: "cargo"
  # Seconds before one suite invocation is killed; null disables the timeout.
  # timeout_seconds: 600
  # test_threads: 1
  # extra_args:
  #   - "<OPTIONAL>"
  # env:
  #   CARGO_TERM_COLOR: "never"

suites:
  # Each suite's points are split evenly across the tests its filter selects.
  - number: "1"
    name: "<REQUIRED>"
    points: "<REQUIRED>"
    # Substring passed to `cargo test`; empty selects every test.
    filter: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML grading settings template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
