"""Module entry point for `python -m cargo_test_grader`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
