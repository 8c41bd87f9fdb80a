"""Suite running domain exports."""

from .suite_invocation import (
    CommandRunner,
    SuiteInvocationError,
    SuiteRunner,
    build_cargo_test_command,
)

__all__ = [
    "CommandRunner",
    "SuiteInvocationError",
    "SuiteRunner",
    "build_cargo_test_command",
]
