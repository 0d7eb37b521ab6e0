"""Suite definition errors and their dual-mode formatting.

Human mode prints a heading per file with one indented line per
problem; CI mode prints concise 'file -- field: message' lines.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Set to a truthy value by common CI providers
CI_ENV_VARS = ("CI", "GITHUB_ACTIONS", "GITLAB_CI", "BUILDKITE")


@dataclass
class SuiteErrorDetail:
    """A single problem found in a suite definition.

    Attributes:
        field: Dotted field path, or '<yaml>' for parse errors.
        message: Human-readable description.
        type: Pydantic error type, or 'yaml_syntax_error' / 'empty_file'.
        line: 1-indexed line number when known.
    """

    field: str
    message: str
    type: str
    line: int | None = None


class SuiteDefinitionError(Exception):
    """Raised when a suite definition file cannot be loaded."""

    def __init__(self, filename: str, errors: list[SuiteErrorDetail]) -> None:
        self.filename = filename
        self.errors = errors
        summary = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"{filename}: {summary}")


def running_in_ci() -> bool:
    return any(
        os.environ.get(name, "").lower() in ("true", "1", "yes") for name in CI_ENV_VARS
    )


class ErrorFormatter:
    """Formats suite errors for terminal or CI output.

    Args:
        ci_mode: Concise output. If None, auto-detect from CI_ENV_VARS.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        self.ci_mode = running_in_ci() if ci_mode is None else ci_mode

    def format_error(self, error: SuiteErrorDetail, filename: str) -> str:
        if self.ci_mode:
            line = f":{error.line}" if error.line is not None else ""
            return f"{filename}{line} -- {error.field}: {error.message}"
        location = f" (line {error.line})" if error.line is not None else ""
        return f"  {error.field}: {error.message}{location}"

    def format_all(self, errors: list[SuiteErrorDetail], filename: str) -> str:
        lines = [self.format_error(e, filename) for e in errors]
        if not self.ci_mode:
            count = len(errors)
            noun = "error" if count == 1 else "errors"
            lines.insert(0, f"error: {filename} has {count} {noun}")
        return "\n".join(lines)
