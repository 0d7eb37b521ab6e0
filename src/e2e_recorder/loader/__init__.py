"""Suite definition loader - parsing, validation, and error reporting."""

from e2e_recorder.loader.errors import ErrorFormatter, SuiteDefinitionError, SuiteErrorDetail
from e2e_recorder.loader.suite_loader import (
    discover_suite_files,
    load_suite,
    validate_suite_file,
    validate_suite_string,
)

__all__ = [
    "ErrorFormatter",
    "SuiteDefinitionError",
    "SuiteErrorDetail",
    "discover_suite_files",
    "load_suite",
    "validate_suite_file",
    "validate_suite_string",
]
