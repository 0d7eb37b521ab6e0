"""Suite definition loading: YAML parsing plus Pydantic validation.

All problems in a file are collected and returned together so the
validate command can report them in one pass.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from e2e_recorder.loader.errors import SuiteDefinitionError, SuiteErrorDetail
from e2e_recorder.models.suite import SuiteDefinition


def _validation_details(exc: ValidationError) -> list[SuiteErrorDetail]:
    details: list[SuiteErrorDetail] = []
    for err in exc.errors():
        loc = err.get("loc", ())
        details.append(
            SuiteErrorDetail(
                field=".".join(str(part) for part in loc) or "<root>",
                message=err.get("msg", "Validation error"),
                type=err.get("type", "unknown"),
            )
        )
    return details


def validate_suite_string(
    source: str,
) -> tuple[SuiteDefinition | None, list[SuiteErrorDetail]]:
    """Validate a suite definition given as YAML text.

    Returns:
        (SuiteDefinition, []) on success, or (None, errors) on failure.
    """
    try:
        raw: Any = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 1 if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        return None, [
            SuiteErrorDetail(field="<yaml>", message=problem, type="yaml_syntax_error", line=line)
        ]

    if raw is None:
        return None, [
            SuiteErrorDetail(
                field="<yaml>",
                message="File is empty or contains only comments",
                type="empty_file",
            )
        ]
    if not isinstance(raw, dict):
        return None, [
            SuiteErrorDetail(
                field="<root>",
                message="Suite definition must be a mapping",
                type="type_error",
            )
        ]

    try:
        return SuiteDefinition.model_validate(raw), []
    except ValidationError as exc:
        return None, _validation_details(exc)


def validate_suite_file(
    filepath: Path,
) -> tuple[SuiteDefinition | None, list[SuiteErrorDetail]]:
    source = Path(filepath).read_text(encoding="utf-8")
    return validate_suite_string(source)


def load_suite(filepath: Path) -> SuiteDefinition:
    """Load a suite definition, raising on any problem.

    Raises:
        FileNotFoundError: If the file does not exist.
        SuiteDefinitionError: If the file is not a valid suite definition.
    """
    suite, errors = validate_suite_file(filepath)
    if errors:
        raise SuiteDefinitionError(str(filepath), errors)
    assert suite is not None
    return suite


def discover_suite_files(suites_dir: Path) -> list[Path]:
    """Return all .yaml/.yml files under suites_dir, sorted."""
    if not suites_dir.is_dir():
        return []
    return sorted(list(suites_dir.glob("**/*.yaml")) + list(suites_dir.glob("**/*.yml")))
