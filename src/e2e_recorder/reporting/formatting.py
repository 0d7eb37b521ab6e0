"""Fixed-width text helpers for report tables.

Plain text only, no Rich markup: the same strings are printed to the
console and written to the report file.
"""

from __future__ import annotations

import re
from datetime import datetime

ELLIPSIS = "..."

NAME_WIDTH = 55
STATUS_WIDTH = 8
DETAILS_WIDTH = 24
RULE_WIDTH = 80

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def fit_cell(text: str, width: int) -> str:
    """Pad text to width, or truncate it to a prefix plus an ellipsis.

    The result is always exactly width characters long.

    >>> fit_cell("abc", 5)
    'abc  '
    >>> fit_cell("abcdefgh", 6)
    'abc...'
    """
    text = " ".join(text.split())
    if len(text) > width:
        return text[: width - len(ELLIPSIS)] + ELLIPSIS
    return text.ljust(width)


def fit_name(name: str) -> str:
    return fit_cell(name, NAME_WIDTH)


def format_pass_rate(rate: float) -> str:
    return f"{rate:.2f}"


def format_instant(value: datetime | None) -> str:
    """ISO-8601 with millisecond precision, or '-' when unset."""
    if value is None:
        return "-"
    return value.isoformat(timespec="milliseconds")


def format_duration(duration_ms: int | None) -> str | None:
    if duration_ms is None:
        return None
    return f"{duration_ms}ms"


def slugify(text: str, sep: str = "-") -> str:
    """Lowercase text and collapse non-alphanumerics into sep."""
    slug = _SLUG_RE.sub(sep, text.lower()).strip(sep)
    return slug or "scenario"


def table_border(left: str, mid: str, right: str) -> str:
    """Box-drawing border line for the summary table."""
    segments = [
        "─" * (NAME_WIDTH + 2),
        "─" * (STATUS_WIDTH + 2),
        "─" * (DETAILS_WIDTH + 2),
    ]
    return left + mid.join(segments) + right


def table_row(name: str, status: str, details: str) -> str:
    return (
        f"│ {fit_name(name)} "
        f"│ {fit_cell(status, STATUS_WIDTH)} "
        f"│ {fit_cell(details, DETAILS_WIDTH)} │"
    )
