"""Report renderer: outcome snapshot -> console text and report file text.

One parameterized renderer serves every suite. The table follows the
suite's declared scenario order, not execution order. A declared
scenario without a record is shown as not executed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from e2e_recorder.models.result import (
    Outcome,
    ResultRecord,
    RunSummary,
    RunWindow,
    StoreSnapshot,
)
from e2e_recorder.models.suite import SuiteDefinition
from e2e_recorder.reporting.formatting import (
    RULE_WIDTH,
    format_duration,
    format_instant,
    format_pass_rate,
    table_border,
    table_row,
)

NOT_EXECUTED = "Not executed"

# Outcome -> status label shown after the icon
_STATUS_LABELS: dict[Outcome, str] = {
    Outcome.passed: "PASS",
    Outcome.failed: "FAIL",
    Outcome.skipped: "SKIP",
}


@dataclass(frozen=True)
class ReportRow:
    """One line of the summary table."""

    name: str
    status: Outcome
    details: str
    executed: bool
    attempts: int = 0


@dataclass(frozen=True)
class RenderedReport:
    """Rendered report in its two output forms."""

    console_text: str
    file_text: str
    rows: tuple[ReportRow, ...]
    summary: RunSummary


def _latest_by_name(records: list[ResultRecord]) -> tuple[dict[str, ResultRecord], dict[str, int]]:
    latest: dict[str, ResultRecord] = {}
    counts: dict[str, int] = {}
    for result in records:
        latest[result.name] = result
        counts[result.name] = counts.get(result.name, 0) + 1
    return latest, counts


def _details_for(result: ResultRecord) -> str:
    if result.status == Outcome.passed:
        return format_duration(result.duration_ms) or "Completed"
    if result.status == Outcome.failed:
        if result.screenshot_path:
            return "Screenshot"
        return result.error_message or "Failed"
    return result.error_message or "Skipped"


class ReportRenderer:
    """Formats an outcome snapshot for one suite.

    Args:
        suite: Suite definition supplying title, icons, log tag and
            the declared scenario order.
        screenshot_dir: Directory mentioned at the bottom of the report.
    """

    def __init__(self, suite: SuiteDefinition, screenshot_dir: Path | None = None) -> None:
        self.suite = suite
        self.screenshot_dir = screenshot_dir

    def status_label(self, status: Outcome) -> str:
        icon = getattr(self.suite.icons, status.value)
        return f"{icon} {_STATUS_LABELS[status]}"

    def build_rows(
        self,
        snapshot: StoreSnapshot,
        declared_scenarios: list[str],
    ) -> list[ReportRow]:
        """Build table rows in declared order.

        The most recent record for a name is displayed. When a name was
        recorded more than once, the attempt count is appended to the
        details.
        """
        latest, counts = _latest_by_name(snapshot.all_records())
        rows: list[ReportRow] = []
        for name in declared_scenarios:
            result = latest.get(name)
            if result is None:
                rows.append(ReportRow(name, Outcome.skipped, NOT_EXECUTED, executed=False))
                continue
            details = _details_for(result)
            if counts[name] > 1:
                details = f"{details} (x{counts[name]})"
            rows.append(
                ReportRow(name, result.status, details, executed=True, attempts=counts[name])
            )
        return rows

    def render_lines(
        self,
        snapshot: StoreSnapshot,
        declared_scenarios: list[str] | None = None,
        run_window: RunWindow | None = None,
    ) -> tuple[list[str], list[ReportRow], RunSummary]:
        """Render the report body as a list of unprefixed lines."""
        declared = list(self.suite.scenarios if declared_scenarios is None else declared_scenarios)
        window = run_window or RunWindow()
        summary = RunSummary.from_snapshot(snapshot)
        rows = self.build_rows(snapshot, declared)
        rate = format_pass_rate(summary.pass_rate)
        not_executed = sum(1 for row in rows if not row.executed)

        lines: list[str] = [
            self.suite.report_title,
            "=" * RULE_WIDTH,
            f"\U0001f550 Test Duration: {format_instant(window.started_at)} → "
            f"{format_instant(window.finished_at)}",
            f"\U0001f4c8 Pass Rate: {rate}% ({summary.passed}/{summary.total})",
            "=" * RULE_WIDTH,
            "\U0001f4cb TEST SUMMARY TABLE:",
            table_border("┌", "┬", "┐"),
            table_row("Test Scenario", "Status", "Details"),
            table_border("├", "┼", "┤"),
        ]
        for row in rows:
            lines.append(table_row(row.name, self.status_label(row.status), row.details))
        lines.append(table_border("└", "┴", "┘"))

        icons = self.suite.icons
        lines += [
            "",
            "\U0001f4ca STATISTICS:",
            f"   {icons.passed} Passed: {summary.passed} tests",
            f"   {icons.failed} Failed: {summary.failed} tests",
            f"   {icons.skipped} Skipped: {summary.skipped} tests",
            f"   \U0001f4ca Total: {summary.total} tests",
            f"   {icons.skipped} Not executed: {not_executed} tests",
            f"   \U0001f4c8 Success Rate: {rate}%",
        ]

        if snapshot.failed:
            lines += ["", f"{icons.failed} FAILED TESTS DETAILS:", "-" * RULE_WIDTH]
            for index, result in enumerate(snapshot.failed, 1):
                lines.append(f"{index}. {result.name}")
                lines.append(f"   ⏰ Time: {format_instant(result.timestamp)}")
                error = result.error_message or "-"
                if result.failure_category is not None:
                    error = f"[{result.failure_category.value}] {error}"
                lines.append(f"   \U0001f4a5 Error: {error}")
                if result.screenshot_path:
                    lines.append(f"   \U0001f4f8 Screenshot: {result.screenshot_path}")

        declared_set = set(declared)
        undeclared = [r for r in snapshot.all_records() if r.name not in declared_set]
        if undeclared:
            lines += ["", "❔ UNDECLARED SCENARIOS:"]
            for result in undeclared:
                lines.append(f"   • {result.name}: {self.status_label(result.status)}")

        if self.screenshot_dir is not None:
            lines += ["", f"\U0001f4f8 Screenshots: {self.screenshot_dir}"]
        lines.append("=" * RULE_WIDTH)
        return lines, rows, summary

    def console_prefix(self, now: datetime | None = None) -> str:
        """Log-style line prefix: 'HH:MM:SS.mmm tag[pid] i '."""
        now = now or datetime.now()
        clock = now.strftime("%H:%M:%S") + f".{now.microsecond // 1000:03d}"
        return f"{clock} {self.suite.log_tag}[{os.getpid()}] i "

    def render(
        self,
        snapshot: StoreSnapshot,
        declared_scenarios: list[str] | None = None,
        run_window: RunWindow | None = None,
        now: datetime | None = None,
    ) -> RenderedReport:
        """Render console and file text for a snapshot.

        Args:
            snapshot: Outcome store snapshot.
            declared_scenarios: Display order; defaults to the suite's list.
            run_window: Suite start/end instants.
            now: Instant used for the console line prefix.

        Returns:
            RenderedReport with both text forms, the rows, and the summary.
        """
        lines, rows, summary = self.render_lines(snapshot, declared_scenarios, run_window)
        prefix = self.console_prefix(now)
        console_text = "\n".join(f"{prefix}{line}".rstrip() for line in lines)
        file_text = "\n".join(lines) + "\n"
        return RenderedReport(
            console_text=console_text,
            file_text=file_text,
            rows=tuple(rows),
            summary=summary,
        )
