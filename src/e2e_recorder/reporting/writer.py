"""Report file persistence.

One report file per suite per calendar day. Re-running a suite on the
same day overwrites that day's file. Write failures are logged and
never propagate into the test run.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from e2e_recorder.models.suite import SuiteDefinition

logger = logging.getLogger(__name__)


class ReportWriter:
    """Writes rendered report text under reports_dir/<suite name>/.

    File layout:
        reports/
            navigation/
                navigation-test-report-2026-10-19.txt
                FAIL_<scenario>_<timestamp>.png
    """

    def __init__(self, reports_dir: Path, suite: SuiteDefinition) -> None:
        self.reports_dir = Path(reports_dir)
        self.suite = suite

    @property
    def report_dir(self) -> Path:
        return self.reports_dir / self.suite.name

    def path_for(self, day: date) -> Path:
        return self.report_dir / f"{self.suite.name}-test-report-{day:%Y-%m-%d}.txt"

    def write(self, text: str, today: date | None = None) -> Path | None:
        """Write report text to today's file.

        Args:
            text: Rendered report file text.
            today: Calendar date for the file name (default: local today).

        Returns:
            The written path, or None if the write failed.
        """
        path = self.path_for(today or date.today())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save report to %s: %s", path, exc)
            return None

        logger.info("Report saved: %s", path)
        return path
