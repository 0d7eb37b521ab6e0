"""Failure screenshot capture through the device-automation driver.

The driver is an external collaborator; this module only asks it to
write a screenshot to a path. A capture failure is logged and
swallowed so it never masks the scenario failure being reported.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from e2e_recorder.reporting.formatting import slugify

logger = logging.getLogger(__name__)


@runtime_checkable
class ScreenshotDriver(Protocol):
    """Minimal driver surface consumed by the recorder."""

    def take_screenshot(self, path: Path) -> Any:
        """Write a device screenshot to path. May be sync or async."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScreenshotCapture:
    """Captures FAIL_<scenario>_<timestamp>.png files into a directory."""

    def __init__(
        self,
        driver: ScreenshotDriver | None,
        directory: Path,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.driver = driver
        self.directory = Path(directory)
        self._clock = clock

    def path_for(self, name: str, now: datetime | None = None) -> Path:
        """Build the screenshot path for a scenario at the given instant.

        The timestamp keeps microseconds so two captures for the same
        scenario in one second do not collide.
        """
        now = now or self._clock()
        stamp = now.isoformat(timespec="microseconds").replace(":", "-").replace(".", "-")
        return self.directory / f"FAIL_{slugify(name, sep='_')}_{stamp}.png"

    async def capture(self, name: str) -> Path | None:
        """Ask the driver for a screenshot. Never raises.

        Returns:
            The screenshot path, or None if capture is disabled or failed.
        """
        if self.driver is None:
            return None

        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            result = self.driver.take_screenshot(path)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.warning("Failed to capture screenshot for %r: %s", name, exc)
            return None

        logger.info("Screenshot saved: %s", path)
        return path
