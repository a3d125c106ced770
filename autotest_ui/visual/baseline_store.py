"""
================================================================================
Baseline Store
================================================================================

Filesystem layout for visual regression artifacts:

    <root>/baseline/<test>-baseline.png
    <root>/current/<test>-current-<YYYY-MM-DD>.png
    <root>/diff/<test>-diff-<YYYY-MM-DD>.png

A baseline is only ever written through `create_from`, which copies into a
temp file and hard-links it into place. The baseline path appears only once
its bytes are complete, and one that already exists is never overwritten, even
when two workers race on the same test name.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from autotest_ui.common import get_config


BASELINE_DIR = "baseline"
CURRENT_DIR = "current"
DIFF_DIR = "diff"
DEFAULT_THRESHOLD = 0.1


def utc_today() -> date:
    """Capture date used to stamp current/diff images."""
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class VisualTestCase:
    """All paths and the tolerance for one visual test on one day."""
    test_name: str
    baseline_path: Path
    current_path: Path
    diff_path: Path
    threshold: float = DEFAULT_THRESHOLD


class BaselineStore:
    """
    Maps test names to baseline, current and diff image paths.

    Usage:
        >>> store = BaselineStore("reports/visual-tests")
        >>> store.exists("home-page")
        False
        >>> store.create_from("home-page", store.current_path("home-page"))
        True
    """

    def __init__(self, report_root: Optional[Union[str, Path]] = None):
        """
        Initialize the store and create its directories.

        Args:
            report_root: Root directory; defaults to `visual.report_root`
        """
        root = report_root or get_config("visual.report_root", "reports/visual-tests")
        self.report_root = Path(root)
        self.baseline_dir = self.report_root / BASELINE_DIR
        self.current_dir = self.report_root / CURRENT_DIR
        self.diff_dir = self.report_root / DIFF_DIR
        for directory in (self.baseline_dir, self.current_dir, self.diff_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def path(self, test_name: str) -> Path:
        return self.baseline_dir / f"{test_name}-baseline.png"

    def exists(self, test_name: str) -> bool:
        return self.path(test_name).is_file()

    def current_path(self, test_name: str, day: Optional[date] = None) -> Path:
        day = day or utc_today()
        return self.current_dir / f"{test_name}-current-{day.isoformat()}.png"

    def diff_path(self, test_name: str, day: Optional[date] = None) -> Path:
        day = day or utc_today()
        return self.diff_dir / f"{test_name}-diff-{day.isoformat()}.png"

    def case(
        self,
        test_name: str,
        day: Optional[date] = None,
        threshold: Optional[float] = None,
    ) -> VisualTestCase:
        """Build the VisualTestCase for `test_name` on `day` (UTC today by default)."""
        day = day or utc_today()
        if threshold is None:
            threshold = get_config("visual.threshold", DEFAULT_THRESHOLD)
        return VisualTestCase(
            test_name=test_name,
            baseline_path=self.path(test_name),
            current_path=self.current_path(test_name, day),
            diff_path=self.diff_path(test_name, day),
            threshold=threshold,
        )

    def create_from(self, test_name: str, source: Union[str, Path]) -> bool:
        """
        Copy `source` into place as the baseline unless one already exists.

        Returns:
            True if this call created the baseline, False if it already existed

        Raises:
            OSError: Source unreadable or baseline directory not writable
        """
        target = self.path(test_name)
        if target.exists():
            logger.info(f"Baseline for {test_name} already exists, keeping it: {target}")
            return False

        # Write a hidden temp file first; the hard link publishes it complete
        # and fails if another writer got there first.
        fd, tmp_name = tempfile.mkstemp(
            dir=self.baseline_dir, prefix=f".{test_name}-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as dst, open(source, "rb") as src:
                shutil.copyfileobj(src, dst)
            os.link(tmp_name, target)
        except FileExistsError:
            logger.info(f"Baseline for {test_name} already exists, keeping it: {target}")
            return False
        finally:
            Path(tmp_name).unlink(missing_ok=True)

        logger.info(f"Stored baseline for {test_name}: {target}")
        return True


__all__ = [
    "BaselineStore",
    "VisualTestCase",
    "utc_today",
]
