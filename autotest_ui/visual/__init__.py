"""
================================================================================
Visual Regression
================================================================================

Screenshot baselines and pixel-level comparison.

Components:
    - baseline_store: Baseline/current/diff file layout
    - screenshot_capture: Page screenshots to explicit paths
    - image_differ: YIQ-based pixel comparison and diff artifacts
    - pipeline: Baseline-or-compare orchestration per test name

Author: Automation Team
License: MIT
================================================================================
"""

from .baseline_store import BaselineStore, VisualTestCase
from .image_differ import ComparisonResult, ImageDiffer, ImageDimensionMismatchError
from .pipeline import VisualRegressionPipeline
from .screenshot_capture import ScreenshotCapture

__all__ = [
    "BaselineStore",
    "ComparisonResult",
    "ImageDiffer",
    "ImageDimensionMismatchError",
    "ScreenshotCapture",
    "VisualRegressionPipeline",
    "VisualTestCase",
]
