"""
Repository-level pytest configuration.

Why this exists:
  - Keep every test's configuration and visual artifacts isolated
  - Make local runs predictable regardless of the caller's environment
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from autotest_ui.common import reload_config


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(autouse=True)
def visual_report_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """
    Point visual artifacts at a per-test directory and reload configuration.

    Runtime `set_config` changes made by a test are discarded afterwards.
    """
    report_root = tmp_path / "visual-tests"
    monkeypatch.setenv("VISUAL__REPORT_ROOT", str(report_root))
    reload_config()

    yield report_root

    monkeypatch.undo()
    reload_config()
