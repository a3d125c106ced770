"""
Unit test fixtures: in-memory page fakes and a loguru record sink.
"""

from typing import Dict, Generator, List

import pytest
from loguru import logger

from autotest_ui.visual import BaselineStore
from testsuites.unit.fakes import FakePage


@pytest.fixture
def page() -> FakePage:
    return FakePage(title="Demo Page")


@pytest.fixture
def log_records() -> Generator[List[Dict], None, None]:
    """Capture loguru records emitted during the test."""
    records: List[Dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def store(tmp_path) -> BaselineStore:
    return BaselineStore(tmp_path / "visual")

