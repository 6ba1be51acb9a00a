from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.page_builder import PageBuilder


@pytest.fixture
def page_builder(tmp_path: Path) -> PageBuilder:
    """Provide a project builder rooted at the pytest tmp_path."""
    return PageBuilder(tmp_path)
