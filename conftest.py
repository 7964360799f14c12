from pathlib import Path

import pytest

from storyloom.storage import Storage


@pytest.fixture
def storage(tmp_path: Path) -> Storage:
    """A fresh, empty storage tree per test."""
    return Storage(tmp_path / "data")
