"""Shared fixtures."""

from pathlib import Path
from typing import Callable, List

import pytest


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., List[Path]]:
    """Create empty files in tmp_path and return their paths."""

    def _make(*names: str) -> List[Path]:
        paths = []
        for name in names:
            path = tmp_path / name
            path.write_text(name, encoding="utf-8")
            paths.append(path)
        return paths

    return _make
