from __future__ import annotations

import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def _add_repo_root_to_syspath() -> None:
    """Make the local package importable when running tests from `tests/`."""

    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


SAMPLE_LOG = """\
11:35:23,scheduled task 032, START,37980
11:35:56,scheduled task 032, END,37980
11:36:11,scheduled task 796, START,57672
11:36:18,scheduled task 796, END,57672
11:36:58,background job wmy, START,81258
11:51:44,background job wmy, END,81258
"""


@pytest.fixture
def sample_log(tmp_path: Path) -> Path:
    path = tmp_path / "logs.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path
