"""Shared pytest fixtures for daicho tests."""

from __future__ import annotations

import pytest

from daicho.ledger.format_rules import LedgerFormat, get_default_ledger_format
from daicho.runtime import load_ledger_format, reset_paths

# Three items, one vendor, a remainder-blank line and the trailing totals.
SAMPLE_LEDGER = """\
納入台帳
令和７年１１月
滝川駐屯地　株式会社トワニ旭川食品
0001 牛乳 PC
0.10 19,500.00
0.10 19,500.00
1,950.00
0002 １Ｌ豆乳飲料
CN
12 150.00
1,800.00
0003
苺タルト
EA
3 200.00
600.00
-　以　下　余　白　-
課税対象額　4,350.00
合計　\\4,698-
消費税　348
"""


@pytest.fixture(autouse=True)
def isolated_project_root(tmp_path, monkeypatch):
    """Point DAICHO_HOME at an empty temp dir so no real config leaks into tests."""
    monkeypatch.setenv("DAICHO_HOME", str(tmp_path))
    reset_paths()
    load_ledger_format.cache_clear()
    yield tmp_path
    reset_paths()
    load_ledger_format.cache_clear()


@pytest.fixture
def sample_ledger_text() -> str:
    return SAMPLE_LEDGER


@pytest.fixture
def ledger_format() -> LedgerFormat:
    return get_default_ledger_format()
