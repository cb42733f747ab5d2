"""Pytest configuration shared by the unit and end-to-end suites.

What:
  Establish project import paths and define fixtures that point configuration
  discovery at the canned ``tests/data/mailfmt.yaml`` for every test.

Why:
  Tests must exercise the in-repo source tree rather than an installed wheel,
  and the configuration cache is module-global, so it is reset around each
  test to keep results independent of execution order.

How:
  Prepend ``mailfmt/src`` to ``sys.path`` when present, then use an autouse
  fixture that sets ``MAILFMT_CONFIG_PATH`` and clears the cache before and
  after the test.

Interfaces:
  :func:`formatter_config` (autouse fixture), :data:`DATA_DIR`.
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "mailfmt" / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

import pytest

from mailfmt.config.loader import reset_formatter_config

DATA_DIR = Path(__file__).resolve().parent / "data"
CONFIG_PATH = DATA_DIR / "mailfmt.yaml"


@pytest.fixture(autouse=True)
def formatter_config(monkeypatch: pytest.MonkeyPatch):
    """Apply the canned configuration file for every test.

    Args:
      monkeypatch: Pytest helper injected automatically for environment control.
    """

    monkeypatch.setenv("MAILFMT_CONFIG_PATH", str(CONFIG_PATH))
    reset_formatter_config()
    try:
        yield
    finally:
        reset_formatter_config()
