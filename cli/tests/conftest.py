"""Shared fixtures for CLI tests.

Every test runs in an empty working directory with no ``LLMC_*``
variables so that a developer's ``.env`` file or shell environment never
changes the outcome, and the root logger is restored afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from contract_cli import logging_setup

_SETTINGS_VARS = ("DEBUG", "LOG_LEVEL", "STRUCTURED_LOGGING", "METRICS_FILE", "VERDICT_INDENT")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    for name in _SETTINGS_VARS:
        monkeypatch.delenv(f"LLMC_{name}", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    if logging_setup._installed_handler is not None:
        root_logger.removeHandler(logging_setup._installed_handler)
        logging_setup._installed_handler = None
    root_logger.setLevel(level)
