"""Unit tests for templating session logging."""

import sys

import pytest
from loguru import logger

from paperforge.contexts.templating.logger import _log_info, setup_templating_logger


@pytest.fixture
def restore_sinks():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_setup_writes_session_log(tmp_path, restore_sinks):
    log_file = setup_templating_logger(tmp_path / "logs", tmp_path / "cache")
    _log_info("sweep started")

    assert log_file == tmp_path / "logs" / "template.log"
    contents = log_file.read_text()
    assert f"Template cache: {tmp_path / 'cache'}" in contents
    assert "[template] sweep started" in contents
