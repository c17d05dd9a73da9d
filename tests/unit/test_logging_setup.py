import logging

import pytest

from iacscan.logging_setup import configure_logging


def test_configure_logging_installs_single_stderr_handler():
    configure_logging("debug")
    configure_logging("info")

    logger = logging.getLogger("iacscan")
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert not logger.propagate


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError):
        configure_logging("chatty")
