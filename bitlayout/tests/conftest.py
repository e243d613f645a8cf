"""Unit tests configuration file."""

import logging

import pytest


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    """Capture generator debug logs so failing renders show what ran."""
    caplog.set_level(logging.DEBUG, logger="bitlayout")
