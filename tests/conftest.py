"""Pytest configuration and shared fixtures for ccBencode tests."""

from __future__ import annotations

import logging

import pytest

import ccbencode.config as config_module


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("core", "marks tests as core functionality tests"),
        ("codec", "marks tests as bencode codec tests"),
        ("config", "marks tests as configuration tests"),
        ("observability", "marks tests as logging/observability tests"),
        ("cli", "marks tests as CLI tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep tests away from user config files and CCBENCODE_* variables."""
    for env_name in config_module.ENV_MAPPINGS:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setattr(config_module.Path, "home", lambda: tmp_path / "home")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "_config_manager", None)


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        if logger_name.startswith("ccbencode"):
            logger.setLevel(logging.NOTSET)
            logger.propagate = True

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
