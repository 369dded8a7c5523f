"""Tests for logging setup."""

import logging
import logging.handlers
from unittest.mock import MagicMock

import pytest
import structlog

from cmdengine.logging_config import (
    LOGGER_PREFIX,
    MAX_LOGGED_ITEMS,
    setup_logging,
    truncate_sequences,
)


@pytest.fixture
def restore_logging():
    """Put stdlib and structlog logging back the way pytest had it."""
    root = logging.getLogger()
    pkg = logging.getLogger(LOGGER_PREFIX)
    saved_root = (root.level, list(root.handlers))
    saved_pkg = (pkg.level, list(pkg.handlers), pkg.propagate)
    yield
    for handler in pkg.handlers:
        if handler not in saved_pkg[1]:
            handler.close()
    root.setLevel(saved_root[0])
    root.handlers[:] = saved_root[1]
    pkg.setLevel(saved_pkg[0])
    pkg.handlers[:] = saved_pkg[1]
    pkg.propagate = saved_pkg[2]
    structlog.reset_defaults()


def _config(log_dir=None, level="DEBUG"):
    config = MagicMock()
    config.log_dir = log_dir
    config.logging_level_number = getattr(logging, level)
    config.logging_max_file_size_mb = 1
    config.logging_backup_count = 2
    return config


def test_truncate_sequences_clips_long_lists():
    args = [str(i) for i in range(MAX_LOGGED_ITEMS + 5)]
    event = truncate_sequences(None, "debug", {"event": "x", "args": args, "n": 3})
    assert event["args"][:MAX_LOGGED_ITEMS] == args[:MAX_LOGGED_ITEMS]
    assert event["args"][-1] == "... +5 more"
    assert event["n"] == 3


def test_truncate_sequences_leaves_short_lists():
    event = truncate_sequences(None, "debug", {"args": ("a", "b")})
    assert event["args"] == ("a", "b")


def test_setup_logging_defaults_console_only(restore_logging):
    setup_logging()
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger(LOGGER_PREFIX).handlers == []


def test_setup_logging_writes_log_file(tmp_path, restore_logging):
    log_dir = tmp_path / "logs"
    setup_logging(_config(log_dir))

    handlers = logging.getLogger(LOGGER_PREFIX).handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)

    structlog.get_logger("cmdengine.engine").info("command_registered", command="echo")
    handlers[0].flush()

    text = (log_dir / "cmdengine.log").read_text()
    assert "command_registered" in text
    assert "command=echo" in text


def test_setup_logging_survives_unusable_log_dir(tmp_path, restore_logging, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("")
    setup_logging(_config(blocker / "logs"))
    assert logging.getLogger(LOGGER_PREFIX).handlers == []
    assert "console-only" in capsys.readouterr().err


def test_dispatched_arguments_are_clipped_in_log_file(tmp_path, restore_logging, monkeypatch):
    from cmdengine import engine as engine_module
    from cmdengine.engine import Engine

    # Fresh proxy so the cached binding does not outlive this test
    monkeypatch.setattr(engine_module, "logger", structlog.get_logger("cmdengine.engine"))
    log_dir = tmp_path / "logs"
    setup_logging(_config(log_dir))

    engine = Engine()
    engine.add_command("many", "", lambda ctx, args: len(args))
    args = [f"arg{i}" for i in range(MAX_LOGGED_ITEMS + 7)]
    assert engine.exec(None, 0, ["many"] + args) == len(args)

    for handler in logging.getLogger(LOGGER_PREFIX).handlers:
        handler.flush()
    text = (log_dir / "cmdengine.log").read_text()
    assert "command_dispatched" in text
    assert "... +7 more" in text
    assert f"arg{MAX_LOGGED_ITEMS + 6}" not in text
