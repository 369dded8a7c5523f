"""Logging configuration for cmdengine.

Wires structlog onto the stdlib logging hierarchy:

    root               → StreamHandler (console)
      └─ cmdengine     → RotatingFileHandler → cmdengine.log (when log_dir is set)

All cmdengine.* loggers propagate to both handlers.
"""

import logging
import logging.handlers
import sys
from typing import Any, Dict

import structlog

LOGGER_PREFIX = "cmdengine"

# Argument lists longer than this are clipped in log events
MAX_LOGGED_ITEMS = 20


def truncate_sequences(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """structlog processor that clips long list/tuple values.

    Command vectors can be arbitrarily long; the clipped value keeps
    the first MAX_LOGGED_ITEMS items followed by a count of the rest.
    """
    for key, value in event_dict.items():
        if isinstance(value, (list, tuple)) and len(value) > MAX_LOGGED_ITEMS:
            rest = len(value) - MAX_LOGGED_ITEMS
            event_dict[key] = list(value[:MAX_LOGGED_ITEMS]) + [f"... +{rest} more"]
    return event_dict


def setup_logging(config=None) -> None:
    """Configure structured logging.

    Args:
        config: Optional Config instance. Without one, logs go to the
            console at INFO and loggers are not cached, so a later call
            with the real config takes effect.
    """
    if config is not None:
        log_dir = config.log_dir
        level = config.logging_level_number
        max_bytes = config.logging_max_file_size_mb * 1024 * 1024
        backup_count = config.logging_backup_count
        cache_loggers = True
    else:
        log_dir = None
        level = logging.INFO
        max_bytes = 10 * 1024 * 1024
        backup_count = 5
        cache_loggers = False

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    pkg_logger = logging.getLogger(LOGGER_PREFIX)
    pkg_logger.setLevel(level)
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True

    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            # Console logging still works; a broken log dir must not stop the host
            print(
                f"WARNING: Cannot create log directory {log_dir}: {exc}. "
                "Falling back to console-only logging.",
                file=sys.stderr,
            )
        else:
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / f"{LOGGER_PREFIX}.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            pkg_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            truncate_sequences,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )
