"""
Log formatting for HabitLoop, rendered by structlog.

Every module logs through the stdlib (`logging.getLogger(__name__)`);
structlog only formats the records on the root handler. Records go to
stderr so the CLI can keep stdout for its JSON results.

Environment:
    HABITLOOP_LOG_LEVEL   DEBUG, INFO (default), WARNING, ...
    HABITLOOP_LOG_FORMAT  "json" for one JSON object per line,
                          anything else for colored console output

Usage:
    from habitloop.logging_config import setup_logging
    setup_logging(level="DEBUG")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import structlog

# Third-party loggers that drown out HabitLoop's own messages at INFO
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install a single structlog-formatted handler on the root logger."""
    level = level or os.environ.get("HABITLOOP_LOG_LEVEL", "INFO")
    if json_output is None:
        json_output = os.environ.get("HABITLOOP_LOG_FORMAT", "").lower() == "json"

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        pre_chain.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "NOISY_LOGGERS"]
