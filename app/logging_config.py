from __future__ import annotations
import logging
import sys
from typing import TextIO
import structlog

def configure_logging(debug: bool = False, json_logs: bool = True, stream: TextIO | None = None) -> None:
    # stdout belongs to the console renderer, so logs default to stderr
    stream = stream if stream is not None else sys.stderr
    level = logging.DEBUG if debug else logging.INFO
    timestamper = structlog.processors.TimeStamper(fmt="iso")
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    # also route stdlib logging (pynput, tkinter helpers) to the same stream
    logging.basicConfig(format="%(message)s", stream=stream, level=level)
