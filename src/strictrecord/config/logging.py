"""structlog configuration for strictrecord.

Library modules log through stdlib ``logging.getLogger(__name__)``; this
module routes those records through structlog's formatter.

By default the handler is attached to the ``strictrecord`` logger only, so
the host's root logger is left alone. ``install_root=True`` routes every
stdlib logger through structlog instead, for hosts without their own setup.

Two output modes:
- Human (default): console-rendered output to stderr
- JSON (log_json=True): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "strictrecord"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    install_root: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output for ``strictrecord``. When False,
            only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        install_root: Replace the root logger's handlers rather than
            attaching to the ``strictrecord`` logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    lib_logger = logging.getLogger(LOGGER_NAME)
    lib_logger.handlers.clear()
    lib_logger.setLevel(level)

    if install_root:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.WARNING)
        lib_logger.propagate = True
        logging.getLogger("pydantic").setLevel(logging.WARNING)
    else:
        lib_logger.addHandler(handler)
        lib_logger.propagate = False
