"""structlog over stdlib logging, always on stderr.

stdout belongs to command output (tables, ``--json`` payloads), so log
lines never go there. Modules log events with
``structlog.get_logger(__name__)``; the ``sitectl`` logger level decides
what is shown: WARNING by default (malformed files, duplicate
permalinks), DEBUG with ``-v`` (every registered document).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

_SHARED: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Safe to call more than once; the root handler is replaced, not added.

    Args:
        verbose: Show ``sitectl`` DEBUG events.
        log_json: One JSON object per line instead of console formatting.
        stream: Defaults to the current ``sys.stderr``.
    """
    out = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[*_SHARED, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, out),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger("sitectl").setLevel(logging.DEBUG if verbose else logging.WARNING)
