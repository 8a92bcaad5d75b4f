"""Logging configuration for the command line.

Logs always go to *stderr* so that the verdict document on *stdout* stays
machine-readable.  Two formats are supported:

* plain text, one line per record;
* JSON lines (``LLMC_STRUCTURED_LOGGING=true``), for log aggregators::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "WARNING",
        "logger": "contract_cli.app",
        "message": "Contract rejected: ...",
        "exc_info": "Traceback ..."  // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import UTC, datetime
from typing import Any

_TEXT_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

# The handler installed by the last configure_logging() call.
_installed_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* as a single JSON line."""
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(level: int, *, structured: bool = False) -> logging.Handler:
    """Install a stderr handler on the root logger and set its level.

    Calling this again replaces the handler installed previously; handlers
    added by anything else are left alone.
    """
    global _installed_handler  # noqa: PLW0603

    root_logger = logging.getLogger()
    if _installed_handler is not None:
        root_logger.removeHandler(_installed_handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if structured else logging.Formatter(_TEXT_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _installed_handler = handler
    return handler
