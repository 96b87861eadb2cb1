"""
Logging for the inventory tracker CLI.

``configure_logging(config)`` is called by every CLI command right after the
config is loaded, so ledger writes and store access are logged from the first
statement.  It installs two handlers on the root logger:

  - stdout, always;
  - ``[logging] log_file`` (default ``data/logs/inventory_tracker.log``),
    unless the setting is blank.

Library modules only ever do ``logger = logging.getLogger(__name__)``.  The
Streamlit dashboard does not call ``configure_logging``; Streamlit owns the
root logger there.

With ``json_format = true`` each record becomes one JSON object, and anything
passed through ``extra=`` (for example ``item_id``) lands next to ``msg``::

    {"ts": "2026-03-10T09:30:00Z", "level": "INFO",
     "logger": "inventory_tracker.ledger", "msg": "Added item 4 (Stapler)"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inventory_tracker.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes present on every LogRecord; anything else came from ``extra=``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``, extras."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": ts.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonLineFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _attach(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig") -> None:
    """Reset the root logger to the stdout and log-file handlers in ``config``.

    Safe to call repeatedly; earlier handlers are replaced (``force=True``),
    which keeps repeated CLI invocations in one test process from stacking
    handlers.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = build_formatter(config.json_format)

    handlers = [_attach(logging.StreamHandler(sys.stdout), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _attach(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Streamlit is chatty at INFO when the dashboard imports the package
    logging.getLogger("streamlit").setLevel(logging.WARNING)
