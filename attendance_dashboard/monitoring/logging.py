"""Structured logging with context injection.

Features:
- console handler
- optional file handler
- JSON logs optional (easy ingestion)
- context injection (run_id/stage/month) without needing a big framework
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

ROOT_LOGGER = "attendance_dashboard"

_CONTEXT_FIELDS = ("run_id", "stage", "month")

# ---------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k in _CONTEXT_FIELDS:
            if hasattr(record, k):
                base[k] = getattr(record, k)

        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)

        payload = getattr(record, "payload", None)
        if isinstance(payload, dict):
            base["payload"] = payload

        return json.dumps(base, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Format log records as human-readable text."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [record.levelname, record.name]

        ctx = [f"{k}={getattr(record, k)}" for k in _CONTEXT_FIELDS if getattr(record, k, None)]
        if ctx:
            parts.append("[" + " ".join(ctx) + "]")

        parts.append(record.getMessage())
        s = " ".join(parts)

        if record.exc_info:
            s += "\n" + self.formatException(record.exc_info)

        return s


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingOptions:
    """Configure logging behavior for a run."""

    level: str = "INFO"
    json_logs: bool = False
    log_file: Path | None = None
    enable_console: bool = True


def setup_logging(options: LoggingOptions | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call repeatedly: handlers installed by an earlier call are
    replaced, not duplicated.
    """
    options = options or LoggingOptions()
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, options.level.upper(), logging.INFO))
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fmt = JsonFormatter() if options.json_logs else TextFormatter()

    if options.enable_console:
        # stdout carries command output
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(logger.level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    if options.log_file:
        options.log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(options.log_file, encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


# ---------------------------------------------------------------------
# Context injection
# ---------------------------------------------------------------------


class ContextAdapter(logging.LoggerAdapter):
    """Inject context fields into log records."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        merged = dict(self.extra)
        merged.update(extra)
        kwargs["extra"] = merged
        return msg, kwargs


def with_context(
    logger: logging.Logger,
    *,
    run_id: str | None = None,
    stage: str | None = None,
    month: str | None = None,
) -> ContextAdapter:
    """Create a context adapter with run, stage, and month info."""
    extra: dict[str, Any] = {}
    if run_id:
        extra["run_id"] = run_id
    if stage:
        extra["stage"] = stage
    if month:
        extra["month"] = month
    return ContextAdapter(logger, extra)
