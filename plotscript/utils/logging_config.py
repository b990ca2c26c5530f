"""Logging configuration for the plotscript entry points.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by whoever owns the process (the CLI, a test, an
embedding application):
    - Console handler on stderr, optional file handler
    - Human or JSON-lines format
    - Contextual fields (document=..., terminal=...) via contextvars
    - Python warnings routed into logging

Public API:
    setup_logging("INFO", context={"app": "compile_plot"})
    push_context(document="figure.yaml")
    pop_context(keys=["document"])

Format examples:
    Human: 2026-10-19T08:15:02.114Z | INFO     | app=compile_plot | Wrote script
    JSON:  {"t":"2026-10-19T08:15:02.114+00:00","lvl":"INFO","msg":"..."}

Idempotent: repeated setup_logging() calls replace, not duplicate, handlers.
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_context_var = contextvars.ContextVar('plotscript_log_context', default={})

_installed: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields to each record.

    Parameters
    ----------
    fmt_mode : str
        "human" or "json"
    use_color : bool
        ANSI level colors (only when stderr is a TTY)
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        entry = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'msg': record.getMessage(),
        }
        entry.update(context)
        if record.exc_info:
            entry['exc'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)

    def _format_human(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts_str, '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
            parts.append('|')
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        JSON lines instead of the human format
    color : bool
        ANSI colors on the console handler
    context : dict, optional
        Initial contextual fields, e.g. {"app": "compile_plot"}

    Returns
    -------
    list[logging.Handler]
        Handlers installed on the root logger
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(getattr(logging, level))

    fmt_mode = "json" if json else "human"
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ContextFormatter(fmt_mode, use_color=color))
    handlers: List[logging.Handler] = [console]

    if log_file:
        handlers.append(_create_file_handler(log_file, fmt_mode))

    for handler in handlers:
        root.addHandler(handler)
    _installed.extend(handlers)

    if context:
        push_context(**context)

    logging.captureWarnings(True)

    return handlers


def _create_file_handler(log_file: str, fmt_mode: str) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path)
    handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
    return handler


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(document="figure.yaml")
    >>> logger.info("Compiled")  # → "... | document=figure.yaml | Compiled"
    """
    _context_var.set({**_context_var.get({}), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; all of them when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)
