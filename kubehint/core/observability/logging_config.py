"""
Logging configuration for the kubehint command line.

``kubehint.main`` calls ``setup_logging`` once per invocation. Library
users never need it: the engine only emits records on module loggers,
and the "No linter defined" notices are ordinary WARNING records.

Console level: ``--debug`` / ``--verbose`` / ``--quiet``, else
KUBEHINT_LOG_LEVEL, else WARNING. KUBEHINT_LOG_FILE adds a file at
KUBEHINT_LOG_FILE_LEVEL (default: the console level).
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LOG_LEVEL = "KUBEHINT_LOG_LEVEL"
ENV_LOG_FILE = "KUBEHINT_LOG_FILE"
ENV_LOG_FILE_LEVEL = "KUBEHINT_LOG_FILE_LEVEL"

# Console formats, most detailed first; the first whose level is
# reached by the console level wins.
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s"),
    (logging.CRITICAL, "-> %(levelname)s: %(message)s"),
)
_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# Loggers held at WARNING unless the console is at DEBUG
_NOISY_LOGGERS = ("yaml", "pydantic")


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LOG_LEVEL, "WARNING")


def _console_handler(level: int) -> logging.Handler:
    fmt = next(f for threshold, f in _CONSOLE_FORMATS if level <= threshold)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers with kubehint's.

    Args:
        level: Console level name. Unknown names mean WARNING.
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
        quiet_third_party: Hold noisy libraries at WARNING unless the
            console is at DEBUG.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]
    if log_file:
        handlers.append(_file_handler(log_file, _parse_level(log_file_level or level)))

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _parse_level(level: str | None) -> int:
    """Level name to number; anything unrecognised is WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
