"""Logging setup for the cloudbuild CLI."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "CLOUDBUILD_LOG_LEVEL"


def _resolve_level() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if raw:
        level = logging.getLevelName(raw)
        if isinstance(level, int):
            return level
    return logging.WARNING


def configure_cli_logging(*, verbose: bool = False, stream=None) -> logging.Logger:
    """Route cloudbuild.* loggers to stderr as plain messages. --verbose overrides env."""
    level = logging.DEBUG if verbose else _resolve_level()
    root = logging.getLogger("cloudbuild")
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False
    return root
