"""Conditional logging for bibfix.

Messages go to stderr and are only emitted in debug mode, which is enabled by
``BIBFIX_DEBUG=1`` in the environment or by the ``--debug`` CLI flag.
"""

import os
import sys

_DEBUG = os.environ.get("BIBFIX_DEBUG", "").lower() in ("1", "true", "yes")


def set_debug(enabled: bool) -> None:
    global _DEBUG
    _DEBUG = enabled


def _emit(tag: str, msg: str) -> None:
    if _DEBUG:
        print(f"[{tag}] {msg}", file=sys.stderr)


def debug(msg: str) -> None:
    _emit("DEBUG", msg)


def info(msg: str) -> None:
    _emit("INFO", msg)


def warning(msg: str) -> None:
    _emit("WARN", msg)
