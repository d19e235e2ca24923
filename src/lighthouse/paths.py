from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path

logger = logging.getLogger(__name__)


def config_root() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return (root / "lighthouse").expanduser()


def expand_path(raw: str) -> str:
    """Expand a shell-style path the way a shell would for its first word.

    Quotes are honoured and ``~`` / ``$VAR`` are expanded. When the text can't
    be split (an unbalanced quote, for instance) the literal string is used.
    """
    try:
        words = shlex.split(raw)
    except ValueError as exc:
        logger.warning("Error expanding file %s: %s", raw, exc)
        return raw
    if not words:
        logger.warning("Error expanding file %r: nothing to expand", raw)
        return raw
    return os.path.expanduser(os.path.expandvars(words[0]))
