"""Locating ``attachments.toml``.

An explicit ``--config`` path wins, then ``ATTACHMENTS_CONFIG``, then the
nearest ``attachments.toml`` at or above the starting directory.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "attachments.toml"
CONFIG_ENV_VAR = "ATTACHMENTS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file at or above *start* (default: CWD).

    ``ATTACHMENTS_CONFIG`` short-circuits the walk: its file is used when it
    exists, and no config is used when it does not.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(
    config_path: str | Path | None = None,
    start: Path | None = None,
) -> Path | None:
    """Return the config file a run should read, or None.

    A missing explicit *config_path* means no config; discovery is not
    attempted in that case.
    """
    if config_path:
        path = Path(config_path)
        return path if path.is_file() else None
    return find_config(start)
