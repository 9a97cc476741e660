"""
Mirror provider credentials into a dotenv file.

The settings table is the source of truth. When SETTINGS_ENV_FILE is set,
updates to keys listed in `defaults.ENV_SETTINGS` are also written to that
file so out-of-process consumers (deploy scripts, workers) see them. The
running process environment is left alone.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import dotenv

from core.config import env_str

from .defaults import ENV_SETTINGS

logger = logging.getLogger(__name__)


def env_file_path() -> Path | None:
    raw = env_str("SETTINGS_ENV_FILE")
    return Path(raw) if raw else None


def mirror_settings(values: Mapping[str, str], path: Path | None = None) -> list[str]:
    """
    Write mirrored keys from `values` (setting_key -> value) to the env file.
    Returns the environment variable names written. Never raises.

    Every existing `KEY=` line is replaced and missing keys are appended.
    Values are single-quoted so `$` and `#` are stored literally.
    """
    path = path or env_file_path()
    updates = {ENV_SETTINGS[k]: v for k, v in values.items() if k in ENV_SETTINGS}
    if path is None or not updates:
        return []

    try:
        for env_key in sorted(updates):
            dotenv.set_key(path, env_key, str(updates[env_key]), quote_mode="always")
    except OSError:
        logger.warning("env_mirror_failed path=%s keys=%s", path, sorted(updates), exc_info=True)
        return []

    logger.info("env_mirror_written path=%s keys=%s", path, sorted(updates))
    return sorted(updates)
