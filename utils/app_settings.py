"""Application settings used by the deployment editor.

Values come from environment variables first, then from an optional INI
file at ``$DEPLOYMENTS_DATA_DIR/app.ini`` (section ``[deployments]``), and
finally fall back to built-in defaults.
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_SECTION = "deployments"


def _data_dir() -> Path:
    return Path(os.environ.get("DEPLOYMENTS_DATA_DIR", "data"))


def _read_ini_value(key: str) -> str | None:
    """Read ``key`` from the ``[deployments]`` section of ``app.ini``."""
    ini_path = _data_dir() / "app.ini"
    if not ini_path.exists():
        return None
    cp = configparser.ConfigParser()
    try:
        cp.read(ini_path, encoding="utf-8")
    except configparser.Error as e:
        logger.warning("[settings] unreadable %s: %s", ini_path, e)
        return None
    value = cp.get(_SECTION, key, fallback=None)
    return value.strip() if value else None


def _setting(env_name: str, ini_key: str, default: str) -> str:
    raw = os.environ.get(env_name)
    if raw and raw.strip():
        return raw.strip()
    return _read_ini_value(ini_key) or default


def default_start() -> str:
    return _setting("DEPLOYMENTS_DEFAULT_START", "default_start", "08:00")


def default_end() -> str:
    return _setting("DEPLOYMENTS_DEFAULT_END", "default_end", "16:00")


def event_id_prefix() -> str:
    return _setting("DEPLOYMENTS_ID_PREFIX", "id_prefix", "EV-")


DEFAULT_START: str = default_start()
DEFAULT_END: str = default_end()
EVENT_ID_PREFIX: str = event_id_prefix()


__all__ = [
    "DEFAULT_START",
    "DEFAULT_END",
    "EVENT_ID_PREFIX",
    "default_start",
    "default_end",
    "event_id_prefix",
]
