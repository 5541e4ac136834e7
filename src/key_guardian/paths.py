"""Shared filesystem path helpers for Key Guardian."""
from __future__ import annotations

import sys
from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "Key Guardian"
_LINUX_APP_NAME = "key-guardian"

SEPARATOR = "/"


def _platform_dirs() -> PlatformDirs:
    if sys.platform in ("win32", "darwin"):
        return PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    return PlatformDirs(appname=_LINUX_APP_NAME, appauthor=None, roaming=False)


def runtime_config_dir() -> Path:
    """Return the per-user runtime configuration directory."""
    return Path(_platform_dirs().user_config_path)


def default_local_store_dir() -> Path:
    """Return the directory backing ``file:///`` storage."""
    return Path(_platform_dirs().user_data_path) / "store"


def join_store_path(root: str, name: str) -> str:
    """Join a root directory and a key location into one store path.

    ``name`` is normalised to begin with a separator and ``root`` is used as-is,
    so ``join_store_path("/inst", "keys/kek")`` yields ``"/inst/keys/kek"``.
    """
    if not name.startswith(SEPARATOR):
        name = SEPARATOR + name
    return root + name


__all__ = ["SEPARATOR", "default_local_store_dir", "join_store_path", "runtime_config_dir"]
