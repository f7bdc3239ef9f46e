"""Shop initialization.

Creates a shop's folder structure and an empty slot database inside the data
root. Existing slots are left untouched, so running it twice is safe.
"""

from __future__ import annotations

from pathlib import Path

from .kv_store.sqlite_store import SqliteKeyValueStore
from .paths_and_safety import ShopPaths, ensure_shop_directories, resolve_shop_paths


def init_shop(shop_name: str, data_root: Path | None = None) -> ShopPaths:
    """Initialize (create) the directory structure and database for a shop.

    Parameters
    ----------
    shop_name:
        Name of the shop to initialize.
    data_root:
        Optional override for the data root. If not provided, the default
        data root resolver is used.

    Returns
    -------
    ShopPaths
        The resolved shop paths that were initialized.
    """
    paths = resolve_shop_paths(shop_name=shop_name, data_root=data_root)
    ensure_shop_directories(paths)
    SqliteKeyValueStore(db_path=paths.db_path)
    return paths
