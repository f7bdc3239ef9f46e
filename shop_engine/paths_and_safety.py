"""
Filesystem path policy.

This module is the single choke point for determining where the shop keeps its
data:

- Runtime data lives under a data root (default: %LOCALAPPDATA%\\toyshop, or
  ~/.toyshop where no Windows profile variables exist).
- Each named shop gets its own folder holding the slot database and logs.

Nothing in the engine should choose an on-disk location without going through
this module.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ShopPathError

DATA_ROOT_ENV = "TOYSHOP_DATA_ROOT"
DEFAULT_SHOP_NAME = "default"


@dataclass(frozen=True, slots=True)
class ShopPaths:
    """
    Concrete resolved paths for a shop.

    Attributes
    ----------
    data_root:
        The root directory for all runtime data.
    shop_root:
        Root for the named shop within `data_root`.
    db_path:
        SQLite database holding the durable slots.
    logs_root:
        Log files, if file logging is enabled.
    """

    data_root: Path
    shop_root: Path
    db_path: Path
    logs_root: Path


def default_data_root() -> Path:
    """
    Resolve the default data root.

    Preference order:
    1) $TOYSHOP_DATA_ROOT if set
    2) %LOCALAPPDATA%/toyshop
    3) %APPDATA%/toyshop (Roaming)
    4) ~/.toyshop
    """
    override = os.environ.get(DATA_ROOT_ENV)
    if override:
        return Path(override)

    local = os.environ.get("LOCALAPPDATA")
    if local:
        return Path(local) / "toyshop"

    roaming = os.environ.get("APPDATA")
    if roaming:
        return Path(roaming) / "toyshop"

    return Path.home() / ".toyshop"


def resolve_shop_paths(shop_name: str, data_root: Path | None = None) -> ShopPaths:
    """
    Resolve and return all filesystem paths for a given shop.

    Parameters
    ----------
    shop_name:
        Name of the shop. Must be a non-empty, simple folder name.
    data_root:
        Optional override for the data root.

    Returns
    -------
    ShopPaths
        Resolved shop paths.

    Raises
    ------
    ShopPathError
        If shop_name is unsafe or resolution escapes the data root.
    """
    shop = shop_name.strip()
    if not shop:
        raise ShopPathError("Shop name must not be empty.")
    if any(ch in shop for ch in r'\/:*?"<>|'):
        raise ShopPathError(f"Shop name contains invalid characters: {shop!r}")
    if shop in {".", ".."}:
        raise ShopPathError("Shop name must not be '.' or '..'.")

    root = (data_root or default_data_root()).expanduser().resolve()
    shop_root = (root / "shops" / shop).resolve()
    _assert_within(root, shop_root, purpose="shop root")

    return ShopPaths(
        data_root=root,
        shop_root=shop_root,
        db_path=shop_root / "shop.sqlite",
        logs_root=shop_root / "logs",
    )


def ensure_shop_directories(paths: ShopPaths) -> None:
    """
    Create the directory structure for a shop if it does not already exist.

    Notes
    -----
    This function creates directories only. It performs no deletion.
    """
    for directory in (paths.shop_root, paths.logs_root):
        directory.mkdir(parents=True, exist_ok=True)


def shop_paths_as_text(paths: ShopPaths) -> str:
    """Render ShopPaths as a readable multi-line string."""
    return "\n".join(
        [
            f"data_root: {paths.data_root}",
            f"shop_root: {paths.shop_root}",
            f"db_path: {paths.db_path}",
            f"logs_root: {paths.logs_root}",
        ]
    )


def _assert_within(base: Path, candidate: Path, purpose: str) -> None:
    """Ensure candidate is within base after resolution."""
    try:
        candidate.relative_to(base)
    except ValueError as exc:
        raise ShopPathError(f"Unsafe path for {purpose}: {candidate} is not within {base}") from exc
