from __future__ import annotations

from pathlib import Path

import pytest

from shop_engine.errors import ShopPathError
from shop_engine.init_shop import init_shop
from shop_engine.paths_and_safety import (
    default_data_root,
    resolve_shop_paths,
    shop_paths_as_text,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TOYSHOP_DATA_ROOT", "LOCALAPPDATA", "APPDATA"):
        monkeypatch.delenv(name, raising=False)


def test_default_data_root_prefers_explicit_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TOYSHOP_DATA_ROOT", str(tmp_path / "custom"))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "Local"))

    assert default_data_root() == tmp_path / "custom"


def test_default_data_root_prefers_local_appdata(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "Local"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))

    assert default_data_root() == tmp_path / "Local" / "toyshop"


def test_default_data_root_falls_back_to_roaming(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))

    assert default_data_root() == tmp_path / "Roaming" / "toyshop"


def test_default_data_root_falls_back_to_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    assert default_data_root() == tmp_path / ".toyshop"


def test_resolve_shop_paths_layout(tmp_path: Path) -> None:
    paths = resolve_shop_paths("main", data_root=tmp_path)
    root = tmp_path.resolve()

    assert paths.data_root == root
    assert paths.shop_root == root / "shops" / "main"
    assert paths.db_path == root / "shops" / "main" / "shop.sqlite"
    assert "db_path:" in shop_paths_as_text(paths)


@pytest.mark.parametrize("name", ["", "   ", ".", "..", "a/b", r"a\b", "c:", "what?"])
def test_resolve_shop_paths_rejects_unsafe_names(name: str, tmp_path: Path) -> None:
    with pytest.raises(ShopPathError):
        resolve_shop_paths(name, data_root=tmp_path)


def test_init_shop_creates_directories_and_database(tmp_path: Path) -> None:
    paths = init_shop(shop_name="default", data_root=tmp_path)

    assert paths.shop_root.is_dir()
    assert paths.logs_root.is_dir()
    assert paths.db_path.is_file()

    # Second run leaves existing data alone.
    assert init_shop(shop_name="default", data_root=tmp_path) == paths
