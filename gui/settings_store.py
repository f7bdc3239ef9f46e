from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from shop_engine.data_models import OrderStatus, PaymentStatus
from shop_engine.errors import ShopPathError
from shop_engine.paths_and_safety import DEFAULT_SHOP_NAME, default_data_root, resolve_shop_paths


@dataclass(frozen=True, slots=True)
class GuiSettings:
    """
    Persisted GUI settings.

    Notes
    -----
    These settings only choose which shop the GUI opens and how the order form
    is prefilled. Shop data itself lives in the shop's slot database.
    """

    data_root: Path | None
    shop_name: str
    default_order_status: str  # "Pending" | "Completed"
    default_payment_status: str  # "Unpaid" | "Paid"

    @staticmethod
    def defaults() -> "GuiSettings":
        return GuiSettings(
            data_root=None,
            shop_name=DEFAULT_SHOP_NAME,
            default_order_status=OrderStatus.PENDING.value,
            default_payment_status=PaymentStatus.UNPAID.value,
        )


_ORDER_STATUSES = {s.value for s in OrderStatus}
_PAYMENT_STATUSES = {s.value for s in PaymentStatus}


def _settings_path(data_root: Path | None) -> Path:
    root = default_data_root() if data_root is None else data_root
    return root / "gui_settings.json"


def usable_shop_name(shop_name: str, data_root: Path | None) -> bool:
    """Return True if ``shop_name`` resolves to a safe folder under the data root."""
    try:
        resolve_shop_paths(shop_name=shop_name, data_root=data_root)
    except ShopPathError:
        return False
    return True


def load_gui_settings(*, data_root: Path | None) -> GuiSettings:
    """
    Load GUI settings from disk.

    Parameters
    ----------
    data_root:
        Data root holding the settings file. If None, the default is used.

    Returns
    -------
    GuiSettings
        Loaded settings, or defaults if missing/unreadable. Individual invalid
        values fall back to their defaults. A shop name that does not
        resolve to a safe shop folder counts as invalid.
    """
    defaults = GuiSettings.defaults()
    path = _settings_path(data_root)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return defaults
    if not isinstance(payload, dict):
        return defaults

    raw_root = payload.get("data_root")
    data_root_val = Path(raw_root) if isinstance(raw_root, str) and raw_root.strip() else None

    shop_name = payload.get("shop_name")
    if not isinstance(shop_name, str) or not usable_shop_name(shop_name.strip(), data_root_val):
        shop_name = defaults.shop_name

    order_status = payload.get("default_order_status")
    if order_status not in _ORDER_STATUSES:
        order_status = defaults.default_order_status

    payment_status = payload.get("default_payment_status")
    if payment_status not in _PAYMENT_STATUSES:
        payment_status = defaults.default_payment_status

    return GuiSettings(
        data_root=data_root_val,
        shop_name=shop_name.strip(),
        default_order_status=str(order_status),
        default_payment_status=str(payment_status),
    )


def save_gui_settings(*, data_root: Path | None, settings: GuiSettings) -> None:
    """
    Save GUI settings to disk.

    Parameters
    ----------
    data_root:
        Data root holding the settings file. If None, the default is used.
    settings:
        Settings to persist.
    """
    path = _settings_path(data_root)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "data_root": str(settings.data_root) if settings.data_root is not None else None,
        "shop_name": settings.shop_name,
        "default_order_status": settings.default_order_status,
        "default_payment_status": settings.default_payment_status,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
