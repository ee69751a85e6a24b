"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from calendar_logic import day_of_year


def tray_title(today: date | None = None) -> str:
    today = today or date.today()
    return f"Linear Calendar – Day {day_of_year(today)}"


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_today: Callable[[], None] | None = None,
    on_reload: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_today is not None:
        items.append(MenuItem("Go to Today", lambda _icon, _item: on_today()))
    if on_reload is not None:
        items.append(MenuItem("Reload Events", lambda _icon, _item: on_reload()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    return pystray.Icon("linear-calendar", icon_image, tray_title(), menu)
