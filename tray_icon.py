"""System-tray property menu via pystray."""

from typing import Callable, Iterable

import pystray
from pystray import MenuItem, Menu

from icon_gen import create_icon_image
from presets import SIZES, THEMES, WEEK_STARTS, size_label
from settings import WidgetState
from timeline_logic import range_tooltip


def _choice_menu(
    state: WidgetState,
    key: str,
    options: Iterable[str],
    label_of: Callable[[str], str],
    on_select: Callable[[str, str], None],
) -> Menu:
    """Radio submenu; a pick is handed to *on_select* as ``(key, option)``."""
    def _select(option: str):
        return lambda _icon, _item: on_select(key, option)

    def _checked(option: str):
        return lambda _item: state.get(key) == option

    return Menu(*[
        MenuItem(label_of(option), _select(option), checked=_checked(option), radio=True)
        for option in options
    ])


def range_text(state: WidgetState) -> str:
    start, end = state.date_range()
    return range_tooltip(start, end)


def refresh_tray(icon: pystray.Icon, state: WidgetState) -> None:
    """Redraw the icon and menu after the widget state changed."""
    icon.icon = create_icon_image(state.theme())
    icon.title = f"Mini Timeline – {range_text(state)}"
    icon.update_menu()


def create_tray(
    state: WidgetState,
    on_show: Callable[[], None],
    on_pick_range: Callable[[], None],
    on_export: Callable[[], None],
    on_exit: Callable[[], None],
    on_select: Callable[[str, str], None],
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started).

    Menu actions run on the pystray thread and only forward to the
    callbacks; *on_select* receives ``("theme" | "size" | "week_start", value)``.
    """
    menu = Menu(
        MenuItem("Show Timeline", lambda _icon, _item: on_show(), default=True),
        MenuItem("Theme", _choice_menu(state, "theme", THEMES, str, on_select)),
        MenuItem("Size", _choice_menu(state, "size", SIZES, size_label, on_select)),
        MenuItem("Week starts on",
                 _choice_menu(state, "week_start", WEEK_STARTS, size_label, on_select)),
        Menu.SEPARATOR,
        MenuItem(lambda _item: range_text(state), lambda _icon, _item: on_pick_range()),
        MenuItem("Export PNG…", lambda _icon, _item: on_export()),
        Menu.SEPARATOR,
        MenuItem("Exit", lambda _icon, _item: on_exit()),
    )
    return pystray.Icon("mini-timeline", create_icon_image(state.theme()),
                        f"Mini Timeline – {range_text(state)}", menu)
