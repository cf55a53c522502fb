"""Entry point — PNG export, or pystray (daemon thread) with tkinter (main thread)."""

from __future__ import annotations

import argparse
import logging
import threading

from presets import SIZES, THEMES, WEEK_STARTS, get_size, get_theme, get_week_start
from render import export_png, render_timeline
from settings import WidgetState
from timeline_logic import InvalidDateError, parse_date

logger = logging.getLogger(__name__)


def _date_arg(value: str):
    try:
        return parse_date(value)
    except InvalidDateError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mini-timeline",
        description="Horizontal month/week timeline for a date range.",
    )
    parser.add_argument("--export", metavar="PATH",
                        help="render the timeline to a PNG and exit")
    parser.add_argument("--from", dest="start", type=_date_arg, metavar="YYYY-MM-DD",
                        help="first day (default: stored range)")
    parser.add_argument("--to", dest="end", type=_date_arg, metavar="YYYY-MM-DD",
                        help="last day, inclusive (default: stored range)")
    parser.add_argument("--theme", choices=sorted(THEMES))
    parser.add_argument("--size", choices=list(SIZES))
    parser.add_argument("--week-start", choices=list(WEEK_STARTS),
                        help="first day of the week (default: stored setting)")
    parser.add_argument("--settings", metavar="PATH",
                        help="settings file (default: ~/.mini-timeline-settings.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def export(args: argparse.Namespace, state: WidgetState) -> int:
    start, end = state.date_range()
    start = args.start or start
    end = args.end or end
    if start > end:
        logger.warning("Range %s..%s is inverted; the timeline is empty", start, end)
    theme = get_theme(args.theme) if args.theme else state.theme()
    size = get_size(args.size) if args.size else state.size()
    first_weekday = (get_week_start(args.week_start) if args.week_start
                     else state.first_weekday())
    export_png(render_timeline(start, end, theme, size, first_weekday), args.export)
    return 0


class TrayBridge:
    """Runs tray callbacks on the tkinter thread.

    pystray calls these from its own thread; each one only schedules work
    with ``root.after(0, ...)`` so ``WidgetState`` is touched by tkinter alone.
    """

    def __init__(self, root, state: WidgetState, window=None) -> None:
        self.root = root
        self.state = state
        self.window = window
        self.tray = None

    def _later(self, fn, *args) -> None:
        self.root.after(0, fn, *args)

    def on_show(self) -> None:
        self._later(self.window.toggle)

    def on_pick_range(self) -> None:
        self._later(self.window.open_date_picker)

    def on_export(self) -> None:
        self._later(self.window.export)

    def on_select(self, key: str, value: str) -> None:
        self._later(self.apply_choice, key, value)

    def on_exit(self) -> None:
        self._later(self._quit)

    def apply_choice(self, key: str, value: str) -> None:
        if self.state.set(key, value):
            self.window.refresh()
            self.on_state_change()

    def on_state_change(self) -> None:
        if self.tray is not None:
            from tray_icon import refresh_tray
            refresh_tray(self.tray, self.state)

    def _quit(self) -> None:
        if self.tray is not None:
            self.tray.stop()
        self.root.destroy()


def run_gui(state: WidgetState) -> int:
    # Imported here so --export works on machines without a display
    from timeline_window import TimelineWindow
    from tray_icon import create_tray

    bridge = TrayBridge(None, state)
    win = TimelineWindow(state, on_state_change=bridge.on_state_change)
    bridge.root, bridge.window = win.root, win

    bridge.tray = create_tray(state, bridge.on_show, bridge.on_pick_range,
                              bridge.on_export, bridge.on_exit, bridge.on_select)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=bridge.tray.run, daemon=True)
    tray_thread.start()

    win.show()
    win.root.mainloop()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = WidgetState(args.settings)
    if args.export:
        return export(args, state)
    return run_gui(state)


if __name__ == "__main__":
    raise SystemExit(main())
