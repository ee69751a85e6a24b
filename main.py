"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import os
import threading

from calendar_window import CalendarWindow
from event_source import CalendarManager, DisabledEventSource, EventSource, MemoryEventSource
from icon_gen import create_icon_image
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    level = os.environ.get("LINEAR_CALENDAR_LOG", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _make_source() -> EventSource:
    # "disabled" mimics a platform calendar that refused access
    if os.environ.get("LINEAR_CALENDAR_SOURCE", "memory") == "disabled":
        return DisabledEventSource()
    return MemoryEventSource()


def main() -> None:
    _setup_logging()

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    manager = CalendarManager(_make_source())
    manager.request_access()
    manager.load_events()

    cal_win = CalendarWindow(manager)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def on_today() -> None:
        cal_win.root.after(0, cal_win.go_today)

    def on_reload() -> None:
        cal_win.root.after(0, cal_win.reload)

    icon_image = create_icon_image()
    tray = create_tray(icon_image, on_show, on_exit,
                       on_today=on_today, on_reload=on_reload)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.show()
    logger.info("Linear calendar started")
    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
