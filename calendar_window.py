"""Linear year window (tkinter) drawing the layout computed in linear_layout."""

from __future__ import annotations

import logging
from datetime import date, datetime
from tkinter import font as tkfont
from tkinter import messagebox
import tkinter as tk

from calendar_logic import GRID_WEEK_START, month_name, weekday_labels
from controller import MONTH_VIEW, YEAR_VIEW, CalendarController, MonthGridCell
from errors import EventConstructionError
from event_forms import EventDraft, describe_event, draft_for, format_date
from event_source import CalendarManager
from events import CalendarEvent
from linear_layout import GRID_COLUMNS, DayCell, EventPlacement, MonthRow, header_labels
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
GRID_BG = "white"
WEEKEND_BG = "#EDEDED"
PAD_BG = "#F7F7F7"
WN_FG = "#888888"
NOTICE_BG = "#FFF4CE"

# Cell geometry (pixels)
CELL_W = 26
CELL_H = 62
BAR_H = 11
BAR_GAP = 1
BAR_TOP = 2
LABEL_W = 10  # characters
MONTH_CELL_W = 110
MONTH_CELL_H = 90


class _ToolTip:
    """Lightweight shared tooltip listing a day's events."""

    __slots__ = ("_root", "_tw")

    def __init__(self, root: tk.Tk) -> None:
        self._root = root
        self._tw: tk.Toplevel | None = None

    def show(self, widget: tk.Widget, text: str) -> None:
        self.hide()
        tw = tk.Toplevel(self._root)
        tw.wm_overrideredirect(True)
        tw.wm_attributes("-topmost", True)
        lbl = tk.Label(
            tw, text=text, bg="#FFFFE0", fg="black",
            relief="solid", borderwidth=1, padx=6, pady=3, justify="left",
        )
        lbl.pack()
        x = widget.winfo_rootx() + widget.winfo_width() // 2
        y = widget.winfo_rooty() + widget.winfo_height() + 2
        tw.wm_geometry(f"+{x}+{y}")
        self._tw = tw

    def hide(self) -> None:
        if self._tw:
            self._tw.destroy()
            self._tw = None


class _MonthRowPanel:
    """Pre-allocated widgets for one month row: two labels and the day canvases."""

    __slots__ = ("left", "right", "cells")

    def __init__(self, parent: tk.Frame, grid_row: int, fonts: dict, bind) -> None:
        self.left = tk.Label(
            parent, font=fonts["header"], bg=GRID_BG, fg="#333333",
            width=LABEL_W, anchor="e",
        )
        self.left.grid(row=grid_row, column=0, sticky="e", padx=(0, 4))

        self.cells: list[tk.Canvas] = []
        for c in range(GRID_COLUMNS):
            cell = tk.Canvas(
                parent, width=CELL_W, height=CELL_H, bg=GRID_BG,
                highlightthickness=1, highlightbackground="#DDDDDD", borderwidth=0,
            )
            cell.grid(row=grid_row, column=c + 1)
            bind(cell)
            self.cells.append(cell)

        self.right = tk.Label(
            parent, font=fonts["header"], bg=GRID_BG, fg="#333333",
            width=LABEL_W, anchor="w",
        )
        self.right.grid(row=grid_row, column=GRID_COLUMNS + 1, sticky="w", padx=(4, 0))


class CalendarWindow:
    """Twelve-row linear year calendar with a month grid as second view."""

    def __init__(self, manager: CalendarManager, settings_path: str | None = None) -> None:
        self.root = tk.Tk()
        self.root.resizable(True, True)
        self.root.configure(bg=GRID_BG)

        self._setup_fonts()

        self._settings_path = settings_path
        settings = load_settings(settings_path)
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]

        self.controller = CalendarController(
            manager, self, view=settings["view"],
            show_weekends=settings["show_weekends"],
        )
        self.root.title(self.controller.title())

        # Canvas-to-date mapping (filled on every redraw)
        self._widget_dates: dict[int, date] = {}
        # Canvas-to-cell mapping for event hit testing and tooltips
        self._widget_cells: dict[int, DayCell | MonthGridCell] = {}

        self._panel_fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "small": self.font_small,
        }
        self._rows: list[_MonthRowPanel] = []
        self._month_cells: list[list[tk.Canvas]] = []
        self._build_shell()
        self._tooltip = _ToolTip(self.root)
        self._redraw()

        self.root.bind("<Escape>", self._on_escape)
        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_small = tkfont.Font(family=base, size=7)
        self.font_footer = tkfont.Font(family=base, size=9)

    # ------------------------------------------------------------------
    # Build shell (once): nav bar, year grid, month grid, footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4, fill="both", expand=True)

        # Navigation row: ◀  Today  ▶  ...  Year | Month
        nav = self._nav = tk.Frame(self._outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_today.pack(side="left", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self._go_today())

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_next.pack(side="left", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        self._period_label = tk.Label(nav, font=self.font_nav, bg=GRID_BG)
        self._period_label.pack(side="left", padx=12)

        self._weekend_btn = tk.Label(
            nav, font=self.font_normal, bg=GRID_BG, fg=ACCENT, cursor="hand2",
        )
        self._weekend_btn.pack(side="right", padx=6)
        self._weekend_btn.bind("<Button-1>", lambda _e: self._toggle_weekends())

        for view, text in ((MONTH_VIEW, "Month"), (YEAR_VIEW, "Year")):
            btn = tk.Label(
                nav, text=text, font=self.font_bold, bg=GRID_BG, fg=ACCENT,
                cursor="hand2",
            )
            btn.pack(side="right", padx=6)
            btn.bind("<Button-1>", lambda _e, v=view: self._set_view(v))

        # Notice bar (event source problems), hidden while empty
        self._notice_label = tk.Label(
            self._outer, font=self.font_normal, bg=NOTICE_BG, fg="#333333",
            anchor="w", padx=6, cursor="hand2",
        )
        self._notice_label.bind("<Button-1>", lambda _e: self._dismiss_notice())

        self._year_frame = tk.Frame(self._outer, bg=GRID_BG)
        self._build_year_grid(self._year_frame)
        self._month_frame = tk.Frame(self._outer, bg=GRID_BG)
        self._build_month_grid(self._month_frame)

        # Footer
        self._footer_label = tk.Label(
            self._outer, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(side="bottom", pady=(4, 0))

    def _bind_cell(self, cell: tk.Canvas) -> None:
        cell.bind("<ButtonPress-1>", self._on_press)
        cell.bind("<B1-Motion>", self._on_motion)
        cell.bind("<ButtonRelease-1>", self._on_release)
        cell.bind("<Double-Button-1>", self._on_double_click)
        cell.bind("<Enter>", self._on_cell_enter)
        cell.bind("<Leave>", self._on_cell_leave)

    def _build_year_grid(self, parent: tk.Frame) -> None:
        labels = header_labels()
        for grid_row in (0, 13):
            for c, text in enumerate(labels):
                weekend = text in ("Sat", "Sun")
                tk.Label(
                    parent, text=text[:2], font=self.font_small,
                    bg=WEEKEND_BG if weekend else GRID_BG,
                    fg="#CC0000" if weekend else "#333333", width=3,
                ).grid(row=grid_row, column=c + 1)
        for m in range(12):
            self._rows.append(_MonthRowPanel(parent, m + 1, self._panel_fonts, self._bind_cell))

    def _build_month_grid(self, parent: tk.Frame) -> None:
        for col, abbr in enumerate(weekday_labels(GRID_WEEK_START)):
            fg = "#CC0000" if abbr in ("Sat", "Sun") else "#333333"
            tk.Label(
                parent, text=abbr, font=self.font_bold, bg=GRID_BG, fg=fg,
            ).grid(row=0, column=col)
        for r in range(6):
            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    parent, width=MONTH_CELL_W, height=MONTH_CELL_H, bg=GRID_BG,
                    highlightthickness=1, highlightbackground="#DDDDDD", borderwidth=0,
                )
                cell.grid(row=r + 1, column=c)
                self._bind_cell(cell)
                row_cells.append(cell)
            self._month_cells.append(row_cells)

    # ------------------------------------------------------------------
    # Redraw
    # ------------------------------------------------------------------
    def _redraw(self) -> None:
        self._widget_dates.clear()
        self._widget_cells.clear()
        ctl = self.controller

        if ctl.view == YEAR_VIEW:
            self._month_frame.pack_forget()
            self._year_frame.pack()
            layout = ctl.render()
            self._period_label.configure(text=str(layout.year))
            for panel, row in zip(self._rows, layout.months):
                self._fill_row(panel, row)
        else:
            self._year_frame.pack_forget()
            self._month_frame.pack()
            self._period_label.configure(
                text=f"{month_name(ctl.anchor.month)} {ctl.anchor.year}")
            for r, week in enumerate(ctl.month_cells()):
                for c, mcell in enumerate(week):
                    self._fill_month_cell(self._month_cells[r][c], mcell)

        self._weekend_btn.configure(
            text="Hide weekends" if ctl.show_weekends else "Show weekends")
        self.root.title(ctl.title())
        self._footer_label.configure(text=ctl.selection_summary())
        self._show_notice()

    def _fill_row(self, panel: _MonthRowPanel, row: MonthRow) -> None:
        panel.left.configure(text=row.month_name)
        panel.right.configure(text=row.month_name)
        shade_weekends = self.controller.show_weekends
        sel_lo, sel_hi = self.controller.selection_range()
        for cell, lcell in zip(panel.cells, row.cells):
            cell.delete("all")
            if lcell.is_empty:
                cell.configure(
                    bg=WEEKEND_BG if (lcell.is_weekend and shade_weekends) else PAD_BG,
                    cursor="",
                )
                continue
            self._widget_dates[id(cell)] = lcell.date
            self._widget_cells[id(cell)] = lcell
            in_sel = sel_lo is not None and sel_lo <= lcell.date <= sel_hi
            self._draw_day(cell, lcell, in_sel)

    def _day_bg(self, is_today: bool, is_weekend: bool, in_sel: bool) -> tuple[str, str]:
        if in_sel:
            return SEL_BG, "black"
        if is_today:
            return ACCENT, "white"
        if is_weekend and self.controller.show_weekends:
            return WEEKEND_BG, "#CC0000"
        return GRID_BG, "black"

    def _draw_day(self, cell: tk.Canvas, day: DayCell, in_sel: bool) -> None:
        bg, fg = self._day_bg(day.is_today, day.is_weekend, in_sel)
        cell.configure(bg=bg, cursor="hand2")
        if not day.placements:
            cell.create_text(
                CELL_W // 2, 10, text=str(day.day_number), fill=fg,
                font=self.font_bold if day.is_today else self.font_normal,
            )
            return
        for placement in day.placements:
            self._draw_bar(cell, placement)
        if day.overflow_count:
            cell.create_text(
                2, CELL_H - 2, text=f"+{day.overflow_count}", anchor="sw",
                fill=WN_FG, font=self.font_small,
            )

    def _draw_bar(self, cell: tk.Canvas, placement: EventPlacement) -> None:
        y1 = BAR_TOP + placement.lane * (BAR_H + BAR_GAP)
        x1 = 0 if placement.continues_prev else 2
        x2 = CELL_W + 2 if placement.continues_next else CELL_W - 1
        cell.create_rectangle(x1, y1, x2, y1 + BAR_H,
                              fill=placement.event.color, outline="")
        if placement.show_title:
            cell.create_text(
                x1 + 2, y1 + BAR_H // 2, text=placement.event.title, anchor="w",
                fill="white", font=self.font_small,
            )

    def _fill_month_cell(self, cell: tk.Canvas, mcell: MonthGridCell) -> None:
        cell.delete("all")
        if mcell.date is None:
            cell.configure(bg=PAD_BG, cursor="")
            return
        self._widget_dates[id(cell)] = mcell.date
        self._widget_cells[id(cell)] = mcell
        sel_lo, sel_hi = self.controller.selection_range()
        in_sel = sel_lo is not None and sel_lo <= mcell.date <= sel_hi
        is_today = mcell.date == self.controller.today_fn()
        bg, fg = self._day_bg(is_today, mcell.date.weekday() >= 5, in_sel)
        cell.configure(bg=bg, cursor="hand2")
        cell.create_text(6, 4, text=str(mcell.date.day), anchor="nw", fill=fg,
                         font=self.font_bold)
        for i, event in enumerate(mcell.events):
            y1 = 22 + i * (BAR_H + 4)
            cell.create_rectangle(4, y1, MONTH_CELL_W - 4, y1 + BAR_H + 2,
                                  fill=event.color, outline="")
            cell.create_text(7, y1 + (BAR_H + 2) // 2, text=event.title,
                             anchor="w", fill="white", font=self.font_small)
        if mcell.overflow_count:
            cell.create_text(6, MONTH_CELL_H - 4, text=f"+{mcell.overflow_count} more",
                             anchor="sw", fill=WN_FG, font=self.font_small)

    def _show_notice(self) -> None:
        notice = self.controller.notice
        if notice:
            self._notice_label.configure(text=f"{notice}   (click to dismiss)")
            self._notice_label.pack(fill="x", pady=(0, 4), after=self._nav)
        else:
            self._notice_label.pack_forget()

    def _dismiss_notice(self) -> None:
        self.controller.manager.clear_notice()
        self._show_notice()

    # ------------------------------------------------------------------
    # Mouse handling: press/drag/release select a range
    # ------------------------------------------------------------------
    def _event_at(self, event: tk.Event) -> CalendarEvent | None:
        cell = self._widget_cells.get(id(event.widget))
        if isinstance(cell, DayCell):
            lane = (event.y - BAR_TOP) // (BAR_H + BAR_GAP)
            for placement in cell.placements:
                if placement.lane == lane:
                    return placement.event
        elif isinstance(cell, MonthGridCell):
            index = (event.y - 22) // (BAR_H + 4)
            if event.y >= 22 and index < len(cell.events):
                return cell.events[index]
        return None

    def _on_press(self, event: tk.Event) -> None:
        clicked = self._event_at(event)
        if clicked is not None:
            self.controller.click_event(clicked)
            return
        d = self._widget_dates.get(id(event.widget))
        if d:
            self.controller.press(d)
            self._redraw_selection()

    def _on_motion(self, event: tk.Event) -> None:
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        if w and id(w) in self._widget_dates:
            if self.controller.drag(self._widget_dates[id(w)]):
                self._redraw_selection()

    def _on_release(self, event: tk.Event) -> None:
        if self.controller.sel_start is None:
            return
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        end = self._widget_dates.get(id(w)) if w else None
        self.controller.release(end)
        lo, hi = self.controller.selection_range()
        if lo is not None and lo == hi:
            self.controller.clear_selection()
            self.controller.click_date(lo)
        self._redraw_selection()

    def _on_double_click(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d and self._event_at(event) is None:
            self.controller.double_click_date(d)

    def _redraw_selection(self) -> None:
        # Layout is cached by the controller, so this only repaints
        self._redraw()

    def _on_cell_enter(self, event: tk.Event) -> None:
        cell = self._widget_cells.get(id(event.widget))
        if cell is None:
            return
        if isinstance(cell, DayCell):
            names = [p.event.title for p in cell.placements]
            hidden = cell.overflow_count
        else:
            names = [e.title for e in cell.events]
            hidden = cell.overflow_count
        if not names:
            return
        lines = [format_date(cell.date), *names]
        if hidden:
            lines.append(f"+{hidden} more")
        self._tooltip.show(event.widget, "\n".join(lines))

    def _on_cell_leave(self, _event: tk.Event) -> None:
        self._tooltip.hide()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def date_selected(self, day: date) -> None:
        # The controller moved its anchor; the Month button now opens that month
        self._redraw()

    def create_requested(self, start: date, end: date | None) -> None:
        self.open_create_dialog(draft_for(start, end))

    def event_selected(self, event: CalendarEvent) -> None:
        self.open_event_dialog(event)

    # ------------------------------------------------------------------
    # Create dialog
    # ------------------------------------------------------------------
    def open_create_dialog(self, draft: EventDraft) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("New Event")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        title_var = tk.StringVar(value=draft.title)
        start_var = tk.StringVar()
        end_var = tk.StringVar()
        all_day_var = tk.BooleanVar(value=draft.all_day)
        location_var = tk.StringVar(value=draft.location)

        def _show_times() -> None:
            start_var.set(draft.start.strftime("%Y-%m-%d %H:%M"))
            end_var.set(draft.end.strftime("%Y-%m-%d %H:%M"))

        _show_times()

        rows = (("Title:", title_var), ("Start:", start_var),
                ("End:", end_var), ("Location:", location_var))
        for r, (text, var) in enumerate(rows):
            tk.Label(frame, text=text, font=self.font_normal).grid(
                row=r, column=0, sticky="w", pady=4,
            )
            tk.Entry(frame, textvariable=var, width=28, font=self.font_normal).grid(
                row=r, column=1, padx=(8, 0), pady=4,
            )

        def _toggle_all_day() -> None:
            draft.set_all_day(all_day_var.get())
            _show_times()

        tk.Checkbutton(
            frame, text="All day", variable=all_day_var, font=self.font_normal,
            command=_toggle_all_day,
        ).grid(row=len(rows), column=0, columnspan=2, sticky="w", pady=4)

        tk.Label(frame, text="Notes:", font=self.font_normal).grid(
            row=len(rows) + 1, column=0, sticky="nw", pady=4,
        )
        notes = tk.Text(frame, width=28, height=4, font=self.font_normal)
        notes.insert("1.0", draft.notes)
        notes.grid(row=len(rows) + 1, column=1, padx=(8, 0), pady=4)

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=len(rows) + 2, column=0, columnspan=2, pady=(8, 0))

        def on_save() -> None:
            try:
                draft.start = datetime.strptime(start_var.get().strip(), "%Y-%m-%d %H:%M")
                draft.end = datetime.strptime(end_var.get().strip(), "%Y-%m-%d %H:%M")
            except ValueError:
                messagebox.showerror("New Event", "Use the format YYYY-MM-DD HH:MM", parent=dlg)
                return
            draft.title = title_var.get()
            draft.location = location_var.get()
            draft.notes = notes.get("1.0", "end")
            try:
                self.controller.create_event(draft)
            except EventConstructionError as exc:
                messagebox.showerror("New Event", str(exc), parent=dlg)
                return
            dlg.destroy()
            self._redraw()

        tk.Button(btn_frame, text="Save", width=8, command=on_save).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Event detail dialog
    # ------------------------------------------------------------------
    def open_event_dialog(self, event: CalendarEvent) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title(event.title)
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        lines = describe_event(event)
        tk.Label(frame, text=lines[0], font=self.font_header, bg=event.color,
                 fg="white", padx=6).pack(fill="x", pady=(0, 6))
        for line in lines[1:]:
            tk.Label(frame, text=line, font=self.font_normal, justify="left",
                     anchor="w", wraplength=280).pack(fill="x")

        def on_delete() -> None:
            if not messagebox.askyesno("Delete Event", f"Delete “{event.title}”?",
                                       parent=dlg):
                return
            self.controller.delete_event(event.id)
            dlg.destroy()
            self._redraw()

        btn_frame = tk.Frame(frame)
        btn_frame.pack(pady=(8, 0))
        tk.Button(btn_frame, text="Delete", width=8, command=on_delete).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Close", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        self.controller.navigate(direction)
        self._redraw()

    def _set_view(self, view: str) -> None:
        self.controller.set_view(view)
        self._redraw()

    def _go_today(self) -> None:
        self.controller.go_today()
        self._redraw()

    def _toggle_weekends(self) -> None:
        self.controller.toggle_weekends()
        self._redraw()

    # ------------------------------------------------------------------
    # ESC clears selection first, then hides
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        if self.controller.sel_start is not None:
            self.controller.clear_selection()
            self._redraw()
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Window size tracking (persisted on hide)
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()

    def _persist_settings(self) -> None:
        settings = load_settings(self._settings_path)
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        settings["view"] = self.controller.view
        settings["show_weekends"] = self.controller.show_weekends
        save_settings(settings, self._settings_path)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.controller.go_today()
        self._redraw()
        self.root.deiconify()
        self.root.update_idletasks()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        try:
            self._persist_settings()
        except OSError as exc:
            logger.warning("Could not save settings: %s", exc)
        self.root.withdraw()

    def go_today(self) -> None:
        self._go_today()

    def reload(self) -> None:
        self.controller.reload()
        self._redraw()

    # ------------------------------------------------------------------
    # Centre on screen, restoring the saved size
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        if self._saved_width and self._saved_height:
            win_w, win_h = self._saved_width, self._saved_height
        else:
            win_w = self.root.winfo_reqwidth()
            win_h = self.root.winfo_reqheight()
        x = max(0, (self.root.winfo_screenwidth() - win_w) // 2)
        y = max(0, (self.root.winfo_screenheight() - win_h) // 2)
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
