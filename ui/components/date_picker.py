import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from utils.date_helpers import parse_date, format_date, today


class DatePickerWidget(ctk.CTkFrame):
    """CTkEntry holding a YYYY-MM-DD date plus a calendar popup button.

    allow_empty=True turns it into an optional filter bound: an empty entry
    is valid and .get() returns ''.
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        allow_empty: bool = False,
        on_change=None,   # callable, fired after a valid edit
        width: int = 110,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._allow_empty = allow_empty
        self._on_change = on_change
        self._popup: ctk.CTkToplevel | None = None

        self._var = tk.StringVar(value=initial_date or "")

        self._entry = ctk.CTkEntry(
            self, textvariable=self._var, width=width,
            placeholder_text="YYYY-MM-DD" if allow_empty else None,
        )
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._on_focus_out)
        self._entry.bind("<Return>", self._on_focus_out)

        self._btn = ctk.CTkButton(
            self, text="📅", width=32, command=self._open_popup
        )
        self._btn.grid(row=0, column=1, padx=(4, 0))

    def get(self) -> str:
        """Return the date as YYYY-MM-DD, or '' if empty."""
        raw = self._var.get().strip()
        if not raw:
            return ""
        d = parse_date(raw)
        return format_date(d) if d else raw

    def set(self, date_str: str):
        self._var.set(date_str or "")
        self._reset_border()

    def is_valid(self) -> bool:
        raw = self._var.get().strip()
        if not raw:
            return self._allow_empty
        return parse_date(raw) is not None

    def _on_focus_out(self, _event=None):
        raw = self._var.get().strip()
        if not raw:
            self._reset_border()
            self._fire_change()
            return
        d = parse_date(raw)
        if d:
            self._var.set(format_date(d))
            self._reset_border()
            self._fire_change()
        else:
            self._entry.configure(border_color="#E74C3C")

    def _fire_change(self):
        if self._on_change:
            self._on_change()

    def _reset_border(self):
        self._entry.configure(border_color=("gray65", "gray35"))

    def _open_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
            self._popup = None
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        # Theme the calendar to match CTk appearance
        if ctk.get_appearance_mode() == "Dark":
            bg, fg = "#2b2b2b", "#ffffff"
        else:
            bg, fg = "#ffffff", "#000000"
        style = ttk.Style(popup)
        style.theme_use("default")

        current = parse_date(self._var.get()) or today()
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_date_selected(cal, popup))

        # Position below the entry
        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")
        popup.bind("<Escape>", lambda e: self._close_popup())

    def _on_date_selected(self, cal, popup):
        self._var.set(cal.get_date())
        self._reset_border()
        self._close_popup()
        self._fire_change()

    def _close_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
        self._popup = None
