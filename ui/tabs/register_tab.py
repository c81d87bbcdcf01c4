import customtkinter as ctk
from services.report_service import ReportService
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.settings_service import SettingsService
from models.transaction import Transaction
from ui.components.transaction_form import TransactionForm
from ui.components.confirm_dialog import confirm
from ui.components.date_picker import DatePickerWidget
from utils.currency import format_currency


_MAX_RENDERED_ROWS = 200
_ALL = "All"


class RegisterTab(ctk.CTkFrame):
    """Filterable table of one kind of record (expenses or income) with stats."""

    def __init__(
        self,
        master,
        type_: str,
        report_service: ReportService,
        tx_service: TransactionService,
        category_service: CategoryService,
        settings_service: SettingsService,
        notify_refresh,   # callable
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._type = type_
        self._report_svc = report_service
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._settings_svc = settings_service
        self._notify_refresh = notify_refresh

        self._cat_var = ctk.StringVar(value=_ALL)
        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())
        self._select_all_var = ctk.BooleanVar(value=False)
        self._row_checks: dict[str, ctk.BooleanVar] = {}

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_filter_bar()
        self._build_stats()
        self._build_header()
        self._build_register()
        self._load()

    @property
    def _noun(self) -> str:
        return "expense" if self._type == "expense" else "income item"

    def refresh(self):
        self._cat_combo.configure(values=[_ALL] + self._cat_svc.get_for_type(self._type))
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="From:").pack(side="left", padx=(12, 4), pady=8)
        self._from_picker = DatePickerWidget(bar, allow_empty=True, on_change=self._load)
        self._from_picker.pack(side="left")

        ctk.CTkLabel(bar, text="To:").pack(side="left", padx=(12, 4))
        self._to_picker = DatePickerWidget(bar, allow_empty=True, on_change=self._load)
        self._to_picker.pack(side="left")

        ctk.CTkLabel(bar, text="Category:").pack(side="left", padx=(12, 4))
        self._cat_combo = ctk.CTkComboBox(
            bar, values=[_ALL] + self._cat_svc.get_for_type(self._type),
            variable=self._cat_var, width=140, state="readonly",
            command=lambda _: self._load(),
        )
        self._cat_combo.pack(side="left")

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search notes…", width=160,
        ).pack(side="left", padx=12)

        ctk.CTkButton(
            bar, text="Delete Selected", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._delete_selected,
        ).pack(side="right", padx=(4, 8))
        ctk.CTkButton(
            bar, text=f"+ Add {self._type.title()}", width=120,
            command=self.open_add_form,
        ).pack(side="right", padx=4)

    def _build_stats(self):
        self._stats_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._stats_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=8)
        self._stats_frame.grid_columnconfigure((0, 1, 2), weight=1)

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 0))
        ctk.CTkCheckBox(
            hdr, text="", width=30, variable=self._select_all_var,
            command=self._toggle_select_all,
        ).grid(row=0, column=0, padx=4, pady=4)
        cols = [("Date", 90), ("Category", 120), ("Account", 100), ("Amount", 100),
                ("Notes", 200), ("Recurring", 80), ("Actions", 100)]
        for i, (label, width) in enumerate(cols, start=1):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    def _build_register(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        self._row_checks = {}
        self._select_all_var.set(False)

        currency = self._settings_svc.get().currency
        category = self._cat_var.get()
        rows, stats = self._report_svc.get_filtered(
            self._type,
            date_from=self._from_picker.get() if self._from_picker.is_valid() else "",
            date_to=self._to_picker.get() if self._to_picker.is_valid() else "",
            category="" if category == _ALL else category,
            search=self._search_var.get().strip(),
        )

        for w in self._stats_frame.winfo_children():
            w.destroy()
        for i, (label, value) in enumerate([
            ("Total", stats["total"]),
            ("Average / Day", stats["avg_per_day"]),
            ("Largest", stats["max"]),
        ]):
            card = ctk.CTkFrame(self._stats_frame, fg_color=("gray90", "gray20"), corner_radius=10)
            card.grid(row=0, column=i, padx=6, sticky="ew")
            ctk.CTkLabel(card, text=label, text_color="gray60").pack(pady=(8, 0), padx=16)
            ctk.CTkLabel(
                card, text=format_currency(value, currency),
                font=ctk.CTkFont(size=16, weight="bold"),
            ).pack(pady=(2, 8), padx=16)

        if not rows:
            ctk.CTkLabel(
                self._scroll, text=f"No {self._noun}s match these filters.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx, currency)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)}. Narrow the filters to see more.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=6)

    def _add_row(self, idx: int, tx: Transaction, currency: str):
        bg = ("gray90", "gray20") if idx % 2 == 0 else ("gray86", "gray24")
        f = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        f.grid(row=idx, column=0, sticky="ew", pady=1)

        check = ctk.BooleanVar(value=False)
        self._row_checks[tx.id] = check
        ctk.CTkCheckBox(f, text="", width=30, variable=check).grid(row=0, column=0, padx=4)

        cells = [
            (tx.date, 90),
            (tx.category, 120),
            (tx.account, 100),
            (format_currency(tx.amount, currency), 100),
            (tx.notes, 200),
            ((tx.frequency or "yes") if tx.recurring else "", 80),
        ]
        for col, (text, width) in enumerate(cells, start=1):
            ctk.CTkLabel(f, text=text, width=width, anchor="w").grid(
                row=0, column=col, padx=4, pady=3, sticky="w"
            )

        actions = ctk.CTkFrame(f, fg_color="transparent")
        actions.grid(row=0, column=len(cells) + 1, padx=4)
        ctk.CTkButton(
            actions, text="Edit", width=44,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda t=tx: self._open_edit_form(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            actions, text="×", width=30,
            fg_color="transparent", border_width=1,
            text_color="#E74C3C",
            command=lambda t=tx: self._delete_one(t),
        ).pack(side="left", padx=2)

    # ── Actions ──────────────────────────────────────────────────────────────
    def _toggle_select_all(self):
        value = self._select_all_var.get()
        for var in self._row_checks.values():
            var.set(value)

    def open_add_form(self):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc, type_=self._type,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh()

    def _open_edit_form(self, tx: Transaction):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc, transaction=tx,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh()

    def _delete_one(self, tx: Transaction):
        if not confirm(self.winfo_toplevel(), "Delete this item?"):
            return
        self._tx_svc.delete(tx.id)
        self._notify_refresh()

    def _delete_selected(self):
        ids = [tx_id for tx_id, var in self._row_checks.items() if var.get()]
        if not ids:
            return
        if not confirm(self.winfo_toplevel(), f"Delete {len(ids)} {self._noun}(s)?"):
            return
        self._tx_svc.delete_bulk(self._type, ids)
        self._notify_refresh()
