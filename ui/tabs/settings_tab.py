import json
import logging
import customtkinter as ctk
from tkinter import filedialog, messagebox

from services.category_service import CategoryService
from services.data_service import DataService
from services.settings_service import SettingsService
from ui.components.confirm_dialog import confirm
from utils.app_config import get_db_folder, set_db_folder
from utils.constants import CURRENCY_SYMBOLS

logger = logging.getLogger(__name__)


class SettingsTab(ctk.CTkFrame):
    """Settings tab: preferences, category lists, backup/restore, reset."""

    def __init__(
        self,
        master,
        settings_service: SettingsService,
        category_service: CategoryService,
        data_service: DataService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._settings_svc = settings_service
        self._cat_svc = category_service
        self._data_svc = data_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_preferences_section(scroll)
        self._build_categories_section(scroll)
        self._build_data_section(scroll)
        self.refresh()

    def refresh(self):
        """Re-read settings from the store and update displayed values."""
        settings = self._settings_svc.get()
        self._currency_var.set(settings.currency)
        self._theme_var.set(settings.theme.title())
        self._hints_var.set(settings.beginner_hints)
        self._fill_category_list("expense", self._expense_list)
        self._fill_category_list("income", self._income_list)

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        outer = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=8, pady=(8, 0))
        outer.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            outer, text=title, font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))
        section = ctk.CTkFrame(outer, fg_color="transparent")
        section.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        return section

    # ── Section 1: Preferences ────────────────────────────────────────────────

    def _build_preferences_section(self, parent):
        section = self._make_section(parent, "Preferences", row=0)

        ctk.CTkLabel(section, text="Currency:", anchor="e", width=120).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._currency_var = ctk.StringVar()
        ctk.CTkComboBox(
            section, values=list(CURRENCY_SYMBOLS), variable=self._currency_var,
            width=120, state="readonly", command=self._on_currency,
        ).grid(row=0, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Theme:", anchor="e", width=120).grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._theme_var = ctk.StringVar()
        ctk.CTkSegmentedButton(
            section, values=["Dark", "Light"], variable=self._theme_var,
            command=self._on_theme,
        ).grid(row=1, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Beginner hints:", anchor="e", width=120).grid(
            row=2, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._hints_var = ctk.BooleanVar()
        ctk.CTkSwitch(
            section, text="", variable=self._hints_var, command=self._on_hints,
        ).grid(row=2, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Data folder:", anchor="e", width=120).grid(
            row=3, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._db_folder_var = ctk.StringVar(value=get_db_folder() or "(default: app folder)")
        ctk.CTkEntry(
            section, textvariable=self._db_folder_var, state="readonly", width=300,
        ).grid(row=3, column=1, padx=4, pady=6, sticky="w")
        ctk.CTkButton(
            section, text="Browse…", width=90, command=self._browse_db_folder,
        ).grid(row=3, column=2, padx=4)
        self._db_restart_label = ctk.CTkLabel(
            section, text="", text_color="#E67E22", font=ctk.CTkFont(size=11),
        )
        self._db_restart_label.grid(row=4, column=1, columnspan=2, sticky="w", padx=4)

    def _on_currency(self, value):
        self._settings_svc.set_currency(value)
        self._notify_refresh()

    def _on_theme(self, value):
        self._settings_svc.set_theme(value.lower())
        ctk.set_appearance_mode(value.lower())
        self._notify_refresh()

    def _on_hints(self):
        self._settings_svc.set_beginner_hints(self._hints_var.get())
        self._notify_refresh()

    def _browse_db_folder(self):
        path = filedialog.askdirectory(title="Choose data folder")
        if not path:
            return
        try:
            set_db_folder(path)
        except OSError as e:
            messagebox.showerror("Settings", f"Could not save config:\n{e}")
            return
        self._db_folder_var.set(path)
        self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    # ── Section 2: Categories ─────────────────────────────────────────────────

    def _build_categories_section(self, parent):
        section = self._make_section(parent, "Categories", row=1)
        section.grid_columnconfigure((0, 1), weight=1)
        self._expense_list, self._expense_new = self._build_category_column(
            section, 0, "Expense categories", "expense"
        )
        self._income_list, self._income_new = self._build_category_column(
            section, 1, "Income categories", "income"
        )

    def _build_category_column(self, parent, col, title, type_):
        frame = ctk.CTkFrame(parent, fg_color="transparent")
        frame.grid(row=0, column=col, sticky="nsew", padx=8)
        frame.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(frame, text=title, anchor="w").grid(row=0, column=0, columnspan=2, sticky="w")

        entry_var = ctk.StringVar()
        ctk.CTkEntry(frame, textvariable=entry_var, placeholder_text="New category").grid(
            row=1, column=0, sticky="ew", pady=4
        )
        ctk.CTkButton(
            frame, text="Add", width=60,
            command=lambda: self._add_category(type_, entry_var),
        ).grid(row=1, column=1, padx=(4, 0))

        pills = ctk.CTkScrollableFrame(frame, height=140)
        pills.grid(row=2, column=0, columnspan=2, sticky="nsew", pady=(4, 0))
        pills.grid_columnconfigure(0, weight=1)
        return pills, entry_var

    def _fill_category_list(self, type_, frame):
        for w in frame.winfo_children():
            w.destroy()
        for idx, name in enumerate(self._cat_svc.get_for_type(type_)):
            ctk.CTkLabel(frame, text=name, anchor="w").grid(row=idx, column=0, sticky="w", padx=4)
            ctk.CTkButton(
                frame, text="×", width=28,
                fg_color="transparent", border_width=1, text_color="#E74C3C",
                command=lambda n=name: self._remove_category(type_, n),
            ).grid(row=idx, column=1, padx=4, pady=1)

    def _add_category(self, type_, entry_var):
        name = entry_var.get().strip()
        if not name:
            return
        self._cat_svc.add(type_, name)
        entry_var.set("")
        self._notify_refresh()

    def _remove_category(self, type_, name):
        if self._cat_svc.is_in_use(type_, name) and not confirm(
            self.winfo_toplevel(),
            f'"{name}" is used in existing transactions. Delete anyway?',
        ):
            return
        self._cat_svc.remove(type_, name)
        self._notify_refresh()

    # ── Section 3: Data ───────────────────────────────────────────────────────

    def _build_data_section(self, parent):
        section = self._make_section(parent, "Data", row=2)

        btn_frame = ctk.CTkFrame(section, fg_color="transparent")
        btn_frame.grid(row=0, column=0, sticky="w", padx=8, pady=6)
        ctk.CTkButton(
            btn_frame, text="Export JSON", width=120, command=self._export_json,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            btn_frame, text="Import JSON…", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._import_json,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            btn_frame, text="Load Sample Data", width=140,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._load_sample,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            btn_frame, text="Reset App", width=110,
            fg_color="#E74C3C", hover_color="#C0392B",
            command=self._reset,
        ).pack(side="left", padx=4)

        self._io_status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._io_status_var,
            text_color="#2ECC71", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=1, column=0, sticky="w", padx=12, pady=(0, 6))

    def _export_json(self):
        path = filedialog.asksaveasfilename(
            title="Export backup",
            initialfile="pfm_backup.json",
            defaultextension=".json",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._data_svc.export_json(), f, indent=2)
        except OSError as e:
            logger.exception("Export to %s failed", path)
            messagebox.showerror("Export Failed", str(e))
            return
        self._io_status_var.set(f"Exported to {path}")

    def _import_json(self):
        path = filedialog.askopenfilename(
            title="Import backup",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", path, e)
            messagebox.showerror("Import Failed", "Could not read this JSON file.")
            return
        if not confirm(
            self.winfo_toplevel(),
            "Importing replaces ALL current transactions and settings. Continue?",
            confirm_text="Import",
        ):
            return
        try:
            stats = self._data_svc.import_json(data)
        except ValueError as e:
            messagebox.showerror("Import Failed", str(e))
            return
        ctk.set_appearance_mode(self._settings_svc.get().theme)
        self._notify_refresh()
        skipped = f", {stats['skipped']} skipped" if stats["skipped"] else ""
        self._io_status_var.set(f"Data imported: {stats['transactions']} transactions{skipped}.")

    def _load_sample(self):
        if not confirm(
            self.winfo_toplevel(),
            "Sample data replaces your current transactions. Continue?",
            confirm_text="Load",
        ):
            return
        self._data_svc.load_sample_data()
        self._notify_refresh()
        self._io_status_var.set("Sample data loaded.")

    def _reset(self):
        if not confirm(
            self.winfo_toplevel(),
            "This will delete ALL your data and reset everything. Are you sure?",
            confirm_text="Reset",
        ):
            return
        self._data_svc.reset()
        ctk.set_appearance_mode(self._settings_svc.get().theme)
        self._notify_refresh()
        self._io_status_var.set("App reset.")
