import customtkinter as ctk
from services.category_service import CategoryService
from services.data_service import DataService
from services.report_service import ReportService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.register_tab import RegisterTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        category_service: CategoryService,
        settings_service: SettingsService,
        report_service: ReportService,
        data_service: DataService,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._settings_svc = settings_service
        self._report_svc = report_service
        self._data_svc = data_service

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_top_bar()
        self._build_tabs()

    def _build_top_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=15, weight="bold"),
        ).pack(side="left", padx=12, pady=8)

        ctk.CTkButton(
            bar, text="Theme", width=80,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._toggle_theme,
        ).pack(side="right", padx=(4, 12))
        ctk.CTkButton(
            bar, text="+ Income", width=90,
            command=lambda: self._quick_add("Income"),
        ).pack(side="right", padx=4)
        ctk.CTkButton(
            bar, text="+ Expense", width=90,
            command=lambda: self._quick_add("Expenses"),
        ).pack(side="right", padx=4)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Expenses", "Income", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            report_service=self._report_svc,
            settings_service=self._settings_svc,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._registers: dict[str, RegisterTab] = {}
        for tab_name, type_ in (("Expenses", "expense"), ("Income", "income")):
            tab = RegisterTab(
                self._tabview.tab(tab_name),
                type_=type_,
                report_service=self._report_svc,
                tx_service=self._tx_svc,
                category_service=self._cat_svc,
                settings_service=self._settings_svc,
                notify_refresh=self.refresh_all,
            )
            tab.grid(row=0, column=0, sticky="nsew")
            self._registers[tab_name] = tab

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            settings_service=self._settings_svc,
            category_service=self._cat_svc,
            data_service=self._data_svc,
            notify_refresh=self.refresh_all,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    def _quick_add(self, tab_name: str):
        self._tabview.set(tab_name)
        self._registers[tab_name].open_add_form()

    def _toggle_theme(self):
        ctk.set_appearance_mode(self._settings_svc.toggle_theme())
        self.refresh_all()

    # Every mutation triggers a full recompute of every view
    def refresh_all(self):
        self._dashboard_tab.refresh()
        for tab in self._registers.values():
            tab.refresh()
        self._settings_tab.refresh()
