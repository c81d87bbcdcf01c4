import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from services.settings_service import SettingsService
from utils.currency import format_currency, format_signed
from utils.date_helpers import today, friendly_month

_INCOME_COLOR = "#2ECC71"
_EXPENSE_COLOR = "#E74C3C"
_PIE_COLORS = [
    "#3498DB", "#E67E22", "#9B59B6", "#1ABC9C", "#F1C40F",
    "#E74C3C", "#2ECC71", "#34495E", "#FF6F91", "#95A5A6",
]


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        report_service: ReportService,
        settings_service: SettingsService,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._settings_svc = settings_service

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_header()
        self._build_kpi_cards()
        self._build_lists()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_header(self):
        self._title_label = ctk.CTkLabel(
            self, text="", font=ctk.CTkFont(size=15, weight="bold"), anchor="w",
        )
        self._title_label.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        self._hint_label = ctk.CTkLabel(
            self,
            text="Run rate is this month's spending per day so far; "
                 "the projection assumes the same pace until month end.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        )

    def _build_kpi_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2, 3, 4), weight=1)

    def _build_lists(self):
        lists = ctk.CTkFrame(self, fg_color="transparent")
        lists.grid(row=2, column=0, sticky="ew", padx=16, pady=(0, 12))
        lists.grid_columnconfigure((0, 1), weight=1)

        self._top_frame = ctk.CTkScrollableFrame(
            lists, label_text="Top Expense Categories (This Month)", height=110
        )
        self._top_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 8))

        self._upcoming_frame = ctk.CTkScrollableFrame(
            lists, label_text="Upcoming Recurring (Next 30 Days)", height=110
        )
        self._upcoming_frame.grid(row=0, column=1, sticky="nsew", padx=(8, 0))

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=3, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure(0, weight=3)
        charts.grid_columnconfigure((1, 2), weight=2)
        charts.grid_rowconfigure(0, weight=1)

        self._trend_fig, self._trend_ax, self._trend_mpl = self._make_chart(
            charts, 0, "Income vs Expenses (12 Months)", (5, 3)
        )
        self._exp_fig, self._exp_ax, self._exp_mpl = self._make_chart(
            charts, 1, "Expenses by Category", (3, 3)
        )
        self._inc_fig, self._inc_ax, self._inc_mpl = self._make_chart(
            charts, 2, "Income by Category", (3, 3)
        )

    def _make_chart(self, parent, col, title, figsize):
        outer = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=0, column=col, sticky="nsew", padx=(0 if col == 0 else 8, 0))
        ctk.CTkLabel(
            outer, text=title, font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        fig = Figure(figsize=figsize, dpi=80, tight_layout=True)
        ax = fig.add_subplot(111)
        canvas = FigureCanvasTkAgg(fig, master=outer)
        canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))
        return fig, ax, canvas

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)
        return fg

    def _load(self):
        ref = today()
        settings = self._settings_svc.get()
        currency = settings.currency

        self._title_label.configure(text=friendly_month(ref.year, ref.month))
        if settings.beginner_hints:
            self._hint_label.grid(row=4, column=0, sticky="ew", padx=16, pady=(0, 8))
        else:
            self._hint_label.grid_remove()

        # KPI cards
        for w in self._card_frame.winfo_children():
            w.destroy()
        summary = self._report_svc.get_summary(ref)
        cards = [
            ("Income", format_currency(summary["income"], currency), _INCOME_COLOR),
            ("Expenses", format_currency(summary["expense"], currency), _EXPENSE_COLOR),
            ("Net", format_signed(summary["net"], currency),
             "#3498DB" if summary["net"] >= 0 else "#E67E22"),
            ("Run Rate", f"{format_currency(summary['run_rate'], currency)} / day", "gray60"),
            ("Projected Spend", format_currency(summary["projected"], currency), "#E67E22"),
        ]
        for i, (label, text, color) in enumerate(cards):
            self._make_card(self._card_frame, i, label, text, color)

        # Top categories
        for w in self._top_frame.winfo_children():
            w.destroy()
        top = self._report_svc.get_top_categories(ref)
        if not top:
            ctk.CTkLabel(
                self._top_frame, text="No expenses this month yet.", text_color="gray60",
            ).pack(pady=12)
        for category, amount in top:
            ctk.CTkLabel(
                self._top_frame, text=f"{category}: {format_currency(amount, currency)}",
                anchor="w",
            ).pack(fill="x", padx=8, pady=1)

        # Upcoming recurring
        for w in self._upcoming_frame.winfo_children():
            w.destroy()
        upcoming = self._report_svc.get_upcoming_recurring(ref)
        if not upcoming:
            ctk.CTkLabel(
                self._upcoming_frame, text="No recurring items due soon.", text_color="gray60",
            ).pack(pady=12)
        for item in upcoming:
            tx = item.transaction
            kind = "Expense" if tx.type == "expense" else "Income"
            ctk.CTkLabel(
                self._upcoming_frame,
                text=f"{item.due_date:%d %b} · {kind} · {tx.category} · "
                     f"{format_currency(tx.amount, currency)} ({tx.frequency or 'recurring'})",
                text_color=_EXPENSE_COLOR if tx.type == "expense" else _INCOME_COLOR,
                anchor="w",
            ).pack(fill="x", padx=8, pady=1)

        self.after(50, lambda: self._draw_charts(ref))

    def _make_card(self, parent, col, label, text, color):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12), text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card, text=text, font=ctk.CTkFont(size=18, weight="bold"), text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)

    def _draw_charts(self, ref):
        self._draw_trend(ref)
        expense_by_cat, income_by_cat = self._report_svc.get_category_breakdown(
            ref.year, ref.month
        )
        self._draw_pie(self._exp_ax, self._exp_fig, self._exp_mpl, expense_by_cat, "No expense data")
        self._draw_pie(self._inc_ax, self._inc_fig, self._inc_mpl, income_by_cat, "No income data")

    def _draw_trend(self, ref):
        ax = self._trend_ax
        ax.clear()
        fg = self._style_ax(ax, self._trend_fig)

        data = self._report_svc.get_monthly_chart_data(ref)
        labels = [d["label"] for d in data]
        x = list(range(len(labels)))
        w = 0.38
        ax.bar([i - w / 2 for i in x], [d["income"] for d in data], w,
               color=_INCOME_COLOR, label="Income")
        ax.bar([i + w / 2 for i in x], [d["expense"] for d in data], w,
               color=_EXPENSE_COLOR, label="Expenses")
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        legend = ax.legend(fontsize=8, frameon=False)
        for text in legend.get_texts():
            text.set_color(fg)
        self._trend_mpl.draw_idle()

    def _draw_pie(self, ax, fig, canvas, by_category, empty_text):
        ax.clear()
        fg = self._style_ax(ax, fig)
        total = sum(by_category.values())
        if not by_category or total == 0:
            ax.text(0.5, 0.5, empty_text, ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.set_axis_off()
            canvas.draw_idle()
            return
        colors = [_PIE_COLORS[i % len(_PIE_COLORS)] for i in range(len(by_category))]
        ax.pie(
            list(by_category.values()),
            labels=list(by_category.keys()),
            colors=colors,
            startangle=90,
            textprops={"color": fg, "fontsize": 8},
        )
        ax.axis("equal")
        canvas.draw_idle()
