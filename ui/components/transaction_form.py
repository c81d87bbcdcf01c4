import customtkinter as ctk
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from models.transaction import Transaction
from ui.components.date_picker import DatePickerWidget
from utils.constants import FREQUENCIES
from utils.date_helpers import today_str


class TransactionForm(ctk.CTkToplevel):
    """Add or edit one income or expense record."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        type_: str = "expense",
        transaction: Transaction | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._transaction = transaction
        self._type = transaction.type if transaction else type_
        self.saved = False

        self.title(f"{'Edit' if transaction else 'Add'} {self._type.title()}")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._build(transaction)

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _build(self, tx: Transaction | None):
        r = 0

        # Amount
        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(value=f"{tx.amount:.2f}" if tx else "")
        amount_entry = ctk.CTkEntry(self, textvariable=self._amount_var, width=220)
        amount_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        amount_entry.focus_set()
        r += 1

        # Date
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=tx.date if tx else today_str()
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Category + "New" button
        self._label("Category:", r)
        cat_frame = ctk.CTkFrame(self, fg_color="transparent")
        cat_frame.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        cat_frame.grid_columnconfigure(0, weight=1)
        self._cat_names = self._cat_svc.get_for_type(self._type)
        current_cat = tx.category if tx else (self._cat_names[0] if self._cat_names else "")
        self._cat_var = ctk.StringVar(value=current_cat)
        self._cat_combo = ctk.CTkComboBox(
            cat_frame, values=self._cat_names,
            variable=self._cat_var, width=160, state="readonly",
        )
        self._cat_combo.grid(row=0, column=0, sticky="ew")
        ctk.CTkButton(
            cat_frame, text="+ New", width=56, command=self._new_category,
        ).grid(row=0, column=1, padx=(4, 0))
        r += 1

        # Account
        self._label("Account:", r)
        self._account_var = ctk.StringVar(value=tx.account if tx else "")
        ctk.CTkEntry(
            self, textvariable=self._account_var, width=220,
            placeholder_text="Bank, Card, Cash…",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Notes
        self._label("Notes:", r)
        self._notes_var = ctk.StringVar(value=tx.notes if tx else "")
        ctk.CTkEntry(self, textvariable=self._notes_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Recurring + frequency
        self._label("Recurring:", r)
        rec_frame = ctk.CTkFrame(self, fg_color="transparent")
        rec_frame.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        self._recurring_var = ctk.BooleanVar(value=tx.recurring if tx else False)
        ctk.CTkCheckBox(
            rec_frame, text="", width=24, variable=self._recurring_var,
            command=self._on_recurring_toggle,
        ).pack(side="left")
        self._freq_var = ctk.StringVar(value=(tx.frequency if tx and tx.frequency else FREQUENCIES[0]))
        self._freq_combo = ctk.CTkComboBox(
            rec_frame, values=FREQUENCIES, variable=self._freq_var,
            width=120, state="readonly",
        )
        self._freq_combo.pack(side="left", padx=(8, 0))
        self._on_recurring_toggle()
        r += 1

        self._build_footer(r)

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#E74C3C", wraplength=280, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save", width=110, command=self._on_save,
        ).pack(side="right")

    def _on_recurring_toggle(self):
        self._freq_combo.configure(state="readonly" if self._recurring_var.get() else "disabled")

    def _new_category(self):
        dialog = ctk.CTkInputDialog(
            text=f"New {self._type} category name?", title="New Category"
        )
        name = dialog.get_input()
        if not name:
            return
        try:
            name = self._cat_svc.add(self._type, name)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self._cat_names = self._cat_svc.get_for_type(self._type)
        self._cat_combo.configure(values=self._cat_names)
        self._cat_var.set(name)

    def _on_save(self):
        if not self._date_picker.is_valid():
            self._error_var.set("Invalid date format. Use YYYY-MM-DD.")
            return

        fields = dict(
            amount=self._amount_var.get().strip() or "0",
            date=self._date_picker.get(),
            category=self._cat_var.get(),
            account=self._account_var.get(),
            notes=self._notes_var.get(),
            recurring=self._recurring_var.get(),
            frequency=self._freq_var.get(),
        )
        try:
            if self._transaction:
                self._tx_svc.update(self._transaction.id, **fields)
            else:
                self._tx_svc.create(self._type, **fields)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
