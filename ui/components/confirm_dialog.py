import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no question. Read the answer from .result after it closes."""

    def __init__(
        self, master, title: str, message: str,
        confirm_text: str = "Delete", **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)

        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._answer(False),
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            fg_color="#E74C3C", hover_color="#C0392B",
            command=self._answer(True),
        ).pack(side="left")

        self.bind("<Escape>", lambda _e: self._answer(False)())
        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _answer(self, value: bool):
        def handler():
            self.result = value
            self.destroy()
        return handler

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_width(), self.winfo_height()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")


def confirm(master, message: str, title: str = "Please confirm", confirm_text: str = "Delete") -> bool:
    return ConfirmDialog(master, title, message, confirm_text=confirm_text).result
