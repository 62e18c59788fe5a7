# -*- coding: utf-8 -*-

"""
SearchFrame - View class cho ô lọc bưu cục (lọc ngay khi gõ).
"""

import tkinter as tk
from tkinter import ttk
from typing import Callable

from pinlocator.theme import Theme


class SearchFrame(ttk.Frame):
    """Frame chứa ô tìm kiếm bưu cục"""

    def __init__(self, parent, on_query_change: Callable[[str], None]):
        super().__init__(parent, padding=(0, 10))

        self.on_query_change_callback = on_query_change

        self._build_ui()

    def _build_ui(self):
        lbl = tk.Label(
            self,
            text="🔍 Search by name or branch type:",
            font=Theme.FONT_DEFAULT,
            bg=Theme.BG_MAIN,
            fg=Theme.TEXT_PRIMARY
        )
        lbl.pack(side="left", padx=(0, 10))

        self.query_var = tk.StringVar()
        self.query_entry = ttk.Entry(
            self,
            textvariable=self.query_var,
            width=50,
            style="Custom.TEntry"
        )
        self.query_entry.pack(side="left", fill="x", expand=True)
        self.query_entry.bind("<KeyRelease>", lambda e: self._on_query_changed())

    def _on_query_changed(self):
        self.on_query_change_callback(self.query_var.get())

    def get_query(self) -> str:
        return self.query_var.get()
