# -*- coding: utf-8 -*-

"""
PostOfficeFrame - Bảng danh sách bưu cục kèm message từ dịch vụ và placeholder.
"""

import tkinter as tk
from tkinter import ttk
from typing import Callable, Sequence

from pinlocator.constants import POST_OFFICE_LABELS
from pinlocator.formatters import post_office_to_row
from pinlocator.models import PostOffice
from pinlocator.theme import Theme


class PostOfficeFrame(ttk.LabelFrame):
    """Frame hiển thị danh sách bưu cục"""

    def __init__(self, parent, on_export: Callable[[], None]):
        super().__init__(parent, text="📮 Post offices near you", padding=15)

        self.on_export_callback = on_export
        self.columns = [label for _, label in POST_OFFICE_LABELS]

        self._build_ui()

    def _build_ui(self):
        header = tk.Frame(self, bg=Theme.BG_WHITE)
        header.pack(side="top", fill="x", pady=(0, 8))

        self.message_var = tk.StringVar(value="")
        tk.Label(
            header,
            textvariable=self.message_var,
            font=Theme.FONT_BOLD,
            bg=Theme.BG_WHITE,
            fg=Theme.TEXT_PRIMARY
        ).pack(side="left")

        self.export_button = ttk.Button(
            header,
            text="📤 Export Excel",
            command=self.on_export_callback,
            style="Secondary.TButton"
        )
        self.export_button.pack(side="right")

        self.placeholder = tk.Label(
            self,
            text="",
            font=Theme.FONT_HINT,
            bg=Theme.BG_WHITE,
            fg=Theme.TEXT_SECONDARY
        )

        self.tree_frame = tk.Frame(self, bg=Theme.BG_WHITE)
        self.tree_frame.pack(side="top", fill="both", expand=True)

        self.tree = ttk.Treeview(self.tree_frame, columns=self.columns, show="headings", height=12)
        for col in self.columns:
            self.tree.heading(col, text=col)
            self.tree.column(col, width=180, anchor="w")
        self.tree.tag_configure("even", background=Theme.BG_TREE_EVEN)
        self.tree.tag_configure("odd", background=Theme.BG_WHITE)

        scrollbar = ttk.Scrollbar(self.tree_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=scrollbar.set)
        self.tree.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

    def set_message(self, message: str):
        self.message_var.set(message)

    def render(self, post_offices: Sequence[PostOffice]):
        """Hiển thị danh sách bưu cục, ẩn placeholder"""
        self.placeholder.pack_forget()
        self.tree.delete(*self.tree.get_children())
        for idx, post_office in enumerate(post_offices):
            row = post_office_to_row(post_office)
            self.tree.insert(
                "", "end",
                values=[row[col] for col in self.columns],
                tags=("even" if idx % 2 == 0 else "odd",)
            )

    def show_placeholder(self, message: str):
        """Xoá bảng và hiển thị thông báo thay thế"""
        self.tree.delete(*self.tree.get_children())
        self.placeholder.config(text=message)
        self.placeholder.pack(side="top", fill="x", pady=10, before=self.tree_frame)
