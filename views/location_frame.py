# -*- coding: utf-8 -*-

"""
LocationFrame - Hiển thị thông tin vị trí, giờ địa phương và nút mở bản đồ.
"""

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional

from pinlocator.constants import LOCATION_LABELS, MSG_MAP_UNAVAILABLE, PLACEHOLDER_NA
from pinlocator.theme import Theme


class LocationFrame(ttk.LabelFrame):
    """Frame hiển thị chi tiết vị trí theo IP"""

    def __init__(self, parent, on_open_map: Callable[[], None]):
        super().__init__(parent, text="📍 Your location", padding=20)

        self.on_open_map_callback = on_open_map
        self.value_vars: Dict[str, tk.StringVar] = {}

        self._build_ui()

    def _build_ui(self):
        labels = [label for _, label in LOCATION_LABELS] + ["Date & Time"]
        for idx, label in enumerate(labels):
            row, col = divmod(idx, 3)
            cell = tk.Frame(self, bg=Theme.BG_WHITE)
            cell.grid(row=row, column=col, sticky="w", padx=(0, 30), pady=4)

            tk.Label(
                cell,
                text=f"{label}:",
                font=Theme.FONT_BOLD,
                bg=Theme.BG_WHITE,
                fg=Theme.TEXT_SECONDARY
            ).pack(side="left")

            var = tk.StringVar(value=PLACEHOLDER_NA)
            tk.Label(
                cell,
                textvariable=var,
                font=Theme.FONT_DEFAULT,
                bg=Theme.BG_WHITE,
                fg=Theme.TEXT_PRIMARY
            ).pack(side="left", padx=(6, 0))
            self.value_vars[label] = var

        map_row = (len(labels) + 2) // 3
        self.map_button = ttk.Button(
            self,
            text="🗺️ Open map",
            command=self.on_open_map_callback,
            style="Custom.TButton",
            state="disabled"
        )
        self.map_button.grid(row=map_row, column=0, sticky="w", pady=(12, 0))

        self.map_status = tk.Label(
            self,
            text="",
            font=Theme.FONT_HINT,
            bg=Theme.BG_WHITE,
            fg=Theme.TEXT_SECONDARY
        )
        self.map_status.grid(row=map_row, column=1, columnspan=2, sticky="w", pady=(12, 0))

    def set_fields(self, fields: Dict[str, str]):
        """Cập nhật các field vị trí (label -> value đã format)"""
        for label, value in fields.items():
            if label in self.value_vars:
                self.value_vars[label].set(value)

    def set_time(self, text: str):
        self.value_vars["Date & Time"].set(text)

    def set_map(self, map_url: Optional[str]):
        if map_url:
            self.map_button.config(state="normal")
            self.map_status.config(text=map_url)
        else:
            self.map_button.config(state="disabled")
            self.map_status.config(text=MSG_MAP_UNAVAILABLE)
