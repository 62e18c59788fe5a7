# -*- coding: utf-8 -*-

"""
IpFrame - Màn hình đầu: hiển thị IP công khai và nút "Get Started".
"""

import tkinter as tk
from tkinter import ttk
from typing import Callable

from pinlocator.constants import PLACEHOLDER_LOADING_IP
from pinlocator.theme import Theme


class IpFrame(ttk.LabelFrame):
    """Frame hiển thị IP và nút bắt đầu tra cứu"""

    def __init__(self, parent, on_start: Callable[[], None]):
        super().__init__(parent, text="🌐 Your public IP address", padding=30)

        self.on_start_callback = on_start

        self._build_ui()

    def _build_ui(self):
        self.ip_var = tk.StringVar(value=PLACEHOLDER_LOADING_IP)
        self.ip_label = tk.Label(
            self,
            textvariable=self.ip_var,
            font=Theme.FONT_IP,
            foreground=Theme.TEXT_PRIMARY,
            background=Theme.BG_WHITE
        )
        self.ip_label.pack(pady=(0, 20))

        self.start_button = ttk.Button(
            self,
            text="🚀 Get Started",
            command=self.on_start_callback,
            style="Primary.TButton",
            state="disabled"
        )
        self.start_button.pack()

    def set_ip(self, ip: str):
        self.ip_var.set(ip)
        self.ip_label.config(foreground=Theme.TEXT_PRIMARY)

    def set_error(self, message: str):
        self.ip_var.set(message)
        self.ip_label.config(foreground=Theme.STATUS_ERROR)

    def set_start_enabled(self, enabled: bool):
        """Enable/disable nút Get Started"""
        state = "normal" if enabled else "disabled"
        self.start_button.config(state=state)
