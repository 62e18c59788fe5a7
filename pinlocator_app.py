# pinlocator_app.py
# -*- coding: utf-8 -*-

import asyncio
import logging
import threading
import tkinter as tk
import webbrowser
from concurrent.futures import Future
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import Coroutine, List, Optional, Sequence

from pinlocator import LocatorPipeline, PinLocatorClient
from pinlocator.constants import (
    MSG_NOTHING_TO_EXPORT,
    SUCCESS_EXPORT,
    TITLE_APP,
    TITLE_ERROR,
    TITLE_EXPORT_ERROR,
    TITLE_INFO
)
from pinlocator.excel_service import build_export_metadata, export_post_offices
from pinlocator.exceptions import FileError, ValidationError
from pinlocator.formatters import build_map_url, format_location_fields
from pinlocator.models import LocationInfo, PostOffice
from pinlocator.pipeline import PipelineView
from pinlocator.theme import Theme
from views import IpFrame, LocationFrame, PostOfficeFrame, SearchFrame

logger = logging.getLogger(__name__)


class TkPipelineView(PipelineView):
    """
    Chuyển các cập nhật từ pipeline (chạy trên event loop thread) sang main thread của tkinter.
    """

    def __init__(self, app: "PinLocatorApp"):
        self.app = app

    def _ui(self, func, *args) -> None:
        # Capture args ngay lúc gọi để tránh closure issue
        self.app.after(0, lambda a=args: func(*a))

    def show_ip(self, ip: str) -> None:
        self._ui(self.app.ip_frame.set_ip, ip)

    def show_ip_error(self, message: str) -> None:
        self._ui(self.app.ip_frame.set_error, message)

    def set_start_enabled(self, enabled: bool) -> None:
        self._ui(self.app.ip_frame.set_start_enabled, enabled)

    def show_loading(self) -> None:
        self._ui(self.app.set_status, "⏱️ Looking up your location...")

    def notify_error(self, message: str, detail: str = "") -> None:
        self._ui(self.app.show_error, message, detail)

    def show_details_screen(self) -> None:
        self._ui(self.app.show_details_screen)

    def show_location(self, location: LocationInfo) -> None:
        self._ui(self.app.location_frame.set_fields, format_location_fields(location))

    def show_time(self, text: str) -> None:
        self._ui(self.app.location_frame.set_time, text)

    def show_directory_message(self, message: str) -> None:
        self._ui(self.app.post_office_frame.set_message, message)

    def render_post_offices(self, post_offices: Sequence[PostOffice]) -> None:
        self._ui(self.app.render_post_offices, list(post_offices))

    def show_post_offices_placeholder(self, message: str) -> None:
        self._ui(self.app.show_post_offices_placeholder, message)

    def show_map(self, latitude: float, longitude: float, zoom: int) -> None:
        self._ui(self.app.set_map_url, build_map_url(latitude, longitude, zoom))

    def show_map_unavailable(self) -> None:
        self._ui(self.app.set_map_url, None)


class PinLocatorApp(tk.Tk):
    def __init__(self) -> None:
        super().__init__()

        self.title(TITLE_APP)

        self.update_idletasks()
        width = 1100
        height = 720
        x = (self.winfo_screenwidth() // 2) - (width // 2)
        y = (self.winfo_screenheight() // 2) - (height // 2)
        self.geometry(f"{width}x{height}+{x}+{y}")

        self.last_dir: Optional[str] = None
        self.map_url: Optional[str] = None
        self.displayed_post_offices: List[PostOffice] = []

        # Event loop chạy trên thread riêng, UI chỉ cập nhật từ main thread qua after()
        self.loop = asyncio.new_event_loop()
        self._loop_thread = threading.Thread(target=self.loop.run_forever, daemon=True)
        self._loop_thread.start()

        self.client = PinLocatorClient()
        self.pipeline = LocatorPipeline(self.client, TkPipelineView(self))

        self._setup_style()
        self._build_ui()

        self.protocol("WM_DELETE_WINDOW", self._on_closing)

        self._submit(self.pipeline.start())

    def _setup_style(self) -> None:
        """Thiết lập theme và font"""
        style = ttk.Style(self)
        if "clam" in style.theme_names():
            style.theme_use("clam")

        self.option_add("*TLabel.Font", Theme.FONT_DEFAULT)
        self.option_add("*TButton.Font", Theme.FONT_DEFAULT)
        self.configure(bg=Theme.BG_MAIN)

        style.configure("TFrame", background=Theme.BG_MAIN)
        style.configure("TLabelframe",
                        background=Theme.BG_WHITE,
                        borderwidth=2,
                        relief="solid",
                        bordercolor=Theme.BORDER_LIGHT)
        style.configure("TLabelframe.Label",
                        font=Theme.FONT_TITLE,
                        background=Theme.BG_WHITE,
                        foreground=Theme.TEXT_PRIMARY)

        style.configure("Treeview.Heading",
                        font=Theme.FONT_BOLD,
                        background=Theme.BG_HEADER,
                        foreground=Theme.TEXT_WHITE,
                        relief="flat")
        style.configure("Treeview", rowheight=28, font=(Theme.FONT_FAMILY, 9))
        style.map("Treeview",
                  background=[("selected", Theme.SELECTED)],
                  foreground=[("selected", Theme.SELECTED_TEXT)])

        for name, normal, active, padding in [
            ("Primary.TButton", Theme.SUCCESS, Theme.SUCCESS_DARK, (25, 12)),
            ("Custom.TButton", Theme.PRIMARY, Theme.PRIMARY_DARK, (18, 10)),
            ("Secondary.TButton", Theme.BORDER_MEDIUM, Theme.TEXT_SECONDARY, (15, 8)),
        ]:
            style.configure(name, font=Theme.FONT_BOLD, padding=padding, relief="flat", borderwidth=0)
            style.map(name,
                      background=[("active", active), ("!active", normal)],
                      foreground=[("active", Theme.TEXT_WHITE), ("!active", Theme.TEXT_WHITE)])

        style.configure("Custom.TEntry",
                        fieldbackground=Theme.BG_WHITE,
                        bordercolor=Theme.BORDER_MEDIUM,
                        padding=8)

    def _build_ui(self) -> None:
        """Xây dựng hai màn hình: màn hình IP và màn hình chi tiết"""
        self.status_var = tk.StringVar(value="")
        tk.Label(
            self,
            textvariable=self.status_var,
            font=Theme.FONT_HINT,
            bg=Theme.BG_MAIN,
            fg=Theme.STATUS_INFO,
            anchor="w"
        ).pack(side="bottom", fill="x", padx=20, pady=(0, 8))

        self.initial_screen = ttk.Frame(self, padding=40)
        self.ip_frame = IpFrame(self.initial_screen, on_start=self.on_get_started)
        self.ip_frame.pack(expand=True)
        self.initial_screen.pack(fill="both", expand=True)

        self.info_screen = ttk.Frame(self, padding=20)
        self.location_frame = LocationFrame(self.info_screen, on_open_map=self.on_open_map)
        self.location_frame.pack(side="top", fill="x")
        self.search_frame = SearchFrame(self.info_screen, on_query_change=self.on_query_change)
        self.search_frame.pack(side="top", fill="x")
        self.post_office_frame = PostOfficeFrame(self.info_screen, on_export=self.on_export_excel)
        self.post_office_frame.pack(side="top", fill="both", expand=True)

    def _submit(self, coro: Coroutine) -> Future:
        """Chạy coroutine trên event loop thread"""
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        future.add_done_callback(self._on_task_done)
        return future

    def _on_task_done(self, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Unexpected error in pipeline task", exc_info=error)
            self.after(0, lambda err=error: self.show_error("Unexpected error", str(err)))

    def set_status(self, text: str) -> None:
        logger.info(f"[UI Status] {text}")
        self.status_var.set(text)

    def on_get_started(self) -> None:
        """Xử lý sự kiện bấm Get Started"""
        self._submit(self.pipeline.trigger())

    def show_details_screen(self) -> None:
        self.set_status("")
        self.initial_screen.pack_forget()
        self.info_screen.pack(fill="both", expand=True)

    def show_error(self, message: str, detail: str = "") -> None:
        self.set_status(f"✗ {message}")
        messagebox.showerror(TITLE_ERROR, f"{message}\n\n{detail}" if detail else message)

    def render_post_offices(self, post_offices: List[PostOffice]) -> None:
        self.displayed_post_offices = post_offices
        self.post_office_frame.render(post_offices)

    def show_post_offices_placeholder(self, message: str) -> None:
        self.displayed_post_offices = []
        self.post_office_frame.show_placeholder(message)

    def set_map_url(self, map_url: Optional[str]) -> None:
        self.map_url = map_url
        self.location_frame.set_map(map_url)

    def on_open_map(self) -> None:
        if self.map_url:
            webbrowser.open(self.map_url)

    def on_query_change(self, query: str) -> None:
        """Lọc lại danh sách bưu cục mỗi lần gõ phím"""
        self.pipeline.search(query)

    def on_export_excel(self) -> None:
        """Xuất danh sách bưu cục đang hiển thị ra Excel"""
        if not self.displayed_post_offices:
            messagebox.showinfo(TITLE_INFO, MSG_NOTHING_TO_EXPORT)
            return

        file_path = filedialog.asksaveasfilename(
            title="Export post offices",
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            initialdir=self.last_dir
        )
        if not file_path:
            return
        self.last_dir = str(Path(file_path).parent)

        location = self.pipeline.session.location
        metadata = build_export_metadata(
            pincode=location.postal_code if location else None,
            query=self.search_frame.get_query(),
            count=len(self.displayed_post_offices)
        )
        try:
            path = export_post_offices(self.displayed_post_offices, file_path, metadata=metadata)
        except (FileError, ValidationError) as e:
            messagebox.showerror(TITLE_EXPORT_ERROR, e.message)
            return

        messagebox.showinfo(TITLE_INFO, SUCCESS_EXPORT.format(count=len(self.displayed_post_offices), file_path=path))

    def _on_closing(self) -> None:
        self.loop.call_soon_threadsafe(self.loop.stop)
        self.client.close()
        self.destroy()
