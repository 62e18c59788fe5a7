# pipeline.py
# -*- coding: utf-8 -*-

"""
LocatorPipeline - điều phối chuỗi tra cứu IP -> vị trí -> bưu cục.
Không phụ thuộc vào UI: mọi cập nhật hiển thị đi qua PipelineView.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pinlocator.client import PinLocatorClient
from pinlocator.config import MAP_DEFAULT_ZOOM
from pinlocator.constants import (
    MSG_IP_FAILED,
    MSG_LOCATION_FAILED,
    MSG_NO_POST_OFFICES,
    MSG_NO_SEARCH_MATCHES,
    MSG_POST_OFFICES_FAILED,
    MSG_TIME_FAILED
)
from pinlocator.exceptions import PinLocatorError, StaleRunError, ValidationError
from pinlocator.filters import filter_post_offices
from pinlocator.formatters import format_local_time
from pinlocator.models import LocationInfo, LookupStatus, PostOffice
from pinlocator.utils import to_coordinate, validate_ip

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    AWAITING_IP = "awaiting_ip"
    READY_TO_START = "ready_to_start"
    LOADING = "loading"
    DISPLAYED = "displayed"
    DISPLAYED_PARTIAL = "displayed_partial"
    FAILED = "failed"


@dataclass
class SessionState:
    """Trạng thái của phiên hiện tại (chỉ có một phiên logic)"""
    state: PipelineState = PipelineState.AWAITING_IP
    current_ip: Optional[str] = None
    location: Optional[LocationInfo] = None
    post_offices: Tuple[PostOffice, ...] = ()
    generation: int = 0


class PipelineView:
    """
    Interface hiển thị cho LocatorPipeline.
    Mặc định không làm gì; CLI và tkinter app override các method cần thiết.
    """

    def show_ip(self, ip: str) -> None:
        pass

    def show_ip_error(self, message: str) -> None:
        pass

    def set_start_enabled(self, enabled: bool) -> None:
        pass

    def show_loading(self) -> None:
        pass

    def notify_error(self, message: str, detail: str = "") -> None:
        """Thông báo lỗi dạng blocking (dialog)"""
        pass

    def show_details_screen(self) -> None:
        pass

    def show_location(self, location: LocationInfo) -> None:
        pass

    def show_time(self, text: str) -> None:
        pass

    def show_directory_message(self, message: str) -> None:
        pass

    def render_post_offices(self, post_offices: Sequence[PostOffice]) -> None:
        pass

    def show_post_offices_placeholder(self, message: str) -> None:
        pass

    def show_map(self, latitude: float, longitude: float, zoom: int) -> None:
        pass

    def show_map_unavailable(self) -> None:
        pass


class LocatorPipeline:
    """
    Điều phối ba bước network theo thứ tự, cô lập lỗi theo từng bước.

    - start(): lấy IP ngay khi khởi động
    - trigger(): người dùng bấm "Get Started" -> vị trí, giờ, bưu cục, bản đồ
    - search(): lọc danh sách bưu cục đã tải theo từ khoá
    """

    def __init__(
        self,
        client: PinLocatorClient,
        view: PipelineView = None,
        map_zoom: int = MAP_DEFAULT_ZOOM
    ):
        self.client = client
        self.view = view or PipelineView()
        self.map_zoom = map_zoom
        self.session = SessionState()

    @property
    def state(self) -> PipelineState:
        return self.session.state

    async def start(self) -> Optional[str]:
        """
        Lấy IP công khai. Thất bại là lỗi cuối cùng của phiên (nút Start vẫn bị disable).

        Returns:
            Địa chỉ IP, None nếu thất bại
        """
        self.session.state = PipelineState.AWAITING_IP
        self.view.set_start_enabled(False)

        try:
            ip = await asyncio.to_thread(self.client.get_public_ip)
        except PinLocatorError as e:
            logger.error(f"Không lấy được IP: {e}")
            self.session.state = PipelineState.FAILED
            self.view.show_ip_error(MSG_IP_FAILED)
            return None

        self._set_ip(ip)
        return ip

    def use_ip(self, ip: str) -> str:
        """
        Dùng IP do người dùng cung cấp thay vì gọi dịch vụ IP.

        Raises:
            ValidationError: Nếu ip không hợp lệ
        """
        ip = validate_ip(ip)
        self._set_ip(ip)
        return ip

    def _set_ip(self, ip: str) -> None:
        self.session.current_ip = ip
        self.session.state = PipelineState.READY_TO_START
        self.view.show_ip(ip)
        self.view.set_start_enabled(True)

    def _check_current(self, generation: int) -> None:
        if generation != self.session.generation:
            raise StaleRunError(generation=generation)

    async def trigger(self) -> PipelineState:
        """
        Chạy chuỗi tra cứu sau khi người dùng bấm Start.
        Mỗi lần gọi là một lượt mới; lượt cũ hơn bị bỏ qua kết quả khi hoàn tất.

        Returns:
            Trạng thái pipeline sau lượt chạy
        """
        ip = self.session.current_ip
        if not ip:
            logger.warning(f"Chưa có IP, bỏ qua trigger (state={self.session.state.value})")
            return self.session.state

        self.session.generation += 1
        generation = self.session.generation
        self.session.state = PipelineState.LOADING
        self.view.show_loading()
        logger.info(f"Bắt đầu lượt tra cứu #{generation} cho IP {ip}")

        try:
            return await self._run(ip, generation)
        except StaleRunError:
            logger.info(f"Lượt tra cứu #{generation} đã bị thay thế bởi lượt #{self.session.generation}, bỏ qua")
            return self.session.state

    async def _run(self, ip: str, generation: int) -> PipelineState:
        try:
            location = await asyncio.to_thread(self.client.get_location, ip)
        except PinLocatorError as e:
            self._check_current(generation)
            logger.error(f"Không lấy được thông tin vị trí: {e}")
            self.session.state = PipelineState.FAILED
            self.view.notify_error(MSG_LOCATION_FAILED, str(e))
            return self.session.state

        self._check_current(generation)
        self.session.location = location

        # Chuyển màn hình trước, không phụ thuộc kết quả các bước sau
        self.view.show_details_screen()
        self.view.show_location(location)

        complete = self._show_time(location.timezone)
        # Bản đồ không cần dữ liệu bưu cục, nhưng vẫn chờ bước bưu cục xong rồi mới hiển thị
        complete = await self._load_post_offices(location.postal_code, generation) and complete
        complete = self._show_map(location) and complete

        self.session.state = PipelineState.DISPLAYED if complete else PipelineState.DISPLAYED_PARTIAL
        logger.info(f"Lượt tra cứu #{generation} hoàn tất: {self.session.state.value}")
        return self.session.state

    def _show_time(self, timezone: Optional[str]) -> bool:
        try:
            text = format_local_time(timezone)
        except ValidationError as e:
            logger.warning(f"Lỗi hiển thị thời gian: {e}")
            self.view.show_time(MSG_TIME_FAILED)
            return False

        self.view.show_time(text)
        return bool(timezone)

    async def _load_post_offices(self, pincode: Optional[str], generation: int) -> bool:
        try:
            result = await asyncio.to_thread(self.client.get_post_offices, pincode)
        except PinLocatorError as e:
            self._check_current(generation)
            logger.warning(f"Lỗi khi tải danh sách bưu cục: {e}")
            self.view.show_post_offices_placeholder(MSG_POST_OFFICES_FAILED)
            return False

        self._check_current(generation)
        self.view.show_directory_message(result.message)

        if result.status is LookupStatus.UNAVAILABLE:
            return False

        if result.status is LookupStatus.EMPTY or not result.post_offices:
            # Giữ nguyên danh sách đã lưu, chỉ thay phần hiển thị
            self.view.show_post_offices_placeholder(MSG_NO_POST_OFFICES)
            return False

        self.session.post_offices = result.post_offices
        self.view.render_post_offices(result.post_offices)
        return True

    def _show_map(self, location: LocationInfo) -> bool:
        latitude = to_coordinate(location.latitude)
        longitude = to_coordinate(location.longitude)
        if latitude is None or longitude is None:
            logger.warning(f"Toạ độ không hợp lệ: {location.latitude!r}, {location.longitude!r}")
            self.view.show_map_unavailable()
            return False

        self.view.show_map(latitude, longitude, self.map_zoom)
        return True

    def search(self, query: str) -> List[PostOffice]:
        """
        Lọc danh sách bưu cục đã tải và cập nhật hiển thị.
        Chưa tải được danh sách nào thì không làm gì.

        Returns:
            Danh sách bưu cục khớp
        """
        post_offices = self.session.post_offices
        if not post_offices:
            return []

        matches = filter_post_offices(post_offices, query)
        if matches:
            self.view.render_post_offices(matches)
        else:
            self.view.show_post_offices_placeholder(MSG_NO_SEARCH_MATCHES)
        return matches
