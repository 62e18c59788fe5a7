# formatters.py
# -*- coding: utf-8 -*-

"""
Helper functions để format dữ liệu cho UI display.
Tách biệt business logic (models) khỏi presentation logic (formatting).
"""

from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pinlocator.config import MAP_EMBED_URL, MAP_DEFAULT_ZOOM
from pinlocator.constants import LOCATION_LABELS, PLACEHOLDER_NA, POST_OFFICE_LABELS
from pinlocator.exceptions import ValidationError
from pinlocator.models import LocationInfo, PostOffice
from pinlocator.utils import to_coordinate


def display_value(value: Any) -> str:
    """
    Đổi giá trị sang string để hiển thị, None/rỗng thành "N/A".
    Số 0 vẫn được hiển thị (latitude/longitude 0 là hợp lệ).
    """
    if value is None:
        return PLACEHOLDER_NA
    text = str(value).strip()
    return text or PLACEHOLDER_NA


def format_location_fields(location: LocationInfo) -> Dict[str, str]:
    """
    Format LocationInfo thành dict label -> value theo thứ tự hiển thị.

    Args:
        location: Thông tin vị trí

    Returns:
        Dict (giữ thứ tự) với label và giá trị đã format
    """
    return {
        label: display_value(getattr(location, field_name))
        for field_name, label in LOCATION_LABELS
    }


def format_local_time(timezone: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Format thời gian hiện tại theo timezone IANA, kiểu en-US:
    "October 18, 2026 at 09:05:03 AM".

    Args:
        timezone: Tên timezone (vd: "Asia/Kolkata"), None/rỗng thì trả về "N/A"
        now: Thời điểm cần format (aware datetime), mặc định là hiện tại

    Returns:
        String thời gian đã format

    Raises:
        ValidationError: Nếu timezone không hợp lệ
    """
    if not timezone:
        return PLACEHOLDER_NA

    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
        raise ValidationError(f"Timezone không hợp lệ: {timezone!r} ({e})", field="timezone")

    local = (now or datetime.now(tz=zone)).astimezone(zone)
    return f"{local:%B} {local.day}, {local.year} at {local:%I:%M:%S %p}"


def format_post_office(post_office: PostOffice) -> str:
    """
    Format một bưu cục thành card text nhiều dòng.

    Returns:
        String với mỗi field một dòng "Label: value"
    """
    return "\n".join(
        f"{label}: {getattr(post_office, field_name)}"
        for field_name, label in POST_OFFICE_LABELS
    )


def post_office_to_row(post_office: PostOffice) -> Dict[str, str]:
    """Đổi bưu cục thành dict label -> value (dùng cho bảng và Excel)"""
    return {
        label: getattr(post_office, field_name)
        for field_name, label in POST_OFFICE_LABELS
    }


def build_map_url(latitude: Any, longitude: Any, zoom: int = MAP_DEFAULT_ZOOM) -> Optional[str]:
    """
    Tạo URL Google Maps embed có marker tại toạ độ.

    Returns:
        URL, hoặc None nếu toạ độ thiếu / không phải số
    """
    lat = to_coordinate(latitude)
    lon = to_coordinate(longitude)
    if lat is None or lon is None:
        return None
    return MAP_EMBED_URL.format(latitude=lat, longitude=lon, zoom=zoom)
