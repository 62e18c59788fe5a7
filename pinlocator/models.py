# models.py
# -*- coding: utf-8 -*-

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class LocationInfo:
    """
    Thông tin vị trí của một địa chỉ IP (từ ipapi.co)

    Note: Giá trị được giữ nguyên như server trả về, field thiếu là None.
    Việc hiển thị placeholder ("N/A") là trách nhiệm của formatters.
    """
    ip: Optional[str] = None
    city: Optional[str] = None
    organization: Optional[str] = None
    latitude: Optional[Any] = None
    longitude: Optional[Any] = None
    region: Optional[str] = None
    timezone: Optional[str] = None
    postal_code: Optional[str] = None


@dataclass(frozen=True)
class PostOffice:
    """Một bưu cục trong danh bạ pincode (api.postalpincode.in)"""
    name: str
    branch_type: str
    delivery_status: str
    district: str
    division: str


class LookupStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class DirectoryLookupResult:
    """
    Kết quả tra cứu danh bạ bưu cục theo pincode.

    - OK: server trả về Status "Success", post_offices có dữ liệu
    - EMPTY: server trả về Status khác (không tìm thấy), chỉ có message
    - UNAVAILABLE: không có pincode, không gọi server
    """
    status: LookupStatus
    message: str
    post_offices: Tuple[PostOffice, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK
