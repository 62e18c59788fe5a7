# utils.py
# -*- coding: utf-8 -*-

"""
Utility functions cho pinlocator
"""

import ipaddress
import math
import re
from pathlib import Path
from typing import Any, Optional

from pinlocator.exceptions import ValidationError
from pinlocator.constants import ALLOWED_EXCEL_EXTENSIONS


def is_valid_ip(value: Any) -> bool:
    """
    Kiểm tra xem value có phải địa chỉ IPv4/IPv6 hợp lệ không.

    Args:
        value: Giá trị cần kiểm tra

    Returns:
        True nếu hợp lệ, False nếu không
    """
    if not value or not isinstance(value, str):
        return False

    try:
        ipaddress.ip_address(value.strip())
    except ValueError:
        return False
    return True


def validate_ip(value: Any) -> str:
    """
    Validate và chuẩn hóa địa chỉ IP.

    Raises:
        ValidationError: Nếu không phải địa chỉ IP hợp lệ
    """
    if not is_valid_ip(value):
        raise ValidationError(f"Địa chỉ IP không hợp lệ: {value!r}", field="ip")
    return value.strip()


def normalize_pincode(pincode: Any) -> Optional[str]:
    """
    Chuẩn hóa pincode: bỏ khoảng trắng hai đầu.
    Số nguyên (một số API trả pincode dạng số) được đổi sang string.

    Returns:
        Pincode đã chuẩn hóa, None nếu rỗng
    """
    if pincode is None or isinstance(pincode, bool):
        return None
    if isinstance(pincode, int):
        pincode = str(pincode)
    if not isinstance(pincode, str):
        return None

    cleaned = pincode.strip()
    return cleaned or None


def to_coordinate(value: Any) -> Optional[float]:
    """
    Đổi latitude/longitude sang float.

    Returns:
        float nếu hợp lệ, None nếu thiếu hoặc không phải số
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        coordinate = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(coordinate):
        return None
    return coordinate


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename để tránh các ký tự không hợp lệ.

    Args:
        filename: Tên file cần sanitize

    Returns:
        Tên file đã được sanitize
    """
    sanitized = re.sub(r'[<>"|?*]', '', filename)
    sanitized = sanitized.strip()
    if len(sanitized) > 255:
        sanitized = sanitized[:255]
    return sanitized


def validate_export_path(file_path: str) -> Path:
    """
    Validate đường dẫn file Excel đầu ra, tự thêm .xlsx nếu thiếu.

    Raises:
        ValidationError: Nếu path rỗng, sai extension hoặc thư mục cha không tồn tại
    """
    if not file_path or not isinstance(file_path, str):
        raise ValidationError("File path không hợp lệ", field="file_path")

    sanitized = sanitize_filename(file_path)
    if not sanitized:
        raise ValidationError("File path không hợp lệ", field="file_path")

    path = Path(sanitized)
    if not path.suffix:
        path = path.with_suffix(".xlsx")

    if path.suffix.lower() not in ALLOWED_EXCEL_EXTENSIONS:
        raise ValidationError(
            f"File phải có extension: {', '.join(ALLOWED_EXCEL_EXTENSIONS)}",
            field="file_path"
        )

    parent = path.resolve().parent
    if not parent.exists():
        raise ValidationError(f"Thư mục không tồn tại: {parent}", field="file_path")

    return path
