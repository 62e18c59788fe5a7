# excel_service.py
# -*- coding: utf-8 -*-

"""
Service layer cho thao tác xuất Excel.
Tách biệt logic ghi file Excel khỏi UI/CLI.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from pinlocator.constants import EXCEL_SHEET_TITLE, POST_OFFICE_LABELS
from pinlocator.exceptions import FileError
from pinlocator.formatters import post_office_to_row
from pinlocator.models import PostOffice
from pinlocator.utils import validate_export_path

logger = logging.getLogger(__name__)


def build_export_metadata(
    pincode: Optional[str] = None,
    query: Optional[str] = None,
    count: Optional[int] = None
) -> Dict[str, Any]:
    """Tạo metadata cho file export (thời gian, pincode, từ khoá lọc, số lượng)"""
    metadata: Dict[str, Any] = {"timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
    if pincode:
        metadata["pincode"] = pincode
    if query:
        metadata["query"] = query
    if count is not None:
        metadata["count"] = count
    return metadata


def export_post_offices(
    post_offices: Sequence[PostOffice],
    file_path: str,
    metadata: Optional[Dict[str, Any]] = None
) -> Path:
    """
    Xuất danh sách bưu cục ra file Excel.

    Args:
        post_offices: Danh sách bưu cục (thường là kết quả đang hiển thị)
        file_path: Đường dẫn file Excel để lưu
        metadata: Dictionary chứa metadata (timestamp, pincode, query, count)

    Returns:
        Path của file đã ghi

    Raises:
        ValueError: Nếu danh sách rỗng
        ValidationError: Nếu đường dẫn không hợp lệ
        FileError: Nếu không ghi được file
    """
    if not post_offices:
        raise ValueError("Không có dữ liệu để xuất")

    path = validate_export_path(file_path)

    wb = Workbook()
    ws = wb.active
    ws.title = EXCEL_SHEET_TITLE

    row = 1
    if metadata:
        metadata_labels = [
            ("timestamp", "Exported at:"),
            ("pincode", "Pincode:"),
            ("query", "Search:"),
            ("count", "Count:"),
        ]
        for key, label in metadata_labels:
            if key in metadata:
                ws.cell(row=row, column=1, value=label)
                ws.cell(row=row, column=2, value=metadata[key])
                row += 1
        row += 1

    headers = [label for _, label in POST_OFFICE_LABELS]
    for col_idx, header in enumerate(headers, 1):
        ws.cell(row=row, column=col_idx, value=header)
        ws.column_dimensions[get_column_letter(col_idx)].width = 24

    for row_idx, post_office in enumerate(post_offices, row + 1):
        row_data = post_office_to_row(post_office)
        for col_idx, header in enumerate(headers, 1):
            ws.cell(row=row_idx, column=col_idx, value=row_data.get(header, ""))

    try:
        wb.save(path)
    except OSError as e:
        raise FileError(f"Lỗi khi ghi file Excel: {e}", file_path=str(path))

    logger.info(f"Đã xuất {len(post_offices)} bưu cục ra file Excel: {path}")
    return path
