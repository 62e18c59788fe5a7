# filters.py
# -*- coding: utf-8 -*-

"""
Lọc danh sách bưu cục theo từ khoá (chạy trên dữ liệu đã tải, không gọi network)
"""

from typing import List, Sequence

from pinlocator.models import PostOffice


def filter_post_offices(post_offices: Sequence[PostOffice], query: str) -> List[PostOffice]:
    """
    Lọc bưu cục có Name hoặc BranchType chứa query (không phân biệt hoa thường).

    Args:
        post_offices: Danh sách bưu cục gốc (không bị thay đổi)
        query: Từ khoá tìm kiếm, rỗng thì trả về toàn bộ

    Returns:
        List bưu cục khớp, giữ nguyên thứ tự gốc
    """
    term = (query or "").casefold()
    if not term:
        return list(post_offices)

    return [
        po for po in post_offices
        if term in po.name.casefold() or term in po.branch_type.casefold()
    ]
