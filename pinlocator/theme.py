# theme.py
# -*- coding: utf-8 -*-

"""
Theme colors cho ứng dụng định vị IP và tra cứu bưu cục
Tập trung tất cả màu sắc để dễ dàng thay đổi theme
"""


class Theme:
    """Theme colors và font cho UI"""

    # Primary colors
    PRIMARY = "#3498db"  # Xanh dương chính
    PRIMARY_DARK = "#2980b9"  # Hover, active

    # Success colors
    SUCCESS = "#2ecc71"
    SUCCESS_DARK = "#27ae60"

    # Background colors
    BG_MAIN = "#f0f2f5"
    BG_WHITE = "#ffffff"
    BG_HEADER = "#2c3e50"
    BG_TREE_EVEN = "#f8f9fa"  # Nền dòng chẵn trong tree

    # Text colors
    TEXT_PRIMARY = "#2c3e50"
    TEXT_SECONDARY = "#7f8c8d"
    TEXT_WHITE = "#ffffff"

    # Border colors
    BORDER_LIGHT = "#e8e8e8"
    BORDER_MEDIUM = "#bdc3c7"

    # Selected colors
    SELECTED = "#3498db"
    SELECTED_TEXT = "#ffffff"

    # Status colors
    STATUS_INFO = "#3498db"
    STATUS_ERROR = "#e74c3c"

    FONT_FAMILY = "Segoe UI"
    FONT_DEFAULT = (FONT_FAMILY, 10)
    FONT_BOLD = (FONT_FAMILY, 10, "bold")
    FONT_HINT = (FONT_FAMILY, 9, "italic")
    FONT_TITLE = (FONT_FAMILY, 12, "bold")
    FONT_IP = (FONT_FAMILY, 22, "bold")
