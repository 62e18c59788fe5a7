# exceptions.py
# -*- coding: utf-8 -*-

"""
Custom exceptions cho PinLocatorClient và LocatorPipeline
"""


class PinLocatorError(Exception):
    """Base exception cho tất cả lỗi của pinlocator"""
    pass


class FetchError(PinLocatorError):
    """Request HTTP không hoàn tất được (lỗi mạng hoặc status code không thành công)"""

    def __init__(self, message: str = None, url: str = None):
        self.message = message or "Không lấy được dữ liệu từ server"
        self.url = url
        super().__init__(self.message)


class NetworkError(FetchError):
    """Lỗi liên quan đến network/connection"""

    def __init__(self, message: str = None, url: str = None, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(message or "Lỗi kết nối mạng", url=url)


class HttpStatusError(FetchError):
    """Server trả về HTTP status code không thành công"""

    def __init__(self, message: str = None, url: str = None, status_code: int = None):
        """
        Args:
            message: Thông báo lỗi
            url: URL gây ra lỗi
            status_code: HTTP status code
        """
        self.status_code = status_code
        super().__init__(message or f"Lỗi HTTP {status_code}", url=url)


class ParseError(PinLocatorError):
    """Lỗi khi parse JSON response hoặc response sai cấu trúc"""

    def __init__(self, message: str = None, payload_snippet: str = None):
        self.message = message or "Lỗi khi phân tích dữ liệu trả về"
        self.payload_snippet = payload_snippet
        super().__init__(self.message)


class ValidationError(PinLocatorError):
    """Lỗi validation input"""

    def __init__(self, message: str = None, field: str = None):
        self.message = message or "Dữ liệu đầu vào không hợp lệ"
        self.field = field
        super().__init__(self.message)


class FileError(PinLocatorError):
    """Lỗi liên quan đến file operations"""

    def __init__(self, message: str = None, file_path: str = None):
        self.message = message or "Lỗi khi thao tác với file"
        self.file_path = file_path
        super().__init__(self.message)


class StaleRunError(PinLocatorError):
    """Lượt chạy pipeline đã bị thay thế bởi một lượt mới hơn"""

    def __init__(self, message: str = None, generation: int = None):
        self.message = message or "Lượt tra cứu đã cũ, bỏ qua kết quả"
        self.generation = generation
        super().__init__(self.message)
