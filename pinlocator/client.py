# client.py
# -*- coding: utf-8 -*-

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from pinlocator.config import (
    IP_API_URL,
    IP_API_PARAMS,
    LOCATION_API_URL,
    POSTAL_API_URL,
    POSTAL_SUCCESS_STATUS,
    REQUEST_TIMEOUT,
    REQUEST_HEADERS
)
from pinlocator.constants import MSG_PINCODE_NOT_AVAILABLE
from pinlocator.exceptions import (
    HttpStatusError,
    NetworkError,
    ParseError
)
from pinlocator.models import (
    DirectoryLookupResult,
    LocationInfo,
    LookupStatus,
    PostOffice
)
from pinlocator.utils import is_valid_ip, normalize_pincode, validate_ip

logger = logging.getLogger(__name__)

POST_OFFICE_FIELDS = {
    "name": "Name",
    "branch_type": "BranchType",
    "delivery_status": "DeliveryStatus",
    "district": "District",
    "division": "Division",
}


class PinLocatorClient:
    """
    Client cho ba dịch vụ công khai: ipify (IP), ipapi (vị trí), postalpincode (bưu cục).
    Mỗi method gửi đúng một request, không retry, không cache.
    """

    def __init__(
        self,
        timeout: int = None,
        session: requests.Session = None
    ):
        self.session = session or requests.Session()
        self.session.headers.update(REQUEST_HEADERS)
        self.timeout = timeout or REQUEST_TIMEOUT

    def close(self) -> None:
        self.session.close()

    def _get_json(self, url: str, params: dict = None) -> Any:
        """
        Internal method: Gửi request GET và parse JSON.

        Args:
            url: Full URL
            params: Query parameters

        Returns:
            Dữ liệu JSON đã parse

        Raises:
            NetworkError: Nếu request không hoàn tất (timeout, DNS, connection...)
            HttpStatusError: Nếu status code không phải 2xx
            ParseError: Nếu body không phải JSON
        """
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Request error khi request {url}: {e}")
            raise NetworkError(
                message=f"Lỗi kết nối khi truy cập {url}: {e}",
                url=url,
                original_error=e
            )

        if not resp.ok:
            logger.warning(
                f"HTTP error {resp.status_code} khi request {url}: {resp.reason}",
                extra={"url": url, "status_code": resp.status_code}
            )
            raise HttpStatusError(
                message=f"Lỗi HTTP {resp.status_code} khi truy cập {url}: {resp.reason}",
                url=url,
                status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError:
            raise ParseError(
                message=f"Response từ {url} không phải JSON hợp lệ",
                payload_snippet=resp.text[:200]
            )

    def get_public_ip(self) -> str:
        """
        Lấy địa chỉ IP công khai của máy đang chạy.

        Returns:
            Địa chỉ IP (IPv4 hoặc IPv6)

        Raises:
            NetworkError, HttpStatusError: Nếu request thất bại
            ParseError: Nếu response không có field "ip" hợp lệ
        """
        data = self._get_json(IP_API_URL, params=IP_API_PARAMS)

        if not isinstance(data, dict):
            raise ParseError("Response IP không phải JSON object", payload_snippet=repr(data)[:200])

        ip = data.get("ip")
        if not is_valid_ip(ip):
            raise ParseError(f"Response IP không chứa địa chỉ hợp lệ: {ip!r}", payload_snippet=repr(data)[:200])

        ip = ip.strip()
        logger.info(f"Public IP: {ip}")
        return ip

    def get_location(self, ip: str) -> LocationInfo:
        """
        Tra cứu vị trí, timezone và pincode của một địa chỉ IP.

        Args:
            ip: Địa chỉ IP cần tra cứu

        Returns:
            LocationInfo với các field giữ nguyên giá trị server trả về

        Raises:
            ValidationError: Nếu ip không hợp lệ
            NetworkError, HttpStatusError: Nếu request thất bại
            ParseError: Nếu response không phải object hoặc là error envelope của ipapi
        """
        ip = validate_ip(ip)
        data = self._get_json(LOCATION_API_URL.format(ip=quote(ip, safe=":")))

        if not isinstance(data, dict):
            raise ParseError("Response vị trí không phải JSON object", payload_snippet=repr(data)[:200])

        # ipapi.co trả về HTTP 200 kèm {"error": true, "reason": ...} khi bị rate limit, IP reserved...
        if data.get("error") is True:
            reason = data.get("reason") or data.get("message") or "unknown"
            raise ParseError(f"Dịch vụ vị trí báo lỗi: {reason}", payload_snippet=repr(data)[:200])

        location = LocationInfo(
            ip=data.get("ip"),
            city=data.get("city"),
            organization=data.get("org"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            region=data.get("region"),
            timezone=data.get("timezone"),
            postal_code=data.get("postal")
        )
        logger.info(f"Location for {ip}: city={location.city}, postal={location.postal_code}")
        return location

    def get_post_offices(self, pincode: Optional[str]) -> DirectoryLookupResult:
        """
        Tra cứu danh sách bưu cục theo pincode.

        Args:
            pincode: Pincode (None hoặc rỗng thì không gọi server)

        Returns:
            DirectoryLookupResult (OK / EMPTY / UNAVAILABLE)

        Raises:
            NetworkError, HttpStatusError: Nếu request thất bại
            ParseError: Nếu response sai cấu trúc
        """
        pincode = normalize_pincode(pincode)
        if not pincode:
            logger.info("Không có pincode, bỏ qua tra cứu bưu cục")
            return DirectoryLookupResult(status=LookupStatus.UNAVAILABLE, message=MSG_PINCODE_NOT_AVAILABLE)

        data = self._get_json(POSTAL_API_URL.format(pincode=quote(pincode, safe="")))
        entry = self._first_entry(data)

        status = entry.get("Status")
        if not isinstance(status, str):
            raise ParseError("Response bưu cục thiếu field 'Status'", payload_snippet=repr(entry)[:200])

        message = entry.get("Message")
        message = message if isinstance(message, str) else ""

        if status != POSTAL_SUCCESS_STATUS:
            logger.info(f"Không tìm thấy bưu cục cho pincode {pincode}: {status} - {message}")
            return DirectoryLookupResult(status=LookupStatus.EMPTY, message=message)

        post_offices = tuple(self._parse_post_offices(entry.get("PostOffice")))
        logger.info(f"Tìm thấy {len(post_offices)} bưu cục cho pincode {pincode}")
        return DirectoryLookupResult(status=LookupStatus.OK, message=message, post_offices=post_offices)

    def _first_entry(self, data: Any) -> Dict[str, Any]:
        """Lấy phần tử đầu tiên của response mảng một phần tử"""
        if not isinstance(data, list) or not data:
            raise ParseError("Response bưu cục không phải mảng có dữ liệu", payload_snippet=repr(data)[:200])

        entry = data[0]
        if not isinstance(entry, dict):
            raise ParseError("Phần tử đầu của response bưu cục không phải object", payload_snippet=repr(entry)[:200])
        return entry

    def _parse_post_offices(self, records: Any) -> List[PostOffice]:
        if not isinstance(records, list):
            raise ParseError("Field 'PostOffice' không phải mảng", payload_snippet=repr(records)[:200])

        post_offices: List[PostOffice] = []
        for idx, record in enumerate(records):
            if not isinstance(record, dict):
                raise ParseError(f"Bưu cục #{idx} không phải object", payload_snippet=repr(record)[:200])

            values = {}
            for field_name, api_key in POST_OFFICE_FIELDS.items():
                value = record.get(api_key)
                if not isinstance(value, str):
                    raise ParseError(
                        f"Bưu cục #{idx} thiếu field '{api_key}'",
                        payload_snippet=repr(record)[:200]
                    )
                values[field_name] = value
            post_offices.append(PostOffice(**values))

        return post_offices
