# cli.py
# -*- coding: utf-8 -*-

"""
Command-line interface cho pinlocator package
"""

import argparse
import asyncio
import logging
import sys
import webbrowser
from typing import List, Optional, Sequence

from pinlocator.client import PinLocatorClient
from pinlocator.config import MAP_DEFAULT_ZOOM
from pinlocator.constants import MSG_NO_SEARCH_MATCHES, MSG_NO_POST_OFFICES
from pinlocator.excel_service import build_export_metadata, export_post_offices
from pinlocator.exceptions import (
    FileError,
    FetchError,
    ParseError,
    ValidationError
)
from pinlocator.filters import filter_post_offices
from pinlocator.formatters import build_map_url, format_location_fields, format_post_office
from pinlocator.models import LocationInfo, LookupStatus, PostOffice
from pinlocator.pipeline import LocatorPipeline, PipelineState, PipelineView

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Cấu hình logging cho CLI"""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def print_post_offices(post_offices: Sequence[PostOffice]) -> None:
    for idx, post_office in enumerate(post_offices, 1):
        lines = format_post_office(post_office).splitlines()
        print(f"{idx}. {lines[0]}")
        for line in lines[1:]:
            print(f"   {line}")
        print()


class ConsolePipelineView(PipelineView):
    """In kết quả pipeline ra stdout"""

    def __init__(self, open_map: bool = False):
        self.open_map = open_map
        self.map_url: Optional[str] = None

    def show_ip(self, ip: str) -> None:
        print(f"🌐 Your IP address: {ip}")

    def show_ip_error(self, message: str) -> None:
        print(f"❌ {message}")

    def show_loading(self) -> None:
        print("⏱️  Looking up your location...")

    def notify_error(self, message: str, detail: str = "") -> None:
        print(f"❌ {message}")
        if detail:
            print(f"   {detail}")

    def show_location(self, location: LocationInfo) -> None:
        print()
        for label, value in format_location_fields(location).items():
            print(f"   {label + ':':<14} {value}")

    def show_time(self, text: str) -> None:
        print(f"   {'Date & Time:':<14} {text}")

    def show_directory_message(self, message: str) -> None:
        print(f"\n📮 {message}")

    def render_post_offices(self, post_offices: Sequence[PostOffice]) -> None:
        print(f"\n✅ {len(post_offices)} post office(s):\n")
        print_post_offices(post_offices)

    def show_post_offices_placeholder(self, message: str) -> None:
        print(f"\n{message}")

    def show_map(self, latitude: float, longitude: float, zoom: int) -> None:
        self.map_url = build_map_url(latitude, longitude, zoom)
        print(f"🗺️  Map: {self.map_url}")
        if self.open_map:
            webbrowser.open(self.map_url)

    def show_map_unavailable(self) -> None:
        print("🗺️  Map: N/A")


def export_command_results(
    post_offices: Sequence[PostOffice],
    export_file: str,
    pincode: Optional[str] = None,
    query: Optional[str] = None
) -> int:
    """Ghi danh sách bưu cục ra Excel, trả về exit code"""
    if not post_offices:
        print("⚠️  Nothing to export.")
        return 1

    try:
        metadata = build_export_metadata(pincode=pincode, query=query, count=len(post_offices))
        path = export_post_offices(post_offices, export_file, metadata=metadata)
    except (FileError, ValidationError) as e:
        print(f"❌ Export failed: {e}")
        return 1

    print(f"💾 Exported {len(post_offices)} post office(s) to: {path}")
    return 0


def ip_command(timeout: Optional[int] = None, verbose: bool = False) -> int:
    """
    In địa chỉ IP công khai

    Returns:
        0 nếu thành công, 1 nếu có lỗi
    """
    setup_logging(verbose)

    client = PinLocatorClient(timeout=timeout)
    try:
        print(client.get_public_ip())
        return 0
    except (FetchError, ParseError) as e:
        print(f"❌ Failed to load IP: {e}")
        return 1
    finally:
        client.close()


async def _locate(pipeline: LocatorPipeline, ip: Optional[str]) -> PipelineState:
    if ip:
        pipeline.use_ip(ip)
    elif not await pipeline.start():
        return pipeline.state
    return await pipeline.trigger()


def locate_command(
    ip: Optional[str] = None,
    search: Optional[str] = None,
    open_map: bool = False,
    export_file: Optional[str] = None,
    timeout: Optional[int] = None,
    zoom: int = MAP_DEFAULT_ZOOM,
    verbose: bool = False
) -> int:
    """
    Chạy toàn bộ chuỗi: IP -> vị trí -> giờ địa phương -> bưu cục -> bản đồ

    Args:
        ip: Tra cứu IP này thay vì IP của máy
        search: Lọc danh sách bưu cục theo từ khoá
        open_map: Mở bản đồ trên trình duyệt
        export_file: Xuất danh sách bưu cục (đã lọc) ra Excel
        timeout: Timeout cho mỗi request (giây)
        zoom: Mức zoom bản đồ
        verbose: Hiển thị log chi tiết

    Returns:
        0 nếu thành công, 1 nếu có lỗi
    """
    setup_logging(verbose)

    view = ConsolePipelineView(open_map=open_map)
    client = PinLocatorClient(timeout=timeout)
    pipeline = LocatorPipeline(client, view, map_zoom=zoom)

    try:
        state = asyncio.run(_locate(pipeline, ip))
    except ValidationError as e:
        print(f"❌ {e}")
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"❌ Unexpected error: {e}")
        return 1
    finally:
        client.close()

    if state not in (PipelineState.DISPLAYED, PipelineState.DISPLAYED_PARTIAL):
        return 1

    post_offices: List[PostOffice] = list(pipeline.session.post_offices)
    if search is not None and post_offices:
        print(f"🔎 Search: {search}")
        post_offices = pipeline.search(search)

    if export_file:
        pincode = pipeline.session.location.postal_code if pipeline.session.location else None
        return export_command_results(post_offices, export_file, pincode=pincode, query=search)

    return 0


def pincode_command(
    pincode: str,
    search: Optional[str] = None,
    export_file: Optional[str] = None,
    timeout: Optional[int] = None,
    verbose: bool = False
) -> int:
    """
    Tra cứu danh sách bưu cục theo pincode

    Returns:
        0 nếu thành công, 1 nếu có lỗi hoặc không tìm thấy
    """
    setup_logging(verbose)

    client = PinLocatorClient(timeout=timeout)
    try:
        result = client.get_post_offices(pincode)
    except (FetchError, ParseError) as e:
        print(f"❌ Failed to load post office data: {e}")
        return 1
    finally:
        client.close()

    print(f"📮 {result.message}")
    if result.status is not LookupStatus.OK or not result.post_offices:
        if result.status is not LookupStatus.UNAVAILABLE:
            print(MSG_NO_POST_OFFICES)
        return 1

    post_offices = filter_post_offices(result.post_offices, search or "")
    if not post_offices:
        print(MSG_NO_SEARCH_MATCHES)
        return 1

    print(f"\n✅ {len(post_offices)} post office(s):\n")
    print_post_offices(post_offices)

    if export_file:
        return export_command_results(post_offices, export_file, pincode=pincode, query=search)
    return 0


def main(argv: Optional[List[str]] = None):
    """Entry point cho CLI"""
    parser = argparse.ArgumentParser(
        description="Locate yourself by IP and list nearby Indian post offices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ví dụ:
  %(prog)s ip
  %(prog)s locate
  %(prog)s locate --ip 8.8.8.8 --search head --open-map
  %(prog)s pincode 110001 --search "head" --export post_offices.xlsx
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Hiển thị log chi tiết'
    )
    parser.add_argument(
        '--timeout',
        type=int,
        default=None,
        help='Timeout cho mỗi request (giây)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Lệnh cần thực hiện')

    subparsers.add_parser('ip', help='In địa chỉ IP công khai')

    locate_parser = subparsers.add_parser('locate', help='Định vị theo IP và liệt kê bưu cục')
    locate_parser.add_argument('--ip', default=None, help='Tra cứu IP này thay vì IP của máy')
    locate_parser.add_argument('--search', '-s', default=None, help='Lọc bưu cục theo tên hoặc loại bưu cục')
    locate_parser.add_argument('--open-map', action='store_true', help='Mở bản đồ trên trình duyệt')
    locate_parser.add_argument('--export', dest='export_file', default=None, help='Xuất danh sách bưu cục ra file Excel')
    locate_parser.add_argument('--zoom', type=int, default=MAP_DEFAULT_ZOOM, help='Mức zoom bản đồ')

    pincode_parser = subparsers.add_parser('pincode', help='Tra cứu bưu cục theo pincode')
    pincode_parser.add_argument('pincode', help='Pincode cần tra cứu')
    pincode_parser.add_argument('--search', '-s', default=None, help='Lọc bưu cục theo tên hoặc loại bưu cục')
    pincode_parser.add_argument('--export', dest='export_file', default=None, help='Xuất danh sách bưu cục ra file Excel')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'ip':
        return ip_command(args.timeout, args.verbose)
    elif args.command == 'locate':
        return locate_command(
            ip=args.ip,
            search=args.search,
            open_map=args.open_map,
            export_file=args.export_file,
            timeout=args.timeout,
            zoom=args.zoom,
            verbose=args.verbose
        )
    elif args.command == 'pincode':
        return pincode_command(args.pincode, args.search, args.export_file, args.timeout, args.verbose)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
