# pinlocator package
# -*- coding: utf-8 -*-

"""
Pinlocator - Định vị theo IP, giờ địa phương và tra cứu bưu cục Ấn Độ theo pincode
"""

__version__ = "1.0.0"

from pinlocator.models import (
    LocationInfo,
    PostOffice,
    LookupStatus,
    DirectoryLookupResult
)
from pinlocator.client import PinLocatorClient
from pinlocator.filters import filter_post_offices
from pinlocator.pipeline import (
    LocatorPipeline,
    PipelineState,
    PipelineView,
    SessionState
)
from pinlocator.exceptions import (
    PinLocatorError,
    FetchError,
    NetworkError,
    HttpStatusError,
    ParseError,
    ValidationError,
    FileError,
    StaleRunError
)

__all__ = [
    "LocationInfo",
    "PostOffice",
    "LookupStatus",
    "DirectoryLookupResult",
    "PinLocatorClient",
    "filter_post_offices",
    "LocatorPipeline",
    "PipelineState",
    "PipelineView",
    "SessionState",
    "PinLocatorError",
    "FetchError",
    "NetworkError",
    "HttpStatusError",
    "ParseError",
    "ValidationError",
    "FileError",
    "StaleRunError",
    "__version__"
]
