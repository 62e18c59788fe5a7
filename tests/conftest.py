"""
Pytest fixtures cho pinlocator: payload mẫu của ba dịch vụ và view ghi lại các lời gọi.
"""

from typing import Any, Dict, List, Tuple
from unittest.mock import Mock

import pytest

from pinlocator.client import PinLocatorClient
from pinlocator.models import PostOffice
from pinlocator.pipeline import PipelineView

IP = "8.8.8.8"
PINCODE = "110001"
IP_URL = "https://api.ipify.org"
LOCATION_URL = f"https://ipapi.co/{IP}/json/"
POSTAL_URL = f"https://api.postalpincode.in/pincode/{PINCODE}"


@pytest.fixture
def view() -> Mock:
    """PipelineView giả, ghi lại thứ tự các lời gọi trong view.method_calls"""
    return Mock(spec=PipelineView)


@pytest.fixture
def client() -> PinLocatorClient:
    client = PinLocatorClient(timeout=2)
    yield client
    client.close()


@pytest.fixture
def location_payload() -> Dict[str, Any]:
    return {
        "ip": IP,
        "city": "New Delhi",
        "region": "National Capital Territory of Delhi",
        "country_name": "India",
        "postal": PINCODE,
        "latitude": 28.6139,
        "longitude": 77.209,
        "timezone": "Asia/Kolkata",
        "org": "AS15169 Google LLC",
    }


@pytest.fixture
def post_office_records() -> List[Dict[str, str]]:
    return [
        {
            "Name": "Baroda House",
            "Description": None,
            "BranchType": "Sub Post Office",
            "DeliveryStatus": "Non-Delivery",
            "Circle": "Delhi",
            "District": "Central Delhi",
            "Division": "New Delhi Central",
            "Region": "Delhi",
            "State": "Delhi",
            "Country": "India",
            "Pincode": PINCODE,
        },
        {
            "Name": "New Delhi G.P.O.",
            "Description": None,
            "BranchType": "Head Post Office",
            "DeliveryStatus": "Delivery",
            "Circle": "Delhi",
            "District": "New Delhi",
            "Division": "New Delhi GPO",
            "Region": "Delhi",
            "State": "Delhi",
            "Country": "India",
            "Pincode": PINCODE,
        },
        {
            "Name": "Parliament House",
            "Description": None,
            "BranchType": "Sub Post Office",
            "DeliveryStatus": "Non-Delivery",
            "Circle": "Delhi",
            "District": "New Delhi",
            "Division": "New Delhi West",
            "Region": "Delhi",
            "State": "Delhi",
            "Country": "India",
            "Pincode": PINCODE,
        },
    ]


@pytest.fixture
def postal_success_payload(post_office_records) -> List[Dict[str, Any]]:
    return [{
        "Message": f"Number of pincode(s) found:{len(post_office_records)}",
        "Status": "Success",
        "PostOffice": post_office_records,
    }]


@pytest.fixture
def postal_error_payload() -> List[Dict[str, Any]]:
    return [{"Message": "No records found", "Status": "Error", "PostOffice": None}]


@pytest.fixture
def post_offices(post_office_records) -> Tuple[PostOffice, ...]:
    return tuple(
        PostOffice(
            name=r["Name"],
            branch_type=r["BranchType"],
            delivery_status=r["DeliveryStatus"],
            district=r["District"],
            division=r["Division"],
        )
        for r in post_office_records
    )
