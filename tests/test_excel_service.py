"""
Tests cho excel_service
"""

import pytest
from openpyxl import load_workbook

from pinlocator.excel_service import build_export_metadata, export_post_offices
from pinlocator.exceptions import ValidationError


def test_export_writes_header_and_rows(tmp_path, post_offices):
    path = export_post_offices(post_offices, str(tmp_path / "offices.xlsx"))

    ws = load_workbook(path).active
    rows = list(ws.iter_rows(values_only=True))

    assert ws.title == "Post Offices"
    assert rows[0] == ("Name", "Branch Type", "Delivery Status", "District", "Division")
    assert rows[2] == ("New Delhi G.P.O.", "Head Post Office", "Delivery", "New Delhi", "New Delhi GPO")
    assert len(rows) == 1 + len(post_offices)


def test_export_with_metadata(tmp_path, post_offices):
    metadata = build_export_metadata(pincode="110001", query="head", count=1)

    path = export_post_offices(post_offices[1:2], str(tmp_path / "filtered"), metadata=metadata)

    assert path.suffix == ".xlsx"
    ws = load_workbook(path).active
    assert ws["A1"].value == "Exported at:"
    assert ws["A2"].value == "Pincode:"
    assert ws["B2"].value == "110001"
    assert ws["B3"].value == "head"
    assert ws["B4"].value == 1
    assert ws["A6"].value == "Name"
    assert ws["A7"].value == "New Delhi G.P.O."


def test_export_empty_raises(tmp_path):
    with pytest.raises(ValueError):
        export_post_offices([], str(tmp_path / "empty.xlsx"))


def test_export_invalid_path(tmp_path, post_offices):
    with pytest.raises(ValidationError):
        export_post_offices(post_offices, str(tmp_path / "nope" / "offices.xlsx"))


def test_metadata_skips_missing_values():
    metadata = build_export_metadata()

    assert list(metadata) == ["timestamp"]
