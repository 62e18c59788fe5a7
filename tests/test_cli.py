"""
Tests cho CLI: chạy main() với các dịch vụ HTTP được mock bằng responses.
"""

import responses
from openpyxl import load_workbook
from responses import matchers

from pinlocator.cli import main
from tests.conftest import IP, IP_URL, LOCATION_URL, POSTAL_URL


def add_ip_response(**kwargs):
    responses.add(
        responses.GET,
        IP_URL,
        match=[matchers.query_param_matcher({"format": "json"})],
        **kwargs
    )


@responses.activate
def test_ip_command(capsys):
    add_ip_response(json={"ip": IP})

    assert main(["ip"]) == 0
    assert capsys.readouterr().out.strip() == IP


@responses.activate
def test_ip_command_failure(capsys):
    add_ip_response(status=500)

    assert main(["ip"]) == 1
    assert "Failed to load IP" in capsys.readouterr().out


@responses.activate
def test_locate_full_pipeline(capsys, location_payload, postal_success_payload):
    add_ip_response(json={"ip": IP})
    responses.add(responses.GET, LOCATION_URL, json=location_payload)
    responses.add(responses.GET, POSTAL_URL, json=postal_success_payload)

    assert main(["locate", "--search", "head"]) == 0

    out = capsys.readouterr().out
    assert f"Your IP address: {IP}" in out
    assert "New Delhi" in out
    assert "Number of pincode(s) found:3" in out
    assert "https://maps.google.com/maps?q=28.6139,77.209&z=15&output=embed" in out
    # Kết quả lọc cuối cùng chỉ còn Head Post Office
    assert out.rstrip().endswith("Division: New Delhi GPO")
    assert "1 post office(s)" in out


@responses.activate
def test_locate_with_explicit_ip_skips_ip_service(capsys, location_payload, postal_error_payload):
    responses.add(responses.GET, LOCATION_URL, json=location_payload)
    responses.add(responses.GET, POSTAL_URL, json=postal_error_payload)

    assert main(["locate", "--ip", IP]) == 0

    out = capsys.readouterr().out
    assert "No records found" in out
    assert "No post offices found for this pincode." in out
    assert all("ipify" not in c.request.url for c in responses.calls)


@responses.activate
def test_locate_location_failure(capsys):
    responses.add(responses.GET, LOCATION_URL, status=500)

    assert main(["locate", "--ip", IP]) == 1
    assert "Could not retrieve detailed location information." in capsys.readouterr().out


def test_locate_invalid_ip(capsys):
    assert main(["locate", "--ip", "not-an-ip"]) == 1
    assert "IP" in capsys.readouterr().out


@responses.activate
def test_locate_export(tmp_path, capsys, location_payload, postal_success_payload):
    responses.add(responses.GET, LOCATION_URL, json=location_payload)
    responses.add(responses.GET, POSTAL_URL, json=postal_success_payload)
    out_file = tmp_path / "offices.xlsx"

    assert main(["locate", "--ip", IP, "--search", "sub", "--export", str(out_file)]) == 0

    ws = load_workbook(out_file).active
    names = [row[0] for row in ws.iter_rows(values_only=True)]
    assert "Baroda House" in names
    assert "Parliament House" in names
    assert "New Delhi G.P.O." not in names


@responses.activate
def test_pincode_command(capsys, postal_success_payload):
    responses.add(responses.GET, POSTAL_URL, json=postal_success_payload)

    assert main(["pincode", "110001", "--search", "PARLIAMENT"]) == 0

    out = capsys.readouterr().out
    assert "Name: Parliament House" in out
    assert "Baroda House" not in out


@responses.activate
def test_pincode_command_no_match(capsys, postal_success_payload):
    responses.add(responses.GET, POSTAL_URL, json=postal_success_payload)

    assert main(["pincode", "110001", "--search", "xyz"]) == 1
    assert "No post offices match your search criteria." in capsys.readouterr().out


@responses.activate
def test_pincode_command_not_found(capsys, postal_error_payload):
    responses.add(responses.GET, POSTAL_URL, json=postal_error_payload)

    assert main(["pincode", "110001"]) == 1
    assert "No post offices found for this pincode." in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


@responses.activate
def test_pincode_command_success_without_records(capsys):
    responses.add(
        responses.GET,
        POSTAL_URL,
        json=[{"Status": "Success", "Message": "Number of pincode(s) found:0", "PostOffice": []}]
    )

    assert main(["pincode", "110001"]) == 1
    assert "No post offices found for this pincode." in capsys.readouterr().out
