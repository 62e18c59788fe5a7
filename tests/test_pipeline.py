"""
Tests cho LocatorPipeline: thứ tự các bước, cô lập lỗi và bỏ qua lượt chạy cũ.
"""

import asyncio
import threading
from unittest.mock import Mock, call

import pytest
import responses

from pinlocator.client import PinLocatorClient
from pinlocator.constants import (
    MSG_IP_FAILED,
    MSG_LOCATION_FAILED,
    MSG_NO_POST_OFFICES,
    MSG_NO_SEARCH_MATCHES,
    MSG_PINCODE_NOT_AVAILABLE,
    MSG_POST_OFFICES_FAILED,
    MSG_TIME_FAILED
)
from pinlocator.exceptions import HttpStatusError, NetworkError, ParseError, ValidationError
from pinlocator.models import DirectoryLookupResult, LocationInfo, LookupStatus
from pinlocator.pipeline import LocatorPipeline, PipelineState
from tests.conftest import IP, LOCATION_URL, PINCODE, POSTAL_URL

LOCATION = LocationInfo(
    ip=IP,
    city="New Delhi",
    organization="AS15169 Google LLC",
    latitude=28.6139,
    longitude=77.209,
    region="Delhi",
    timezone="Asia/Kolkata",
    postal_code=PINCODE
)


@pytest.fixture
def fake_client(post_offices):
    client = Mock(spec=PinLocatorClient)
    client.get_public_ip.return_value = IP
    client.get_location.return_value = LOCATION
    client.get_post_offices.return_value = DirectoryLookupResult(
        status=LookupStatus.OK,
        message="Number of pincode(s) found:3",
        post_offices=post_offices
    )
    return client


@pytest.fixture
def pipeline(fake_client, view):
    return LocatorPipeline(fake_client, view)


def view_call_names(view):
    return [name for name, _, _ in view.method_calls]


@pytest.mark.asyncio
class TestStart:

    async def test_success_shows_ip_and_enables_start(self, pipeline, view):
        ip = await pipeline.start()

        assert ip == IP
        assert pipeline.state is PipelineState.READY_TO_START
        assert pipeline.session.current_ip == IP
        view.show_ip.assert_called_once_with(IP)
        assert view.set_start_enabled.call_args_list == [call(False), call(True)]

    @pytest.mark.parametrize("error", [NetworkError("offline"), HttpStatusError(status_code=502), ParseError("bad")])
    async def test_failure_is_terminal(self, pipeline, fake_client, view, error):
        fake_client.get_public_ip.side_effect = error

        ip = await pipeline.start()

        assert ip is None
        assert pipeline.state is PipelineState.FAILED
        view.show_ip_error.assert_called_once_with(MSG_IP_FAILED)
        view.set_start_enabled.assert_called_once_with(False)

    async def test_trigger_without_ip_is_noop(self, pipeline, fake_client):
        fake_client.get_public_ip.side_effect = NetworkError("offline")
        await pipeline.start()

        state = await pipeline.trigger()

        assert state is PipelineState.FAILED
        fake_client.get_location.assert_not_called()


@pytest.mark.asyncio
class TestTrigger:

    async def test_full_success(self, pipeline, fake_client, view, post_offices):
        await pipeline.start()
        view.reset_mock()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED
        assert view_call_names(view) == [
            "show_loading",
            "show_details_screen",
            "show_location",
            "show_time",
            "show_directory_message",
            "render_post_offices",
            "show_map",
        ]
        fake_client.get_location.assert_called_once_with(IP)
        fake_client.get_post_offices.assert_called_once_with(PINCODE)
        view.show_location.assert_called_once_with(LOCATION)
        view.show_directory_message.assert_called_once_with("Number of pincode(s) found:3")
        view.render_post_offices.assert_called_once_with(post_offices)
        view.show_map.assert_called_once_with(28.6139, 77.209, 15)
        assert pipeline.session.post_offices == post_offices
        assert pipeline.session.location == LOCATION
        assert pipeline.session.generation == 1

    async def test_location_http_500_aborts_without_transition(self, pipeline, fake_client, view):
        await pipeline.start()
        fake_client.get_location.side_effect = HttpStatusError(status_code=500)

        state = await pipeline.trigger()

        assert state is PipelineState.FAILED
        view.notify_error.assert_called_once()
        assert view.notify_error.call_args[0][0] == MSG_LOCATION_FAILED
        view.show_details_screen.assert_not_called()
        view.show_location.assert_not_called()
        view.show_time.assert_not_called()
        view.show_map.assert_not_called()
        fake_client.get_post_offices.assert_not_called()

    async def test_can_retrigger_after_location_failure(self, pipeline, fake_client):
        await pipeline.start()
        fake_client.get_location.side_effect = [ParseError("RateLimited"), LOCATION]

        assert await pipeline.trigger() is PipelineState.FAILED
        assert await pipeline.trigger() is PipelineState.DISPLAYED

    async def test_empty_directory_keeps_previous_collection(
        self, pipeline, fake_client, view, post_offices
    ):
        await pipeline.start()
        await pipeline.trigger()
        fake_client.get_post_offices.return_value = DirectoryLookupResult(
            status=LookupStatus.EMPTY, message="No records found"
        )
        view.reset_mock()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED_PARTIAL
        view.show_directory_message.assert_called_once_with("No records found")
        view.show_post_offices_placeholder.assert_called_once_with(MSG_NO_POST_OFFICES)
        view.render_post_offices.assert_not_called()
        view.show_map.assert_called_once()
        assert pipeline.session.post_offices == post_offices

    async def test_empty_directory_before_any_load(self, pipeline, fake_client, view):
        fake_client.get_post_offices.return_value = DirectoryLookupResult(
            status=LookupStatus.EMPTY, message="No records found"
        )
        await pipeline.start()

        await pipeline.trigger()

        view.show_post_offices_placeholder.assert_called_once_with(MSG_NO_POST_OFFICES)
        assert pipeline.session.post_offices == ()
        assert pipeline.search("head") == []

    async def test_success_with_no_records_shows_placeholder(
        self, pipeline, fake_client, view, post_offices
    ):
        await pipeline.start()
        await pipeline.trigger()
        fake_client.get_post_offices.return_value = DirectoryLookupResult(
            status=LookupStatus.OK, message="Number of pincode(s) found:0"
        )
        view.reset_mock()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED_PARTIAL
        view.show_post_offices_placeholder.assert_called_once_with(MSG_NO_POST_OFFICES)
        view.render_post_offices.assert_not_called()
        view.show_map.assert_called_once()
        assert pipeline.session.post_offices == post_offices

    async def test_directory_failure_does_not_block_map(self, pipeline, fake_client, view):
        fake_client.get_post_offices.side_effect = NetworkError("timeout")
        await pipeline.start()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED_PARTIAL
        view.show_post_offices_placeholder.assert_called_once_with(MSG_POST_OFFICES_FAILED)
        view.show_time.assert_called_once()
        view.show_map.assert_called_once_with(28.6139, 77.209, 15)

    async def test_missing_pincode(self, pipeline, fake_client, view):
        fake_client.get_location.return_value = LocationInfo(ip=IP, latitude=1.5, longitude=2.5)
        fake_client.get_post_offices.return_value = DirectoryLookupResult(
            status=LookupStatus.UNAVAILABLE, message=MSG_PINCODE_NOT_AVAILABLE
        )
        await pipeline.start()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED_PARTIAL
        fake_client.get_post_offices.assert_called_once_with(None)
        view.show_directory_message.assert_called_once_with(MSG_PINCODE_NOT_AVAILABLE)
        view.show_post_offices_placeholder.assert_not_called()
        view.show_time.assert_called_once_with("N/A")
        view.show_map.assert_called_once_with(1.5, 2.5, 15)

    @pytest.mark.parametrize("tz", ["Not/AZone", "Asia", "Etc"])
    async def test_invalid_timezone_is_contained(self, pipeline, fake_client, view, tz):
        fake_client.get_location.return_value = LocationInfo(
            ip=IP, latitude=1.0, longitude=2.0, timezone=tz, postal_code=PINCODE
        )
        await pipeline.start()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED_PARTIAL
        view.show_time.assert_called_once_with(MSG_TIME_FAILED)
        view.render_post_offices.assert_called_once()
        view.show_map.assert_called_once()

    async def test_missing_coordinates(self, pipeline, fake_client, view):
        fake_client.get_location.return_value = LocationInfo(ip=IP, timezone="UTC", postal_code=PINCODE)
        await pipeline.start()

        state = await pipeline.trigger()

        assert state is PipelineState.DISPLAYED_PARTIAL
        view.show_map.assert_not_called()
        view.show_map_unavailable.assert_called_once_with()

    async def test_custom_zoom(self, fake_client, view):
        pipeline = LocatorPipeline(fake_client, view, map_zoom=9)
        await pipeline.start()

        await pipeline.trigger()

        view.show_map.assert_called_once_with(28.6139, 77.209, 9)

    async def test_stale_run_is_discarded(self, pipeline, fake_client, view):
        newer = LocationInfo(ip="1.1.1.1", city="Sydney", latitude=-33.8, longitude=151.2,
                             timezone="Australia/Sydney", postal_code="2000")
        gate = threading.Event()

        def get_location(ip):
            if ip == IP:
                gate.wait(timeout=5)
                return LOCATION
            return newer

        fake_client.get_location.side_effect = get_location
        await pipeline.start()

        first = asyncio.create_task(pipeline.trigger())
        await asyncio.sleep(0)
        pipeline.use_ip("1.1.1.1")
        second_state = await pipeline.trigger()
        gate.set()
        first_state = await first

        assert second_state is PipelineState.DISPLAYED
        assert first_state is PipelineState.DISPLAYED
        view.show_location.assert_called_once_with(newer)
        assert pipeline.session.location == newer
        assert pipeline.session.generation == 2
        fake_client.get_post_offices.assert_called_once_with("2000")


class TestUseIp:

    def test_seeds_session(self, pipeline, view):
        assert pipeline.use_ip(" 1.1.1.1 ") == "1.1.1.1"

        assert pipeline.state is PipelineState.READY_TO_START
        view.show_ip.assert_called_once_with("1.1.1.1")
        view.set_start_enabled.assert_called_once_with(True)

    def test_rejects_invalid_ip(self, pipeline):
        with pytest.raises(ValidationError):
            pipeline.use_ip("localhost")


class TestSearch:

    def test_before_load_is_noop(self, pipeline, view):
        assert pipeline.search("head") == []
        view.render_post_offices.assert_not_called()
        view.show_post_offices_placeholder.assert_not_called()

    @pytest.mark.asyncio
    async def test_filters_loaded_collection(self, pipeline, view, post_offices):
        await pipeline.start()
        await pipeline.trigger()
        view.reset_mock()

        result = pipeline.search("head")

        assert result == [post_offices[1]]
        view.render_post_offices.assert_called_once_with([post_offices[1]])
        assert pipeline.session.post_offices == post_offices

    @pytest.mark.asyncio
    async def test_no_match_shows_placeholder(self, pipeline, view):
        await pipeline.start()
        await pipeline.trigger()
        view.reset_mock()

        assert pipeline.search("xyz") == []
        view.show_post_offices_placeholder.assert_called_once_with(MSG_NO_SEARCH_MATCHES)

    @pytest.mark.asyncio
    async def test_empty_query_restores_full_list(self, pipeline, view, post_offices):
        await pipeline.start()
        await pipeline.trigger()
        pipeline.search("head")
        view.reset_mock()

        assert pipeline.search("") == list(post_offices)
        view.render_post_offices.assert_called_once_with(list(post_offices))


@pytest.mark.asyncio
async def test_success_status_without_records_end_to_end(client, view, location_payload):
    pipeline = LocatorPipeline(client, view)
    pipeline.use_ip(IP)

    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, LOCATION_URL, json=location_payload)
        rsps.add(
            responses.GET,
            POSTAL_URL,
            json=[{"Status": "Success", "Message": "Number of pincode(s) found:0", "PostOffice": []}]
        )
        state = await pipeline.trigger()

    assert state is PipelineState.DISPLAYED_PARTIAL
    view.show_directory_message.assert_called_once_with("Number of pincode(s) found:0")
    view.show_post_offices_placeholder.assert_called_once_with(MSG_NO_POST_OFFICES)
    view.render_post_offices.assert_not_called()
    view.show_map.assert_called_once_with(28.6139, 77.209, 15)
    assert pipeline.search("head") == []
