from unittest.mock import MagicMock, patch

import pytest
from requests.exceptions import ConnectionError

from app.exceptions import FetchError
from app.models.gateway.dto import SourceDto
from app.services.api.call_service import CallService
from tests.utils import mock_response

PATCHED_MODULE = "app.services.api.api_service.request"


@patch(PATCHED_MODULE)
def test_call_should_send_api_key_headers(mock_request: MagicMock, api_key_source: SourceDto) -> None:
    mock_request.return_value = mock_response(200, {"data": []})

    response = CallService().call(api_key_source, "/api/v2/cm/task/get_task_list", query={"a": "b"})

    assert response.status_code == 200
    kwargs = mock_request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "http://example.com/zaaksysteem/api/v2/cm/task/get_task_list?a=b"
    assert kwargs["headers"]["API-Interface-ID"] == "interface-1"
    assert kwargs["headers"]["API-Key"] == "secret"


@patch(PATCHED_MODULE)
def test_call_should_post_body(mock_request: MagicMock, open_source: SourceDto) -> None:
    mock_request.return_value = mock_response(200, {"data": {"success": True}})

    CallService().call(open_source, "task/create", method="POST", body={"task_uuid": "1"})

    kwargs = mock_request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == "http://example.com/open/task/create"
    assert kwargs["json"] == {"task_uuid": "1"}
    assert "API-Key" not in kwargs["headers"]


@patch(PATCHED_MODULE)
def test_call_should_raise_fetch_error_on_error_status(mock_request: MagicMock, open_source: SourceDto) -> None:
    mock_request.return_value = mock_response(404, {"error": "not found"})

    with pytest.raises(FetchError):
        CallService().call(open_source, "/case/1")


@patch(PATCHED_MODULE)
def test_call_should_raise_fetch_error_on_connection_error(
    mock_request: MagicMock, open_source: SourceDto
) -> None:
    mock_request.side_effect = ConnectionError

    with pytest.raises(FetchError):
        CallService().call(open_source, "/case/1")

    mock_request.assert_called_once()


def test_call_should_raise_fetch_error_on_incomplete_api_key_source() -> None:
    source = SourceDto(reference="broken", location="http://example.com", authentication="api_key")

    with pytest.raises(FetchError):
        CallService().call(source, "/case/1")


def test_decode_response_should_return_body(open_source: SourceDto) -> None:
    assert CallService().decode_response(open_source, mock_response(200, {"a": 1})) == {"a": 1}


def test_decode_response_should_raise_on_invalid_json(open_source: SourceDto) -> None:
    with pytest.raises(FetchError):
        CallService().decode_response(open_source, mock_response(200, None))


def test_decode_response_should_raise_on_non_object(open_source: SourceDto) -> None:
    with pytest.raises(FetchError):
        CallService().decode_response(open_source, mock_response(200, [1, 2]))
