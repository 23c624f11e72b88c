from typing import Any, Dict
import pytest

from app.models.gateway.dto import SourceDto
from app.services.api.api_service import HttpService
from app.services.api.authenticators.authenticator import Authenticator

MOCK_AUTH = "some-auth"


class MockAuthenticator(Authenticator):
    """
    Dummy class for testing purposes only
    """

    def get_authentication_headers(self) -> dict[str, str]:
        return {"Authorization": "some-token"}

    def get_auth(self) -> Any:
        return MOCK_AUTH


@pytest.fixture()
def base_url() -> str:
    return "http://example.com"


@pytest.fixture()
def mock_sub_route() -> str:
    return "/some-route"


@pytest.fixture()
def mock_params() -> Dict[str, Any]:
    return {"param": "example"}


@pytest.fixture()
def mock_body() -> Dict[str, Any]:
    return {"example": "some data"}


@pytest.fixture()
def http_service(base_url: str) -> HttpService:
    return HttpService(
        base_url=base_url,
        timeout=1,
    )


@pytest.fixture()
def mock_authenticator() -> MockAuthenticator:
    # this is used as a dummy authenticator for testing purposes
    return MockAuthenticator()


@pytest.fixture()
def api_key_source() -> SourceDto:
    return SourceDto(
        reference="https://example.com/source/zaaksysteem.source.json",
        location="http://example.com/zaaksysteem",
        authentication="api_key",
        api_interface_id="interface-1",
        api_key="secret",
    )


@pytest.fixture()
def open_source() -> SourceDto:
    return SourceDto(
        reference="https://example.com/source/open.source.json",
        location="http://example.com/open/",
    )
