import pytest

from app.models.gateway.dto import SourceDto
from app.services.api.authenticators.api_key_authenticator import ApiKeyAuthenticator
from app.services.api.authenticators.factory import AuthenticatorFactory
from app.services.api.authenticators.null_authenticator import NullAuthenticator


def test_create_authenticator_should_return_null_authenticator(open_source: SourceDto) -> None:
    authenticator = AuthenticatorFactory().create_authenticator(open_source)

    assert isinstance(authenticator, NullAuthenticator)
    assert authenticator.get_authentication_headers() == {}
    assert authenticator.get_auth() is None


def test_create_authenticator_should_return_api_key_authenticator(api_key_source: SourceDto) -> None:
    authenticator = AuthenticatorFactory().create_authenticator(api_key_source)

    assert isinstance(authenticator, ApiKeyAuthenticator)
    assert authenticator.get_authentication_headers() == {
        "API-Interface-ID": "interface-1",
        "API-Key": "secret",
    }


def test_create_authenticator_should_fail_without_key() -> None:
    source = SourceDto(reference="ref", location="http://example.com", authentication="api_key", api_key="secret")

    with pytest.raises(ValueError):
        AuthenticatorFactory().create_authenticator(source)
